"""Configuration management for the POS dashboard.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import tz

logger = logging.getLogger(__name__)

# Base project root - assumes this file is in pos_dashboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("POS_DATA_DIR", _PROJECT_ROOT / "data"))
SNAPSHOT_DIR = Path(os.getenv("POS_SNAPSHOT_DIR", DATA_DIR / "snapshots"))
REPORTS_DIR = DATA_DIR / "reports"

# UI preferences
CACHE_PATH = DATA_DIR / "persistent_cache.json"

# Name printed on exported reports
BUSINESS_NAME = os.getenv("POS_BUSINESS_NAME", "POS Juan Mejía")

# Timezone used to interpret stored timestamps. Empty means the host's zone.
TIMEZONE_NAME = os.getenv("POS_TIMEZONE", "")


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, SNAPSHOT_DIR, REPORTS_DIR]:
        directory.mkdir(parents=True, exist_ok=True)


def get_snapshot_dir() -> str:
    """Get the snapshot directory as a string."""
    return str(SNAPSHOT_DIR)


def get_local_timezone(name: Optional[str] = None) -> tzinfo:
    """Return the zone that defines local calendar days.

    ``POS_TIMEZONE`` wins when set to a valid IANA name; otherwise the
    host's zone is used, with its daylight-saving rules.
    """
    name = TIMEZONE_NAME if name is None else name
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown POS_TIMEZONE %r, using the host timezone", name)
    return tz.tzlocal()


def local_now() -> datetime:
    """Current wall-clock time in the local zone, as a naive datetime."""
    return datetime.now(get_local_timezone()).replace(tzinfo=None)


def local_today() -> date:
    return local_now().date()
