#!/usr/bin/env python3
"""Lightweight validator for the JSON snapshot files."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pos_dashboard.config import SNAPSHOT_DIR
from pos_dashboard.snapshot_storage import COLLECTIONS, SAVINGS_RECORDS

REQUIRED_KEYS = {
    'ventas': ('id', 'fecha', 'total'),
    'gastos_admin': ('fecha', 'monto'),
    'nominas': ('fecha', 'total'),
    'lienzo': ('fecha', 'tipo', 'monto'),
    'metas_ahorro': ('nombre', 'meta', 'fechaLimite'),
}


def validate_snapshot(path: Path, name: str) -> List[str]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        return [f"unreadable: {exc}"]

    if name == SAVINGS_RECORDS:
        if not isinstance(data, dict):
            return ["must be an object keyed by goal id"]
        return [f"goal {key}: records must be a list" for key, rows in data.items() if not isinstance(rows, list)]

    if not isinstance(data, list):
        return ["must be a JSON array"]

    errors = []
    for position, row in enumerate(data):
        if not isinstance(row, dict):
            errors.append(f"row {position} is not an object")
            continue
        missing = [key for key in REQUIRED_KEYS.get(name, ()) if key not in row]
        if missing:
            errors.append(f"row {position} missing {', '.join(missing)}")
    return errors


def main(snapshot_dir: Path = SNAPSHOT_DIR) -> int:
    if not snapshot_dir.exists():
        print(f"Snapshot directory not found: {snapshot_dir}")
        return 1

    issues = []
    for name in list(COLLECTIONS) + [SAVINGS_RECORDS]:
        path = snapshot_dir / f"{name}.json"
        if not path.exists():
            continue
        for message in validate_snapshot(path, name):
            issues.append((path.name, message))

    if issues:
        print("Snapshot validation failed:")
        for filename, message in issues:
            print(f"  - {filename}: {message}")
        return 1

    print("All snapshots validated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
