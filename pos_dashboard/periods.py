"""Period windows used by each screen.

Every screen evaluates the same financial formula over its own window.
The windows are built here from naive local datetimes so that they compare
directly against the timestamps parsed in :mod:`data_processing`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional, Tuple

import pandas as pd

from .config import local_now, local_today
from .data_processing import parse_timestamp

EPOCH = datetime(1970, 1, 1)
ONE_MS = timedelta(milliseconds=1)

REPORT_PERIODS = ('hoy', 'semana', 'mes', 'año', 'personalizado')
REPORT_PERIOD_LABELS = {
    'hoy': 'Hoy',
    'semana': 'Esta Semana',
    'mes': 'Este Mes',
    'año': 'Este Año',
    'personalizado': 'Personalizado',
}
LEDGER_PERIODS = ('dia', 'semana', 'mes', 'año')


@dataclass(frozen=True)
class Period:
    """Inclusive ``[start, end]`` window."""

    start: datetime
    end: datetime

    def contains(self, value: Any) -> bool:
        ts = parse_timestamp(value)
        if pd.isna(ts):
            return False
        return self.start <= ts.to_pydatetime() <= self.end

    @property
    def label(self) -> str:
        return f"{self.start:%d/%m/%Y} - {self.end:%d/%m/%Y}"

    def day_keys(self) -> Tuple[str, str]:
        """Calendar days of both bounds as ``YYYY-MM-DD``."""
        return self.start.strftime('%Y-%m-%d'), self.end.strftime('%Y-%m-%d')


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else local_now()


def midnight(value: datetime) -> datetime:
    return datetime(value.year, value.month, value.day)


def end_of_day(value: datetime) -> datetime:
    """Last millisecond of ``value``'s day."""
    return midnight(value) + timedelta(days=1) - ONE_MS


def today_period(now: Optional[datetime] = None) -> Period:
    current = _now(now)
    return Period(midnight(current), end_of_day(current))


def trailing_week(now: Optional[datetime] = None) -> Period:
    """Seven days back from today's midnight up to ``now``."""
    current = _now(now)
    return Period(midnight(current) - timedelta(days=7), current)


def current_month(now: Optional[datetime] = None) -> Period:
    current = _now(now)
    first = datetime(current.year, current.month, 1)
    last_day = (pd.Timestamp(first) + pd.offsets.MonthEnd(0)).day
    return Period(first, datetime(current.year, current.month, last_day, 23, 59, 59))


def current_year(now: Optional[datetime] = None) -> Period:
    current = _now(now)
    return Period(datetime(current.year, 1, 1), datetime(current.year, 12, 31, 23, 59, 59))


def _as_date(value: Any) -> Optional[date]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    ts = parse_timestamp(value)
    if pd.isna(ts):
        return None
    return ts.date()


def report_period(
    kind: str,
    now: Optional[datetime] = None,
    custom_start: Any = None,
    custom_end: Any = None,
) -> Period:
    """Window for the reports screen.

    ``hoy``, ``semana``, ``mes`` and ``año`` reach back from today's midnight
    and end with the last millisecond of today.  ``personalizado`` runs from
    ``custom_start`` (or the epoch) to the end of ``custom_end`` (or ``now``).
    Calendar months and years that do not exist on the shifted date clamp
    to the last valid day.
    """
    current = _now(now)
    today = midnight(current)
    end = end_of_day(current)
    if kind == 'hoy':
        return Period(today, end)
    if kind == 'semana':
        return Period(today - timedelta(days=7), end)
    if kind == 'mes':
        return Period((pd.Timestamp(today) - pd.DateOffset(months=1)).to_pydatetime(), end)
    if kind == 'año':
        return Period((pd.Timestamp(today) - pd.DateOffset(years=1)).to_pydatetime(), end)
    if kind == 'personalizado':
        start_day = _as_date(custom_start)
        end_day = _as_date(custom_end)
        start = datetime(start_day.year, start_day.month, start_day.day) if start_day else EPOCH
        finish = datetime(end_day.year, end_day.month, end_day.day, 23, 59, 59) if end_day else current
        return Period(start, finish)
    return Period(EPOCH, current)


def ledger_period(kind: str, now: Optional[datetime] = None) -> Period:
    """Window for the side-venture ledger screen."""
    current = _now(now)
    if kind == 'dia':
        return today_period(current)
    if kind == 'semana':
        return Period(midnight(current) - timedelta(days=7), end_of_day(current))
    if kind == 'mes':
        return current_month(current)
    if kind == 'año':
        return current_year(current)
    return Period(EPOCH, current)


def screen_period(screen: str, now: Optional[datetime] = None, **kwargs: Any) -> Period:
    """Window each screen uses for its net-profit figures."""
    if screen in {'dashboard', 'nomina'}:
        return trailing_week(now)
    if screen == 'gastos_admin':
        return current_month(now)
    if screen == 'reportes':
        return report_period(kwargs.get('kind', 'año'), now, kwargs.get('custom_start'), kwargs.get('custom_end'))
    raise ValueError(f"Unknown screen '{screen}'")


def week_monday(value: Any = None) -> str:
    """Monday of ``value``'s week as ``YYYY-MM-DD``; Sunday closes the week."""
    day = _as_date(value) if value is not None else local_today()
    if day is None:
        return ''
    return (day - timedelta(days=day.weekday())).strftime('%Y-%m-%d')
