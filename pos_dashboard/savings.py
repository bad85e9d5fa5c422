"""Savings goals: daily amortization and the day-by-day calendar.

A goal has a target amount and a deadline.  Each day can carry one record:
``monto > 0`` means that amount was saved, ``monto == 0`` means the day was
explicitly marked as not saved, and no record means the day is undecided.
Days marked as not saved shrink the remaining window, so the recommended
daily amount rises to compensate.

All calendar comparisons use local ``YYYY-MM-DD`` days.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .config import local_today
from .data_processing import parse_timestamp
from .formatting import round_currency
from .records import SavingsDayRecord, SavingsGoal, day_key, number

STATUS_SAVED = 'saved'
STATUS_MISSED = 'missed'
STATUS_UNMARKED = 'unmarked'
STATUS_FUTURE = 'future'

STATUS_COLORS = {
    STATUS_SAVED: 'green',
    STATUS_MISSED: 'red',
    STATUS_UNMARKED: 'gray',
    STATUS_FUTURE: 'gray',
}

WEEKDAY_LABELS = ['Dom', 'Lun', 'Mar', 'Mié', 'Jue', 'Vie', 'Sáb']


def _as_day(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, date):
        return value if type(value) is date else value.date()
    key = day_key(value)
    ts = parse_timestamp(key)
    if pd.isna(ts):
        return None
    return ts.date()


def _today(today: Optional[date]) -> date:
    return _as_day(today) or local_today()


def days_until(deadline: Any, today: Optional[date] = None) -> int:
    """Whole days from today to the deadline, never negative."""
    limit = _as_day(deadline)
    if limit is None:
        return 0
    return max(0, (limit - _today(today)).days)


def total_saved(records: Iterable[SavingsDayRecord]) -> float:
    """Sum of the days that actually saved money; zero markings add nothing."""
    return float(sum(r.monto for r in records or [] if r.monto > 0))


def days_missed_until(records: Iterable[SavingsDayRecord], today: Optional[date] = None) -> int:
    """Days up to and including today explicitly marked as not saved."""
    today_key = _today(today).strftime('%Y-%m-%d')
    return sum(1 for r in records or [] if r.fecha and r.fecha <= today_key and r.monto == 0)


def days_remaining(deadline: Any, records: Iterable[SavingsDayRecord], today: Optional[date] = None) -> int:
    """Days left to save after discounting missed days; at least one."""
    records = list(records or [])
    return max(1, days_until(deadline, today) - days_missed_until(records, today))


def daily_amortization(
    target_amount: Any,
    deadline: Any,
    day_records: Iterable[SavingsDayRecord],
    today: Optional[date] = None,
) -> float:
    """Amount to save per remaining day to reach ``target_amount`` by ``deadline``.

    Example:
        >>> daily_amortization(1000, date(2024, 1, 11), [], today=date(2024, 1, 1))
        100.0
    """
    records = list(day_records or [])
    remaining = max(0.0, number(target_amount) - total_saved(records))
    return round_currency(remaining / days_remaining(deadline, records, today))


def suggested_daily_amount(target_amount: Any, deadline: Any, today: Optional[date] = None) -> float:
    """Preview shown while creating a goal, before any day is recorded."""
    days = days_until(deadline, today)
    if days <= 0:
        return 0.0
    return round_currency(number(target_amount) / days)


@dataclass(frozen=True)
class GoalProgress:
    id: Optional[int]
    nombre: str
    meta: float
    ahorrado: float
    restante: float
    porcentaje: float
    dias_restantes: int
    vencida: bool
    completada: bool
    ahorro_diario: float


def goal_progress(goal: SavingsGoal, records: Iterable[SavingsDayRecord], today: Optional[date] = None) -> GoalProgress:
    records = list(records or [])
    ahorrado = total_saved(records)
    percentage = (ahorrado / goal.meta * 100) if goal.meta > 0 else 0.0
    dias = days_until(goal.fecha_limite, today)
    return GoalProgress(
        id=goal.id,
        nombre=goal.nombre,
        meta=goal.meta,
        ahorrado=ahorrado,
        restante=max(0.0, goal.meta - ahorrado),
        porcentaje=min(percentage, 100.0),
        dias_restantes=dias,
        vencida=dias <= 0,
        completada=not goal.is_active,
        ahorro_diario=daily_amortization(goal.meta, goal.fecha_limite, records, today),
    )


def total_daily_for_active_goals(
    goals: Iterable[SavingsGoal],
    records_by_goal: Mapping[Any, Iterable[SavingsDayRecord]],
    today: Optional[date] = None,
) -> float:
    """Combined daily amount of every active goal."""
    total = 0.0
    for goal in goals or []:
        if not goal.is_active:
            continue
        total += daily_amortization(goal.meta, goal.fecha_limite, records_by_goal.get(goal.id, []), today)
    return total


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DayCell:
    fecha: str
    dia: int
    status: str
    actionable: bool
    monto: Optional[float] = None

    @property
    def color(self) -> str:
        return STATUS_COLORS[self.status]


def record_lookup(records: Iterable[SavingsDayRecord]) -> Dict[str, float]:
    """Amount per day; a later record for the same day replaces an earlier one."""
    return {day_key(r.fecha): r.monto for r in records or []}


def day_cell(fecha: str, lookup: Mapping[str, float], deadline: Any, today: Optional[date] = None) -> DayCell:
    """Status and eligibility of a single calendar day."""
    today_key = _today(today).strftime('%Y-%m-%d')
    deadline_key = day_key(deadline)
    past_or_today = fecha <= today_key
    monto = lookup.get(fecha)

    if monto is not None and monto > 0:
        status = STATUS_SAVED
    elif monto is not None and monto == 0 and past_or_today:
        status = STATUS_MISSED
    elif monto is None and past_or_today:
        status = STATUS_UNMARKED
    else:
        status = STATUS_FUTURE

    return DayCell(
        fecha=fecha,
        dia=int(fecha[8:10]),
        status=status,
        actionable=past_or_today and fecha <= deadline_key,
        monto=monto,
    )


def calendar_month(
    year: int,
    month: int,
    records: Iterable[SavingsDayRecord],
    deadline: Any,
    today: Optional[date] = None,
) -> List[Optional[DayCell]]:
    """Sunday-first grid of ``month``; leading ``None`` entries pad the first week."""
    lookup = record_lookup(records)
    padding = (date(year, month, 1).weekday() + 1) % 7
    cells: List[Optional[DayCell]] = [None] * padding
    for day in range(1, calendar.monthrange(year, month)[1] + 1):
        fecha = f"{year:04d}-{month:02d}-{day:02d}"
        cells.append(day_cell(fecha, lookup, deadline, today))
    return cells
