"""Weekly payroll helpers: prorated pay and salary-advance withholding.

Pay is weekly.  An employee who worked fewer than seven days receives
``sueldo * dias / 7``.  A salary advance is repaid in equal weekly
installments withheld from the runs that follow the week it was issued.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from .formatting import round_currency
from .periods import week_monday
from .records import Employee, PayrollItem, PayrollRun, SalaryAdvance

FULL_WEEK = 7
MAX_ADVANCE_WEEKS = 52


def clamp_days_worked(dias: Any) -> int:
    """Days worked in a week, rounded and kept within ``1..7``."""
    try:
        value = math.floor(float(dias) + 0.5)
    except (TypeError, ValueError, OverflowError):
        return 1
    return min(FULL_WEEK, max(1, value or 1))


def clamp_advance_weeks(semanas: Any, default: int = 2) -> int:
    try:
        value = int(float(semanas))
    except (TypeError, ValueError, OverflowError):
        value = default
    return max(1, min(MAX_ADVANCE_WEEKS, value or default))


def prorated_pay(sueldo: float, dias: Any = FULL_WEEK) -> float:
    """Weekly salary scaled by the days worked, rounded to cents."""
    return round_currency(sueldo * clamp_days_worked(dias) / FULL_WEEK)


def advance_installment(monto_total: float, semanas: Any) -> float:
    """Weekly amount withheld to repay an advance."""
    return round_currency(monto_total / clamp_advance_weeks(semanas))


def advance_preview(sueldo: float, monto_total: float, semanas: Any) -> Dict[str, float]:
    """What the employee receives today and what is withheld per week afterwards."""
    weeks = clamp_advance_weeks(semanas)
    return {
        'entregar_hoy': sueldo + monto_total,
        'por_semana': advance_installment(monto_total, weeks),
        'semanas': weeks,
    }


def weekly_advance_discounts(advances: Iterable[SalaryAdvance], current_week: Optional[str] = None) -> Dict[int, float]:
    """Installment owed this week per employee.

    Only active advances issued in an earlier week are withheld; the week an
    advance is handed over is paid in full.
    """
    current_week = current_week or week_monday()
    discounts: Dict[int, float] = {}
    for advance in advances or []:
        if not advance.is_active or advance.empleado_id is None or not advance.fecha:
            continue
        issued_week = week_monday(advance.fecha)
        if not issued_week or current_week <= issued_week:
            continue
        discounts[advance.empleado_id] = discounts.get(advance.empleado_id, 0.0) + advance.monto_por_semana
    return discounts


def outstanding_advances(advances: Iterable[SalaryAdvance]) -> Dict[int, float]:
    """Remaining balance of active advances per employee."""
    balances: Dict[int, float] = {}
    for advance in advances or []:
        if advance.is_active and advance.empleado_id is not None:
            balances[advance.empleado_id] = balances.get(advance.empleado_id, 0.0) + advance.saldo_pendiente
    return balances


def employees_paid_in_week(runs: Iterable[PayrollRun], week: Optional[str] = None) -> Set[int]:
    week = week or week_monday()
    return {
        item.empleado_id
        for run in runs or []
        for item in run.items
        if item.semana == week and item.empleado_id is not None
    }


def pending_employees(employees: Iterable[Employee], runs: Iterable[PayrollRun], week: Optional[str] = None) -> List[Employee]:
    """Employees without a payroll line for ``week``."""
    paid = employees_paid_in_week(runs, week)
    return [e for e in employees or [] if e.id not in paid]


@dataclass
class PayrollDraft:
    items: List[PayrollItem] = field(default_factory=list)
    total_bruto: float = 0.0
    total_descuento: float = 0.0

    @property
    def total_neto(self) -> float:
        return self.total_bruto - self.total_descuento

    def net_for(self, empleado_id: int) -> float:
        for item in self.items:
            if item.empleado_id == empleado_id:
                return max(0.0, item.monto - (item.adelanto_descontado or 0.0))
        return 0.0


def build_payroll_run(
    employees: Iterable[Employee],
    days_by_employee: Optional[Mapping[int, Any]] = None,
    discounts: Optional[Mapping[int, float]] = None,
    week: Optional[str] = None,
) -> PayrollDraft:
    """Lines of a payroll run for the given employees.

    Each line carries the gross prorated pay; the withheld installment is
    recorded next to it and summed separately.
    """
    days_by_employee = days_by_employee or {}
    discounts = discounts or {}
    week = week or week_monday()
    draft = PayrollDraft()
    for employee in employees or []:
        dias = clamp_days_worked(days_by_employee.get(employee.id, FULL_WEEK))
        monto = prorated_pay(employee.sueldo, dias)
        descuento = discounts.get(employee.id, 0.0)
        draft.items.append(PayrollItem(
            empleado_id=employee.id,
            nombre=employee.nombre,
            monto=monto,
            dias_trabajados=dias,
            semana=week,
            adelanto_descontado=descuento or None,
        ))
        draft.total_bruto += monto
        draft.total_descuento += descuento
    return draft


def payroll_events_by_day(runs: Iterable[PayrollRun], advances: Iterable[SalaryAdvance]) -> Dict[str, Dict[str, list]]:
    """Payroll runs and advances grouped by calendar day for the payroll calendar."""
    events: Dict[str, Dict[str, list]] = {}
    for run in runs or []:
        key = (run.fecha or '')[:10]
        if key:
            events.setdefault(key, {'nominas': [], 'adelantos': []})['nominas'].append(run)
    for advance in advances or []:
        key = (advance.fecha or '')[:10]
        if key:
            events.setdefault(key, {'nominas': [], 'adelantos': []})['adelantos'].append(advance)
    return events
