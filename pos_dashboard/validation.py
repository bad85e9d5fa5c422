"""Form validation for the capture screens.

Each validator returns the cleaned payload sent to the backend, with the
backend's camelCase keys, or raises ``ValueError`` with the message shown
to the user.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from .payroll import clamp_advance_weeks, clamp_days_worked
from .records import LEDGER_EXPENSE, LEDGER_INCOME, day_key, optional_number

__all__ = [
    'clamp_days_worked',
    'parse_amount',
    'validate_advance',
    'validate_admin_expense',
    'validate_employee',
    'validate_ledger_movement',
    'validate_savings_goal',
]


def parse_amount(value: Any) -> Optional[float]:
    """Parse a typed amount, accepting thousands separators (``'1,250.50'``)."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.replace(',', '').strip()
        if not value:
            return None
    return optional_number(value)


def _date_text(value: Any) -> str:
    if isinstance(value, date):
        return value.strftime('%Y-%m-%d')
    return day_key(value)


def validate_savings_goal(nombre: Any, meta: Any, fecha_limite: Any) -> Dict[str, Any]:
    name = str(nombre or '').strip()
    if not name:
        raise ValueError('El nombre de la meta es obligatorio')
    amount = parse_amount(meta)
    if amount is None or amount <= 0:
        raise ValueError('La meta debe ser un monto mayor a cero')
    deadline = _date_text(fecha_limite)
    if not deadline:
        raise ValueError('La fecha límite es obligatoria')
    return {'nombre': name, 'meta': amount, 'fechaLimite': deadline}


def validate_admin_expense(descripcion: Any, categoria: Any, monto: Any, fecha: Any = None) -> Dict[str, Any]:
    description = str(descripcion or '').strip()
    if not description:
        raise ValueError('La descripción es obligatoria')
    amount = parse_amount(monto)
    if amount is None:
        raise ValueError('El monto debe ser un número')
    category = str(categoria or '').strip() or 'Diversos'
    payload: Dict[str, Any] = {'descripcion': description, 'categoria': category, 'monto': amount}
    fecha_text = _date_text(fecha)
    if fecha_text:
        payload['fecha'] = fecha_text
    return payload


def validate_ledger_movement(tipo: Any, monto: Any, descripcion: Any = None, fecha: Any = None) -> Dict[str, Any]:
    kind = str(tipo or '')
    if kind not in {LEDGER_INCOME, LEDGER_EXPENSE}:
        raise ValueError("El tipo debe ser 'ingreso' o 'gasto'")
    amount = parse_amount(monto)
    if amount is None or amount <= 0:
        raise ValueError('Ingresa un monto mayor a cero')
    payload: Dict[str, Any] = {'tipo': kind, 'monto': amount}
    description = str(descripcion or '').strip()
    if description:
        payload['descripcion'] = description
    fecha_text = _date_text(fecha)
    if fecha_text:
        payload['fecha'] = fecha_text
    return payload


def validate_employee(nombre: Any, sueldo: Any, puesto: Any = None) -> Dict[str, Any]:
    name = str(nombre or '').strip()
    if not name:
        raise ValueError('El nombre del trabajador es obligatorio')
    salary = parse_amount(sueldo)
    if salary is None or salary < 0:
        raise ValueError('El sueldo semanal debe ser un monto válido')
    payload: Dict[str, Any] = {'nombre': name, 'sueldo': salary}
    role = str(puesto or '').strip()
    if role:
        payload['puesto'] = role
    return payload


def validate_advance(empleado_id: Any, monto_total: Any, semanas: Any) -> Dict[str, Any]:
    try:
        employee = int(empleado_id)
    except (TypeError, ValueError):
        raise ValueError('Selecciona un trabajador') from None
    amount = parse_amount(monto_total)
    if amount is None or amount <= 0:
        raise ValueError('El adelanto debe ser mayor a cero')
    return {'empleadoId': employee, 'montoTotal': amount, 'semanas': clamp_advance_weeks(semanas)}
