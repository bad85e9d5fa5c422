"""Record types for the collections served by the POS backend.

Every record is built from a JSON object through ``from_dict``, which never
raises on bad data: missing or malformed required numbers become ``0`` and
optional numbers stay ``None`` so callers can apply their own fallback.
JSON keys keep the backend's camelCase names.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

CATEGORIAS_GASTOS = (
    'Salud',
    'Automotriz',
    'Escuelas',
    'Diversos',
    'Sueldos',
    'Viáticos',
    'Entretenimiento',
    'Servicios básicos de casa',
    'Compras familiares',
    'Gastos de la empresa',
)

LEDGER_INCOME = 'ingreso'
LEDGER_EXPENSE = 'gasto'
GOAL_ACTIVE = 'activa'
GOAL_COMPLETED = 'completada'
ADVANCE_ACTIVE = 'activo'
ADVANCE_SETTLED = 'liquidado'
SALE_PENDING = 'pendiente'

T = TypeVar('T')


def optional_number(value: Any) -> Optional[float]:
    """Return ``value`` as a float, or ``None`` when it is absent or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def number(value: Any, default: float = 0.0) -> float:
    """Coerce ``value`` to a float, falling back to ``default``."""
    parsed = optional_number(value)
    return default if parsed is None else parsed


def optional_int(value: Any) -> Optional[int]:
    parsed = optional_number(value)
    return None if parsed is None else int(parsed)


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def day_key(value: Any) -> str:
    """First ten characters of a stored date, i.e. its ``YYYY-MM-DD`` part."""
    if value is None:
        return ''
    return str(value)[:10]


@dataclass
class SaleItem:
    id: Optional[int]
    nombre: str
    precio: float
    cantidad: float
    costo: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SaleItem':
        return cls(
            id=optional_int(data.get('id')),
            nombre=str(data.get('nombre') or ''),
            precio=number(data.get('precio')),
            cantidad=number(data.get('cantidad')),
            costo=optional_number(data.get('costo')),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'id': self.id,
            'nombre': self.nombre,
            'precio': self.precio,
            'cantidad': self.cantidad,
        }
        if self.costo is not None:
            payload['costo'] = self.costo
        return payload


@dataclass
class Sale:
    id: Optional[int]
    fecha: Optional[str]
    total: float
    pagado: Optional[float] = None
    items: List[SaleItem] = field(default_factory=list)
    cliente: Optional[str] = None
    cliente_id: Optional[int] = None
    estado: Optional[str] = None

    @property
    def amount_collected(self) -> float:
        """Paid amount, or the sale total when nothing was recorded."""
        return self.total if self.pagado is None else self.pagado

    @property
    def pendiente(self) -> float:
        return max(0.0, self.total - self.amount_collected)

    @property
    def is_pending(self) -> bool:
        return self.pendiente > 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Sale':
        items = data.get('items') or []
        if not isinstance(items, list):
            items = []
        return cls(
            id=optional_int(data.get('id')),
            fecha=optional_text(data.get('fecha')),
            total=number(data.get('total')),
            pagado=optional_number(data.get('pagado')),
            items=[SaleItem.from_dict(item) for item in items if isinstance(item, dict)],
            cliente=optional_text(data.get('cliente')),
            cliente_id=optional_int(data.get('clienteId')),
            estado=optional_text(data.get('estado')),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'id': self.id,
            'fecha': self.fecha,
            'total': self.total,
            'items': [item.to_dict() for item in self.items],
        }
        if self.pagado is not None:
            payload['pagado'] = self.pagado
        if self.cliente is not None:
            payload['cliente'] = self.cliente
        if self.cliente_id is not None:
            payload['clienteId'] = self.cliente_id
        if self.estado is not None:
            payload['estado'] = self.estado
        return payload


@dataclass
class Product:
    id: Optional[int]
    nombre: str
    precio: float = 0.0
    costo: Optional[float] = None
    stock: float = 0.0
    stock_minimo: Optional[float] = None
    estado: Optional[str] = None
    categoria: str = ''

    @property
    def is_active(self) -> bool:
        return (self.estado or 'Activo') == 'Activo'

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= (self.stock_minimo or 0.0)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        return cls(
            id=optional_int(data.get('id')),
            nombre=str(data.get('nombre') or ''),
            precio=number(data.get('precio')),
            costo=optional_number(data.get('costo')),
            stock=number(data.get('stock')),
            stock_minimo=optional_number(data.get('stockMinimo')),
            estado=optional_text(data.get('estado')),
            categoria=str(data.get('categoria') or ''),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'nombre': self.nombre,
            'precio': self.precio,
            'costo': self.costo,
            'stock': self.stock,
            'stockMinimo': self.stock_minimo,
            'estado': self.estado,
            'categoria': self.categoria,
        }


@dataclass
class AdminExpense:
    id: Optional[int]
    fecha: Optional[str]
    descripcion: str
    categoria: str
    monto: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AdminExpense':
        return cls(
            id=optional_int(data.get('id')),
            fecha=optional_text(data.get('fecha')),
            descripcion=str(data.get('descripcion') or ''),
            categoria=str(data.get('categoria') or ''),
            monto=number(data.get('monto')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'fecha': self.fecha,
            'descripcion': self.descripcion,
            'categoria': self.categoria,
            'monto': self.monto,
        }


@dataclass
class PayrollItem:
    empleado_id: Optional[int]
    nombre: str
    monto: float
    dias_trabajados: Optional[int] = None
    semana: Optional[str] = None
    adelanto_descontado: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PayrollItem':
        return cls(
            empleado_id=optional_int(data.get('empleadoId')),
            nombre=str(data.get('nombre') or ''),
            monto=number(data.get('monto')),
            dias_trabajados=optional_int(data.get('diasTrabajados')),
            semana=optional_text(data.get('semana')),
            adelanto_descontado=optional_number(data.get('adelantoDescontado')),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'empleadoId': self.empleado_id,
            'nombre': self.nombre,
            'monto': self.monto,
        }
        if self.dias_trabajados is not None:
            payload['diasTrabajados'] = self.dias_trabajados
        if self.semana is not None:
            payload['semana'] = self.semana
        if self.adelanto_descontado is not None:
            payload['adelantoDescontado'] = self.adelanto_descontado
        return payload


@dataclass
class PayrollRun:
    id: Optional[int]
    fecha: Optional[str]
    total: float
    items: List[PayrollItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PayrollRun':
        items = data.get('items') or []
        if not isinstance(items, list):
            items = []
        return cls(
            id=optional_int(data.get('id')),
            fecha=optional_text(data.get('fecha')),
            total=number(data.get('total')),
            items=[PayrollItem.from_dict(item) for item in items if isinstance(item, dict)],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'fecha': self.fecha,
            'total': self.total,
            'items': [item.to_dict() for item in self.items],
        }


@dataclass
class LedgerMovement:
    id: Optional[int]
    fecha: Optional[str]
    tipo: str
    monto: float
    descripcion: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.tipo == LEDGER_INCOME

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LedgerMovement':
        return cls(
            id=optional_int(data.get('id')),
            fecha=optional_text(data.get('fecha')),
            tipo=str(data.get('tipo') or ''),
            monto=number(data.get('monto')),
            descripcion=optional_text(data.get('descripcion')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'fecha': self.fecha,
            'tipo': self.tipo,
            'monto': self.monto,
            'descripcion': self.descripcion,
        }


@dataclass
class SavingsGoal:
    id: Optional[int]
    nombre: str
    meta: float
    fecha_limite: str
    estado: str = GOAL_ACTIVE

    @property
    def is_active(self) -> bool:
        return self.estado == GOAL_ACTIVE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SavingsGoal':
        return cls(
            id=optional_int(data.get('id')),
            nombre=str(data.get('nombre') or ''),
            meta=number(data.get('meta')),
            fecha_limite=day_key(data.get('fechaLimite')),
            estado=str(data.get('estado') or GOAL_ACTIVE),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'nombre': self.nombre,
            'meta': self.meta,
            'fechaLimite': self.fecha_limite,
            'estado': self.estado,
        }


@dataclass
class SavingsDayRecord:
    fecha: str
    monto: float

    @property
    def saved(self) -> bool:
        return self.monto > 0

    @property
    def missed(self) -> bool:
        return self.monto == 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SavingsDayRecord':
        return cls(fecha=day_key(data.get('fecha')), monto=number(data.get('monto')))

    def to_dict(self) -> Dict[str, Any]:
        return {'fecha': self.fecha, 'monto': self.monto}


@dataclass
class Employee:
    id: Optional[int]
    nombre: str
    sueldo: float
    puesto: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Employee':
        return cls(
            id=optional_int(data.get('id')),
            nombre=str(data.get('nombre') or ''),
            sueldo=number(data.get('sueldo')),
            puesto=optional_text(data.get('puesto')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'nombre': self.nombre, 'sueldo': self.sueldo, 'puesto': self.puesto}


@dataclass
class SalaryAdvance:
    id: Optional[int]
    empleado_id: Optional[int]
    nombre: str
    monto_total: float
    semanas: int
    monto_por_semana: float
    saldo_pendiente: float
    fecha: Optional[str]
    estado: str = ADVANCE_ACTIVE

    @property
    def is_active(self) -> bool:
        return self.estado == ADVANCE_ACTIVE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SalaryAdvance':
        return cls(
            id=optional_int(data.get('id')),
            empleado_id=optional_int(data.get('empleadoId')),
            nombre=str(data.get('nombre') or ''),
            monto_total=number(data.get('montoTotal')),
            semanas=optional_int(data.get('semanas')) or 1,
            monto_por_semana=number(data.get('montoPorSemana')),
            saldo_pendiente=number(data.get('saldoPendiente')),
            fecha=optional_text(data.get('fecha')),
            estado=str(data.get('estado') or ADVANCE_ACTIVE),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'empleadoId': self.empleado_id,
            'nombre': self.nombre,
            'montoTotal': self.monto_total,
            'semanas': self.semanas,
            'montoPorSemana': self.monto_por_semana,
            'saldoPendiente': self.saldo_pendiente,
            'fecha': self.fecha,
            'estado': self.estado,
        }


@dataclass
class Customer:
    id: Optional[int]
    nombre: str
    telefono: Optional[str] = None
    email: Optional[str] = None
    direccion: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Customer':
        return cls(
            id=optional_int(data.get('id')),
            nombre=str(data.get('nombre') or ''),
            telefono=optional_text(data.get('telefono')),
            email=optional_text(data.get('email')),
            direccion=optional_text(data.get('direccion')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'nombre': self.nombre,
            'telefono': self.telefono,
            'email': self.email,
            'direccion': self.direccion,
        }


def parse_records(cls: Type[T], rows: Optional[Iterable[Any]]) -> List[T]:
    """Build ``cls`` records from JSON rows, skipping anything that is not an object."""
    if not rows:
        return []
    return [cls.from_dict(row) for row in rows if isinstance(row, dict)]  # type: ignore[attr-defined]
