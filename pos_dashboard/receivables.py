"""Credit sales and the customers who owe on them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .records import SALE_PENDING, Customer, Sale, number

SALE_PAID = 'pagada'


def pending_balance(sale: Sale) -> float:
    """Outstanding amount of a sale: ``max(0, total - pagado)``."""
    return sale.pendiente


@dataclass
class Debtor:
    cliente: Customer
    ventas_pendientes: List[Sale] = field(default_factory=list)

    @property
    def total_adeudado(self) -> float:
        return sum(pending_balance(v) for v in self.ventas_pendientes)


def debtors(sales: Iterable[Sale], customers: Iterable[Customer], search: str = '') -> List[Debtor]:
    """Customers with pending credit sales, largest balance first.

    A sale counts when it is marked ``pendiente``, still owes money and
    belongs to a known customer.
    """
    by_id = {}
    for customer in customers or []:
        by_id.setdefault(customer.id, customer)

    grouped: Dict[int, Debtor] = {}
    for sale in sales or []:
        if sale.estado != SALE_PENDING or not sale.is_pending or sale.cliente_id is None:
            continue
        customer = by_id.get(sale.cliente_id)
        if customer is None:
            continue
        grouped.setdefault(sale.cliente_id, Debtor(cliente=customer)).ventas_pendientes.append(sale)

    result = sorted(grouped.values(), key=lambda d: d.total_adeudado, reverse=True)
    needle = (search or '').strip().lower()
    if needle:
        result = [d for d in result if needle in d.cliente.nombre.lower()]
    return result


def total_receivable(debtor_list: Iterable[Debtor]) -> float:
    return sum(d.total_adeudado for d in debtor_list)


def validate_payment(sale: Sale, monto: Any) -> float:
    """Check a payment against the sale's balance and return it as a float."""
    amount = number(monto)
    if amount <= 0:
        raise ValueError('El monto del abono debe ser mayor a cero')
    if amount > pending_balance(sale):
        raise ValueError('El monto del abono no puede ser mayor al pendiente')
    return amount


def apply_payment(sale: Sale, monto: Any) -> Dict[str, Any]:
    """Fields to store on ``sale`` after a validated payment of ``monto``."""
    amount = validate_payment(sale, monto)
    pagado = sale.amount_collected + amount
    return {
        'pagado': pagado,
        'estado': SALE_PAID if pagado >= sale.total else SALE_PENDING,
    }
