import pytest

from pos_dashboard.receivables import apply_payment, debtors, total_receivable, validate_payment
from pos_dashboard.records import Customer, Sale, parse_records


def _sales():
    return parse_records(Sale, [
        {'id': 1, 'fecha': '2024-03-01', 'total': 500, 'pagado': 100, 'clienteId': 1, 'estado': 'pendiente'},
        {'id': 2, 'fecha': '2024-03-02', 'total': 200, 'pagado': 0, 'clienteId': 2, 'estado': 'pendiente'},
        {'id': 3, 'fecha': '2024-03-03', 'total': 300, 'pagado': 0, 'clienteId': 2, 'estado': 'pendiente'},
        {'id': 4, 'fecha': '2024-03-04', 'total': 150, 'clienteId': 1, 'estado': 'pagada'},
        {'id': 5, 'fecha': '2024-03-05', 'total': 80, 'pagado': 0, 'clienteId': 99, 'estado': 'pendiente'},
    ])


def _customers():
    return [Customer(id=1, nombre='María López'), Customer(id=2, nombre='Pedro Ruiz')]


def test_debtors_sorted_by_amount_owed():
    result = debtors(_sales(), _customers())
    assert [d.cliente.nombre for d in result] == ['Pedro Ruiz', 'María López']
    assert result[0].total_adeudado == 500
    assert result[1].total_adeudado == 400
    assert total_receivable(result) == 900


def test_debtors_search_is_case_insensitive():
    result = debtors(_sales(), _customers(), search='maría')
    assert [d.cliente.id for d in result] == [1]


def test_validate_payment_bounds():
    sale = _sales()[0]
    assert validate_payment(sale, '150') == 150
    with pytest.raises(ValueError):
        validate_payment(sale, 0)
    with pytest.raises(ValueError):
        validate_payment(sale, 401)


def test_apply_payment_settles_sale():
    sale = _sales()[0]
    assert apply_payment(sale, 100) == {'pagado': 200, 'estado': 'pendiente'}
    assert apply_payment(sale, 400) == {'pagado': 500, 'estado': 'pagada'}
