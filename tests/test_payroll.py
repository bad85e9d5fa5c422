from pos_dashboard.payroll import (
    advance_installment,
    advance_preview,
    build_payroll_run,
    clamp_advance_weeks,
    clamp_days_worked,
    outstanding_advances,
    payroll_events_by_day,
    pending_employees,
    prorated_pay,
    weekly_advance_discounts,
)
from pos_dashboard.records import Employee, PayrollItem, PayrollRun, SalaryAdvance

WEEK = '2024-03-18'


def _employees():
    return [
        Employee(id=1, nombre='Ana', sueldo=700),
        Employee(id=2, nombre='Luis', sueldo=1400),
    ]


def _advance(**overrides):
    data = dict(
        id=1, empleado_id=2, nombre='Luis', monto_total=300, semanas=3,
        monto_por_semana=100, saldo_pendiente=300, fecha='2024-03-12T10:00:00',
    )
    data.update(overrides)
    return SalaryAdvance(**data)


def test_clamp_days_worked():
    assert clamp_days_worked(3) == 3
    assert clamp_days_worked(2.5) == 3
    assert clamp_days_worked(0) == 1
    assert clamp_days_worked(9) == 7
    assert clamp_days_worked('x') == 1


def test_clamp_advance_weeks():
    assert clamp_advance_weeks(100) == 52
    assert clamp_advance_weeks('4') == 4
    assert clamp_advance_weeks(None) == 2


def test_prorated_pay_and_installments():
    assert prorated_pay(700, 3) == 300.0
    assert prorated_pay(700) == 700.0
    assert advance_installment(1000, 3) == 333.33
    assert advance_preview(700, 300, 3) == {'entregar_hoy': 1000, 'por_semana': 100.0, 'semanas': 3}


def test_advance_is_withheld_from_the_following_week():
    advances = [_advance()]
    assert weekly_advance_discounts(advances, '2024-03-11') == {}
    assert weekly_advance_discounts(advances, WEEK) == {2: 100}
    assert weekly_advance_discounts([_advance(estado='liquidado')], WEEK) == {}


def test_outstanding_advances():
    advances = [_advance(), _advance(id=2, saldo_pendiente=50), _advance(id=3, estado='liquidado')]
    assert outstanding_advances(advances) == {2: 350}


def test_build_payroll_run():
    draft = build_payroll_run(_employees(), {1: 7, 2: 5}, {2: 100}, WEEK)
    assert [item.monto for item in draft.items] == [700.0, 1000.0]
    assert draft.items[1].dias_trabajados == 5
    assert draft.items[1].semana == WEEK
    assert draft.items[0].adelanto_descontado is None
    assert draft.total_bruto == 1700
    assert draft.total_descuento == 100
    assert draft.total_neto == 1600
    assert draft.net_for(2) == 900
    assert draft.net_for(99) == 0


def test_pending_employees_skips_paid_this_week():
    runs = [PayrollRun(id=1, fecha='2024-03-18', total=700, items=[
        PayrollItem(empleado_id=1, nombre='Ana', monto=700, semana=WEEK),
    ])]
    assert [e.nombre for e in pending_employees(_employees(), runs, WEEK)] == ['Luis']
    assert len(pending_employees(_employees(), runs, '2024-03-25')) == 2


def test_payroll_events_by_day():
    runs = [PayrollRun(id=1, fecha='2024-03-18T18:00:00', total=700)]
    events = payroll_events_by_day(runs, [_advance()])
    assert set(events) == {'2024-03-18', '2024-03-12'}
    assert len(events['2024-03-18']['nominas']) == 1
    assert len(events['2024-03-12']['adelantos']) == 1
