from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from pos_dashboard import config
from pos_dashboard.records import SavingsDayRecord, SavingsGoal
from pos_dashboard.savings import (
    STATUS_FUTURE,
    STATUS_MISSED,
    STATUS_SAVED,
    STATUS_UNMARKED,
    calendar_month,
    daily_amortization,
    days_missed_until,
    days_remaining,
    days_until,
    goal_progress,
    suggested_daily_amount,
    total_daily_for_active_goals,
    total_saved,
)

TODAY = date(2024, 1, 1)
DEADLINE = date(2024, 1, 11)


def _records(*pairs):
    return [SavingsDayRecord(fecha=fecha, monto=monto) for fecha, monto in pairs]


def test_daily_amount_without_records():
    assert daily_amortization(1000, DEADLINE, [], today=TODAY) == 100.0


def test_missed_days_raise_daily_amount():
    records = _records(('2023-12-30', 0), ('2023-12-31', 0))
    assert days_remaining(DEADLINE, records, today=TODAY) == 8
    assert daily_amortization(1000, DEADLINE, records, today=TODAY) == 125.0


def test_saved_days_reduce_remaining_amount():
    records = _records(('2024-01-01', 200))
    assert daily_amortization(1000, DEADLINE, records, today=TODAY) == 80.0


def test_zero_markings_add_nothing_to_total_saved():
    records = _records(('2023-12-30', 0), ('2023-12-31', 150), ('2024-01-01', 0))
    assert total_saved(records) == 150


def test_future_zero_markings_are_not_missed_days():
    records = _records(('2024-01-05', 0), ('2023-12-31', 0), ('', 0))
    assert days_missed_until(records, today=TODAY) == 1


def test_days_until_never_negative():
    assert days_until('2023-12-25', today=TODAY) == 0
    assert days_until('2024-01-11T00:00:00', today=TODAY) == 10
    assert days_until(None, today=TODAY) == 0


def test_deadline_reached_uses_single_remaining_day():
    assert daily_amortization(500, TODAY, [], today=TODAY) == 500.0
    assert daily_amortization(500, TODAY, _records(('2024-01-01', 600)), today=TODAY) == 0.0


def test_daily_amount_is_rounded_to_cents():
    assert daily_amortization(1000, date(2024, 1, 4), [], today=TODAY) == 333.33


def test_suggested_daily_amount():
    assert suggested_daily_amount(300, date(2024, 1, 4), today=TODAY) == 100.0
    assert suggested_daily_amount(300, TODAY, today=TODAY) == 0.0
    assert suggested_daily_amount(300, date(2023, 12, 1), today=TODAY) == 0.0


def test_goal_progress_and_active_total():
    goals = [
        SavingsGoal(id=1, nombre='Moto', meta=1000, fecha_limite='2024-01-11'),
        SavingsGoal(id=2, nombre='Viaje', meta=300, fecha_limite='2024-01-04', estado='completada'),
    ]
    records = {1: _records(('2024-01-01', 250))}
    progress = goal_progress(goals[0], records[1], today=TODAY)
    assert progress.ahorrado == 250
    assert progress.porcentaje == pytest.approx(25)
    assert progress.restante == 750
    assert progress.ahorro_diario == 75.0
    assert not progress.vencida
    assert total_daily_for_active_goals(goals, records, today=TODAY) == 75.0


def test_calendar_month_statuses():
    records = _records(
        ('2024-02-05', 50),
        ('2024-02-06', 0),
        ('2024-02-12', 0),
    )
    today = date(2024, 2, 10)
    cells = calendar_month(2024, 2, records, '2024-02-20', today)

    # 1 February 2024 is a Thursday, so four blanks lead the Sunday-first grid
    assert cells[:4] == [None, None, None, None]
    assert len(cells) == 4 + 29

    def cell(day):
        return cells[3 + day]

    assert cell(1).fecha == '2024-02-01'
    assert cell(5).status == STATUS_SAVED
    assert cell(5).monto == 50
    assert cell(6).status == STATUS_MISSED
    assert cell(7).status == STATUS_UNMARKED
    assert cell(12).status == STATUS_FUTURE
    assert cell(11).status == STATUS_FUTURE

    assert cell(10).actionable
    assert not cell(11).actionable
    assert cell(5).color == 'green'
    assert cell(6).color == 'red'


def test_calendar_days_after_deadline_are_not_actionable():
    cells = calendar_month(2024, 2, [], '2024-02-08', date(2024, 2, 10))
    days = {c.fecha: c for c in cells if c is not None}
    assert days['2024-02-08'].actionable
    assert not days['2024-02-09'].actionable
    assert days['2024-02-09'].status == STATUS_UNMARKED


def test_missed_days_use_the_business_today(monkeypatch, host_timezone):
    host_timezone('Etc/GMT+12')
    monkeypatch.setattr(config, 'TIMEZONE_NAME', 'Pacific/Kiritimati')
    business_day = datetime.now(ZoneInfo('Pacific/Kiritimati')).date()
    records = _records((business_day.isoformat(), 0))
    assert days_missed_until(records) == 1
