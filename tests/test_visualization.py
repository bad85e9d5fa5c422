from datetime import date

import pandas as pd

from pos_dashboard.pos_finance_analytics import compute_financials
from pos_dashboard.savings import calendar_month
from pos_dashboard.visualization import (
    calendar_matrix,
    create_expense_category_chart,
    create_financial_waterfall,
    create_savings_calendar,
    create_top_products_chart,
)


def test_empty_inputs_give_placeholder_figures():
    empty = pd.DataFrame(columns=['categoria', 'total'])
    assert create_expense_category_chart(empty).layout.title.text == 'Sin datos'
    assert create_top_products_chart(pd.DataFrame()).layout.title.text == 'Sin datos'
    assert create_savings_calendar([]).layout.title.text == 'Sin datos'


def test_waterfall_ends_in_net_profit():
    summary = compute_financials([], [], [], [], None, None)
    fig = create_financial_waterfall(summary)
    assert list(fig.data[0].measure)[-1] == 'total'
    assert list(fig.data[0].x)[-1] == 'Ganancia neta'


def test_savings_calendar_layout():
    cells = calendar_month(2024, 2, [], '2024-02-20', date(2024, 2, 10))
    grid = calendar_matrix(cells)
    assert grid.shape == (5, 7)
    assert grid[0, 4].fecha == '2024-02-01'
    fig = create_savings_calendar(cells)
    assert len(fig.data[0].x) == 29
