"""Plotly figures for the POS dashboard screens.

Each function accepts the objects returned by
:mod:`pos_finance_analytics` or :mod:`savings` and returns a
``plotly.graph_objects.Figure`` that Streamlit renders through
``st.plotly_chart``.  Empty inputs produce an empty figure titled
"Sin datos" instead of raising.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .pos_finance_analytics import FinancialSummary
from .savings import STATUS_COLORS, WEEKDAY_LABELS, DayCell


def _empty_figure(title: str = "Sin datos") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_expense_category_chart(expenses: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Horizontal bar chart of admin expenses per category.

    Parameters
    ----------
    expenses : pandas.DataFrame
        Output of ``PosFinanceAnalytics.expenses_by_category`` with
        ``categoria`` and ``total`` columns.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart, largest category on top.
    """
    if expenses is None or expenses.empty:
        return _empty_figure()
    df = expenses.sort_values('total', ascending=True)
    fig = px.bar(df, x='total', y='categoria', orientation='h')
    fig.update_layout(
        title=title or "Gastos por categoría",
        xaxis_title="Monto",
        yaxis_title="Categoría",
    )
    return fig


def create_financial_waterfall(summary: FinancialSummary, title: str | None = None) -> go.Figure:
    """Waterfall from total income down to net profit.

    Parameters
    ----------
    summary : FinancialSummary
        Figures of one period.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Waterfall chart whose last bar is ``ganancia_neta``.
    """
    labels = ["Ingresos", "Costo de productos", "Gastos admin", "Nóminas", "Ganancia neta"]
    values = [
        summary.ingresos_totales,
        -summary.costo_ventas,
        -summary.total_gastos_admin,
        -summary.total_nominas,
        summary.ganancia_neta,
    ]
    fig = go.Figure(go.Waterfall(
        x=labels,
        y=values,
        measure=["absolute", "relative", "relative", "relative", "total"],
        connector={"line": {"color": "rgb(120, 120, 120)"}},
    ))
    fig.update_layout(title=title or "Del ingreso a la ganancia neta", showlegend=False)
    return fig


def create_top_products_chart(products: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Bar chart of units sold per product (``top_products`` output)."""
    if products is None or products.empty:
        return _empty_figure()
    fig = px.bar(products, x='nombre', y='cantidad', hover_data=['total'])
    fig.update_layout(
        title=title or "Productos más vendidos",
        xaxis_title="Producto",
        yaxis_title="Unidades",
    )
    return fig


def create_ledger_chart(ingresos: float, gastos: float, title: str | None = None) -> go.Figure:
    """Income against expenses of the side-venture ledger."""
    if not ingresos and not gastos:
        return _empty_figure()
    fig = go.Figure(go.Bar(
        x=["Ingresos", "Gastos"],
        y=[ingresos, gastos],
        marker_color=["green", "red"],
    ))
    fig.update_layout(title=title or "Lienzo Charro", yaxis_title="Monto")
    return fig


def calendar_matrix(cells: Sequence[Optional[DayCell]]) -> np.ndarray:
    """Weeks-by-weekday grid of ``cells``, with ``None`` where there is no day."""
    weeks = int(np.ceil(len(cells) / 7)) if cells else 0
    grid = np.full((weeks, 7), None, dtype=object)
    for position, cell in enumerate(cells):
        grid[position // 7, position % 7] = cell
    return grid


def create_savings_calendar(cells: Sequence[Optional[DayCell]], title: str | None = None) -> go.Figure:
    """Month calendar of a savings goal, one coloured marker per day.

    Parameters
    ----------
    cells : sequence of DayCell or None
        Output of :func:`savings.calendar_month` (Sunday first).
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Scatter laid out as a calendar, weeks running top to bottom.
    """
    grid = calendar_matrix(cells)
    if grid.size == 0:
        return _empty_figure()

    xs: List[int] = []
    ys: List[int] = []
    colors: List[str] = []
    texts: List[str] = []
    hovers: List[str] = []
    for (week, weekday), cell in np.ndenumerate(grid):
        if cell is None:
            continue
        xs.append(weekday)
        ys.append(week)
        colors.append(STATUS_COLORS[cell.status])
        texts.append(str(cell.dia))
        amount = f" · ${cell.monto:,.2f}" if cell.monto else ""
        hovers.append(f"{cell.fecha}{amount}")

    fig = go.Figure(go.Scatter(
        x=xs,
        y=ys,
        mode="markers+text",
        text=texts,
        hovertext=hovers,
        hoverinfo="text",
        textfont={"color": "white"},
        marker={"size": 34, "color": colors, "symbol": "square"},
    ))
    fig.update_layout(
        title=title or "Calendario de ahorro",
        xaxis={"tickmode": "array", "tickvals": list(range(7)), "ticktext": WEEKDAY_LABELS, "side": "top"},
        yaxis={"autorange": "reversed", "showticklabels": False},
        showlegend=False,
        height=80 + 50 * grid.shape[0],
    )
    return fig
