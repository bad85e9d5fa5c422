"""Financial aggregation for the point-of-sale screens.

This module holds the single net-profit formula shared by the dashboard,
admin-expenses, payroll and reports screens:

    ganancia_neta = (ingresos_ventas + ingresos_ledger)
                    - costo_ventas - gastos_admin - nominas

Each screen calls :func:`compute_financials` (or a
:class:`PosFinanceAnalytics` built once per render) with its own window.
Missing numbers count as ``0`` and every ratio guards its denominator, so
nothing here raises on incomplete data.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .data_processing import (
    expenses_frame,
    filter_period,
    ledger_frame,
    payroll_frame,
    sale_items_frame,
    sales_frame,
)
from .periods import Period, today_period
from .records import LEDGER_EXPENSE, LEDGER_INCOME, AdminExpense, LedgerMovement, PayrollRun, Product, Sale


@dataclass(frozen=True)
class FinancialSummary:
    """Figures of one period, in the order they are derived."""

    ingresos_ventas: float
    ingresos_ledger: float
    ingresos_totales: float
    costo_ventas: float
    ganancia_bruta: float
    total_gastos_admin: float
    total_nominas: float
    ganancia_neta: float
    efectivo_disponible: float
    efectivo_bajo: bool
    ventas_count: int
    gastos_count: int
    nominas_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ReportMetrics:
    """Reports-screen ratios derived from a :class:`FinancialSummary`."""

    total_ventas: int
    ventas_pagadas: int
    venta_promedio: float
    margen_ganancia: float
    productos_vendidos: float
    costo_promedio: float
    ganancia_por_venta: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def safe_ratio(numerator: float, denominator: float) -> float:
    """``numerator / denominator``, or ``0`` when the denominator is zero."""
    return float(numerator / denominator) if denominator else 0.0


def low_cash_warning(efectivo_disponible: float, ingresos_totales: float, gastos_count: int, nominas_count: int) -> bool:
    """Raised on negative cash, or on zero income while outgoings were booked."""
    return efectivo_disponible < 0 or (ingresos_totales == 0 and (gastos_count > 0 or nominas_count > 0))


class PosFinanceAnalytics:
    """Prepared frames for one snapshot of the POS collections."""

    def __init__(
        self,
        sales: Iterable[Sale] = (),
        admin_expenses: Iterable[AdminExpense] = (),
        payroll_runs: Iterable[PayrollRun] = (),
        ledger_movements: Iterable[LedgerMovement] = (),
        products: Optional[Iterable[Product]] = None,
    ):
        sales = list(sales or [])
        self.sales = sales
        self.sales_df = sales_frame(sales)
        self.items_df = sale_items_frame(sales, products)
        self.expenses_df = expenses_frame(admin_expenses)
        self.payroll_df = payroll_frame(payroll_runs)
        self.ledger_df = ledger_frame(ledger_movements)

    # ------------------------------------------------------------------
    # Canonical formula
    # ------------------------------------------------------------------

    def calculate_period_summary(self, start: Any = None, end: Any = None) -> FinancialSummary:
        """Revenue, cost of goods sold, gross and net profit for ``[start, end]``."""
        ventas = filter_period(self.sales_df, start, end)
        ingresos_ventas = float(ventas['collected'].sum())

        ledger = filter_period(self.ledger_df, start, end)
        ingresos_ledger = float(ledger.loc[ledger['tipo'] == LEDGER_INCOME, 'monto'].sum())
        ingresos_totales = ingresos_ventas + ingresos_ledger

        items = filter_period(self.items_df, start, end)
        costo_ventas = float(items['cost'].sum())
        ganancia_bruta = ingresos_totales - costo_ventas

        gastos = filter_period(self.expenses_df, start, end)
        total_gastos_admin = float(gastos['monto'].sum())

        nominas = filter_period(self.payroll_df, start, end)
        total_nominas = float(nominas['total'].sum())

        ganancia_neta = ganancia_bruta - total_gastos_admin - total_nominas
        efectivo_disponible = ganancia_neta

        return FinancialSummary(
            ingresos_ventas=ingresos_ventas,
            ingresos_ledger=ingresos_ledger,
            ingresos_totales=ingresos_totales,
            costo_ventas=costo_ventas,
            ganancia_bruta=ganancia_bruta,
            total_gastos_admin=total_gastos_admin,
            total_nominas=total_nominas,
            ganancia_neta=ganancia_neta,
            efectivo_disponible=efectivo_disponible,
            efectivo_bajo=low_cash_warning(efectivo_disponible, ingresos_totales, len(gastos), len(nominas)),
            ventas_count=len(ventas),
            gastos_count=len(gastos),
            nominas_count=len(nominas),
        )

    def calculate_period(self, period: Period) -> FinancialSummary:
        return self.calculate_period_summary(period.start, period.end)

    def calculate_report_metrics(
        self,
        start: Any = None,
        end: Any = None,
        summary: Optional[FinancialSummary] = None,
    ) -> ReportMetrics:
        """Averages and margins shown on the reports screen."""
        summary = summary or self.calculate_period_summary(start, end)
        ventas = filter_period(self.sales_df, start, end)
        paid = ventas[ventas['collected'] > 0]
        items = filter_period(self.items_df, start, end)
        productos_vendidos = float(items.loc[items['sale_idx'].isin(paid['sale_idx']), 'cantidad'].sum())
        ventas_pagadas = len(paid)

        return ReportMetrics(
            total_ventas=len(ventas),
            ventas_pagadas=ventas_pagadas,
            venta_promedio=safe_ratio(summary.ingresos_totales, ventas_pagadas),
            margen_ganancia=safe_ratio(summary.ganancia_bruta, summary.ingresos_totales) * 100,
            productos_vendidos=productos_vendidos,
            costo_promedio=safe_ratio(summary.costo_ventas, productos_vendidos),
            ganancia_por_venta=safe_ratio(summary.ganancia_bruta, ventas_pagadas),
        )

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def top_products(self, start: Any = None, end: Any = None, limit: int = 10, paid_only: bool = True) -> pd.DataFrame:
        """Units and sales value per product, most units first."""
        items = filter_period(self.items_df, start, end)
        if paid_only and not items.empty:
            paid_idx = self.sales_df.loc[self.sales_df['collected'] > 0, 'sale_idx']
            items = items[items['sale_idx'].isin(paid_idx)]
        columns = ['item_id', 'nombre', 'cantidad', 'total']
        if items.empty:
            return pd.DataFrame(columns=columns)
        working = items.copy()
        working['total'] = working['precio'] * working['cantidad']
        grouped = working.groupby('item_id', sort=False, dropna=False).agg(
            nombre=('nombre', 'last'),
            cantidad=('cantidad', 'sum'),
            total=('total', 'sum'),
        ).reset_index()
        grouped = grouped.sort_values('cantidad', ascending=False, kind='stable')
        return grouped[columns].head(limit).reset_index(drop=True)

    def recent_sales(self, start: Any = None, end: Any = None, limit: int = 10) -> List[Sale]:
        """Sales of the window, newest first."""
        ventas = filter_period(self.sales_df, start, end)
        ordered = ventas.sort_values('fecha', ascending=False, kind='stable')
        return [self.sales[int(idx)] for idx in ordered['sale_idx'].head(limit)]

    def expenses_by_category(
        self,
        start: Any = None,
        end: Any = None,
        categoria: Optional[str] = None,
    ) -> pd.DataFrame:
        """Admin expenses per category, largest first, with an optional category filter."""
        gastos = self.expenses_df
        if categoria and categoria != 'Todos':
            gastos = gastos[gastos['categoria'] == categoria]
        if start is not None or end is not None:
            gastos = filter_period(gastos, start, end)
        if gastos.empty:
            return pd.DataFrame(columns=['categoria', 'total'])
        summary = gastos.groupby('categoria', sort=False)['monto'].sum().reset_index()
        summary.columns = ['categoria', 'total']
        return summary.sort_values('total', ascending=False, kind='stable').reset_index(drop=True)

    def ledger_summary(self, period: Optional[Period] = None) -> Dict[str, float]:
        """Side-venture income, expenses and balance by calendar day."""
        ledger = self.ledger_df
        if period is not None:
            first, last = period.day_keys()
            ledger = ledger[(ledger['day'] >= first) & (ledger['day'] <= last)]
        ingresos = float(ledger.loc[ledger['tipo'] == LEDGER_INCOME, 'monto'].sum())
        gastos = float(ledger.loc[ledger['tipo'] == LEDGER_EXPENSE, 'monto'].sum())
        return {
            'ingresos': ingresos,
            'gastos': gastos,
            'balance': ingresos - gastos,
            'movimientos': int(len(ledger)),
        }


def compute_financials(
    sales: Iterable[Sale],
    admin_expenses: Iterable[AdminExpense],
    payroll_runs: Iterable[PayrollRun],
    ledger_movements: Iterable[LedgerMovement],
    period_start: Any,
    period_end: Any,
    products: Optional[Iterable[Product]] = None,
) -> FinancialSummary:
    """Canonical financial summary for ``[period_start, period_end]``."""
    analytics = PosFinanceAnalytics(sales, admin_expenses, payroll_runs, ledger_movements, products)
    return analytics.calculate_period_summary(period_start, period_end)


def compute_report_metrics(
    sales: Iterable[Sale],
    admin_expenses: Iterable[AdminExpense],
    payroll_runs: Iterable[PayrollRun],
    ledger_movements: Iterable[LedgerMovement],
    period_start: Any,
    period_end: Any,
    products: Optional[Iterable[Product]] = None,
) -> ReportMetrics:
    analytics = PosFinanceAnalytics(sales, admin_expenses, payroll_runs, ledger_movements, products)
    return analytics.calculate_report_metrics(period_start, period_end)


def dashboard_stats(
    sales: Iterable[Sale],
    products: Iterable[Product],
    now: Optional[datetime] = None,
    recent_limit: int = 5,
) -> Dict[str, Any]:
    """Headline counters of the dashboard screen."""
    sales = list(sales or [])
    products = list(products or [])
    today = today_period(now)
    analytics = PosFinanceAnalytics(sales, products=products)
    return {
        'productos_activos': sum(1 for p in products if p.is_active),
        'transacciones_hoy': int(len(filter_period(analytics.sales_df, today.start, today.end))),
        'productos_stock_bajo': sum(1 for p in products if p.is_low_stock),
        'ventas_recientes': analytics.recent_sales(limit=recent_limit),
        'mas_vendidos': analytics.top_products(limit=10, paid_only=False),
    }
