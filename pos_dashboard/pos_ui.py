"""Streamlit components shared by the POS screens.

The components only render.  Figures come from
:mod:`pos_finance_analytics` and :mod:`savings`; forms hand their input to
:mod:`validation` and return the cleaned payload, or ``None`` when nothing
valid was submitted.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

from .config import BUSINESS_NAME, local_now, local_today
from .formatting import escape_dollar_for_markdown, format_currency, format_quantity, format_signed_currency
from .pos_finance_analytics import FinancialSummary, ReportMetrics
from .records import CATEGORIAS_GASTOS, LEDGER_EXPENSE, LEDGER_INCOME, Employee
from .savings import suggested_daily_amount
from .payroll import advance_preview
from . import validation


class PosUI:
    """UI components for the point-of-sale dashboard."""
    _PAGE_CONFIGURED = False

    def __init__(self, *, configure_page: bool = False):
        if configure_page:
            self.setup_page_config()

    def setup_page_config(self, page_title: str = "POS Dashboard", page_icon: str = "🧾") -> None:
        """Configure Streamlit page settings once per session."""
        if PosUI._PAGE_CONFIGURED:
            return
        try:
            st.set_page_config(
                page_title=page_title,
                page_icon=page_icon,
                layout="wide",
                initial_sidebar_state="expanded",
            )
        except StreamlitAPIException:
            # Already configured upstream; avoid raising to keep reruns smooth.
            pass
        finally:
            PosUI._PAGE_CONFIGURED = True

    def render_header(self, title: str, subtitle: Optional[str] = None) -> None:
        col1, col2 = st.columns([3, 1])
        with col1:
            st.title(title)
            if subtitle:
                st.caption(subtitle)
        with col2:
            st.metric(label=BUSINESS_NAME, value=local_now().strftime("%d/%m/%Y"))

    def render_financial_overview(self, summary: FinancialSummary, period_label: str = "") -> None:
        """Revenue, costs and net profit of one period."""
        st.subheader("📊 Resumen financiero")
        if period_label:
            st.caption(f"Período: {period_label}")

        col1, col2, col3, col4 = st.columns(4)
        col1.metric(
            "💰 Ingresos",
            format_currency(summary.ingresos_totales),
            help="Cobrado en ventas más ingresos del Lienzo Charro",
        )
        col2.metric("📦 Costo de productos", format_currency(summary.costo_ventas))
        col3.metric("📈 Ganancia bruta", format_signed_currency(summary.ganancia_bruta))
        col4.metric(
            "💵 Ganancia neta",
            format_signed_currency(summary.ganancia_neta),
            help="Ganancia bruta menos gastos administrativos y nóminas",
        )

        col5, col6, col7 = st.columns(3)
        col5.metric("🏢 Gastos administrativos", format_currency(summary.total_gastos_admin))
        col6.metric("👷 Nóminas", format_currency(summary.total_nominas))
        col7.metric("🏦 Efectivo disponible", format_signed_currency(summary.efectivo_disponible))

        self.render_low_cash_warning(summary)

    def render_low_cash_warning(self, summary: FinancialSummary) -> None:
        if not summary.efectivo_bajo:
            return
        if summary.efectivo_disponible < 0:
            message = (
                f"Efectivo disponible negativo ({format_signed_currency(summary.efectivo_disponible)}). "
                "Los gastos y nóminas superan lo cobrado en el período."
            )
        else:
            message = "No hay ingresos en el período y ya se registraron gastos o nóminas."
        st.warning(escape_dollar_for_markdown(f"⚠️ {message}"))

    def render_report_metrics(self, metrics: ReportMetrics) -> None:
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("🧾 Ventas", format_quantity(metrics.total_ventas), help=f"{metrics.ventas_pagadas} con pago")
        col2.metric("🎟️ Venta promedio", format_currency(metrics.venta_promedio))
        col3.metric("📐 Margen de ganancia", f"{metrics.margen_ganancia:.2f}%")
        col4.metric("📦 Productos vendidos", format_quantity(metrics.productos_vendidos))

        col5, col6 = st.columns(2)
        col5.metric("Costo promedio por unidad", format_currency(metrics.costo_promedio))
        col6.metric("Ganancia por venta", format_signed_currency(metrics.ganancia_por_venta))

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------

    def render_admin_expense_form(self) -> Optional[Dict]:
        with st.form("admin_expense_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            with col1:
                descripcion = st.text_input("Descripción")
                categoria = st.selectbox("Categoría", options=list(CATEGORIAS_GASTOS), index=3)
            with col2:
                monto = st.text_input("Monto", placeholder="0.00")
                fecha = st.date_input("Fecha", value=local_today())
            submitted = st.form_submit_button("Registrar gasto")
        if not submitted:
            return None
        try:
            return validation.validate_admin_expense(descripcion, categoria, monto, fecha)
        except ValueError as exc:
            st.error(str(exc))
            return None

    def render_savings_goal_form(self) -> Optional[Dict]:
        nombre = st.text_input("Nombre de la meta", key="goal_name")
        col1, col2 = st.columns(2)
        with col1:
            meta = st.text_input("Monto a ahorrar", key="goal_amount", placeholder="0.00")
        with col2:
            fecha_limite = st.date_input("Fecha límite", key="goal_deadline", value=local_today())

        amount = validation.parse_amount(meta)
        if amount and amount > 0:
            diario = suggested_daily_amount(amount, fecha_limite)
            if diario > 0:
                st.info(escape_dollar_for_markdown(f"Deberías ahorrar {format_currency(diario)} por día"))
            else:
                st.info("La fecha límite debe ser posterior a hoy")

        if not st.button("Crear meta", key="goal_submit"):
            return None
        try:
            return validation.validate_savings_goal(nombre, meta, fecha_limite)
        except ValueError as exc:
            st.error(str(exc))
            return None

    def render_ledger_form(self) -> Optional[Dict]:
        with st.form("ledger_form", clear_on_submit=True):
            tipo = st.radio(
                "Tipo",
                options=[LEDGER_INCOME, LEDGER_EXPENSE],
                format_func=lambda t: "Ingreso" if t == LEDGER_INCOME else "Gasto",
                horizontal=True,
            )
            monto = st.text_input("Monto", placeholder="0.00")
            descripcion = st.text_input("Descripción (opcional)")
            fecha = st.date_input("Fecha", value=local_today())
            submitted = st.form_submit_button("Registrar movimiento")
        if not submitted:
            return None
        try:
            return validation.validate_ledger_movement(tipo, monto, descripcion, fecha)
        except ValueError as exc:
            st.error(str(exc))
            return None

    def render_employee_form(self) -> Optional[Dict]:
        with st.form("employee_form", clear_on_submit=True):
            nombre = st.text_input("Nombre")
            puesto = st.text_input("Puesto (opcional)")
            sueldo = st.text_input("Sueldo semanal", placeholder="0.00")
            submitted = st.form_submit_button("Agregar trabajador")
        if not submitted:
            return None
        try:
            return validation.validate_employee(nombre, sueldo, puesto)
        except ValueError as exc:
            st.error(str(exc))
            return None

    def render_advance_form(self, employees: Iterable[Employee]) -> Optional[Dict]:
        employees: List[Employee] = list(employees or [])
        if not employees:
            st.info("Registra trabajadores para poder darles adelantos.")
            return None
        by_id = {e.id: e for e in employees}
        empleado_id = st.selectbox(
            "Trabajador",
            options=list(by_id),
            format_func=lambda i: by_id[i].nombre,
            key="advance_employee",
        )
        col1, col2 = st.columns(2)
        with col1:
            monto = st.text_input("Monto del adelanto", key="advance_amount", placeholder="0.00")
        with col2:
            semanas = st.number_input("Semanas para pagar", min_value=1, max_value=52, value=2, key="advance_weeks")

        amount = validation.parse_amount(monto)
        if amount and amount > 0 and empleado_id in by_id:
            preview = advance_preview(by_id[empleado_id].sueldo, amount, semanas)
            st.info(escape_dollar_for_markdown(
                f"Entregar hoy {format_currency(preview['entregar_hoy'])}; "
                f"se descontarán {format_currency(preview['por_semana'])} durante {preview['semanas']} semanas"
            ))

        if not st.button("Dar adelanto", key="advance_submit"):
            return None
        try:
            return validation.validate_advance(empleado_id, monto, semanas)
        except ValueError as exc:
            st.error(str(exc))
            return None
