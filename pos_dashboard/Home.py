"""Main entry point for the Streamlit multi-page app: the Dashboard screen.

Pages in the pages/ directory appear in the sidebar automatically.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from pos_dashboard.formatting import format_currency, format_quantity
from pos_dashboard.periods import screen_period
from pos_dashboard.pos_finance_analytics import dashboard_stats
from pos_dashboard.pos_ui import PosUI
from pos_dashboard.shared_sidebar import render_shared_sidebar
from pos_dashboard.visualization import create_financial_waterfall, create_top_products_chart


def main():
    """Render the Dashboard screen."""
    ui = PosUI()
    ui.setup_page_config("Dashboard", "🧾")
    sidebar_data = render_shared_sidebar()
    bundle = sidebar_data['bundle']
    analytics = sidebar_data['analytics']

    period = screen_period('dashboard')
    ui.render_header("🧾 Dashboard", f"Últimos 7 días · {period.label}")

    stats = dashboard_stats(bundle.ventas, bundle.productos)
    col1, col2, col3 = st.columns(3)
    col1.metric("Productos activos", format_quantity(stats['productos_activos']))
    col2.metric("Transacciones hoy", format_quantity(stats['transacciones_hoy']))
    col3.metric("Productos con stock bajo", format_quantity(stats['productos_stock_bajo']))

    summary = analytics.calculate_period(period)
    ui.render_financial_overview(summary, period.label)
    st.plotly_chart(create_financial_waterfall(summary), use_container_width=True)

    left, right = st.columns(2)
    with left:
        st.subheader("Ventas recientes")
        recientes = stats['ventas_recientes']
        if not recientes:
            st.info("No hay ventas registradas.")
        else:
            st.dataframe(
                pd.DataFrame([
                    {
                        'ID': v.id,
                        'Fecha': v.fecha,
                        'Cliente': v.cliente or '',
                        'Total': format_currency(v.total),
                        'Pagado': format_currency(v.amount_collected),
                    }
                    for v in recientes
                ]),
                use_container_width=True,
                hide_index=True,
            )
    with right:
        st.subheader("Productos más vendidos")
        st.plotly_chart(create_top_products_chart(stats['mas_vendidos']), use_container_width=True)


if __name__ == "__main__":
    main()
