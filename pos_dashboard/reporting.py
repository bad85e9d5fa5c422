"""CSV export of the reports screen."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from .config import BUSINESS_NAME, REPORTS_DIR, local_now
from .formatting import format_currency, format_quantity
from .periods import Period
from .pos_finance_analytics import FinancialSummary, ReportMetrics
from .records import Sale

logger = logging.getLogger(__name__)

LINE_END = '\r\n'
BOM = '\ufeff'


def _plain_number(value: float) -> str:
    """``100.0 -> '100'``, ``99.5 -> '99.5'``."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def report_filename(period: Period) -> str:
    start, end = period.day_keys()
    return f"reporte-ventas-{start}-{end}.csv"


def build_report_csv(
    metrics: ReportMetrics,
    summary: FinancialSummary,
    sales: Iterable[Sale],
    period: Period,
    generated: Optional[datetime] = None,
    business_name: str = BUSINESS_NAME,
) -> str:
    """Text of the sales report, without the byte-order mark.

    The layout is a title block, a two-column ``RESUMEN`` block and the
    ``ID,Fecha,Total,Pagado`` listing of ``sales``.  Lines end in CRLF.
    """
    generated = generated or local_now()
    header: List[str] = [
        f"Reporte de ventas - {business_name}",
        f"Período: {period.label}",
        f"Generado: {generated:%d/%m/%Y, %H:%M:%S}",
        '',
        'RESUMEN',
    ]

    summary_rows = pd.DataFrame([
        ('Total ventas (transacciones)', str(metrics.total_ventas)),
        ('Ingresos totales', format_currency(summary.ingresos_totales)),
        ('Costo de productos', format_currency(summary.costo_ventas)),
        ('Gastos administrativos (período)', format_currency(summary.total_gastos_admin)),
        ('Nóminas pagadas (período)', format_currency(summary.total_nominas)),
        ('Ganancia bruta', format_currency(summary.ganancia_bruta)),
        ('Ganancia neta', format_currency(summary.ganancia_neta)),
        ('Venta promedio', format_currency(metrics.venta_promedio)),
        ('Productos vendidos (unidades)', format_quantity(metrics.productos_vendidos)),
        ('Margen ganancia (%)', format_currency(metrics.margen_ganancia, include_sign=False)),
    ])
    summary_block = summary_rows.to_csv(index=False, header=False, lineterminator=LINE_END)

    sales_rows = pd.DataFrame(
        [
            {
                'ID': '' if s.id is None else str(s.id),
                'Fecha': s.fecha or '',
                'Total': _plain_number(s.total),
                'Pagado': _plain_number(s.amount_collected),
            }
            for s in sales or []
        ],
        columns=['ID', 'Fecha', 'Total', 'Pagado'],
    )
    sales_block = sales_rows.to_csv(index=False, lineterminator=LINE_END)

    return (
        LINE_END.join(header) + LINE_END
        + summary_block + LINE_END
        + 'VENTAS DEL PERÍODO' + LINE_END
        + sales_block
    )


def report_bytes(*args, **kwargs) -> bytes:
    """:func:`build_report_csv` encoded as UTF-8 with a byte-order mark."""
    return (BOM + build_report_csv(*args, **kwargs)).encode('utf-8')


def export_report_csv(
    metrics: ReportMetrics,
    summary: FinancialSummary,
    sales: Iterable[Sale],
    period: Period,
    directory: Optional[Path] = None,
    generated: Optional[datetime] = None,
) -> Path:
    """Write the report to ``directory`` (``REPORTS_DIR`` by default) and return its path."""
    target_dir = Path(directory or REPORTS_DIR)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / report_filename(period)
    path.write_bytes(report_bytes(metrics, summary, sales, period, generated=generated))
    logger.info("Exported sales report to %s", path)
    return path
