#!/usr/bin/env python3
"""Print the financial summary of a report period from the snapshot files."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pos_dashboard.formatting import format_currency, format_signed_currency
from pos_dashboard.periods import REPORT_PERIODS, report_period
from pos_dashboard.pos_finance_analytics import PosFinanceAnalytics
from pos_dashboard.reporting import export_report_csv
from pos_dashboard.snapshot_storage import SnapshotStorage


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Summarize revenue, costs and net profit of a period.')
    parser.add_argument('--period', choices=REPORT_PERIODS, default='mes', help='Report period')
    parser.add_argument('--from', dest='start', help='Start day (YYYY-MM-DD) for personalizado')
    parser.add_argument('--to', dest='end', help='End day (YYYY-MM-DD) for personalizado')
    parser.add_argument('--snapshot-dir', type=Path, help='Directory with the JSON snapshots')
    parser.add_argument('--export', type=Path, metavar='DIR', help='Also write the CSV report to DIR')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    bundle = SnapshotStorage(args.snapshot_dir).load_bundle()
    if bundle.is_empty:
        print("No snapshot data found.")
        return 1

    period = report_period(args.period, custom_start=args.start, custom_end=args.end)
    analytics = PosFinanceAnalytics(bundle.ventas, bundle.gastos_admin, bundle.nominas, bundle.lienzo, bundle.productos)
    summary = analytics.calculate_period(period)
    metrics = analytics.calculate_report_metrics(period.start, period.end, summary=summary)

    print(f"Período: {period.label}")
    print(f"  Ventas:                {metrics.total_ventas} ({metrics.ventas_pagadas} con pago)")
    print(f"  Ingresos:              {format_currency(summary.ingresos_totales)}")
    print(f"  Costo de productos:    {format_currency(summary.costo_ventas)}")
    print(f"  Ganancia bruta:        {format_signed_currency(summary.ganancia_bruta)}")
    print(f"  Gastos admin:          {format_currency(summary.total_gastos_admin)}")
    print(f"  Nóminas:               {format_currency(summary.total_nominas)}")
    print(f"  Ganancia neta:         {format_signed_currency(summary.ganancia_neta)}")
    print(f"  Margen:                {metrics.margen_ganancia:.2f}%")
    if summary.efectivo_bajo:
        print("  ⚠️  Efectivo bajo")

    if args.export:
        path = export_report_csv(metrics, summary, analytics.recent_sales(period.start, period.end), period, args.export)
        print(f"Reporte guardado en {path}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
