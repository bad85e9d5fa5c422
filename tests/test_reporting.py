from datetime import datetime

from pos_dashboard.periods import Period
from pos_dashboard.pos_finance_analytics import PosFinanceAnalytics
from pos_dashboard.records import AdminExpense, Sale, parse_records
from pos_dashboard.reporting import build_report_csv, export_report_csv, report_filename

PERIOD = Period(datetime(2024, 3, 1), datetime(2024, 3, 31, 23, 59, 59))
GENERATED = datetime(2024, 4, 1, 9, 5, 0)


def _report_inputs():
    sales = parse_records(Sale, [
        {'id': 1, 'fecha': '2024-03-05T10:00:00', 'total': 1500, 'items': [
            {'id': 1, 'nombre': 'Silla', 'precio': 750, 'cantidad': 2, 'costo': 300},
        ]},
        {'id': 2, 'fecha': '2024-03-06T10:00:00', 'total': 99.5, 'pagado': 50, 'items': []},
    ])
    expenses = parse_records(AdminExpense, [
        {'id': 1, 'fecha': '2024-03-07', 'descripcion': 'Renta', 'categoria': 'Gastos de la empresa', 'monto': 200},
    ])
    analytics = PosFinanceAnalytics(sales, expenses)
    summary = analytics.calculate_period(PERIOD)
    metrics = analytics.calculate_report_metrics(PERIOD.start, PERIOD.end, summary=summary)
    return metrics, summary, analytics.recent_sales(PERIOD.start, PERIOD.end)


def test_report_layout():
    metrics, summary, sales = _report_inputs()
    text = build_report_csv(metrics, summary, sales, PERIOD, generated=GENERATED, business_name='Mi Tienda')
    lines = text.split('\r\n')
    assert lines[0] == 'Reporte de ventas - Mi Tienda'
    assert lines[1] == 'Período: 01/03/2024 - 31/03/2024'
    assert lines[2] == 'Generado: 01/04/2024, 09:05:00'
    assert lines[3] == ''
    assert lines[4] == 'RESUMEN'
    assert lines[5] == 'Total ventas (transacciones),2'
    assert lines[6] == 'Ingresos totales,"$1,550.00"'
    assert 'Gastos administrativos (período),$200.00' in lines
    assert 'VENTAS DEL PERÍODO' in lines
    header = lines.index('ID,Fecha,Total,Pagado')
    assert lines[header + 1] == '2,2024-03-06T10:00:00,99.5,50'
    assert lines[header + 2] == '1,2024-03-05T10:00:00,1500,1500'
    assert '\n' not in text.replace('\r\n', '')


def test_export_writes_bom_and_crlf(tmp_path):
    metrics, summary, sales = _report_inputs()
    path = export_report_csv(metrics, summary, sales, PERIOD, directory=tmp_path, generated=GENERATED)
    assert path.name == 'reporte-ventas-2024-03-01-2024-03-31.csv'
    assert path.name == report_filename(PERIOD)
    raw = path.read_bytes()
    assert raw.startswith(b'\xef\xbb\xbf')
    assert b'\r\nRESUMEN\r\n' in raw
