"""Date parsing and DataFrame builders for POS collections.

This module turns the record lists served by the backend into pandas
DataFrames with parsed timestamps and coerced numbers.  The functions are
pure and independent of any user interface so that they can be unit tested
and reused by the analytics module, the pages and the command-line scripts.

Timestamps follow one rule: a stored value without an offset is local
wall-clock time, and a value carrying an offset is converted to the local
zone.  Either way the result is a naive ``pd.Timestamp`` that compares
directly against the naive period bounds built in :mod:`periods`.
"""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import get_local_timezone
from .records import AdminExpense, LedgerMovement, PayrollRun, Product, Sale, day_key

SALE_COLUMNS = ['sale_idx', 'id', 'fecha', 'total', 'pagado', 'collected', 'paid_ratio', 'item_count']
ITEM_COLUMNS = [
    'sale_idx', 'sale_id', 'fecha', 'item_id', 'nombre', 'precio', 'cantidad',
    'costo', 'product_cost', 'unit_cost', 'paid_ratio', 'collected', 'cost',
]
EXPENSE_COLUMNS = ['id', 'fecha', 'descripcion', 'categoria', 'monto']
PAYROLL_COLUMNS = ['id', 'fecha', 'total', 'item_count']
LEDGER_COLUMNS = ['id', 'fecha', 'day', 'tipo', 'monto', 'descripcion']


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def parse_timestamp(value: Any, tz: Optional[tzinfo] = None) -> pd.Timestamp:
    """Parse a stored date into a naive local ``pd.Timestamp``.

    Returns ``pd.NaT`` for missing or unparseable values so they drop out
    of every period comparison.
    """
    if value is None:
        return pd.NaT
    if isinstance(value, (pd.Timestamp, datetime, date)):
        ts = pd.Timestamp(value)
    else:
        text = str(value).strip()
        if not text:
            return pd.NaT
        try:
            ts = pd.Timestamp(text)
        except (ValueError, TypeError, OverflowError):
            return pd.NaT
    if pd.isna(ts):
        return pd.NaT
    if ts.tzinfo is not None:
        ts = ts.tz_convert(tz or get_local_timezone()).tz_localize(None)
    return ts


def to_local_date_string(value: Any) -> str:
    """``YYYY-MM-DD`` of a stored date in local time, or ``''`` when unknown."""
    ts = parse_timestamp(value)
    if pd.isna(ts):
        return ''
    return ts.strftime('%Y-%m-%d')


def _timestamp_series(values: Sequence[Any], index: pd.Index) -> pd.Series:
    parsed = [parse_timestamp(value) for value in values]
    return pd.to_datetime(pd.Series(parsed, index=index, dtype=object))


def filter_period(
    df: pd.DataFrame,
    start: Any = None,
    end: Any = None,
    column: str = 'fecha',
) -> pd.DataFrame:
    """Rows whose ``column`` falls inside ``[start, end]``, both inclusive.

    ``None`` leaves that side of the window open.  Rows without a valid
    timestamp are always excluded.
    """
    if df is None or df.empty:
        return df
    values = df[column]
    mask = values.notna()
    start_ts = parse_timestamp(start)
    end_ts = parse_timestamp(end)
    if not pd.isna(start_ts):
        mask &= values >= start_ts
    if not pd.isna(end_ts):
        mask &= values <= end_ts
    return df[mask]


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------


def product_cost_lookup(products: Optional[Iterable[Product]]) -> Dict[int, Optional[float]]:
    """Map product id to its current cost; the first product with an id wins."""
    lookup: Dict[int, Optional[float]] = {}
    for product in products or []:
        if product.id is not None and product.id not in lookup:
            lookup[product.id] = product.costo
    return lookup


def sales_frame(sales: Iterable[Sale]) -> pd.DataFrame:
    """One row per sale with the collected amount and the paid ratio."""
    sales = list(sales or [])
    rows = [
        {
            'sale_idx': idx,
            'id': sale.id,
            'total': sale.total,
            'pagado': np.nan if sale.pagado is None else sale.pagado,
            'item_count': len(sale.items),
        }
        for idx, sale in enumerate(sales)
    ]
    frame = pd.DataFrame(rows, columns=['sale_idx', 'id', 'total', 'pagado', 'item_count'])
    frame['fecha'] = _timestamp_series([sale.fecha for sale in sales], frame.index)
    frame['total'] = pd.to_numeric(frame['total'], errors='coerce').fillna(0.0).astype(float)
    frame['pagado'] = pd.to_numeric(frame['pagado'], errors='coerce').astype(float)
    frame['collected'] = frame['pagado'].fillna(frame['total'])
    frame['paid_ratio'] = _paid_ratio(frame['collected'], frame['total'])
    return frame[SALE_COLUMNS]


def _paid_ratio(collected: pd.Series, total: pd.Series) -> pd.Series:
    """Share of the sale actually collected; ``1`` when the total is not positive."""
    positive = total > 0
    safe_total = total.where(positive, 1.0)
    return pd.Series(np.where(positive, collected / safe_total, 1.0), index=total.index, dtype=float)


def sale_items_frame(sales: Iterable[Sale], products: Optional[Iterable[Product]] = None) -> pd.DataFrame:
    """One row per sold line with its unit cost and recognised cost.

    The unit cost is the cost captured on the line at sale time, falling
    back to the product's current cost and then to ``0``.  The recognised
    cost scales with the share of the sale that was collected.
    """
    sales = list(sales or [])
    lookup = product_cost_lookup(products)
    rows: List[Dict[str, Any]] = []
    fechas: List[Any] = []
    for idx, sale in enumerate(sales):
        for item in sale.items:
            fallback = lookup.get(item.id) if item.id is not None else None
            rows.append({
                'sale_idx': idx,
                'sale_id': sale.id,
                'item_id': item.id,
                'nombre': item.nombre,
                'precio': item.precio,
                'cantidad': item.cantidad,
                'costo': np.nan if item.costo is None else item.costo,
                'product_cost': np.nan if fallback is None else fallback,
                'total': sale.total,
                'collected': sale.amount_collected,
            })
            fechas.append(sale.fecha)

    frame = pd.DataFrame(rows, columns=[
        'sale_idx', 'sale_id', 'item_id', 'nombre', 'precio', 'cantidad',
        'costo', 'product_cost', 'total', 'collected',
    ])
    frame['fecha'] = _timestamp_series(fechas, frame.index)
    for column in ['precio', 'cantidad', 'costo', 'product_cost', 'total', 'collected']:
        frame[column] = pd.to_numeric(frame[column], errors='coerce').astype(float)
    frame['precio'] = frame['precio'].fillna(0.0)
    frame['cantidad'] = frame['cantidad'].fillna(0.0)
    frame['unit_cost'] = frame['costo'].fillna(frame['product_cost']).fillna(0.0)
    frame['paid_ratio'] = _paid_ratio(frame['collected'].fillna(0.0), frame['total'].fillna(0.0))
    frame['cost'] = frame['unit_cost'] * frame['cantidad'] * frame['paid_ratio']
    return frame[ITEM_COLUMNS]


def expenses_frame(expenses: Iterable[AdminExpense]) -> pd.DataFrame:
    expenses = list(expenses or [])
    frame = pd.DataFrame(
        [{'id': e.id, 'descripcion': e.descripcion, 'categoria': e.categoria, 'monto': e.monto} for e in expenses],
        columns=['id', 'descripcion', 'categoria', 'monto'],
    )
    frame['fecha'] = _timestamp_series([e.fecha for e in expenses], frame.index)
    frame['monto'] = pd.to_numeric(frame['monto'], errors='coerce').fillna(0.0).astype(float)
    return frame[EXPENSE_COLUMNS]


def payroll_frame(runs: Iterable[PayrollRun]) -> pd.DataFrame:
    runs = list(runs or [])
    frame = pd.DataFrame(
        [{'id': run.id, 'total': run.total, 'item_count': len(run.items)} for run in runs],
        columns=['id', 'total', 'item_count'],
    )
    frame['fecha'] = _timestamp_series([run.fecha for run in runs], frame.index)
    frame['total'] = pd.to_numeric(frame['total'], errors='coerce').fillna(0.0).astype(float)
    return frame[PAYROLL_COLUMNS]


def ledger_frame(movements: Iterable[LedgerMovement]) -> pd.DataFrame:
    """Side-venture movements; ``day`` keeps the stored calendar day as text."""
    movements = list(movements or [])
    frame = pd.DataFrame(
        [
            {
                'id': m.id,
                'day': day_key(m.fecha),
                'tipo': m.tipo,
                'monto': m.monto,
                'descripcion': m.descripcion,
            }
            for m in movements
        ],
        columns=['id', 'day', 'tipo', 'monto', 'descripcion'],
    )
    frame['fecha'] = _timestamp_series([m.fecha for m in movements], frame.index)
    frame['monto'] = pd.to_numeric(frame['monto'], errors='coerce').fillna(0.0).astype(float)
    return frame[LEDGER_COLUMNS]
