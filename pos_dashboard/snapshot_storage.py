"""Snapshot storage for the collections fetched from the POS backend.

Each collection lives in ``<snapshot_dir>/<name>.json`` as a JSON array, the
same shape the backend returns.  Savings-day records are stored as an object
mapping goal id to its list of records.  Missing or corrupt files load as
empty collections so a screen can still render.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import SNAPSHOT_DIR, ensure_data_directories, local_now
from .records import (
    AdminExpense,
    Customer,
    Employee,
    LedgerMovement,
    PayrollRun,
    Product,
    SalaryAdvance,
    Sale,
    SavingsDayRecord,
    SavingsGoal,
    parse_records,
)

logger = logging.getLogger(__name__)

COLLECTIONS = {
    'ventas': Sale,
    'productos': Product,
    'gastos_admin': AdminExpense,
    'nominas': PayrollRun,
    'lienzo': LedgerMovement,
    'metas_ahorro': SavingsGoal,
    'empleados': Employee,
    'adelantos': SalaryAdvance,
    'clientes': Customer,
}
SAVINGS_RECORDS = 'registros_ahorro'


@dataclass
class SnapshotBundle:
    """Every collection of one snapshot, parsed into records."""

    ventas: List[Sale] = field(default_factory=list)
    productos: List[Product] = field(default_factory=list)
    gastos_admin: List[AdminExpense] = field(default_factory=list)
    nominas: List[PayrollRun] = field(default_factory=list)
    lienzo: List[LedgerMovement] = field(default_factory=list)
    metas_ahorro: List[SavingsGoal] = field(default_factory=list)
    empleados: List[Employee] = field(default_factory=list)
    adelantos: List[SalaryAdvance] = field(default_factory=list)
    clientes: List[Customer] = field(default_factory=list)
    registros_ahorro: Dict[int, List[SavingsDayRecord]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in COLLECTIONS)


class SnapshotStorage:
    """Reads and writes the JSON snapshot files."""

    def __init__(self, snapshot_dir: Optional[Path] = None):
        """Initialize snapshot storage.

        Args:
            snapshot_dir: Optional custom directory for snapshot files.
                          Defaults to SNAPSHOT_DIR from config.
        """
        if snapshot_dir is None:
            ensure_data_directories()
        self.snapshot_dir = Path(snapshot_dir or SNAPSHOT_DIR)

    def get_path(self, name: str) -> Path:
        return self.snapshot_dir / f"{name}.json"

    def load_raw(self, name: str) -> Any:
        """Decoded JSON of one snapshot file, or ``None`` when unreadable."""
        path = self.get_path(name)
        if not path.exists():
            logger.debug("Snapshot %s not found at %s", name, path)
            return None
        try:
            with path.open('r', encoding='utf-8') as handle:
                return json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not load snapshot '%s': %s", name, exc)
            return None

    def load(self, name: str) -> list:
        """Records of collection ``name``."""
        if name not in COLLECTIONS:
            raise ValueError(f"Unknown collection '{name}'")
        data = self.load_raw(name)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Snapshot '%s' is not a JSON array; ignoring it", name)
            return []
        return parse_records(COLLECTIONS[name], data)

    def load_savings_records(self) -> Dict[int, List[SavingsDayRecord]]:
        data = self.load_raw(SAVINGS_RECORDS)
        if not isinstance(data, dict):
            if data is not None:
                logger.warning("Snapshot '%s' is not a JSON object; ignoring it", SAVINGS_RECORDS)
            return {}
        records: Dict[int, List[SavingsDayRecord]] = {}
        for key, rows in data.items():
            try:
                goal_id = int(key)
            except (TypeError, ValueError):
                continue
            records[goal_id] = parse_records(SavingsDayRecord, rows if isinstance(rows, list) else [])
        return records

    def load_bundle(self) -> SnapshotBundle:
        bundle = SnapshotBundle(**{name: self.load(name) for name in COLLECTIONS})
        bundle.registros_ahorro = self.load_savings_records()
        logger.info(
            "Loaded snapshot from %s: %d sales, %d expenses, %d payroll runs",
            self.snapshot_dir, len(bundle.ventas), len(bundle.gastos_admin), len(bundle.nominas),
        )
        return bundle

    def save(self, name: str, rows: Any) -> Path:
        """Write one collection; ``rows`` may hold records or plain dicts."""
        if not name or not name.strip():
            raise ValueError("Collection name cannot be empty")
        if name not in COLLECTIONS and name != SAVINGS_RECORDS:
            raise ValueError(f"Unknown collection '{name}'")
        self.snapshot_dir.mkdir(parents=True, exist_ok=True)
        path = self.get_path(name)
        with path.open('w', encoding='utf-8') as handle:
            json.dump(_to_json(rows), handle, indent=2, ensure_ascii=False)
        return path

    def _raw_rows(self, name: str) -> List[Dict[str, Any]]:
        data = self.load_raw(name)
        if not isinstance(data, list):
            return []
        return [row for row in data if isinstance(row, dict)]

    def append(self, name: str, payload: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
        """Add one record with the next free id; ``fecha`` defaults to ``now``."""
        rows = self._raw_rows(name)
        ids = [row.get('id') for row in rows if isinstance(row.get('id'), int)]
        record = dict(payload)
        record['id'] = max(ids, default=0) + 1
        record.setdefault('fecha', (now or local_now()).isoformat(timespec='seconds'))
        rows.append(record)
        self.save(name, rows)
        logger.info("Added %s record %s", name, record['id'])
        return record

    def update(self, name: str, record_id: Any, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge ``changes`` into the record with ``record_id``; ``None`` if absent."""
        rows = self._raw_rows(name)
        for row in rows:
            if row.get('id') == record_id:
                row.update(changes)
                self.save(name, rows)
                return row
        logger.warning("No %s record with id %s", name, record_id)
        return None

    def set_savings_day(self, goal_id: int, fecha: str, monto: float) -> None:
        """Record ``monto`` for one day of a goal, replacing an earlier mark."""
        data = self.load_raw(SAVINGS_RECORDS)
        if not isinstance(data, dict):
            data = {}
        key = str(goal_id)
        rows = [r for r in data.get(key) or [] if isinstance(r, dict) and str(r.get('fecha', ''))[:10] != fecha]
        rows.append({'fecha': fecha, 'monto': monto})
        data[key] = sorted(rows, key=lambda r: str(r.get('fecha', '')))
        self.save(SAVINGS_RECORDS, data)


def _to_json(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, dict):
        return {str(k): _to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    return value
