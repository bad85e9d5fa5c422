import json

import pytest

from pos_dashboard.records import Sale
from pos_dashboard.snapshot_storage import SnapshotStorage


def test_missing_directory_loads_empty_bundle(tmp_path):
    storage = SnapshotStorage(tmp_path / 'nada')
    bundle = storage.load_bundle()
    assert bundle.is_empty
    assert bundle.registros_ahorro == {}


def test_save_and_load_round_trip(tmp_path):
    storage = SnapshotStorage(tmp_path)
    sale = Sale(id=1, fecha='2024-03-01T10:00:00', total=100, pagado=40)
    storage.save('ventas', [sale])
    loaded = storage.load('ventas')
    assert loaded == [sale]
    assert json.loads((tmp_path / 'ventas.json').read_text(encoding='utf-8'))[0]['pagado'] == 40


def test_corrupt_or_wrong_shape_files_are_ignored(tmp_path):
    (tmp_path / 'ventas.json').write_text('{not json', encoding='utf-8')
    (tmp_path / 'gastos_admin.json').write_text('{"a": 1}', encoding='utf-8')
    storage = SnapshotStorage(tmp_path)
    assert storage.load('ventas') == []
    assert storage.load('gastos_admin') == []


def test_save_rejects_bad_names(tmp_path):
    storage = SnapshotStorage(tmp_path)
    with pytest.raises(ValueError):
        storage.save('', [])
    with pytest.raises(ValueError):
        storage.save('inventario', [])
    with pytest.raises(ValueError):
        storage.load('inventario')


def test_append_assigns_next_id_and_update_merges(tmp_path):
    storage = SnapshotStorage(tmp_path)
    first = storage.append('lienzo', {'tipo': 'ingreso', 'monto': 10, 'fecha': '2024-03-01'})
    second = storage.append('lienzo', {'tipo': 'gasto', 'monto': 5})
    assert (first['id'], second['id']) == (1, 2)
    assert second['fecha']
    assert storage.update('lienzo', 2, {'monto': 7})['monto'] == 7
    assert storage.update('lienzo', 9, {'monto': 7}) is None
    assert [m.monto for m in storage.load('lienzo')] == [10, 7]


def test_savings_day_replaces_earlier_mark(tmp_path):
    storage = SnapshotStorage(tmp_path)
    storage.set_savings_day(1, '2024-03-02', 0)
    storage.set_savings_day(1, '2024-03-01', 50)
    storage.set_savings_day(1, '2024-03-02', 75)
    records = storage.load_savings_records()[1]
    assert [(r.fecha, r.monto) for r in records] == [('2024-03-01', 50), ('2024-03-02', 75)]
