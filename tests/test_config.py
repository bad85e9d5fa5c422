from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from pos_dashboard import config


def test_named_timezone_wins():
    assert config.get_local_timezone('America/Mexico_City') == ZoneInfo('America/Mexico_City')


def test_invalid_or_empty_timezone_falls_back_to_host(monkeypatch):
    monkeypatch.setattr(config, 'TIMEZONE_NAME', '')
    assert config.get_local_timezone() is not None
    assert config.get_local_timezone('Not/AZone') is not None


def test_ensure_data_directories(tmp_path, monkeypatch):
    monkeypatch.setattr(config, 'DATA_DIR', tmp_path / 'data')
    monkeypatch.setattr(config, 'SNAPSHOT_DIR', tmp_path / 'data' / 'snapshots')
    monkeypatch.setattr(config, 'REPORTS_DIR', tmp_path / 'data' / 'reports')
    config.ensure_data_directories()
    assert (tmp_path / 'data' / 'snapshots').is_dir()
    assert (tmp_path / 'data' / 'reports').is_dir()


def test_invalid_timezone_is_logged(monkeypatch, caplog):
    monkeypatch.setattr(config, 'TIMEZONE_NAME', '')
    with caplog.at_level('WARNING', logger='pos_dashboard.config'):
        config.get_local_timezone('Not/AZone')
    assert 'Not/AZone' in caplog.text


def test_host_timezone_follows_daylight_saving(monkeypatch, host_timezone):
    monkeypatch.setattr(config, 'TIMEZONE_NAME', '')
    host_timezone('America/New_York')
    zone = config.get_local_timezone()
    assert zone.utcoffset(datetime(2024, 1, 15, 12)) == timedelta(hours=-5)
    assert zone.utcoffset(datetime(2024, 7, 15, 12)) == timedelta(hours=-4)


def test_local_now_uses_configured_zone(monkeypatch, host_timezone):
    host_timezone('Etc/GMT+12')
    monkeypatch.setattr(config, 'TIMEZONE_NAME', 'Pacific/Kiritimati')
    expected = datetime.now(ZoneInfo('Pacific/Kiritimati')).date()
    assert config.local_today() == expected
    assert config.local_now().tzinfo is None
