import time

import pytest


@pytest.fixture
def host_timezone(monkeypatch):
    """Switch the process timezone for one test and restore it afterwards."""
    if not hasattr(time, 'tzset'):
        pytest.skip('time.tzset is not available on this platform')

    def _set(name):
        monkeypatch.setenv('TZ', name)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()
