from pos_dashboard.persistent_cache import DEFAULT_CACHE, load_cache, save_cache


def test_missing_or_corrupt_cache_returns_defaults(tmp_path):
    path = tmp_path / 'cache.json'
    assert load_cache(path) == DEFAULT_CACHE
    path.write_text('[1, 2', encoding='utf-8')
    assert load_cache(path) == DEFAULT_CACHE


def test_saved_preferences_merge_over_defaults(tmp_path):
    path = tmp_path / 'nested' / 'cache.json'
    save_cache({'report_period': 'mes', 'unknown': True}, path)
    cache = load_cache(path)
    assert cache['report_period'] == 'mes'
    assert cache['expense_category'] == 'Todos'
    assert 'unknown' not in cache
