"""Shared sidebar components for the multi-page POS dashboard.

Every page calls :func:`render_shared_sidebar` to get the current snapshot,
one :class:`PosFinanceAnalytics` built from it, and the persisted
preferences.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import streamlit as st

from .config import get_snapshot_dir
from .persistent_cache import DEFAULT_CACHE, load_cache as load_persistent_cache, save_cache as save_persistent_cache
from .pos_finance_analytics import PosFinanceAnalytics
from .snapshot_storage import SnapshotBundle, SnapshotStorage

logger = logging.getLogger(__name__)

_BUNDLE_KEY = '_snapshot_bundle'
_CACHE_KEY = '_persistent_cache_store'


def get_storage() -> SnapshotStorage:
    return SnapshotStorage()


def load_bundle(force: bool = False) -> SnapshotBundle:
    """Snapshot held in the session, read from disk on first use or when forced."""
    bundle = st.session_state.get(_BUNDLE_KEY)
    if bundle is None or force:
        bundle = get_storage().load_bundle()
        st.session_state[_BUNDLE_KEY] = bundle
    return bundle


def invalidate_bundle() -> None:
    """Drop the cached snapshot so the next render reads the files again."""
    st.session_state.pop(_BUNDLE_KEY, None)


def render_shared_sidebar() -> Dict[str, Any]:
    """Render shared sidebar elements available on all pages.

    Returns:
        Dict with keys: 'bundle', 'analytics', 'cache'
    """
    st.sidebar.subheader("📂 Datos")
    st.sidebar.caption(f"Carpeta: {get_snapshot_dir()}")
    if st.sidebar.button("🔄 Recargar datos"):
        invalidate_bundle()
        st.rerun()

    bundle = load_bundle()
    if bundle.is_empty:
        st.sidebar.warning("No se encontraron datos en la carpeta de snapshots.")
    else:
        st.sidebar.write(f"🧾 {len(bundle.ventas)} ventas · 📦 {len(bundle.productos)} productos")

    analytics = PosFinanceAnalytics(
        bundle.ventas,
        bundle.gastos_admin,
        bundle.nominas,
        bundle.lienzo,
        bundle.productos,
    )
    return {
        'bundle': bundle,
        'analytics': analytics,
        'cache': get_persistent_cache(),
    }


def get_persistent_cache() -> Dict[str, Any]:
    cache = st.session_state.get(_CACHE_KEY)
    if cache is None:
        cache = load_persistent_cache()
        st.session_state[_CACHE_KEY] = cache
    for key, value in DEFAULT_CACHE.items():
        cache.setdefault(key, value)
    return cache


def remember_preference(key: str, value: Any) -> None:
    """Store one preference in the session and on disk when it changed."""
    cache = get_persistent_cache()
    if cache.get(key) == value:
        return
    cache[key] = value
    try:
        save_persistent_cache(cache)
    except OSError as exc:
        logger.warning("Could not save preferences: %s", exc)
