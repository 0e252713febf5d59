"""Session-scoped series cache keyed by document content signatures."""

from __future__ import annotations

from collections import OrderedDict
from hashlib import blake2b
from typing import Any, Callable, TypeVar

import streamlit as st

from eip_status_radar.schema import GraphsDocument

T = TypeVar("T")

_CACHE_ROOT_KEY = "__signature_series_cache"


def document_signature(doc: GraphsDocument | None, *, salt: str = "") -> str:
    """Build a stable signature of the fetched groups plus a caller salt."""
    h = blake2b(digest_size=16)
    h.update(str(salt).encode("utf-8"))
    if not isinstance(doc, GraphsDocument):
        h.update(b"no_doc")
        return h.hexdigest()
    if not doc.groups:
        h.update(b"empty_doc")
        return h.hexdigest()
    for group in doc.groups:
        h.update(group.model_dump_json(by_alias=True).encode("utf-8"))
    return h.hexdigest()


def _cache_root() -> dict[str, OrderedDict[str, Any]]:
    root = st.session_state.get(_CACHE_ROOT_KEY)
    if isinstance(root, dict):
        return root
    root = {}
    st.session_state[_CACHE_ROOT_KEY] = root
    return root


def cached_by_signature(
    namespace: str,
    signature: str,
    compute: Callable[[], T],
    *,
    max_entries: int = 8,
) -> tuple[T, bool]:
    """Return cached value by signature or compute+store it (LRU per namespace)."""
    root = _cache_root()
    bucket = root.get(namespace)
    if not isinstance(bucket, OrderedDict):
        bucket = OrderedDict()
        root[namespace] = bucket

    if signature in bucket:
        bucket.move_to_end(signature)
        return bucket[signature], True

    value = compute()
    bucket[signature] = value
    bucket.move_to_end(signature)
    while len(bucket) > max_entries:
        bucket.popitem(last=False)
    return value, False


def clear_cache(namespace: str | None = None) -> None:
    root = _cache_root()
    if namespace is None:
        root.clear()
        return
    root.pop(namespace, None)
