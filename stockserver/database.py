import asyncio
from typing import Dict, Any

# This file holds the in-memory products table and its write lock.

PRODUCTS: Dict[int, Dict[str, Any]] = {}
_SEQUENCE = {"next_id": 1}
_LOCKS: Dict[str, asyncio.Lock] = {}

def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]

def next_id() -> int:
    pid = _SEQUENCE["next_id"]
    _SEQUENCE["next_id"] = pid + 1
    return pid

def reset_table():
    PRODUCTS.clear()
    _LOCKS.clear()
    _SEQUENCE["next_id"] = 1
