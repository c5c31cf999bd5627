from __future__ import annotations

from tealeaf.config import DEFAULT_SEED_PREFIX

MASK32 = 0xFFFFFFFF


def seed_from_string(text: str) -> int:
    """Sum of UTF-16 code units, wrapped to an unsigned 32-bit integer."""
    seed = 0
    for unit in _utf16_units(text):
        seed = (seed + unit) & MASK32
    return seed


def seed_from_query(query: str, prefix: str = DEFAULT_SEED_PREFIX) -> int:
    """Seed for a request: the query string is hashed verbatim after `prefix`."""
    return seed_from_string(prefix + (query or ""))


def _utf16_units(text: str):
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)
