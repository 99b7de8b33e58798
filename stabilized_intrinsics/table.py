# stabilized_intrinsics/table.py
"""
Replacement table: intrinsic name -> guidance for its stabilized replacement.

The table is plain data.  It is built once at import time, checked for
duplicate names, and exposed read-only; nothing in the package mutates it
afterwards, so it can be shared freely between threads.

An intrinsic missing from the table is not flagged.  That does not mean it
has no stable counterpart, only that none was recorded here.

Usage
─────
    >>> from stabilized_intrinsics.table import lookup
    >>> lookup("size_of")
    '`std::mem::size_of`'
    >>> lookup("frobnicate") is None
    True
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping, NamedTuple, Optional, Tuple

from stabilized_intrinsics.errors import TableDefinitionError

_log = logging.getLogger(__name__)


class ReplacementEntry(NamedTuple):
    """One row of the table."""
    intrinsic_name: str
    guidance: str


# Keys are kept exactly as authored, including ``add_with_oveflow``.
_ENTRIES: Tuple[ReplacementEntry, ...] = tuple(ReplacementEntry(*row) for row in (
    ("add_with_oveflow", "`overflowing_add` on integer types"),

    ("atomic_and", "`fetch_and` on std::sync::atomic types"),
    ("atomic_and_acq", "`fetch_and` on std::sync::atomic types"),
    ("atomic_and_acqrel", "`fetch_and` on std::sync::atomic types"),
    ("atomic_and_rel", "`fetch_and` on std::sync::atomic types"),
    ("atomic_and_relaxed", "`fetch_and` on std::sync::atomic types"),

    ("atomic_cxchg", "`compare_exchange` on std::sync::atomic types"),
    ("atomic_cxchg_acq", "`compare_exchange` on std::sync::atomic types"),
    ("atomic_cxchg_acqrel", "`compare_exchange` on std::sync::atomic types"),
    ("atomic_cxchg_acqrel_failrelaxed", "`compare_exchange` on std::sync::atomic types"),
    ("atomic_cxchg_failacq", "`compare_exchange` on std::sync::atomic types"),
    ("atomic_cxchg_failrelaxed", "`compare_exchange` on std::sync::atomic types"),
    ("atomic_cxchg_rel", "`compare_exchange` on std::sync::atomic types"),
    ("atomic_cxchg_relaxed", "`compare_exchange` on std::sync::atomic types"),

    ("atomic_cxchgweak", "`compare_exchange_weak` on std::sync::atomic types"),
    ("atomic_cxchgweak_acq", "`compare_exchange_weak` on std::sync::atomic types"),
    ("atomic_cxchgweak_acq_failrelaxed", "`compare_exchange_weak` on std::sync::atomic types"),
    ("atomic_cxchgweak_acqrel", "`compare_exchange_weak` on std::sync::atomic types"),
    ("atomic_cxchgweak_acqrel_failrelaxed", "`compare_exchange_weak` on std::sync::atomic types"),
    ("atomic_cxchgweak_failacq", "`compare_exchange_weak` on std::sync::atomic types"),
    ("atomic_cxchgweak_failrelaxed", "`compare_exchange_weak` on std::sync::atomic types"),
    ("atomic_cxchgweak_rel", "`compare_exchange_weak` on std::sync::atomic types"),
    ("atomic_cxchgweak_relaxed", "`compare_exchange_weak` on std::sync::atomic types"),

    ("atomic_load", "`load` on std::sync::atomic types"),
    ("atomic_load_acq", "`load` on std::sync::atomic types"),
    ("atomic_load_relaxed", "`load` on std::sync::atomic types"),

    ("atomic_nand", "`fetch_nand` on std::sync::atomic::AtomicBool"),
    ("atomic_nand_acq", "`fetch_nand` on std::sync::atomic::AtomicBool"),
    ("atomic_nand_acqrel", "`fetch_nand` on std::sync::atomic::AtomicBool"),
    ("atomic_nand_rel", "`fetch_nand` on std::sync::atomic::AtomicBool"),
    ("atomic_nand_relaxed", "`fetch_nand` on std::sync::atomic::AtomicBool"),

    ("atomic_or", "`fetch_or` on std::sync::atomic types"),
    ("atomic_or_acq", "`fetch_or` on std::sync::atomic types"),
    ("atomic_or_acqrel", "`fetch_or` on std::sync::atomic types"),
    ("atomic_or_rel", "`fetch_or` on std::sync::atomic types"),
    ("atomic_or_relaxed", "`fetch_or` on std::sync::atomic types"),

    ("atomic_store", "`store` on std::sync::atomic types"),
    ("atomic_store_rel", "`store` on std::sync::atomic types"),
    ("atomic_store_relaxed", "`store` on std::sync::atomic types"),

    ("atomic_xadd", "`fetch_add` on std::sync::atomic::AtomicBool"),
    ("atomic_xadd_acq", "`fetch_add` on std::sync::atomic::AtomicBool"),
    ("atomic_xadd_acqrel", "`fetch_add` on std::sync::atomic::AtomicBool"),
    ("atomic_xadd_rel", "`fetch_add` on std::sync::atomic::AtomicBool"),
    ("atomic_xadd_relaxed", "`fetch_add` on std::sync::atomic::AtomicBool"),

    ("atomic_xchg", "`swap` on std::sync::atomic::AtomicBool"),
    ("atomic_xchg_acq", "`swap` on std::sync::atomic::AtomicBool"),
    ("atomic_xchg_acqrel", "`swap` on std::sync::atomic::AtomicBool"),
    ("atomic_xchg_rel", "`swap` on std::sync::atomic::AtomicBool"),
    ("atomic_xchg_relaxed", "`swap` on std::sync::atomic::AtomicBool"),

    ("atomic_xor", "`fetch_xor` on std::sync::atomic::AtomicBool"),
    ("atomic_xor_acq", "`fetch_xor` on std::sync::atomic::AtomicBool"),
    ("atomic_xor_acqrel", "`fetch_xor` on std::sync::atomic::AtomicBool"),
    ("atomic_xor_rel", "`fetch_xor` on std::sync::atomic::AtomicBool"),
    ("atomic_xor_relaxed", "`fetch_xor` on std::sync::atomic::AtomicBool"),

    ("atomic_xsub", "`fetch_sub` on std::sync::atomic::AtomicBool"),
    ("atomic_xsub_acq", "`fetch_sub` on std::sync::atomic::AtomicBool"),
    ("atomic_xsub_acqrel", "`fetch_sub` on std::sync::atomic::AtomicBool"),
    ("atomic_xsub_rel", "`fetch_sub` on std::sync::atomic::AtomicBool"),
    ("atomic_xsub_relaxed", "`fetch_sub` on std::sync::atomic::AtomicBool"),

    ("mul_with_overflow", "`overflowing_mul` on integer types"),

    ("overflowing_add", "`wrapping_add` on integer types"),
    ("overflowing_mul", "`wrapping_mul` on integer types"),

    ("rotate_left", "`rotate_left` on integer types"),
    ("rotate_right", "`rotate_right` on integer types"),

    ("saturating_add", "`saturating_add` on integer types"),
    ("saturating_sub", "`saturating_sub` on integer types"),

    ("sub_with_overflow", "`overflowing_sub` on integer types"),

    ("volatile_load", "`std::ptr::read_volatile`"),
    ("volatile_store", "`std::ptr::store_volatile`"),

    ("size_of", "`std::mem::size_of`"),
    ("transmute", "`std::mem::transmute`"),
))


def _build_table(entries: Iterable[ReplacementEntry]) -> Mapping[str, str]:
    """
    Turn table rows into a read-only name -> guidance mapping.

    Raises TableDefinitionError if a name appears twice.
    """
    table: dict = {}
    for name, guidance in entries:
        if name in table:
            raise TableDefinitionError(name, table[name], guidance)
        table[name] = guidance
    return MappingProxyType(table)


STABILIZED_INTRINSICS: Mapping[str, str] = _build_table(_ENTRIES)

_log.debug("replacement table loaded with %d entries", len(STABILIZED_INTRINSICS))


def lookup(name: Any) -> Optional[str]:
    """Return the guidance for *name*, or None if it is not in the table."""
    if not isinstance(name, str):
        return None
    return STABILIZED_INTRINSICS.get(name)


def entries() -> Tuple[ReplacementEntry, ...]:
    """All table rows, in authoring order."""
    return _ENTRIES


__all__ = [
    "ReplacementEntry",
    "STABILIZED_INTRINSICS",
    "lookup",
    "entries",
]
