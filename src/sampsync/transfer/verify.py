"""Equality of sample packs and collections, on canonicalised loop content."""

from __future__ import annotations

from typing import Optional

from sampsync.types import SampleCollection, SamplePack
from sampsync.util.canonical import canonical_dumps
from sampsync.util.defaults import SLOT_COUNT


def sample_pack_equal(a: Optional[SamplePack], b: Optional[SamplePack]) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if a.name != b.name:
        return False
    return canonical_dumps(a.loops or []) == canonical_dumps(b.loops or [])


def samples_equal(a: Optional[SampleCollection], b: Optional[SampleCollection]) -> bool:
    """True iff both collections have every slot and all slots are pack-equal."""
    if a is None or b is None:
        return False
    if len(a.pages) != SLOT_COUNT or len(b.pages) != SLOT_COUNT:
        return False
    return all(sample_pack_equal(pa, pb) for pa, pb in zip(a.pages, b.pages))
