"""Canonical form of loosely-structured pack records.

Pack loop records come back from the device re-encoded, so key order, tuple vs
list and `1.0` vs `1` may differ from what was uploaded. `canonicalize` folds
those differences away so two records can be compared by their serialised form.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np
import simplejson as json


def canonicalize(value: Any) -> Any:
    """Return `value` in canonical form.

    - mappings -> dicts with sorted (stringified) keys
    - lists, tuples, numpy arrays -> lists
    - numpy scalars -> python scalars
    - integral floats -> ints
    """
    if isinstance(value, np.ndarray):
        return [canonicalize(v) for v in value.tolist()]
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, Mapping):
        return {str(k): canonicalize(value[k]) for k in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [canonicalize(v) for v in value]
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def canonical_dumps(value: Any) -> str:
    """Serialise the canonical form of `value` to a stable JSON string."""
    return json.dumps(canonicalize(value), sort_keys=True, separators=(",", ":"))
