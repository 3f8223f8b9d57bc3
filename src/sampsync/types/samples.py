"""Sample pack data model: packs, 10-slot collections and device inventory."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from mashumaro import DataClassDictMixin

from sampsync.util.defaults import SLOT_COUNT


@dataclass(kw_only=True)
class SamplePack(DataClassDictMixin):
    """A named sample pack.

    `loops` is a list of loosely-structured records (as served by the sample
    server); only their canonical form matters for comparison.
    """

    name: str
    loops: list[Any] = field(default_factory=list)


@dataclass
class SampleCollection(DataClassDictMixin):
    """The unit of transfer: one (optional) pack per device slot.

    A collection handed to or returned from the device always has exactly
    `SLOT_COUNT` pages. The constructor does not enforce this so that a
    malformed payload can still be represented (and rejected).
    """

    pages: list[Optional[SamplePack]] = field(default_factory=list)

    @classmethod
    def empty(cls) -> SampleCollection:
        return cls(pages=[None] * SLOT_COUNT)

    def is_complete(self) -> bool:
        return len(self.pages) == SLOT_COUNT

    def is_well_formed(self) -> bool:
        """Every slot present and each one a `SamplePack` or empty."""
        return self.is_complete() and all(
            p is None or isinstance(p, SamplePack) for p in self.pages
        )

    def pack_names(self) -> list[str | None]:
        return [p.name if p is not None else None for p in self.pages]


@dataclass(kw_only=True)
class SpaceUsed(DataClassDictMixin):
    """Storage report from the device (bytes)."""

    tot: int
    usd: int
    packs: list[int] = field(default_factory=list)


@dataclass(kw_only=True)
class DeviceInventorySnapshot(DataClassDictMixin):
    """Cached view of the device's sample state.

    All fields are `None` ("unknown") until a probe/download fills them in.
    """

    ids: Optional[list[Optional[str]]] = None
    device_samples: Optional[SampleCollection] = None
    is_supported: Optional[bool] = None
    is_set: Optional[bool] = None
    storage_total: Optional[int] = None
    storage_used: Optional[int] = None
    packs_storage_used: Optional[list[int]] = None


@dataclass(frozen=True)
class SupportCheckResult:
    """Outcome of a (non-busy) probe."""

    supported: bool
    is_set: Optional[bool]
