"""Device transport protocol.

The orchestrator never talks to hardware directly; it is handed an object
implementing `SampleTransportProtocol` (see `sampsync.device` for the
mock implementation). Every method is a coroutine and any of them may raise.

Example
-------
    class MySampler(Device):
        async def is_set(self) -> bool: ...
        async def get_space_used(self) -> SpaceUsed: ...
        async def get_ids(self) -> list[str | None]: ...
        async def download_samples(self, progress_cb): ...
        async def upload_samples(self, samples, progress_cb): ...

    orch = SampleTransferOrchestrator(MySampler())
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

from .samples import SampleCollection, SpaceUsed

ProgressCallback = Callable[[float], None]


@runtime_checkable
class SampleTransportProtocol(Protocol):
    """Methods required of a device that stores sample packs."""

    async def is_set(self) -> bool:
        """True if the device holds a valid sample bank."""
        ...

    async def get_space_used(self) -> SpaceUsed:
        """Storage totals and per-slot usage, in bytes."""
        ...

    async def get_ids(self) -> list[Optional[str]]:
        """Raw per-slot pack ids as stored on the device."""
        ...

    async def download_samples(
        self, progress_cb: ProgressCallback
    ) -> Optional[SampleCollection]:
        """Read the whole sample bank. `None` on failure."""
        ...

    async def upload_samples(
        self, samples: SampleCollection, progress_cb: ProgressCallback
    ) -> bool:
        """Write the whole sample bank. False on failure."""
        ...


TRANSPORT_METHODS = (
    "is_set",
    "get_space_used",
    "get_ids",
    "download_samples",
    "upload_samples",
)
