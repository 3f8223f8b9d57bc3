from __future__ import annotations

import asyncio
import copy
from typing import Optional

from loguru import logger

from sampsync.device.device import Device
from sampsync.types import (
    ProgressCallback,
    SampleCollection,
    SamplePack,
    SpaceUsed,
)
from sampsync.util.defaults import SLOT_COUNT
from sampsync.util.canonical import canonical_dumps


class MockSampleDevice(Device):  # Protocol compliance checked by orchestrator
    """In-memory sampler.

    Holds a sample bank and the raw slot ids the firmware reports. Flags on the
    instance switch on the failure modes the orchestrator has to cope with.
    Setting `gate` to an unset `asyncio.Event` parks every transport call at its
    suspension point until the event is set.
    """

    def __init__(self, **config):
        self.storage_total = 4_000_000
        self.progress_steps = 4
        self.supported = True
        self.fail_upload = False
        self.fail_download = False
        self.corrupt_readback = False
        self.set_after_upload = True
        self.gate: Optional[asyncio.Event] = None
        super().__init__(**config)
        self._connected = False
        self._samples: Optional[SampleCollection] = None
        self._ids: list[Optional[str]] = [None] * SLOT_COUNT
        self.calls: list[str] = []

    def open(self):
        self._connected = True
        return True, "MockSampleDevice opened"

    def close(self):
        self._connected = False

    def is_connected(self) -> bool:
        return self._connected

    def load(self, samples: SampleCollection, ids: list[Optional[str]] | None = None):
        """Preload the bank, as if a previous upload had succeeded."""
        self._samples = copy.deepcopy(samples)
        self._ids = list(ids) if ids is not None else self._ids_from(samples)

    async def _suspend(self, name: str):
        self.calls.append(name)
        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(0)
        if not self.supported:
            raise RuntimeError(f"{name}: command not supported by device")

    async def is_set(self) -> bool:
        await self._suspend("is_set")
        return self._samples is not None

    async def get_space_used(self) -> SpaceUsed:
        await self._suspend("get_space_used")
        packs = [self._pack_size(p) for p in self._pages()]
        return SpaceUsed(tot=self.storage_total, usd=sum(packs), packs=packs)

    async def get_ids(self) -> list[Optional[str]]:
        await self._suspend("get_ids")
        return list(self._ids)

    async def download_samples(
        self, progress_cb: ProgressCallback
    ) -> Optional[SampleCollection]:
        await self._suspend("download_samples")
        if self.fail_download or self._samples is None:
            logger.debug("MockSampleDevice: download failed")
            return None
        await self._report_progress(progress_cb)
        samples = copy.deepcopy(self._samples)
        if self.corrupt_readback:
            samples.pages[0] = SamplePack(name="CORRUPT", loops=[])
        return samples

    async def upload_samples(
        self, samples: SampleCollection, progress_cb: ProgressCallback
    ) -> bool:
        await self._suspend("upload_samples")
        if self.fail_upload:
            logger.debug("MockSampleDevice: upload failed")
            return False
        await self._report_progress(progress_cb)
        if self.set_after_upload:
            self.load(samples)
        return True

    async def _report_progress(self, progress_cb: ProgressCallback):
        for i in range(1, self.progress_steps + 1):
            progress_cb(i / self.progress_steps)
            await asyncio.sleep(0)

    def _pages(self) -> list[Optional[SamplePack]]:
        if self._samples is None:
            return [None] * SLOT_COUNT
        return self._samples.pages

    @staticmethod
    def _pack_size(pack: Optional[SamplePack]) -> int:
        if pack is None:
            return 0
        return len(canonical_dumps(pack.loops).encode("utf-8"))

    @staticmethod
    def _ids_from(samples: SampleCollection) -> list[Optional[str]]:
        # firmware stores ids without the dash, reserved slot first
        ids = [p.name.replace("-", "", 1) if p else None for p in samples.pages]
        return ids[-1:] + ids[:-1]
