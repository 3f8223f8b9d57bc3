"""Transfer state store.

Owns the device inventory snapshot and the three per-channel operation states.
The busy signal is derived from the channel states on every read and is never
stored.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from loguru import logger

from sampsync.types import (
    Channel,
    DeviceInventorySnapshot,
    Idle,
    Notification,
    SnapshotReset,
    TransferState,
    TransferStateUpdate,
    is_in_progress,
)


class TransferStateStore:
    """Snapshot + probe/download/upload channel states.

    Parameters
    ----------
    notif_queue : asyncio.Queue[Notification], optional
        If given, a `TransferStateUpdate` is put on it for every channel write
        and a `SnapshotReset` for every reset.
    """

    def __init__(self, notif_queue: Optional[asyncio.Queue[Notification]] = None):
        self.notif_queue = notif_queue
        self.snapshot = DeviceInventorySnapshot()
        self._states: dict[Channel, TransferState] = {ch: Idle() for ch in Channel}

    def get(self, channel: Channel) -> TransferState:
        return self._states[channel]

    def set(self, channel: Channel, state: TransferState) -> None:
        self._states[channel] = state
        logger.trace("Transfer channel {} -> {}", channel.value, state)
        if self.notif_queue is not None:
            self.notif_queue.put_nowait(
                TransferStateUpdate(channel=channel.value, state=state)
            )

    @property
    def probe(self) -> TransferState:
        return self.get(Channel.PROBE)

    @probe.setter
    def probe(self, state: TransferState):
        self.set(Channel.PROBE, state)

    @property
    def download(self) -> TransferState:
        return self.get(Channel.DOWNLOAD)

    @download.setter
    def download(self, state: TransferState):
        self.set(Channel.DOWNLOAD, state)

    @property
    def upload(self) -> TransferState:
        return self.get(Channel.UPLOAD)

    @upload.setter
    def upload(self, state: TransferState):
        self.set(Channel.UPLOAD, state)

    @property
    def is_busy(self) -> bool:
        """True iff any channel is in progress."""
        return any(is_in_progress(s) for s in self._states.values())

    def reset(self) -> None:
        """Replace the snapshot with the all-unknown default.

        Channel states are left alone.
        """
        self.snapshot = DeviceInventorySnapshot()
        logger.debug("Device inventory snapshot reset.")
        if self.notif_queue is not None:
            self.notif_queue.put_nowait(SnapshotReset())
