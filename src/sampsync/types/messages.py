"""Notifications pushed to observers of the transfer state store."""

from __future__ import annotations

from dataclasses import dataclass

from mashumaro.mixins.msgpack import DataClassMessagePackMixin
from mashumaro.types import Discriminator

from .transfer import TransferState


@dataclass(kw_only=True)
class Notification(DataClassMessagePackMixin):
    type: str

    class Config:
        discriminator = Discriminator(field="type", include_subtypes=True)


@dataclass(kw_only=True)
class TransferStateUpdate(Notification):
    type: str = "transfer_state_update"
    channel: str
    state: TransferState


@dataclass(kw_only=True)
class SnapshotReset(Notification):
    type: str = "snapshot_reset"
