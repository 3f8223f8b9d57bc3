"""Per-channel transfer states.

Each of the three transfer channels (probe, download, upload) is always in
exactly one of `Idle`, `InProgress` or `Failed`. These are frozen dataclasses
sharing the `TransferState` base, discriminated on `state` so that a
serialised state decodes back to the right variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig
from mashumaro.types import Discriminator


class Channel(str, Enum):
    """Transfer channels. One operation state is held per channel."""

    PROBE = "probe"
    DOWNLOAD = "download"
    UPLOAD = "upload"


@dataclass(frozen=True, kw_only=True)
class TransferState(DataClassDictMixin):
    state: str

    class Config(BaseConfig):
        discriminator = Discriminator(field="state", include_subtypes=True)


@dataclass(frozen=True, kw_only=True)
class Idle(TransferState):
    state: str = "idle"


@dataclass(frozen=True, kw_only=True)
class InProgress(TransferState):
    state: str = "in_progress"
    progress: Optional[float] = None


@dataclass(frozen=True, kw_only=True)
class Failed(TransferState):
    state: str = "failed"
    message: str


TransferOperationState = Union[Idle, InProgress, Failed]


def is_in_progress(state: TransferState) -> bool:
    return isinstance(state, InProgress)
