"""Sync configuration handling.

Configuration lives in an INI file, one section per setup:

[sampsync]
server_url = https://samples.example.org
device_kind = MONKEY
request_timeout = 5
poll_interval = 0.1
default_pack_ids = W-MIXED, W-UNDRGND, W-OLLI, W-OG

Every key is optional; missing keys take the values in `sampsync.util.defaults`.
An empty entry in `default_pack_ids` (e.g. "A, , B") leaves that slot empty.
"""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger
from mashumaro import DataClassDictMixin

from sampsync.util.defaults import (
    DEFAULT_DEVICE_KIND,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SAMPLE_PACK_IDS,
    DEFAULT_SERVER_URL,
    SLOT_COUNT,
)

DEFAULT_SECTION = "sampsync"
_FLOAT_KEYS = ("request_timeout", "poll_interval")


@dataclass(kw_only=True)
class SyncConfig(DataClassDictMixin):
    """Settings for a sample sync setup.

    Attributes
    ----------
    server_url : str
        Root of the sample server.
    device_kind : str
        Device family directory on the sample server.
    request_timeout : float
        Per-request timeout for pack fetches, seconds.
    poll_interval : float
        Sleep between checks in `wait_for_upload_to_finish`, seconds.
    default_pack_ids : list[str]
        Packs seeded onto a device whose bank isn't set.
    """

    server_url: str = DEFAULT_SERVER_URL
    device_kind: str = DEFAULT_DEVICE_KIND
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    default_pack_ids: list[str] = field(
        default_factory=lambda: list(DEFAULT_SAMPLE_PACK_IDS)
    )


def validate_sync_config(config: ConfigParser, section: str) -> tuple[bool, str]:
    """Validate a sync configuration section.

    Returns
    -------
    tuple[bool, str]
        (is_valid, error_message)
    """
    if section not in config:
        return False, f"Missing section [{section}]"
    sect = config[section]
    for key in _FLOAT_KEYS:
        if key in sect:
            try:
                val = sect.getfloat(key)
            except ValueError:
                return False, f"{key} must be a number, got {sect[key]!r}"
            if val <= 0:
                return False, f"{key} must be positive, got {val}"
    if "default_pack_ids" in sect:
        ids = _split_ids(sect["default_pack_ids"])
        if not 1 <= len(ids) <= SLOT_COUNT:
            return False, f"default_pack_ids must list 1-{SLOT_COUNT} packs"
    if "server_url" in sect and not sect["server_url"].strip():
        return False, "server_url must not be empty"
    return True, ""


def load_sync_config(path: str | Path, section: str = DEFAULT_SECTION) -> SyncConfig:
    """Load a `SyncConfig` from an INI file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the section is missing or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    config = ConfigParser()
    config.read(path)

    is_valid, msg = validate_sync_config(config, section)
    if not is_valid:
        logger.error("Invalid sync config {} [{}]: {}", path, section, msg)
        raise ValueError(f"Invalid sync config {path} [{section}]: {msg}")

    sect = config[section]
    values: dict = {}
    for key in ("server_url", "device_kind"):
        if key in sect:
            values[key] = sect[key].strip()
    for key in _FLOAT_KEYS:
        if key in sect:
            values[key] = sect.getfloat(key)
    if "default_pack_ids" in sect:
        values["default_pack_ids"] = _split_ids(sect["default_pack_ids"])
    logger.debug("Loaded sync config from {} [{}]", path, section)
    return SyncConfig.from_dict(values)


def _split_ids(raw: str) -> list[str]:
    ids = [s.strip() for s in raw.split(",")]
    # trailing comma shouldn't add an empty slot
    while ids and not ids[-1]:
        ids.pop()
    return ids
