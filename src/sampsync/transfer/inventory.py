"""Sample pack fetching and default-inventory construction.

Pack definitions live on the sample server at
`/samples/<device-kind>/DRM/<pack-id>.json`. `build_samples_from_ids` turns a
list of pack ids into a full 10-slot `SampleCollection`, or nothing at all if
any pack can't be fetched.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence
from urllib.parse import quote

import httpx
from loguru import logger
from mashumaro.exceptions import InvalidFieldValue, MissingField

from sampsync.types import SampleCollection, SamplePack
from sampsync.util.defaults import (
    DEFAULT_DEVICE_KIND,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SAMPLE_PACK_IDS,
    SLOT_COUNT,
)

__all__ = [
    "DEFAULT_SAMPLE_PACK_IDS",
    "PackSource",
    "PackFetcher",
    "pack_url",
    "build_samples_from_ids",
]


class PackSource(Protocol):
    async def fetch(self, pack_id: str) -> Optional[SamplePack]: ...


URI_COMPONENT_SAFE = "-_.!~*'()"  # as javascript's encodeURIComponent


def pack_url(device_kind: str, pack_id: str) -> str:
    return f"/samples/{device_kind}/DRM/{quote(pack_id, safe=URI_COMPONENT_SAFE)}.json"


class PackFetcher:
    """Fetch pack definitions from the sample server.

    Parameters
    ----------
    base_url : str
        Sample server root, e.g. "https://example.org".
    device_kind : str
        Device family directory on the server.
    timeout : float
        Per-request timeout in seconds.
    client : httpx.AsyncClient, optional
        Client to use. If not given one is created (and closed by `aclose`).
    """

    def __init__(
        self,
        base_url: str,
        device_kind: str = DEFAULT_DEVICE_KIND,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.device_kind = device_kind
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def fetch(self, pack_id: str) -> Optional[SamplePack]:
        url = pack_url(self.device_kind, pack_id)
        try:
            res = await self.client.get(url)
            res.raise_for_status()
            pack = res.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Failed to fetch pack {} from server ({})", pack_id, e.response.status_code
            )
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to fetch pack {} from server: {}", pack_id, e)
            return None
        if not isinstance(pack, dict):
            logger.error("Pack {} from server is not an object", pack_id)
            return None
        pack["name"] = pack_id
        try:
            sample_pack = SamplePack.from_dict(pack)
        except (MissingField, InvalidFieldValue) as e:
            logger.error("Pack {} from server is malformed: {}", pack_id, e)
            return None
        logger.debug("Fetched pack {} from server", pack_id)
        return sample_pack

    async def aclose(self):
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> PackFetcher:
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()


async def build_samples_from_ids(
    ids: Sequence[Optional[str]], fetcher: PackSource
) -> Optional[SampleCollection]:
    """Build a full sample collection from (up to 10) pack ids.

    Falsy ids leave their slot empty; slots past the end of `ids` are empty too.
    Returns None if `ids` is empty or too long, or if any pack fails to fetch.
    """
    if not ids or len(ids) < 1 or len(ids) > SLOT_COUNT:
        logger.error("Cannot build samples from {} pack ids", len(ids) if ids else 0)
        return None
    pages: list[Optional[SamplePack]] = []
    for pack_id in ids:
        if not pack_id:
            pages.append(None)
            continue
        pack = await fetcher.fetch(pack_id.strip())
        if pack is None:
            logger.error("Could not build samples, pack {} unavailable", pack_id)
            return None
        pages.append(pack)
    pages.extend([None] * (SLOT_COUNT - len(pages)))
    return SampleCollection(pages=pages)
