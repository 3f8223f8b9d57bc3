import asyncio

import pytest
from loguru import logger

import sampsync.util
from sampsync.types import SampleCollection, SamplePack
from sampsync.util import TEST_LOGLEVEL


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: marks test as slow running test")


@pytest.fixture(autouse=True, scope="session")
def sync_log():
    sampsync.util.start_log(
        log_level=TEST_LOGLEVEL, log_to_stdout=True, log_to_file=False, clear_prev=False
    )
    yield
    sampsync.util.shutdown_log()


@pytest.fixture(autouse=True)
def log(request):
    logger.warning("STARTED Test '{}'".format(request.node.originalname))
    yield
    logger.warning("COMPLETED Test '{}' \n".format(request.node.originalname))


class DictFetcher:
    """Pack source serving `{pack_id: loops}`; unknown ids fail."""

    def __init__(self, packs: dict):
        self.packs = packs
        self.requested = []

    async def fetch(self, pack_id):
        self.requested.append(pack_id)
        await asyncio.sleep(0)
        if pack_id not in self.packs:
            return None
        return SamplePack(name=pack_id, loops=self.packs[pack_id])


@pytest.fixture
def make_samples():
    def _make(*names):
        pages = [
            SamplePack(name=n, loops=[{"idx": i, "gain": 0.5, "file": f"{n}.wav"}])
            if n
            else None
            for i, n in enumerate(names)
        ]
        pages.extend([None] * (10 - len(pages)))
        return SampleCollection(pages=pages)

    return _make


@pytest.fixture
def pack_source():
    """Factory for a `DictFetcher`."""
    return DictFetcher
