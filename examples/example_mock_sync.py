"""Initialise a mock device with packs served from memory, then replace slot 2.

Run with `python examples/example_mock_sync.py`.
"""

import asyncio

from loguru import logger

import sampsync.util
from sampsync.device import MockSampleDevice
from sampsync.system import SyncConfig
from sampsync.transfer import SampleTransferOrchestrator, TransferStateStore
from sampsync.types import SamplePack


class MemoryPacks:
    async def fetch(self, pack_id):
        await asyncio.sleep(0.05)
        return SamplePack(name=pack_id, loops=[{"file": f"{pack_id}.wav", "bpm": 120}])


async def watch(queue: asyncio.Queue):
    while True:
        notif = await queue.get()
        logger.info("NOTIF: {}", notif)


async def main():
    sampsync.util.start_log(log_to_file=False, log_to_stdout=True, log_level="DEBUG")
    queue = asyncio.Queue()
    orch = SampleTransferOrchestrator(
        MockSampleDevice(),
        store=TransferStateStore(notif_queue=queue),
        fetcher=MemoryPacks(),
        config=SyncConfig(),
    )
    watcher = asyncio.create_task(watch(queue))

    samples = await orch.initialise_device_samples()
    logger.info("Device holds: {}", samples.pack_names())

    samples.pages[2] = SamplePack(name="X-CUSTOM", loops=[{"file": "c.wav"}])
    upload = asyncio.create_task(orch.upload_device_samples(samples))
    await asyncio.sleep(0)
    await orch.wait_for_upload_to_finish()
    logger.info("Upload verified: {}", upload.result())
    logger.info("Snapshot: {}", orch.store.snapshot.to_dict())

    watcher.cancel()
    sampsync.util.shutdown_log()


if __name__ == "__main__":
    asyncio.run(main())
