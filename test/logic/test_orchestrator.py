"""Tests for the sample transfer workflows against the mock device."""

import asyncio

import pytest
import pytest_asyncio

from sampsync.device import MockSampleDevice
from sampsync.system import SyncConfig
from sampsync.transfer import (
    SampleTransferOrchestrator,
    TransferStateStore,
    format_device_ids,
    samples_equal,
)
from sampsync.types import (
    Channel,
    Failed,
    Idle,
    InProgress,
    SampleCollection,
    SupportCheckResult,
    TransferStateUpdate,
    ValidationError,
)

BUSY = Failed(message="transfer in progress")


@pytest.fixture
def device():
    return MockSampleDevice()


@pytest.fixture
def orch(device, pack_source):
    fetcher = pack_source({"W-MIXED": [{"f": "mix.wav"}], "W-OG": [{"f": "og.wav"}]})
    config = SyncConfig(default_pack_ids=["W-MIXED", "", "W-OG"], poll_interval=0.01)
    return SampleTransferOrchestrator(device, fetcher=fetcher, config=config)


@pytest_asyncio.fixture
async def probed(orch):
    assert await orch.check_device_sample_support() == SupportCheckResult(
        supported=True, is_set=False
    )
    return orch


async def _until(predicate, tries=100):
    for _ in range(tries):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


def _all_idle(store):
    return all(store.get(ch) == Idle() for ch in Channel)


def test_format_device_ids():
    assert format_device_ids(["ABCD", "WXYZ"]) == ["W-XYZ", "A-BCD"]
    assert format_device_ids(["AB", None, "C"]) == [None, "C-", "A-B"]
    assert format_device_ids([]) == []


def test_rejects_non_transport():
    with pytest.raises(ValidationError):
        SampleTransferOrchestrator(object())


# ----------------------------------------------------------------------------------
# probe
# ----------------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_probe_set_device(orch, device, make_samples):
    device.load(make_samples("W-OG", None, "W-MIXED"), ids=["ABCD", "WXYZ"] + [None] * 8)
    result = await orch.check_device_sample_support()
    assert result == SupportCheckResult(supported=True, is_set=True)
    snap = orch.store.snapshot
    assert snap.is_supported is True and snap.is_set is True
    assert snap.ids == ["W-XYZ"] + [None] * 8 + ["A-BCD"]
    assert snap.storage_total == device.storage_total
    assert len(snap.packs_storage_used) == 10
    assert snap.storage_used == sum(snap.packs_storage_used) > 0
    assert orch.store.probe == Idle()


@pytest.mark.asyncio
async def test_probe_unset_device_skips_inventory(orch, device):
    result = await orch.check_device_sample_support()
    assert result == SupportCheckResult(supported=True, is_set=False)
    assert device.calls == ["is_set"]
    assert orch.store.snapshot.ids is None
    assert orch.store.snapshot.storage_total is None


@pytest.mark.asyncio
async def test_probe_fault_means_unsupported(orch, device):
    device.supported = False
    result = await orch.check_device_sample_support()
    assert result == SupportCheckResult(supported=False, is_set=None)
    assert orch.store.snapshot.is_supported is False
    assert orch.store.probe == Idle()


# ----------------------------------------------------------------------------------
# download
# ----------------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_download_requires_set(orch, device):
    assert await orch.download_device_samples() is None
    assert orch.store.download == Failed(message="device samples not set")
    assert "download_samples" not in device.calls


@pytest.mark.asyncio
async def test_download_progress_and_snapshot(device, make_samples):
    qu = asyncio.Queue()
    orch = SampleTransferOrchestrator(device, store=TransferStateStore(notif_queue=qu))
    device.load(make_samples("W-OG"))
    await orch.check_device_sample_support()
    samples = await orch.download_device_samples()
    assert samples_equal(samples, make_samples("W-OG"))
    assert orch.store.snapshot.device_samples is samples
    assert orch.store.download == Idle()

    progress = []
    while not qu.empty():
        notif = qu.get_nowait()
        if isinstance(notif, TransferStateUpdate) and notif.channel == "download":
            progress.append(notif.state)
    assert progress[0] == InProgress(progress=None)
    assert InProgress(progress=1.0) in progress
    assert progress[-1] == Idle()


@pytest.mark.asyncio
async def test_download_failure(orch, device, make_samples):
    device.load(make_samples("W-OG"))
    await orch.check_device_sample_support()
    device.fail_download = True
    assert await orch.download_device_samples() is None
    assert orch.store.download == Failed(message="failed to download")
    assert orch.store.snapshot.device_samples is None


# ----------------------------------------------------------------------------------
# upload
# ----------------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_upload_verified(probed, device, make_samples):
    samples = make_samples("W-OG", None, "W-MIXED")
    assert await probed.upload_device_samples(samples) is True
    assert _all_idle(probed.store)
    assert probed.store.snapshot.is_set is True
    assert samples_equal(probed.store.snapshot.device_samples, samples)
    assert device.calls[-3:] == ["upload_samples", "is_set", "download_samples"]
    # a later download returns the same content
    assert samples_equal(await probed.download_device_samples(), samples)


@pytest.mark.asyncio
async def test_upload_requires_support(orch, device, make_samples):
    assert await orch.upload_device_samples(make_samples("A")) is False
    assert orch.store.upload == Failed(message="device does not support samples")
    assert device.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("n_slots", [0, 9, 11])
async def test_upload_rejects_wrong_slot_count(probed, device, n_slots):
    calls = list(device.calls)
    bad = SampleCollection(pages=[None] * n_slots)
    assert await probed.upload_device_samples(bad) is False
    assert probed.store.upload == Failed(message="invalid samples payload")
    assert device.calls == calls


@pytest.mark.asyncio
async def test_upload_rejects_non_collection(probed, device):
    calls = list(device.calls)
    assert await probed.upload_device_samples([None] * 10) is False
    assert probed.store.upload == Failed(message="invalid samples payload")

    # right slot count, but a slot that isn't a pack
    bad = SampleCollection(pages=[{"name": "A", "loops": []}] + [None] * 9)
    assert await probed.upload_device_samples(bad) is False
    assert probed.store.upload == Failed(message="invalid samples payload")
    assert device.calls == calls
    assert not probed.store.is_busy


@pytest.mark.asyncio
async def test_upload_transport_failure(probed, device, make_samples):
    device.fail_upload = True
    assert await probed.upload_device_samples(make_samples("A")) is False
    assert probed.store.upload == Failed(message="failed to upload")
    assert device.calls[-1] == "upload_samples"


@pytest.mark.asyncio
async def test_upload_not_set_after(probed, device, make_samples):
    device.set_after_upload = False
    assert await probed.upload_device_samples(make_samples("A")) is False
    assert probed.store.upload == Failed(message="device samples are not set")
    assert probed.store.probe == Idle()
    assert probed.store.snapshot.is_set is False


@pytest.mark.asyncio
async def test_upload_redownload_failure(probed, device, make_samples):
    device.fail_download = True
    assert await probed.upload_device_samples(make_samples("A")) is False
    assert probed.store.upload == Failed(message="failed to re-download after upload")
    assert probed.store.download == Failed(message="failed to download")


@pytest.mark.asyncio
async def test_upload_readback_mismatch(probed, device, make_samples):
    device.corrupt_readback = True
    assert await probed.upload_device_samples(make_samples("A")) is False
    assert probed.store.upload == Failed(
        message="uploaded and downloaded samples are not identical"
    )
    assert not probed.store.is_busy


# ----------------------------------------------------------------------------------
# busy / waiting
# ----------------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_busy_rejects_without_device_io(probed, device, make_samples):
    device.gate = asyncio.Event()
    upload = asyncio.create_task(probed.upload_device_samples(make_samples("A")))
    await _until(lambda: device.calls[-1:] == ["upload_samples"])
    assert isinstance(probed.store.upload, InProgress)
    calls = list(device.calls)

    assert await probed.check_device_sample_support() is None
    assert probed.store.probe == BUSY
    assert await probed.download_device_samples() is None
    assert probed.store.download == BUSY
    assert await probed.upload_device_samples(make_samples("B")) is False
    assert await probed.upload_device_default_samples() is False
    # the in-flight upload keeps its channel
    assert isinstance(probed.store.upload, InProgress)
    assert probed.store.is_busy
    assert await probed.initialise_device_samples() is None
    assert device.calls == calls

    device.gate.set()
    assert await upload is True
    assert samples_equal(probed.store.snapshot.device_samples, make_samples("A"))


@pytest.mark.asyncio
@pytest.mark.slow
async def test_wait_for_upload_to_finish(probed, device, make_samples):
    await probed.wait_for_upload_to_finish()  # idle: returns at once

    device.gate = asyncio.Event()
    upload = asyncio.create_task(probed.upload_device_samples(make_samples("A")))
    await _until(lambda: probed.store.is_busy)
    waiter = asyncio.create_task(probed.wait_for_upload_to_finish(poll_interval=0.01))
    await asyncio.sleep(0.05)
    assert not waiter.done()

    device.gate.set()
    await asyncio.wait_for(waiter, timeout=1)
    assert not probed.store.is_busy
    assert upload.done() and upload.result() is True


# ----------------------------------------------------------------------------------
# defaults / initialise
# ----------------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_upload_default_samples(probed, device):
    assert await probed.upload_device_default_samples() is True
    names = probed.store.snapshot.device_samples.pack_names()
    assert names == ["W-MIXED", None, "W-OG"] + [None] * 7


@pytest.mark.asyncio
async def test_upload_default_samples_build_failure(probed, device):
    probed.config.default_pack_ids = ["W-MIXED", "NOPE"]
    assert await probed.upload_device_default_samples() is False
    assert probed.store.upload == Failed(
        message="failed to construct default sample packs"
    )
    assert "upload_samples" not in device.calls


@pytest.mark.asyncio
async def test_initialise_seeds_unset_device(orch, device):
    samples = await orch.initialise_device_samples()
    assert samples.pack_names() == ["W-MIXED", None, "W-OG"] + [None] * 7
    snap = orch.store.snapshot
    assert snap.is_supported is True and snap.is_set is True
    assert snap.ids[:3] == ["W-MIXED", None, "W-OG"]
    assert samples_equal(snap.device_samples, samples)
    assert _all_idle(orch.store)
    assert device.calls.count("upload_samples") == 1


@pytest.mark.asyncio
async def test_initialise_set_device_skips_upload(orch, device, make_samples):
    device.load(make_samples("X-ONE"))
    samples = await orch.initialise_device_samples()
    assert samples_equal(samples, make_samples("X-ONE"))
    assert "upload_samples" not in device.calls


@pytest.mark.asyncio
async def test_initialise_unsupported(orch, device):
    device.supported = False
    assert await orch.initialise_device_samples() is None
    assert orch.store.snapshot.is_supported is False
    assert _all_idle(orch.store)


@pytest.mark.asyncio
async def test_initialise_upload_failure(orch, device):
    device.fail_upload = True
    assert await orch.initialise_device_samples() is None
    assert orch.store.upload == Failed(
        message="failed to upload default samples during initialisation: "
        + "failed to upload"
    )
    assert "download_samples" not in device.calls


@pytest.mark.asyncio
async def test_invalidate(orch, device, make_samples):
    device.load(make_samples("W-OG"))
    await orch.initialise_device_samples()
    orch.invalidate()
    assert orch.store.snapshot.is_set is None
    assert orch.store.snapshot.device_samples is None
    assert await orch.download_device_samples() is None


# ----------------------------------------------------------------------------------
# partial device faults
# ----------------------------------------------------------------------------------


class NoSpaceReportDevice(MockSampleDevice):
    """Answers is_set but faults on the storage query."""

    async def get_space_used(self):
        await self._suspend("get_space_used")
        raise RuntimeError("get_space_used: timeout")


class FaultyRecheckDevice(MockSampleDevice):
    """is_set faults once something has been uploaded."""

    async def upload_samples(self, samples, progress_cb):
        ok = await super().upload_samples(samples, progress_cb)
        self.supported = False
        return ok


class VolatileDevice(MockSampleDevice):
    """Loses its bank after it has been read once."""

    async def download_samples(self, progress_cb):
        samples = await super().download_samples(progress_cb)
        self._samples = None
        return samples


@pytest.mark.asyncio
async def test_probe_commits_nothing_on_partial_fault(make_samples):
    device = NoSpaceReportDevice()
    orch = SampleTransferOrchestrator(device)
    assert await orch.check_device_sample_support() == SupportCheckResult(
        supported=True, is_set=False
    )

    device.load(make_samples("W-OG"))
    result = await orch.check_device_sample_support()
    assert result == SupportCheckResult(supported=False, is_set=False)
    snap = orch.store.snapshot
    assert snap.is_supported is False
    assert snap.is_set is False
    assert snap.storage_total is None and snap.ids is None
    assert "get_ids" not in device.calls
    assert orch.store.probe == Idle()


@pytest.mark.asyncio
async def test_upload_recheck_fault(make_samples):
    device = FaultyRecheckDevice()
    orch = SampleTransferOrchestrator(device)
    await orch.check_device_sample_support()

    assert await orch.upload_device_samples(make_samples("A")) is False
    assert orch.store.upload == Failed(message="device samples are not set")
    assert orch.store.snapshot.is_set is None
    assert orch.store.probe == Idle()
    assert not orch.store.is_busy
    assert "download_samples" not in device.calls


@pytest.mark.asyncio
async def test_initialise_still_unset_after_defaults(pack_source):
    device = VolatileDevice()
    orch = SampleTransferOrchestrator(
        device,
        fetcher=pack_source({"W-OG": []}),
        config=SyncConfig(default_pack_ids=["W-OG"]),
    )
    assert await orch.initialise_device_samples() is None
    assert orch.store.probe == Failed(
        message="device samples still not set after uploading defaults"
    )
    assert orch.store.upload == Idle()
    assert orch.store.snapshot.is_set is False
    # only the verification read-back, no final download
    assert device.calls.count("download_samples") == 1
    assert not orch.store.is_busy
