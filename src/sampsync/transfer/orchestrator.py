"""Sample transfer orchestrator.

Sequences the device workflows over a `TransferStateStore`:

- probe (`check_device_sample_support`): is the device sample-capable, is its
  bank set, how much storage is used, which packs are loaded
- download (`download_device_samples`)
- upload (`upload_device_samples`): write, re-probe, read back and compare
- initialise (`initialise_device_samples`): probe, seed defaults if needed,
  download

At most one operation is in flight at a time. Every public method checks the
store's busy signal first and fails immediately (no queueing) if any channel is
in progress. The only suspension points are calls into the device transport
and the pack fetcher.

Failures never raise out of the public methods: the owning channel goes to
`Failed(message)` and the method returns a falsy value.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence

from loguru import logger

from sampsync.system.sysconfig import SyncConfig
from sampsync.transfer.inventory import PackFetcher, PackSource, build_samples_from_ids
from sampsync.transfer.state import TransferStateStore
from sampsync.transfer.verify import samples_equal
from sampsync.types import (
    BusyError,
    Channel,
    Failed,
    Idle,
    InProgress,
    PreconditionError,
    ProgressCallback,
    SampleCollection,
    SampleTransportProtocol,
    SupportCheckResult,
    TransferError,
    TransportError,
    ValidationError,
    VerificationError,
    validate_transport,
)


def format_device_ids(ids: Sequence[Optional[str]]) -> list[Optional[str]]:
    """Turn raw device slot ids into display ids.

    A dash goes after the first character of each id ("ABCD" -> "A-BCD") and
    the list is rotated left by one, the first slot moving to the end.
    """
    out = [i[0] + "-" + i[1:] if i else None for i in ids]
    return out[1:] + out[:1]


class SampleTransferOrchestrator:
    """Runs sample transfers against one device.

    Parameters
    ----------
    transport : SampleTransportProtocol
        The device.
    store : TransferStateStore, optional
        State to read and write. A fresh store is created if not given.
    fetcher : PackSource, optional
        Source of pack definitions for default seeding. If not given a
        `PackFetcher` is created from `config` on first use.
    config : SyncConfig, optional
        Defaults to `SyncConfig()`.

    Raises
    ------
    ValidationError
        If `transport` doesn't implement `SampleTransportProtocol`.
    """

    def __init__(
        self,
        transport: SampleTransportProtocol,
        store: Optional[TransferStateStore] = None,
        fetcher: Optional[PackSource] = None,
        config: Optional[SyncConfig] = None,
    ):
        is_valid, msg = validate_transport(transport)
        if not is_valid:
            logger.error("Invalid sample transport: {}", msg)
            raise ValidationError(msg)
        self.transport = transport
        self.store = store if store is not None else TransferStateStore()
        self.config = config if config is not None else SyncConfig()
        self._fetcher = fetcher
        self._owns_fetcher = False

    @property
    def fetcher(self) -> PackSource:
        if self._fetcher is None:
            self._fetcher = PackFetcher(
                self.config.server_url,
                device_kind=self.config.device_kind,
                timeout=self.config.request_timeout,
            )
            self._owns_fetcher = True
        return self._fetcher

    async def aclose(self):
        if self._owns_fetcher:
            await self._fetcher.aclose()
            self._fetcher = None
            self._owns_fetcher = False

    # ----------------------------------------------------------------------------------
    # ============================== API ===============================================
    # ----------------------------------------------------------------------------------

    def invalidate(self) -> None:
        """Forget everything known about the device."""
        self.store.reset()

    async def check_device_sample_support(self) -> Optional[SupportCheckResult]:
        """Probe the device.

        Returns None (and fails the probe channel) if a transfer is in flight.
        A transport fault is taken to mean the device doesn't support samples.
        """
        logger.debug("Checking if device supports samples...")
        if self.store.is_busy:
            self._fail(Channel.PROBE, BusyError())
            return None
        self.store.probe = InProgress()
        try:
            is_set = await self.transport.is_set()
            space = ids = None
            if is_set is True:
                logger.debug("Getting space used")
                space = await self.transport.get_space_used()
                logger.debug("Getting IDs")
                ids = format_device_ids(await self.transport.get_ids())
        except Exception:
            self.store.snapshot.is_supported = False
            logger.info("Device does not support samples")
        else:
            snapshot = self.store.snapshot
            snapshot.is_supported = True
            snapshot.is_set = is_set
            if space is not None:
                snapshot.storage_total = space.tot
                snapshot.storage_used = space.usd
                snapshot.packs_storage_used = list(space.packs)
                snapshot.ids = ids
                logger.debug("Space used: {}, IDs: {}", space, ids)
            logger.info("Device supports samples, is_set = {}", is_set)
        self.store.probe = Idle()
        snapshot = self.store.snapshot
        return SupportCheckResult(
            supported=bool(snapshot.is_supported), is_set=snapshot.is_set
        )

    async def download_device_samples(self) -> Optional[SampleCollection]:
        """Read the sample bank from the device into the snapshot."""
        try:
            return await self._download()
        except TransferError as e:
            self._fail(Channel.DOWNLOAD, e)
            return None

    async def upload_device_samples(self, samples: SampleCollection) -> bool:
        """Write `samples` to the device and confirm it by reading them back.

        True means the device now holds exactly `samples`.
        """
        logger.debug("Uploading samples to device...")
        try:
            return await self._upload(samples)
        except TransferError as e:
            self._fail(Channel.UPLOAD, e)
            return False

    async def upload_device_default_samples(self) -> bool:
        """Build the default sample bank from the server and upload it."""
        logger.debug("Uploading default samples to device...")
        if self.store.is_busy:
            self._fail(Channel.UPLOAD, BusyError())
            return False
        # hold the upload channel while packs are fetched
        self.store.upload = InProgress()
        try:
            samples = await build_samples_from_ids(
                self.config.default_pack_ids, self.fetcher
            )
        finally:
            self.store.upload = Idle()
        if samples is None:
            self._fail(
                Channel.UPLOAD,
                TransportError("failed to construct default sample packs"),
            )
            return False
        return await self.upload_device_samples(samples)

    async def initialise_device_samples(self) -> Optional[SampleCollection]:
        """Probe, seed the default bank if the device has none, then download."""
        logger.debug("Initialising device samples...")
        support = await self.check_device_sample_support()
        if support is None:
            logger.debug("Support check aborted (transfer busy).")
            return None
        if not support.supported:
            logger.debug("Device does not support samples, aborting initialisation.")
            return None
        if support.is_set is not True:
            if not await self.upload_device_default_samples():
                cause = self.store.upload
                if isinstance(cause, InProgress):
                    logger.debug("Default upload aborted (transfer busy).")
                    return None
                msg = "failed to upload default samples during initialisation"
                if isinstance(cause, Failed):
                    msg += f": {cause.message}"
                self._fail(Channel.UPLOAD, TransferError(msg))
                return None
            logger.debug("Re-checking device samples after upload...")
            support = await self.check_device_sample_support()
            if support is None or not support.supported or not support.is_set:
                self._fail(
                    Channel.PROBE,
                    TransportError(
                        "device samples still not set after uploading defaults"
                    ),
                )
                return None
        else:
            logger.debug("Device samples already set, no need to upload defaults.")
        return await self.download_device_samples()

    async def wait_for_upload_to_finish(self, poll_interval: Optional[float] = None):
        """Block until no channel is in progress. Polls; no timeout."""
        interval = self.config.poll_interval if poll_interval is None else poll_interval
        while self.store.is_busy:
            await asyncio.sleep(interval)

    # ----------------------------------------------------------------------------------
    # ============================== Internals =========================================
    # ----------------------------------------------------------------------------------

    async def _download(self) -> SampleCollection:
        if self.store.is_busy:
            raise BusyError()
        if self.store.snapshot.is_set is not True:
            raise PreconditionError("device samples not set")
        logger.debug("Downloading samples from device...")
        self.store.download = InProgress()
        try:
            samples = await self.transport.download_samples(
                self._progress_cb(Channel.DOWNLOAD)
            )
        except Exception:
            logger.exception("Error downloading samples from device.")
            samples = None
        self.store.download = Idle()
        if samples is None:
            raise TransportError("failed to download")
        self.store.snapshot.device_samples = samples
        logger.info("Downloaded samples: {}", samples.pack_names())
        return samples

    async def _upload(self, samples: Any) -> bool:
        if self.store.is_busy:
            raise BusyError()
        if self.store.snapshot.is_supported is not True:
            raise PreconditionError("device does not support samples")
        if not isinstance(samples, SampleCollection) or not samples.is_well_formed():
            raise PreconditionError("invalid samples payload")

        self.store.upload = InProgress()
        try:
            ok = await self.transport.upload_samples(
                samples, self._progress_cb(Channel.UPLOAD)
            )
        except Exception:
            logger.exception("Error uploading samples to device.")
            ok = False
        if not ok:
            raise TransportError("failed to upload")
        self.store.upload = Idle()

        # direct re-probe: we are still inside the upload operation
        self.store.probe = InProgress()
        try:
            is_set = await self.transport.is_set()
        except Exception:
            logger.exception("Error re-checking device samples after upload.")
            is_set = None
        self.store.snapshot.is_set = is_set
        self.store.probe = Idle()
        logger.debug("Device samples are set: {}", is_set)
        if is_set is not True:
            raise TransportError("device samples are not set")

        logger.debug("Re-downloading samples from device to verify upload...")
        downloaded = await self.download_device_samples()
        if downloaded is None:
            raise VerificationError("failed to re-download after upload")
        if not samples_equal(samples, downloaded):
            raise VerificationError("uploaded and downloaded samples are not identical")
        logger.info("Upload verified: {}", samples.pack_names())
        return True

    def _progress_cb(self, channel: Channel) -> ProgressCallback:
        def update(val: float):
            self.store.set(channel, InProgress(progress=val))

        return update

    def _fail(self, channel: Channel, err: TransferError) -> None:
        logger.error("Sample {} failed: {}", channel.value, err)
        if isinstance(err, BusyError) and isinstance(self.store.get(channel), InProgress):
            # the in-flight operation owns this channel
            return
        self.store.set(channel, Failed(message=str(err)))
