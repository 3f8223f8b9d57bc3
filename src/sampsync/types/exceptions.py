"""Transfer error taxonomy.

These are raised between workflow steps inside the orchestrator and are
caught at its public methods, which record `Failed(str(err))` on the owning
channel. They do not escape the orchestrator's public API.
"""


class TransferError(Exception):
    """Base class for all transfer failures."""

    pass


class BusyError(TransferError):
    """Another transfer operation is in flight."""

    def __init__(self, message: str = "transfer in progress"):
        super().__init__(message)


class PreconditionError(TransferError):
    """Device capability or payload invariant not met."""

    pass


class TransportError(TransferError):
    """A device call failed or returned a negative result."""

    pass


class VerificationError(TransferError):
    """Post-upload readback did not confirm the upload."""

    pass
