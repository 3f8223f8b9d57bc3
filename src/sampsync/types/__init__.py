"""
Data model, device protocol and errors for sample transfers.

1. Samples (samples.py)
    - `SamplePack`, `SampleCollection` (10 slots), `SpaceUsed`
    - `DeviceInventorySnapshot`, the cached view of device state

2. Transfer states (transfer.py)
    - `Idle` / `InProgress` / `Failed`, one per `Channel`

3. Device protocol (protocols.py, validation.py)
    - `SampleTransportProtocol` and `validate_transport`

4. Notifications (messages.py)
    - pushed by the state store to observers

5. Errors (exceptions.py)
    - `BusyError`, `PreconditionError`, `TransportError`, `VerificationError`

Example
-------
```python
from sampsync.types import Failed, InProgress
if isinstance(orch.store.upload, Failed):
    print(f"Upload failed: {orch.store.upload.message}")
```
"""

from .exceptions import (
    BusyError,
    PreconditionError,
    TransferError,
    TransportError,
    VerificationError,
)
from .messages import Notification, SnapshotReset, TransferStateUpdate
from .protocols import TRANSPORT_METHODS, ProgressCallback, SampleTransportProtocol
from .samples import (
    DeviceInventorySnapshot,
    SampleCollection,
    SamplePack,
    SpaceUsed,
    SupportCheckResult,
)
from .transfer import (
    Channel,
    Failed,
    Idle,
    InProgress,
    TransferOperationState,
    TransferState,
    is_in_progress,
)
from .validation import ValidationError, validate_transport
