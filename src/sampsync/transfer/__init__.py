"""Sample transfers between the sample server and a device.

- `TransferStateStore`: snapshot of the device inventory + per-channel states
- `SampleTransferOrchestrator`: probe / download / upload / initialise workflows
- `build_samples_from_ids`, `PackFetcher`: default-inventory construction
- `samples_equal`, `sample_pack_equal`: equality verification

Example
-------
```python
store = TransferStateStore()
orch = SampleTransferOrchestrator(device, store=store)
if not await orch.upload_device_samples(samples):
    print(store.upload.message)
```
"""

from .inventory import (
    DEFAULT_SAMPLE_PACK_IDS,
    PackFetcher,
    PackSource,
    build_samples_from_ids,
    pack_url,
)
from .orchestrator import SampleTransferOrchestrator, format_device_ids
from .state import TransferStateStore
from .verify import sample_pack_equal, samples_equal

__all__ = [
    "DEFAULT_SAMPLE_PACK_IDS",
    "PackFetcher",
    "PackSource",
    "SampleTransferOrchestrator",
    "TransferStateStore",
    "build_samples_from_ids",
    "format_device_ids",
    "pack_url",
    "sample_pack_equal",
    "samples_equal",
]
