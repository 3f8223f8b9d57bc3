# -*- coding: utf-8 -*-
"""# SampSync Documentation

`Device sample pack synchronisation`

A (python) library for keeping the 10-slot sample pack bank of a connected device
in step with the pack definitions held on a remote sample server.

The package is organised as:

- `sampsync.types`: the data model (packs, collections, transfer states), the
  device transport protocol and the error taxonomy.
- `sampsync.device`: the device base class and a mock sampler for testing.
- `sampsync.transfer`: the transfer state store, the orchestrator workflows
  (probe, download, upload + verify, initialise), default-inventory building
  and equality verification.
- `sampsync.system`: configuration loading.
- `sampsync.util`: logging, defaults and canonicalisation helpers.

Example
-------
```python
from sampsync.device import MockSampleDevice
from sampsync.transfer import SampleTransferOrchestrator

orch = SampleTransferOrchestrator(MockSampleDevice())
await orch.initialise_device_samples()
print(orch.store.snapshot)
```
"""

from ._version import __version__
