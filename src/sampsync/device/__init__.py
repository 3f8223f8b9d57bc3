"""Sample devices.

`Device` is the base class for hardware; `MockSampleDevice` is an in-memory
stand-in implementing `SampleTransportProtocol` for tests and scripts.
"""

from .device import Device
from .mock import MockSampleDevice

__all__ = ["Device", "MockSampleDevice"]
