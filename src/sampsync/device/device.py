"""Device base class.

All sample-capable devices inherit from `Device` and implement the coroutines of
`sampsync.types.SampleTransportProtocol`. The base class only handles keyword
configuration and connection state; the transfer orchestrator validates
protocol compliance when it is handed a device.

Examples
--------
```python
class MySampler(Device):
    required_config = {"address": str}

    def open(self) -> tuple[bool, str]:
        self._connected = True
        return True, "Connected"

    async def is_set(self) -> bool:
        ...
```
"""

from __future__ import annotations

from typing import Type

from loguru import logger


class Device:
    """Base class for all sample devices.

    Attributes
    ----------
    required_config : dict[str, Type]
        Required configuration parameters and their types
    """

    required_config: dict[str, Type] = {}  # Required configuration keys

    def __init__(self, **config_kwargs):
        for key, value in config_kwargs.items():
            setattr(self, key, value)
        for key, value in self.required_config.items():
            if not hasattr(self, key):
                logger.error(
                    f"Device {self.__class__.__name__} missing required config key: "
                    + f"{key}"
                )
                raise ValueError(
                    f"Device {self.__class__.__name__} missing required config "
                    + f"key: {key}"
                )
            if not isinstance(getattr(self, key), value):
                logger.error(
                    f"Device {self.__class__.__name__} config key {key} "
                    + f"has wrong type: {type(getattr(self, key))} (expected {value})"
                )
                raise ValueError(
                    f"Device {self.__class__.__name__} config key {key} has "
                    + f"wrong type: {type(getattr(self, key))} (expected {value})"
                )

    def open(self) -> tuple[bool, str]:
        raise NotImplementedError()

    def close(self):
        raise NotImplementedError()

    def is_connected(self) -> bool:
        raise NotImplementedError()

    def __repr__(self):
        return f"{self.__class__.__name__}()"
