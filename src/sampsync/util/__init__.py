# -*- coding: utf-8 -*-
"""
Utility functions and constants for sampsync.

- Logging configuration (loguru sinks)
- Default values for configuration
- Canonicalisation of pack records for equality checks

Examples
--------
Starting a log for a script:
```python
from sampsync.util import start_log
start_log(log_to_stdout=True, log_level="DEBUG")
```
"""

from .canonical import canonical_dumps, canonicalize
from .defaults import (
    DEFAULT_DEVICE_KIND,
    DEFAULT_LOGLEVEL,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SAMPLE_PACK_IDS,
    DEFAULT_SERVER_URL,
    SLOT_COUNT,
    TEST_LOGLEVEL,
)
from .logging import (
    clear_log,
    log_default_path,
    shutdown_log,
    start_log,
)

__all__ = [
    "DEFAULT_DEVICE_KIND",
    "DEFAULT_LOGLEVEL",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_SAMPLE_PACK_IDS",
    "DEFAULT_SERVER_URL",
    "SLOT_COUNT",
    "TEST_LOGLEVEL",
    "canonical_dumps",
    "canonicalize",
    "clear_log",
    "log_default_path",
    "shutdown_log",
    "start_log",
]
