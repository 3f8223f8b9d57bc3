"""Configuration for sample sync setups.

See `sampsync.system.sysconfig` for the INI format.
"""

from .sysconfig import (
    DEFAULT_SECTION,
    SyncConfig,
    load_sync_config,
    validate_sync_config,
)

__all__ = ["DEFAULT_SECTION", "SyncConfig", "load_sync_config", "validate_sync_config"]
