"""Validation of collaborators handed to the orchestrator."""

from __future__ import annotations

import inspect
from typing import Any

from loguru import logger

from .protocols import TRANSPORT_METHODS, SampleTransportProtocol


class ValidationError(Exception):
    """Raised when a collaborator does not meet its protocol."""

    pass


def validate_transport(transport: Any) -> tuple[bool, str]:
    """Check that `transport` implements `SampleTransportProtocol`.

    Returns
    -------
    tuple[bool, str]
        (is_valid, error_message)
    """
    if transport is None:
        return False, "No transport provided"
    if not isinstance(transport, SampleTransportProtocol):
        missing = [m for m in TRANSPORT_METHODS if not hasattr(transport, m)]
        return (
            False,
            f"{transport.__class__.__name__} does not implement "
            + f"SampleTransportProtocol, missing: {', '.join(missing)}",
        )
    not_async = [
        m
        for m in TRANSPORT_METHODS
        if not inspect.iscoroutinefunction(getattr(transport, m))
    ]
    if not_async:
        logger.debug("Transport methods not coroutines: {}", not_async)
        return (
            False,
            f"{transport.__class__.__name__} methods must be async: "
            + f"{', '.join(not_async)}",
        )
    return True, ""
