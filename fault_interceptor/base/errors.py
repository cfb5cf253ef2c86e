"""Fault taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``fault_interceptor.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.fault_channel import FaultChannel
from .errors_parts.fault_category import FaultCategory
from .errors_parts.interceptor_error import (
    ConfigError,
    DecorationError,
    InterceptorError,
    UnknownCollaboratorError,
)
from .errors_parts.rejection import Rejection
from .errors_parts.classification import (
    extract_failure_code,
    extract_message,
    unwrap_rejection,
)

__all__ = [
    "FaultChannel",
    "FaultCategory",
    "InterceptorError",
    "UnknownCollaboratorError",
    "DecorationError",
    "ConfigError",
    "Rejection",
    "extract_failure_code",
    "extract_message",
    "unwrap_rejection",
]
