"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `fault_interceptor.base.errors` for the stable surface.
"""

from .fault_channel import FaultChannel
from .fault_category import FaultCategory
from .interceptor_error import (
    ConfigError,
    DecorationError,
    InterceptorError,
    UnknownCollaboratorError,
)
from .rejection import Rejection
from .classification import extract_failure_code, extract_message, unwrap_rejection

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
