"""
Interceptor Base Package

Exports the fault taxonomy, the failure normalizer, pending-result detection,
the error log, the interception handler and the collaborator registry.

Import order matters: ``errors`` comes first because the configuration layer
imports it while this package is still initializing.
"""

from .errors import (
    ConfigError,
    DecorationError,
    FaultCategory,
    FaultChannel,
    InterceptorError,
    Rejection,
    UnknownCollaboratorError,
)
from .normalizer import NormalizedFault, classify_fault, describe, normalize
from .pending import Immediate, Pending, classify_result
from .error_log import ErrorLog, ErrorLogView, FaultRecord
from .registry import CollaboratorRegistry
from .handler import InterceptionHandler
from .default_handler import get_error_handler, set_error_handler

__all__ = [
    "ConfigError",
    "DecorationError",
    "FaultCategory",
    "FaultChannel",
    "InterceptorError",
    "Rejection",
    "UnknownCollaboratorError",
    "NormalizedFault",
    "classify_fault",
    "describe",
    "normalize",
    "Immediate",
    "Pending",
    "classify_result",
    "ErrorLog",
    "ErrorLogView",
    "FaultRecord",
    "CollaboratorRegistry",
    "InterceptionHandler",
    "get_error_handler",
    "set_error_handler",
]
