"""fault_interceptor package

Capture failures of arbitrary callables into a shared, human-readable error
log without changing what callers see.

Public API (re-exported):
    - Version: ``__version__``
    - Handler: :class:`InterceptionHandler`, :func:`get_error_handler`,
      :func:`set_error_handler`
    - Log: :class:`ErrorLog`, :class:`ErrorLogView`, :class:`FaultRecord`
    - Normalization: :func:`normalize`, :func:`classify_fault`,
      :func:`describe`
    - Pending results: :class:`Immediate`, :class:`Pending`,
      :func:`classify_result`, :class:`Rejection`
    - Decoration: :class:`CollaboratorRegistry`
    - Configuration: :func:`get_interceptor_config`
    - Exceptions: :class:`InterceptorError` and subclasses
"""


from .base import (
    CollaboratorRegistry,
    ConfigError,
    DecorationError,
    ErrorLog,
    ErrorLogView,
    FaultCategory,
    FaultChannel,
    FaultRecord,
    Immediate,
    InterceptionHandler,
    InterceptorError,
    NormalizedFault,
    Pending,
    Rejection,
    UnknownCollaboratorError,
    classify_fault,
    classify_result,
    describe,
    get_error_handler,
    normalize,
    set_error_handler,
)
from .config import InterceptorSettings, get_interceptor_config

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "InterceptionHandler",
    "get_error_handler",
    "set_error_handler",
    "ErrorLog",
    "ErrorLogView",
    "FaultRecord",
    "normalize",
    "classify_fault",
    "NormalizedFault",
    "describe",
    "Immediate",
    "Pending",
    "classify_result",
    "Rejection",
    "CollaboratorRegistry",
    "InterceptorSettings",
    "get_interceptor_config",
    "FaultCategory",
    "FaultChannel",
    "InterceptorError",
    "UnknownCollaboratorError",
    "DecorationError",
    "ConfigError",
]

