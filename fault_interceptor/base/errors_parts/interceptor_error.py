"""
Package exception hierarchy.

These exceptions describe misuse of the interceptor itself (unknown
collaborators, failed decoration, bad configuration). They never wrap faults
raised by intercepted callables; those propagate unchanged.
"""
from __future__ import annotations


class InterceptorError(Exception):
    """Base exception for fault_interceptor."""


class UnknownCollaboratorError(InterceptorError):
    """Raised when a collaborator cannot be resolved or initialized.

    Failure modes include:
    - The name is not registered in the :class:`CollaboratorRegistry`.
    - The collaborator module cannot be imported or the class is missing.
    - The collaborator factory raised an exception during initialization.
    """


class DecorationError(InterceptorError):
    """Raised when a collaborator's operations cannot be wrapped.

    Either the collaborator refuses attribute assignment (e.g. ``__slots__``
    without ``__dict__``) or decoration was requested after its singleton was
    already resolved.
    """


class ConfigError(InterceptorError):
    """Raised when interceptor configuration cannot be loaded or validated."""


__all__ = [
    "InterceptorError",
    "UnknownCollaboratorError",
    "DecorationError",
    "ConfigError",
]
