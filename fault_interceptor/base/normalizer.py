"""Failure normalization.

Translates a raw failure plus the descriptor of the callable that produced it
into one user-facing string. Priority, most specific first:

1. a failure code present in the failure-code map -> the mapped message;
2. a message carried by the failure (exception-like shape);
3. an absent failure (``None``) -> ``"An unknown error occurred."``;
4. the failure's own string form.

When the callable carries a ``description`` the result is prefixed with
``"Unable to <description>. "``. Everything here is pure: no logging, no
state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from ..config.defaults import DEFAULT_FAILURE_MESSAGES, DESCRIPTION_TEMPLATE, UNKNOWN_ERROR_MESSAGE
from .errors import (
    FaultCategory,
    extract_failure_code,
    extract_message,
    unwrap_rejection,
)


@dataclass(frozen=True)
class NormalizedFault:
    """Outcome of normalizing one failure.

    Attributes:
        message: Final user-facing text (description prefix included).
        category: Which normalization rule produced the text.
        code: Failure code found on the fault, mapped or not.
        description: The callable's description, if it had one.
    """

    message: str
    category: FaultCategory
    code: Optional[int] = None
    description: Optional[str] = None


def describe(description: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Attach a human-readable ``description`` to a callable.

    The text should complete the sentence "Unable to ...", e.g.
    ``@describe("load the example data")``.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        func.description = description  # type: ignore[attr-defined]
        return func

    return decorator


def get_description(func: Any) -> Optional[str]:
    """Return the non-empty string ``description`` of ``func``, if any."""
    if func is None:
        return None
    description = getattr(func, "description", None)
    if isinstance(description, str) and description:
        return description
    return None


def classify_fault(
    func: Any,
    failure: Any,
    failure_messages: Mapping[int, str] = DEFAULT_FAILURE_MESSAGES,
) -> NormalizedFault:
    """Normalize ``failure`` raised by ``func`` into a :class:`NormalizedFault`."""
    failure = unwrap_rejection(failure)
    code = extract_failure_code(failure)
    message: Optional[str] = None
    if code is not None and code in failure_messages:
        message = failure_messages[code]
        category = FaultCategory.CODED
    else:
        message = extract_message(failure)
        category = FaultCategory.STRUCTURED
    if message is None:
        if failure is None:
            message = UNKNOWN_ERROR_MESSAGE
            category = FaultCategory.UNSTRUCTURED
        else:
            message = str(failure)
            category = FaultCategory.RAW

    description = get_description(func)
    if description is not None:
        message = DESCRIPTION_TEMPLATE.format(description=description, message=message)
    return NormalizedFault(message=message, category=category, code=code, description=description)


def normalize(
    func: Any,
    failure: Any,
    failure_messages: Mapping[int, str] = DEFAULT_FAILURE_MESSAGES,
) -> str:
    """Return the user-facing message for ``failure`` raised by ``func``."""
    return classify_fault(func, failure, failure_messages).message


__all__ = [
    "NormalizedFault",
    "describe",
    "get_description",
    "classify_fault",
    "normalize",
]
