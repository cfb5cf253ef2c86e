"""Formatter and context objects behind ``fault_interceptor.base.logging``."""

from .json_formatter import JsonFormatter
from .logging_context import LogContext

__all__ = ["JsonFormatter", "LogContext"]
