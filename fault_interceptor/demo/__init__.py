"""Demo collaborators and scenarios for the interception handler.

Run with ``python -m fault_interceptor.demo``.
"""

from __future__ import annotations

from .services import (
    DataResponse,
    DecoratedService,
    ExampleService,
    UndecoratedService,
    build_registry,
)
from .scenarios import SCENARIOS, build_parser, main, run_scenarios

__all__ = [
    "DataResponse",
    "DecoratedService",
    "ExampleService",
    "UndecoratedService",
    "build_registry",
    "SCENARIOS",
    "build_parser",
    "main",
    "run_scenarios",
]
