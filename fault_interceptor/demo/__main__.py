"""Demo executable module.

Allows running the demo via:

    python -m fault_interceptor.demo [args]
"""

from __future__ import annotations

from . import main


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
