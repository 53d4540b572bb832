"""Mini README: Core package initializer for GastoZero.

GastoZero is a personal income and expense tracker. The package is split
into ``ledger`` (entries and their persistence), ``reports`` (month
aggregation, report layout and PDF rendering) and ``interface`` (the
browser-facing FastAPI application). The logger factory is re-exported here
so scripts can share the same formatting without importing submodules.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
