"""Mini README: Browser interface for GastoZero.

Exports the FastAPI application factory that serves the dashboard, the
entry form and the PDF exports.
"""

from .web_app import create_application

__all__ = ["create_application"]
