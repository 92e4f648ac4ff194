"""
Application package initializer.

The project is split into a few small pieces: ``core`` holds settings
and logging, ``schemas`` the request/response contracts, ``services``
the in‑memory store and ``api`` the HTTP routes.  ``main`` wires them
into a FastAPI application.
"""

from .main import app  # noqa: F401
