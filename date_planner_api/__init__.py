"""
Backend for the date planner: an in‑memory store of date options and
email subscriptions exposed as a JSON API under ``/api``.

The ASGI application lives in ``date_planner_api.app.main``; ``run.py``
at the repository root serves it with uvicorn.
"""

__all__ = []
