"""
Service layer abstraction.

The store in ``storage`` encapsulates all record keeping.  Handlers
talk to it through ``get_storage`` so the in‑memory implementation can
be swapped for a database‑backed one without touching the routes.
"""
