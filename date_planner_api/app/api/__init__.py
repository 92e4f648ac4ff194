"""
API package containing the HTTP routes.

``router`` exposes a single ``APIRouter`` which includes every
domain‑specific router from ``endpoints``; ``main`` mounts it under
``/api``.
"""
