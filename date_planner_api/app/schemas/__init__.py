"""
Pydantic schema definitions for API payloads and stored records.

Each record type defines an input contract (what a client may send)
and a record model (what the store keeps and the API returns).  The
input contracts are written by hand per endpoint so the API does not
depend on any persistence layout.
"""
