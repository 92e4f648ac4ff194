"""
Pydantic models for user accounts.

Passwords are opaque strings and are stored exactly as given.
"""

from pydantic import BaseModel, StrictStr


class UserCreate(BaseModel):
    """Input for account creation."""

    username: StrictStr
    password: StrictStr


class User(UserCreate):
    """A stored user account."""

    id: int
