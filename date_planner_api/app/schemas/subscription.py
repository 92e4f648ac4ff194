"""Pydantic models for email subscriptions."""

from pydantic import BaseModel, Field, StrictStr


class SubscriptionCreate(BaseModel):
    """Schema for subscribing an email address."""

    name: StrictStr = Field(..., examples=["Alex"])
    email: StrictStr = Field(..., examples=["alex@example.com"])


class Subscription(SubscriptionCreate):
    """A stored subscription."""

    id: int
