"""
Subscription endpoints.

One subscription per email address.  The store does not enforce
uniqueness, so the handler looks the email up before inserting; the
comparison is exact and case sensitive.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from date_planner_api.app.schemas.subscription import Subscription, SubscriptionCreate
from date_planner_api.app.services.storage import MemStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Subscription, status_code=status.HTTP_201_CREATED)
async def create_subscription(
    subscription_in: SubscriptionCreate,
    storage: MemStorage = Depends(get_storage),
) -> Subscription:
    """Subscribe an email address.  Returns 409 if it is already subscribed."""
    try:
        existing = await storage.get_subscription_by_email(subscription_in.email)
        if existing is None:
            return await storage.create_subscription(subscription_in)
    except Exception:
        logger.exception("Failed to create subscription")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create subscription",
        )
    logger.info("Rejected duplicate subscription %s", existing.id)
    raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already subscribed")
