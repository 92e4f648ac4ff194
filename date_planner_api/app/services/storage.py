"""
In‑memory storage for users, date options and subscriptions.

``MemStorage`` keeps each collection in an insertion‑ordered dict keyed
by an integer id.  Ids come from a per‑collection counter starting at
1 and are never reused, even after a record is deleted.  Nothing here
raises for a missing record: lookups return ``None`` and deletes return
``False``.

The methods are coroutines so handlers can ``await`` them the same way
they would await a real database, but none of them actually suspends.
Because of that, a counter increment and the insert that follows it
can never be interleaved with another request on the event loop.

A single store lives on ``app.state.storage`` for the lifetime of the
application; handlers obtain it through the ``get_storage`` dependency.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import Request

from date_planner_api.app.schemas.date_option import DateOption, DateOptionCreate
from date_planner_api.app.schemas.subscription import Subscription, SubscriptionCreate
from date_planner_api.app.schemas.user import User, UserCreate

logger = logging.getLogger(__name__)

DEFAULT_DATE_OPTIONS = [
    {"label": "Movie Night", "weight": 1, "color": "#D4A574"},
    {"label": "Candlelight Dinner", "weight": 1, "color": "#E8C5A0"},
    {"label": "Board Game & Wine", "weight": 1, "color": "#C8956D"},
    {"label": "Stargazing", "weight": 1, "color": "#B8926A"},
    {"label": "Cook Together", "weight": 1, "color": "#DBA995"},
]


class MemStorage:
    """Process‑local repository for all record types."""

    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._date_options: Dict[int, DateOption] = {}
        self._subscriptions: Dict[int, Subscription] = {}
        self._next_user_id = 1
        self._next_date_option_id = 1
        self._next_subscription_id = 1
        self._seed_date_options()

    def _seed_date_options(self) -> None:
        for option in DEFAULT_DATE_OPTIONS:
            option_id = self._allocate_date_option_id()
            self._date_options[option_id] = DateOption(id=option_id, is_default=True, **option)

    def _allocate_user_id(self) -> int:
        user_id = self._next_user_id
        self._next_user_id += 1
        return user_id

    def _allocate_date_option_id(self) -> int:
        option_id = self._next_date_option_id
        self._next_date_option_id += 1
        return option_id

    def _allocate_subscription_id(self) -> int:
        subscription_id = self._next_subscription_id
        self._next_subscription_id += 1
        return subscription_id

    # Users

    async def get_user(self, user_id: Optional[int]) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy()
        return None

    async def create_user(self, data: UserCreate) -> User:
        """Store a new account.

        Username collisions are not checked here; callers that need
        unique usernames must look the name up first.
        """
        user = User(id=self._allocate_user_id(), **data.model_dump())
        self._users[user.id] = user
        logger.info("Created user %s", user.id)
        return user.model_copy()

    # Date options

    async def list_date_options(self) -> List[DateOption]:
        return [option.model_copy() for option in self._date_options.values()]

    async def create_date_option(self, data: DateOptionCreate) -> DateOption:
        option = DateOption(
            id=self._allocate_date_option_id(),
            label=data.label,
            weight=data.weight,
            color=data.color,
            is_default=False,
        )
        self._date_options[option.id] = option
        logger.info("Created date option %s", option.id)
        return option.model_copy()

    async def update_date_option(self, option_id: Optional[int], data: Dict[str, Any]) -> Optional[DateOption]:
        """Merge ``data`` onto an existing option.

        Keys present in ``data`` overwrite the stored values, everything
        else is kept.  Returns ``None`` if no option has ``option_id``.
        """
        existing = self._date_options.get(option_id)
        if existing is None:
            return None
        updated = existing.model_copy(update=data)
        # Re‑assigning an existing key keeps its position in the dict.
        self._date_options[existing.id] = updated
        logger.info("Updated date option %s", existing.id)
        return updated.model_copy()

    async def delete_date_option(self, option_id: Optional[int]) -> bool:
        if self._date_options.pop(option_id, None) is None:
            return False
        logger.info("Deleted date option %s", option_id)
        return True

    # Subscriptions

    async def create_subscription(self, data: SubscriptionCreate) -> Subscription:
        """Store a subscription.  Email uniqueness is the caller's concern."""
        subscription = Subscription(id=self._allocate_subscription_id(), **data.model_dump())
        self._subscriptions[subscription.id] = subscription
        logger.info("Created subscription %s", subscription.id)
        return subscription.model_copy()

    async def get_subscription_by_email(self, email: str) -> Optional[Subscription]:
        for subscription in self._subscriptions.values():
            if subscription.email == email:
                return subscription.model_copy()
        return None


def get_storage(request: Request) -> MemStorage:
    """FastAPI dependency returning the application's store."""
    return request.app.state.storage
