"""
Date option endpoints.

Clients list the available options, add custom ones, tweak them and
remove them.  Request bodies are validated by FastAPI against the
schemas in ``schemas.date_option``; a failing body never reaches the
handler and is answered with 400 by the handler registered in
``main``.
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError

from date_planner_api.app.schemas.date_option import DateOption, DateOptionCreate, DateOptionUpdate
from date_planner_api.app.services.storage import MemStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

NOT_FOUND = "Date option not found"


def parse_id(raw: str) -> Optional[int]:
    """Parse the leading integer of a path segment.

    ``"12"`` and ``"12abc"`` both give 12.  Anything without leading
    digits gives ``None``, which the store treats as an unknown id, so
    a malformed id ends up as 404 rather than 400.
    """
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


@router.get("", response_model=List[DateOption])
async def list_date_options(storage: MemStorage = Depends(get_storage)) -> List[DateOption]:
    """Return every date option, seeded defaults first, in insertion order."""
    try:
        return await storage.list_date_options()
    except Exception:
        logger.exception("Failed to fetch date options")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch date options",
        )


@router.post("", response_model=DateOption, status_code=status.HTTP_201_CREATED)
async def create_date_option(
    option_in: DateOptionCreate,
    storage: MemStorage = Depends(get_storage),
) -> DateOption:
    """Create a custom date option.  ``isDefault`` is always false."""
    try:
        return await storage.create_date_option(option_in)
    except Exception:
        logger.exception("Failed to create date option")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create date option",
        )


@router.patch("/{option_id}", response_model=DateOption)
async def update_date_option(
    option_id: str,
    request: Request,
    updates: Optional[DateOptionUpdate] = Body(None),
    storage: MemStorage = Depends(get_storage),
) -> DateOption:
    """Partially update a date option.

    Only the fields present in the body change; a request without a
    body changes nothing.  A JSON ``null`` body is rejected.  Returns
    404 if the option does not exist.
    """
    if updates is None:
        if await request.body():
            raise RequestValidationError(
                [{"type": "model_type", "loc": ("body",), "msg": "Input should be an object", "input": None}]
            )
        updates = DateOptionUpdate()
    try:
        option = await storage.update_date_option(parse_id(option_id), updates.model_dump(exclude_unset=True))
    except Exception:
        logger.exception("Failed to update date option %s", option_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update date option",
        )
    if option is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return option


@router.delete("/{option_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_date_option(
    option_id: str,
    storage: MemStorage = Depends(get_storage),
) -> None:
    """Delete a date option.  Seeded defaults can be deleted too."""
    try:
        deleted = await storage.delete_date_option(parse_id(option_id))
    except Exception:
        logger.exception("Failed to delete date option %s", option_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete date option",
        )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return None
