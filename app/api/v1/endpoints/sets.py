"""Set endpoints."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_caller_id
from app.db.session import get_db
from app.schemas.result import ActionResult
from app.services import workouts as workout_service

router = APIRouter()


@router.delete("/{set_id}", response_model=ActionResult[None])
async def delete_set(
    set_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    caller_id: str | None = Depends(get_caller_id),
):
    """Delete a set. Other sets keep their numbers."""
    await workout_service.delete_set(db, caller_id, set_id)
    return ActionResult[None].ok()
