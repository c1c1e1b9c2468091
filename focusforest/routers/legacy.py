from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from focusforest.database import get_db
from focusforest.schemas.session import LegacyTotal
from focusforest.services import state_service

router = APIRouter(prefix="/legacy", tags=["legacy"])


@router.get("", response_model=LegacyTotal)
async def get_legacy_total(db: AsyncSession = Depends(get_db)):
    """Focus minutes recorded before per-session history existed."""
    return LegacyTotal(minutes=await state_service.get_legacy_total_minutes(db))


@router.put("", response_model=LegacyTotal)
async def set_legacy_total(
    data: LegacyTotal,
    db: AsyncSession = Depends(get_db),
):
    return LegacyTotal(
        minutes=await state_service.set_legacy_total_minutes(db, data.minutes)
    )
