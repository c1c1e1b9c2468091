from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from focusforest.models.app_state import AppState

LEGACY_TOTAL_KEY = "legacy_total_minutes"


async def _get_state(db: AsyncSession, key: str) -> AppState | None:
    result = await db.execute(select(AppState).where(AppState.key == key))
    return result.scalar_one_or_none()


async def get_legacy_total_minutes(db: AsyncSession) -> float:
    state = await _get_state(db, LEGACY_TOTAL_KEY)
    if state is None or not state.value:
        return 0.0
    return float(state.value.get("minutes", 0.0))


async def set_legacy_total_minutes(db: AsyncSession, minutes: float) -> float:
    state = await _get_state(db, LEGACY_TOTAL_KEY)
    if state is None:
        state = AppState(key=LEGACY_TOTAL_KEY)
        db.add(state)
    state.value = {"minutes": minutes}
    await db.flush()
    return minutes
