import logging
import uuid
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from focusforest.exceptions import ConflictError, NotFoundError
from focusforest.models.session import FocusSession
from focusforest.schemas.session import SessionRecord
from focusforest.services import category_service, state_service

logger = logging.getLogger(__name__)


async def get_sessions(
    db: AsyncSession,
    limit: int = 50,
    offset: int = 0,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    category: str | None = None,
) -> list[FocusSession]:
    query = select(FocusSession)
    if start_date:
        query = query.where(FocusSession.date >= start_date)
    if end_date:
        query = query.where(FocusSession.date <= end_date)
    if category:
        query = query.where(FocusSession.category == category)
    query = query.order_by(FocusSession.date.desc()).limit(limit).offset(offset)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_session(db: AsyncSession, session_id: uuid.UUID) -> FocusSession:
    session = await db.get(FocusSession, session_id)
    if session is None:
        raise NotFoundError("Session not found")
    return session


async def get_history(db: AsyncSession) -> list[SessionRecord]:
    """Full session history as immutable records for analytics."""
    result = await db.execute(select(FocusSession))
    return [SessionRecord.model_validate(s) for s in result.scalars().all()]


async def create_session(db: AsyncSession, data: dict) -> FocusSession:
    session_id = data.pop("id", None) or uuid.uuid4()
    if await db.get(FocusSession, session_id) is not None:
        logger.warning("Rejected duplicate session id %s", session_id)
        raise ConflictError("Session with this id already exists")

    data["category"] = await category_service.resolve_category(db, data["category"])
    session = FocusSession(id=session_id, **data)
    db.add(session)
    await db.flush()
    await db.refresh(session)
    return session


async def import_sessions(db: AsyncSession, sessions: list[dict]) -> list[FocusSession]:
    """Insert a batch of device-recorded sessions, skipping ids already stored."""
    incoming_ids = [s["id"] for s in sessions if s.get("id") is not None]
    existing: set[uuid.UUID] = set()
    if incoming_ids:
        result = await db.execute(
            select(FocusSession.id).where(FocusSession.id.in_(incoming_ids))
        )
        existing = set(result.scalars().all())

    created = []
    for data in sessions:
        session_id = data.pop("id", None) or uuid.uuid4()
        if session_id in existing:
            continue  # Skip duplicate
        existing.add(session_id)

        data["category"] = await category_service.resolve_category(db, data["category"])
        session = FocusSession(id=session_id, **data)
        db.add(session)
        created.append(session)

    if created:
        await db.flush()
        for session in created:
            await db.refresh(session)

    logger.info(
        "Imported %d sessions (%d skipped as duplicates)",
        len(created),
        len(sessions) - len(created),
    )
    return created


async def reset_history(db: AsyncSession) -> int:
    """Bulk data reset: drop every session and the legacy total."""
    result = await db.execute(delete(FocusSession))
    await state_service.set_legacy_total_minutes(db, 0.0)
    await db.flush()
    logger.info("Reset session history (%d sessions removed)", result.rowcount)
    return result.rowcount
