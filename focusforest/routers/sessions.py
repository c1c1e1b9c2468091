import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from focusforest.database import get_db
from focusforest.schemas.session import (
    SessionCreate,
    SessionImportBatch,
    SessionResponse,
)
from focusforest.services import session_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=list[SessionResponse])
async def list_sessions(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    category: str | None = Query(default=None, max_length=64),
    db: AsyncSession = Depends(get_db),
):
    return await session_service.get_sessions(
        db, limit=limit, offset=offset,
        start_date=start_date, end_date=end_date, category=category,
    )


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await session_service.get_session(db, session_id)


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    data: SessionCreate,
    db: AsyncSession = Depends(get_db),
):
    return await session_service.create_session(db, data.model_dump())


@router.post("/import", response_model=list[SessionResponse], status_code=201)
async def import_sessions(
    batch: SessionImportBatch,
    db: AsyncSession = Depends(get_db),
):
    return await session_service.import_sessions(
        db, [s.model_dump() for s in batch.sessions]
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def reset_sessions(db: AsyncSession = Depends(get_db)):
    """Bulk data reset: removes the whole session history."""
    await session_service.reset_history(db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
