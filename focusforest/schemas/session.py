import uuid
from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from focusforest.schemas.category import PredefinedCategory

# Local-calendar conversions stay inside datetime's range for any UTC offset
MIN_SESSION_YEAR = 1970
MAX_SESSION_YEAR = 9998


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps (e.g. read back from SQLite) are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _check_session_year(value: datetime) -> datetime:
    if not MIN_SESSION_YEAR <= value.year <= MAX_SESSION_YEAR:
        raise ValueError(
            f"Session date must fall between {MIN_SESSION_YEAR} and {MAX_SESSION_YEAR}"
        )
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]
SessionDatetime = Annotated[UtcDatetime, AfterValidator(_check_session_year)]


class SessionRecord(BaseModel):
    """Immutable completed focus interval, as consumed by the analytics calculator."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    date: SessionDatetime
    duration_minutes: float = Field(ge=0)
    category: str = PredefinedCategory.UNTAGGED.value
    coins_earned: float = Field(default=0.0, ge=0)

    model_config = {"frozen": True, "from_attributes": True}

    @property
    def hours(self) -> float:
        return self.duration_minutes / 60.0


class SessionCreate(BaseModel):
    id: uuid.UUID | None = None  # client-generated ids are kept for sync
    date: SessionDatetime
    duration_minutes: float = Field(ge=0, le=24 * 60)
    category: str = Field(default=PredefinedCategory.UNTAGGED.value, min_length=1, max_length=64)
    coins_earned: float = Field(default=0.0, ge=0)


class SessionImportBatch(BaseModel):
    sessions: list[SessionCreate] = Field(min_length=1, max_length=5000)


class SessionResponse(BaseModel):
    id: uuid.UUID
    date: UtcDatetime
    duration_minutes: float
    category: str
    coins_earned: float
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class LegacyTotal(BaseModel):
    minutes: float = Field(ge=0)
