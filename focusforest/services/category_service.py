import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from focusforest.exceptions import InvalidCategoryError, NotFoundError
from focusforest.models.custom_category import CustomCategory
from focusforest.schemas.category import (
    PREDEFINED_STYLE,
    CategoryResponse,
    PredefinedCategory,
)

logger = logging.getLogger(__name__)


def predefined_categories() -> list[CategoryResponse]:
    return [
        CategoryResponse(
            key=category.value,
            name=category.value.title(),
            icon=PREDEFINED_STYLE[category][0],
            color=PREDEFINED_STYLE[category][1],
            is_custom=False,
        )
        for category in PredefinedCategory
    ]


async def get_custom_categories(db: AsyncSession) -> list[CustomCategory]:
    result = await db.execute(
        select(CustomCategory).order_by(CustomCategory.name, CustomCategory.created_at)
    )
    return list(result.scalars().all())


async def get_all_categories(db: AsyncSession) -> list[CategoryResponse]:
    """Built-in categories first, then custom ones by name."""
    custom = [
        CategoryResponse(
            key=str(c.id),
            name=c.name,
            icon=c.icon,
            color=c.color,
            is_custom=True,
        )
        for c in await get_custom_categories(db)
    ]
    return predefined_categories() + custom


async def resolve_category(db: AsyncSession, key: str) -> str:
    """Return the canonical category key, or raise if it names no category."""
    if key in {c.value for c in PredefinedCategory}:
        return key

    try:
        category_id = uuid.UUID(key)
    except ValueError:
        raise InvalidCategoryError(f"Unknown category: {key}") from None

    if await db.get(CustomCategory, category_id) is None:
        raise InvalidCategoryError(f"Unknown category: {key}")
    return str(category_id)


async def create_category(db: AsyncSession, data: dict) -> CustomCategory:
    category = CustomCategory(**data)
    db.add(category)
    await db.flush()
    await db.refresh(category)
    logger.info("Created custom category %s (%s)", category.id, category.name)
    return category


async def update_category(
    db: AsyncSession, category_id: uuid.UUID, data: dict
) -> CustomCategory:
    category = await db.get(CustomCategory, category_id)
    if category is None:
        raise NotFoundError("Category not found")

    for key, value in data.items():
        if value is not None:
            setattr(category, key, value)

    await db.flush()
    await db.refresh(category)
    return category


async def delete_category(db: AsyncSession, category_id: uuid.UUID) -> None:
    # Sessions keep the deleted category's key; analytics still group them under it
    category = await db.get(CustomCategory, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    await db.delete(category)
    await db.flush()
    logger.info("Deleted custom category %s", category_id)
