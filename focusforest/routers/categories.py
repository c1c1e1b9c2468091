import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from focusforest.database import get_db
from focusforest.schemas.category import (
    CategoryResponse,
    CustomCategoryCreate,
    CustomCategoryResponse,
    CustomCategoryUpdate,
)
from focusforest.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await category_service.get_all_categories(db)


@router.post("", response_model=CustomCategoryResponse, status_code=201)
async def create_category(
    data: CustomCategoryCreate,
    db: AsyncSession = Depends(get_db),
):
    return await category_service.create_category(db, data.model_dump(mode="json"))


@router.patch("/{category_id}", response_model=CustomCategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    data: CustomCategoryUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await category_service.update_category(
        db, category_id, data.model_dump(mode="json", exclude_unset=True)
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    await category_service.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
