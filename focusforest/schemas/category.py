import uuid
from enum import Enum

from pydantic import BaseModel, Field


class PredefinedCategory(str, Enum):
    UNTAGGED = "untagged"
    CODING = "coding"
    ALGORITHMS = "algorithms"
    PHYSICS = "physics"
    BUSINESS = "business"
    MISC = "misc"


class CategoryColor(str, Enum):
    BLUE = "blue"
    PURPLE = "purple"
    GREEN = "green"
    ORANGE = "orange"
    PINK = "pink"
    RED = "red"
    INDIGO = "indigo"
    TEAL = "teal"
    CYAN = "cyan"
    MINT = "mint"


# Icon and palette entry for each built-in category
PREDEFINED_STYLE: dict[PredefinedCategory, tuple[str, CategoryColor]] = {
    PredefinedCategory.UNTAGGED: ("circle", CategoryColor.BLUE),
    PredefinedCategory.CODING: ("chevron.left.forwardslash.chevron.right", CategoryColor.PURPLE),
    PredefinedCategory.ALGORITHMS: ("function", CategoryColor.GREEN),
    PredefinedCategory.PHYSICS: ("atom", CategoryColor.INDIGO),
    PredefinedCategory.BUSINESS: ("chart.line.uptrend.xyaxis", CategoryColor.PINK),
    PredefinedCategory.MISC: ("star.fill", CategoryColor.ORANGE),
}


class CustomCategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    icon: str = Field(min_length=1, max_length=100)
    color: CategoryColor


class CustomCategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    icon: str | None = Field(default=None, min_length=1, max_length=100)
    color: CategoryColor | None = None


class CustomCategoryResponse(BaseModel):
    id: uuid.UUID
    name: str
    icon: str
    color: CategoryColor

    model_config = {"from_attributes": True}


class CategoryResponse(BaseModel):
    key: str  # predefined value or custom category id
    name: str
    icon: str
    color: CategoryColor
    is_custom: bool
