from focusforest.models.app_state import AppState
from focusforest.models.base import Base
from focusforest.models.custom_category import CustomCategory
from focusforest.models.session import FocusSession

__all__ = [
    "AppState",
    "Base",
    "CustomCategory",
    "FocusSession",
]
