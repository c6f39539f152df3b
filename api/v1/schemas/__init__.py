"""Re-export individual schema modules for easy imports."""

from .meal import MealOut, MealBoard
from .quick_add import DraftOut, FieldUpdateIn, SubmitOut
from .clock import ClockOut

__all__ = [
    "MealOut",
    "MealBoard",
    "DraftOut",
    "FieldUpdateIn",
    "SubmitOut",
    "ClockOut",
]
