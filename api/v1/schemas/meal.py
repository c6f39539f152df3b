from __future__ import annotations
from pydantic import BaseModel, ConfigDict

from core.models.meal import TimeSlot


class MealOut(BaseModel):
    id: int
    title: str
    kcal: int
    time: TimeSlot
    details: str
    checked: bool

    model_config = ConfigDict(from_attributes=True)


class MealBoard(BaseModel):
    """Everything the checklist screen draws: meals plus running totals."""
    meals: list[MealOut]
    total_kcal: int
    target_kcal: int
    remaining_kcal: int
    target_reached: bool
    message: str
