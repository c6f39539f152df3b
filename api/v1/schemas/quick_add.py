from __future__ import annotations
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from core.models.meal import TimeSlot
from .meal import MealOut

DraftField = Literal["title", "kcal", "protein", "carbs", "fat", "meal_time"]


class DraftOut(BaseModel):
    title: str
    kcal: str
    protein: str
    carbs: str
    fat: str
    meal_time: TimeSlot

    model_config = ConfigDict(from_attributes=True)


class FieldUpdateIn(BaseModel):
    field: DraftField
    value: str = Field(..., examples=["Tea", "50", "6 AM"])


class SubmitOut(BaseModel):
    accepted: bool
    meal: MealOut | None = None
    draft: DraftOut
