from __future__ import annotations
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

# the 24 hour-labelled slots, in selector order
TimeSlot = Literal[
    "12 AM", "1 AM", "2 AM", "3 AM", "4 AM", "5 AM",
    "6 AM", "7 AM", "8 AM", "9 AM", "10 AM", "11 AM",
    "12 PM", "1 PM", "2 PM", "3 PM", "4 PM", "5 PM",
    "6 PM", "7 PM", "8 PM", "9 PM", "10 PM", "11 PM",
]
TIME_SLOTS: tuple[str, ...] = get_args(TimeSlot)
DEFAULT_MEAL_TIME: TimeSlot = "7 AM"


class Meal(BaseModel):
    id: int
    title: str = Field(..., min_length=1)
    kcal: int = Field(..., ge=0)
    time: TimeSlot               # descriptive only, never used for ordering
    details: str = ""
    checked: bool = False

    # mutated only by MealStore, which swaps in copies
    model_config = ConfigDict(frozen=True)


SEED_MEALS: tuple[Meal, ...] = (
    Meal(
        id=1,
        title="Leamon water",
        kcal=0,
        time="6 AM",
        details="P 0 . C 0 . F 0",
    ),
    Meal(
        id=2,
        title="2 boiled eggs + 2 medium bananas + 5 almonds",
        kcal=310,
        time="7 AM",
        details="P 17g . C 46g . F 7g",
    ),
    Meal(
        id=3,
        title="1 cup cooked white rice (130g) + 1 cup dal (200g) + 1 medium boiled potato",
        kcal=430,
        time="2 PM",
        details="P 28g . C 75g . F 1.5g",
    ),
    Meal(
        id=4,
        title="1 cup cooked white rice (130g) + 1 cup dal (200g) + 2 boiled eggs",
        kcal=460,
        time="2 PM",
        details="P 28g . C 75g . F 1.5g",
    ),
)
