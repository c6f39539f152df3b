# api/v1/meals.py
from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Query, status

from core.calorie_summary import summarize
from core.meal_store import MealStore
from services.state import get_meal_store, get_target_kcal
from api.v1.schemas import MealBoard, MealOut

router = APIRouter()


# ───────────────────────── helpers ──────────────────────────
def _board(store: MealStore, target: int) -> MealBoard:
    summary = summarize(store, target)
    return MealBoard(
        meals=[MealOut.model_validate(m, from_attributes=True) for m in store.meals],
        total_kcal=summary.total_kcal,
        target_kcal=summary.target_kcal,
        remaining_kcal=summary.remaining_kcal,
        target_reached=summary.target_reached,
        message=summary.message,
    )


# ───────────────────────── read ─────────────────────────────
@router.get(
    "",
    response_model=MealBoard,
    status_code=status.HTTP_200_OK,
    summary="Today's checklist with running totals",
)
def list_meals(
    store: MealStore = Depends(get_meal_store),
    target: int = Depends(get_target_kcal),
) -> MealBoard:
    return _board(store, target)


# ───────────────────────── toggle ───────────────────────────
@router.post(
    "/{meal_id}/toggle",
    response_model=MealBoard,
    status_code=status.HTTP_200_OK,
    summary="Flip the consumed flag of a meal",
)
def toggle_meal(
    meal_id: int,
    store: MealStore = Depends(get_meal_store),
    target: int = Depends(get_target_kcal),
) -> MealBoard:
    """
    Unknown ids are a no-op: a stale id from a double click is not an error.
    """
    store.toggle(meal_id)
    return _board(store, target)


# ───────────────────────── delete ───────────────────────────
@router.delete(
    "/{meal_id}",
    response_model=MealBoard,
    status_code=status.HTTP_200_OK,
    summary="Delete a meal (requires confirm=true)",
)
def delete_meal(
    meal_id: int,
    confirm: bool = Query(False, description="explicit user confirmation"),
    store: MealStore = Depends(get_meal_store),
    target: int = Depends(get_target_kcal),
) -> MealBoard:
    if not confirm:
        meal = store.get(meal_id)
        label = f'"{meal.title}"' if meal else f"meal {meal_id}"
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Are you sure you want to delete {label}? Repeat with confirm=true.",
        )
    store.delete(meal_id)
    return _board(store, target)
