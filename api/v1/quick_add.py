# api/v1/quick_add.py
from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, status

from core.models.meal import TIME_SLOTS
from core.quick_add import QuickAddForm
from services.state import get_quick_add_form
from api.v1.schemas import DraftOut, FieldUpdateIn, MealOut, SubmitOut

router = APIRouter()


@router.get("", response_model=DraftOut)
def get_draft(form: QuickAddForm = Depends(get_quick_add_form)) -> DraftOut:
    return DraftOut.model_validate(form.draft, from_attributes=True)


@router.patch("", response_model=DraftOut)
def update_draft(
    body: FieldUpdateIn,
    form: QuickAddForm = Depends(get_quick_add_form),
) -> DraftOut:
    try:
        draft = form.update_field(body.field, body.value)
    except (KeyError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return DraftOut.model_validate(draft, from_attributes=True)


@router.post(
    "/submit",
    response_model=SubmitOut,
    status_code=status.HTTP_200_OK,
    summary="Turn the draft into a meal (accepted=false when title/kcal unusable)",
)
def submit_draft(form: QuickAddForm = Depends(get_quick_add_form)) -> SubmitOut:
    meal = form.submit()
    return SubmitOut(
        accepted=meal is not None,
        meal=MealOut.model_validate(meal, from_attributes=True) if meal else None,
        draft=DraftOut.model_validate(form.draft, from_attributes=True),
    )


@router.get("/time-slots", response_model=list[str])
def list_time_slots() -> list[str]:
    return list(TIME_SLOTS)
