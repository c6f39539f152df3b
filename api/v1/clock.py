# api/v1/clock.py
from __future__ import annotations
from fastapi import APIRouter, Depends

from core.clock import ClockDisplay
from services.state import get_clock_display
from api.v1.schemas import ClockOut

router = APIRouter()


@router.get("", response_model=ClockOut)
def read_clock(display: ClockDisplay = Depends(get_clock_display)) -> ClockOut:
    return ClockOut(**display.snapshot())
