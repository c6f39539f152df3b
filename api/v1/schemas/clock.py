from __future__ import annotations
from pydantic import BaseModel


class ClockOut(BaseModel):
    now: str        # ISO-8601, seconds precision
    date: str
    time: str
    greeting: str
