from __future__ import annotations

from dataclasses import dataclass

from core.meal_store import TARGET_KCAL, MealStore


@dataclass(frozen=True)
class CalorieSummary:
    total_kcal: int
    target_kcal: int
    remaining_kcal: int     # negative once the target is exceeded

    @property
    def target_reached(self) -> bool:
        return self.remaining_kcal <= 0

    @property
    def message(self) -> str:
        if self.target_reached:
            return "Target Reached!"
        return (
            f"Need = {self.target_kcal} - {self.total_kcal} = "
            f"{self.remaining_kcal} Kcal more!"
        )


def summarize(store: MealStore, target: int = TARGET_KCAL) -> CalorieSummary:
    return CalorieSummary(
        total_kcal=store.total_consumed_kcal(),
        target_kcal=target,
        remaining_kcal=store.remaining_kcal(target),
    )
