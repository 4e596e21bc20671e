# liftlog/engine/loadout.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Protocol

EXACT_TOLERANCE = 0.001

class PlateLike(Protocol):
    weight: float
    count: int
    color: str

@dataclass(slots=True, frozen=True)
class PlateSpec:
    weight: float
    count: int
    color: str = "gray"

@dataclass(slots=True, frozen=True)
class LoadedPlate:
    weight: float
    color: str

@dataclass(slots=True)
class Loadout:
    plates_per_side: list[LoadedPlate] = field(default_factory=list)
    total_weight: float = 0.0
    is_exact: bool = False
    # amount still short of the target (bar deficit when the bar alone is too heavy)
    difference: float = 0.0

    def summary(self) -> str:
        if not self.plates_per_side:
            return "Bar only"
        counts: dict[float, int] = {}
        for plate in self.plates_per_side:
            counts[plate.weight] = counts.get(plate.weight, 0) + 1
        return " + ".join(
            f"{n}x{format_weight(w)}" for w, n in sorted(counts.items(), reverse=True)
        )

def format_weight(value: float) -> str:
    if float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.1f}"

def calculate(target_weight: float, bar_weight: float, available_plates: Iterable[PlateLike]) -> Loadout:
    """
    Greedy largest-first plate loadout for one side of the bar.

    Never overshoots the target; when no exact combination is found greedily the
    closest lighter loadout is returned with ``difference`` set to the shortfall.
    """
    if target_weight < bar_weight:
        return Loadout(
            plates_per_side=[],
            total_weight=bar_weight,
            is_exact=False,
            difference=bar_weight - target_weight,
        )

    remaining_per_side = (target_weight - bar_weight) / 2.0

    # [weight, color, pairs available], largest first; sort is stable for equal weights
    inventory = sorted(
        ([p.weight, p.color, p.count // 2] for p in available_plates if p.count >= 2 and p.weight > 0),
        key=lambda entry: entry[0],
        reverse=True,
    )

    plates: list[LoadedPlate] = []
    for entry in inventory:
        weight, color = entry[0], entry[1]
        while remaining_per_side >= weight and entry[2] > 0:
            plates.append(LoadedPlate(weight=weight, color=color))
            remaining_per_side -= weight
            entry[2] -= 1

    achieved_per_side = sum(p.weight for p in plates)
    return Loadout(
        plates_per_side=plates,
        total_weight=bar_weight + achieved_per_side * 2.0,
        is_exact=abs(remaining_per_side) < EXACT_TOLERANCE,
        difference=remaining_per_side * 2.0,
    )
