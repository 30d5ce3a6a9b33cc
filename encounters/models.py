from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from dice.roller import DiceExpression


def str_to_int(raw: Any) -> int:
    """Integer value of table text; blanks and junk read as 0."""
    if raw is None:
        return 0
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


def str_to_float(raw: Any) -> float:
    if raw is None:
        return 0.0
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0


class MonsterRecord(BaseModel):
    name: str
    number_appearing: str = ""
    hit_dice_number: float = 0.0
    ehd: int = 0

    @field_validator("number_appearing", mode="before")
    @classmethod
    def _blank_number(cls, value: Any) -> str:
        return value or ""

    @field_validator("hit_dice_number", mode="before")
    @classmethod
    def _lenient_float(cls, value: Any) -> float:
        return str_to_float(value)

    @field_validator("ehd", mode="before")
    @classmethod
    def _lenient_int(cls, value: Any) -> int:
        return str_to_int(value)

    @property
    def number_dice(self) -> DiceExpression:
        return DiceExpression.parse(self.number_appearing)

    @property
    def sweep_attack(self) -> bool:
        # Sweep attacks: monsters of 1 HD or less count a quarter.
        return self.hit_dice_number <= 1.0


@dataclass
class EncounterQuery:
    terrain: Optional[str] = None
    subtable: Optional[str] = None
    monster: Optional[str] = None
    number_appearing: Optional[str] = None
    count: int = 0
    base_ehd: int = 0
    hit_dice_number: float = 0.0
    npc_level: Optional[int] = None
    entourage: int = 0
    total_ehd: int = 0
