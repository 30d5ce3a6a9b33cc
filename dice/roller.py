"""Dice rolling for table lookups.

All randomness in the simulator flows through a ``DiceRoller`` so a run can be
reproduced from its seed.
"""
import random
import re
from dataclasses import dataclass
from typing import Optional

DICE_PATTERN = re.compile(r"^(\d*)d(\d+)(?:([+-])(\d+))?$")


class DiceRoller:
    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)

    def roll(self, sides: int) -> int:
        """Uniform roll in [1, sides]; a die with no sides rolls 0."""
        if sides < 1:
            return 0
        return self.rng.randint(1, sides)

    def roll_dice(self, count: int, sides: int, modifier: int = 0) -> int:
        return sum(self.roll(sides) for _ in range(count)) + modifier


@dataclass(frozen=True)
class DiceExpression:
    count: int = 0
    sides: int = 0
    modifier: int = 0

    @classmethod
    def parse(cls, text: Optional[str]) -> "DiceExpression":
        """Parse ``NdS``, ``NdS+M``, ``NdS-M`` or a bare integer.

        Table text is hand-entered, so anything unreadable becomes the zero
        expression rather than an error.
        """
        if not text:
            return cls()
        cleaned = text.strip().lower().replace(" ", "")
        if cleaned.isdigit():
            return cls(modifier=int(cleaned))
        match = DICE_PATTERN.match(cleaned)
        if not match:
            return cls()
        count_raw, sides_raw, sign, mod_raw = match.groups()
        count = int(count_raw) if count_raw else 1
        modifier = int(mod_raw) if mod_raw else 0
        if sign == "-":
            modifier = -modifier
        return cls(count=count, sides=int(sides_raw), modifier=modifier)

    def roll(self, roller: DiceRoller) -> int:
        return roller.roll_dice(self.count, self.sides, self.modifier)

    def __str__(self) -> str:
        if not self.count or not self.sides:
            return str(self.modifier)
        text = f"{self.count}d{self.sides}"
        if self.modifier > 0:
            text += f"+{self.modifier}"
        elif self.modifier < 0:
            text += str(self.modifier)
        return text
