"""Name and value corrections applied while resolving an encounter.

The tables roll generic labels ("Men", "Giant", "Dragon") that have to be
narrowed to a specific sub-table or monster entry before lookup.
"""
from typing import Callable, Dict, List, Optional

from dice.roller import DiceRoller

Rule = Callable[[DiceRoller], str]

MEN_SUBTABLES = {
    "Mountain": "Men Mountain",
    "Desert": "Men Desert",
    "River": "Men Water",
}
MEN_DEFAULT = "Men Typical"

GIANT_TYPES = {7: "Giant, Stone", 8: "Giant, Frost", 9: "Giant, Fire", 10: "Giant, Cloud"}
DRAGON_TYPES = ["White", "Black", "Green", "Blue", "Red", "Gold"]

MONSTER_RENAMES = {
    "Giant Snake": "Giant Snake, Constrictor",
    "Giant Beetle": "Giant Beetle, Bombardier",
    "Giant Ant": "Giant Ant, Worker",
    "Sea Monster": "Sea Monster, Small",
    "Hydra": "Hydra, 10 Heads",
    "Roc": "Roc, Small",
}

NPC_LEVELS = {
    "Wizard": 11,
    "Necromancer": 10,
    "Lord": 9,
    "Superhero": 8,
    "Patriarch": 8,
    "Evil High Priest": 8,
}

# Estimates for monsters whose EHD column is blank.
EHD_PATCHES = {
    "Dragon, Gold": 40,
}


def subtable_fixup(terrain: str, name: str) -> str:
    if name == "Men":
        return MEN_SUBTABLES.get(terrain, MEN_DEFAULT)
    return name


def roll_giant(roller: DiceRoller) -> str:
    return GIANT_TYPES.get(roller.roll(10), "Giant, Hill")


def roll_dragon(roller: DiceRoller) -> str:
    return f"Dragon, {DRAGON_TYPES[roller.roll(len(DRAGON_TYPES)) - 1]}"


def _rename(target: str) -> Rule:
    return lambda roller: target


MONSTER_RULES: Dict[str, Rule] = {
    "Giant": roll_giant,
    "Dragon": roll_dragon,
}
MONSTER_RULES.update({name: _rename(target) for name, target in MONSTER_RENAMES.items()})


def monster_fixup(name: str, roller: DiceRoller) -> str:
    rule = MONSTER_RULES.get(name)
    return rule(roller) if rule else name


def npc_level(name: str) -> Optional[int]:
    return NPC_LEVELS.get(name)


def npc_entourage(roller: DiceRoller) -> int:
    """Total EHD of an NPC's followers: 2d6 followers worth 1d4 each."""
    followers = roller.roll_dice(2, 6)
    return roller.roll_dice(followers, 4)


def ehd_fixup(name: str, ehd: int) -> int:
    if ehd == 0:
        return EHD_PATCHES.get(name, 0)
    return ehd


def monster_variants(name: str) -> List[str]:
    """Every name ``monster_fixup`` can turn ``name`` into."""
    if name == "Giant":
        return ["Giant, Hill"] + list(GIANT_TYPES.values())
    if name == "Dragon":
        return [f"Dragon, {color}" for color in DRAGON_TYPES]
    return [MONSTER_RENAMES.get(name, name)]
