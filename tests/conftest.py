import sys
from pathlib import Path
from typing import Iterable, List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from dice.roller import DiceRoller
from encounters.config import get_settings


class ScriptedRoller(DiceRoller):
    """Roller that replays fixed die results, for exact roll sequences."""

    def __init__(self, results: Iterable[int]):
        super().__init__(seed=0)
        self.results: List[int] = list(results)
        self.calls: List[int] = []

    def roll(self, sides: int) -> int:
        self.calls.append(sides)
        if not self.results:
            raise AssertionError(f"unexpected d{sides} roll")
        value = self.results.pop(0)
        assert 1 <= value <= sides, f"scripted {value} does not fit d{sides}"
        return value


def _write_csv(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


MAIN_CSV = """
Roll,Mountain,Clear,Woods
1,Men,Men,Animal
2,-,Bogus,Animal
"""

SUB_CSV = """
Roll,Men Mountain,Men Typical,Animal
1,Wizard,Bandit,Giant Ant
2,Dragon,-,Unicorn
3,-,-,Ghost
"""

MONSTER_CSV = """
Name,Number,HDN,EHD
Bandit,4,0.5,10
"Giant Ant, Worker",2d4,2,2
"Dragon, Gold",1d4,11,-
Ghost,1d6,3,-
"""


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def scripted():
    return ScriptedRoller


@pytest.fixture()
def data_dir(tmp_path):
    base = tmp_path / "data"
    _write_csv(base / "WildMainTable.csv", MAIN_CSV)
    _write_csv(base / "WildSubTable.csv", SUB_CSV)
    _write_csv(base / "MonsterDatabase.csv", MONSTER_CSV)
    return base


@pytest.fixture()
def write_csv(tmp_path):
    def _write(name: str, text: str) -> Path:
        return _write_csv(tmp_path / name, text)

    return _write


@pytest.fixture()
def repo_data_dir():
    return Path(__file__).resolve().parents[1] / "encounters" / "data"
