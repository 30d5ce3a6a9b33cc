import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from dice.roller import DiceRoller
from encounters.config import Settings
from encounters.models import MonsterRecord, str_to_float, str_to_int
from encounters.resolver import EncounterResolver, UnknownTerrainError, truncate_div
from encounters.table import Table, TableError, load_table


def _resolver(data_dir, roller):
    settings = Settings(data_dir=str(data_dir))
    return EncounterResolver.from_settings(settings, roller)


def test_mountain_men_resolve_to_mountain_subtable(data_dir, scripted):
    # main d2 -> Men, sub d3 -> Wizard, 2d6 followers = 3, 3d4 = 1+2+4
    roller = scripted([1, 1, 1, 2, 1, 2, 4])
    query = _resolver(data_dir, roller).resolve("Mountain")
    assert query.subtable == "Men Mountain"
    assert query.monster == "Wizard"
    assert query.npc_level == 11
    assert query.entourage == 7
    assert query.total_ehd == 18
    assert roller.results == []


def test_clear_men_resolve_to_typical_subtable(data_dir, scripted, capsys):
    roller = scripted([1, 1])
    query = _resolver(data_dir, roller).resolve("Clear")
    assert query.subtable == "Men Typical"
    assert query.monster == "Bandit"
    # 4 bandits x EHD 10 at 1/2 HD: sweep attacks quarter the total
    assert query.count == 4
    assert query.base_ehd == 10
    assert query.total_ehd == 10
    assert capsys.readouterr().err == ""


def test_known_monster_above_one_hit_die(data_dir, scripted):
    # main d2 -> Animal, sub d3 -> Giant Ant, 2d4 = 3+4
    roller = scripted([1, 1, 3, 4])
    query = _resolver(data_dir, roller).resolve("Woods")
    assert query.monster == "Giant Ant, Worker"
    assert query.number_appearing == "2d4"
    assert query.count == 7
    assert query.total_ehd == 14


def test_gold_dragon_uses_patched_ehd(data_dir, scripted, capsys):
    # sub d3 -> Dragon, d6 -> Gold, 1d4 -> 3 dragons
    roller = scripted([2, 6, 3])
    resolver = _resolver(data_dir, roller)
    assert resolver.roll_by_subtable("Men Mountain") == 120
    assert "null EHD" not in capsys.readouterr().err


def test_null_ehd_monster_warns(data_dir, scripted, capsys):
    roller = scripted([5])
    assert _resolver(data_dir, roller).roll_by_monster("Ghost") == 0
    assert "[WARN] Monster with null EHD: Ghost" in capsys.readouterr().err


def test_unknown_subtable_scores_zero(data_dir, scripted, capsys):
    roller = scripted([2])
    query = _resolver(data_dir, roller).resolve("Clear")
    assert query.subtable == "Bogus"
    assert query.total_ehd == 0
    assert "[WARN] Unknown subtable: Bogus" in capsys.readouterr().err


def test_unknown_monster_scores_zero(data_dir, scripted, capsys):
    roller = scripted([2, 2])
    assert _resolver(data_dir, roller).roll_by_terrain("Woods") == 0
    assert "[WARN] Unknown monster: Unicorn" in capsys.readouterr().err


def test_unknown_terrain_is_a_caller_error(data_dir):
    resolver = _resolver(data_dir, DiceRoller(seed=1))
    assert not resolver.has_terrain("Atlantis")
    with pytest.raises(UnknownTerrainError):
        resolver.resolve("Atlantis")


def test_npc_skips_monster_table(data_dir, scripted, capsys):
    roller = scripted([1, 1, 4, 4])
    assert _resolver(data_dir, roller).roll_by_monster("Patriarch") == 16
    assert capsys.readouterr().err == ""


def test_seeded_runs_repeat(repo_data_dir):
    def run(seed):
        resolver = _resolver(repo_data_dir, DiceRoller(seed=seed))
        return [resolver.roll_by_terrain("Swamp") for _ in range(300)]

    assert run(17) == run(17)
    assert all(value >= 0 for value in run(18))


def test_missing_monster_column_is_fatal(data_dir):
    main = load_table(data_dir / "WildMainTable.csv")
    sub = load_table(data_dir / "WildSubTable.csv")
    monsters = load_table(data_dir / "MonsterDatabase.csv")
    with pytest.raises(TableError, match="missing column 'XP'"):
        EncounterResolver(main, sub, monsters, DiceRoller(seed=1), ehd_col="XP")


def test_monster_record_reads_lenient_fields():
    table = Table([["Name", "Number", "HDN", "EHD"], ["Blob", "bad", "?", "-"]])
    resolver = EncounterResolver(table, table, table, DiceRoller(seed=1))
    record = resolver.monster_record("Blob")
    assert record == MonsterRecord(name="Blob", number_appearing="bad", hit_dice_number=0.0, ehd=0)
    assert record.sweep_attack
    assert resolver.monster_record("Nobody") is None


@pytest.mark.parametrize("raw, expected", [("12", 12), ("+3", 3), ("3.5", 0), ("", 0), (None, 0), ("x", 0)])
def test_str_to_int(raw, expected):
    assert str_to_int(raw) == expected


@pytest.mark.parametrize("raw, expected", [("0.5", 0.5), ("2", 2.0), ("1/2", 0.0), ("", 0.0), (None, 0.0)])
def test_str_to_float(raw, expected):
    assert str_to_float(raw) == expected


def test_truncating_division():
    assert truncate_div(40, 4) == 10
    assert truncate_div(41, 4) == 10
    assert truncate_div(3, 4) == 0
    assert truncate_div(-5, 4) == -1
