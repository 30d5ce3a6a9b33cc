"""Roll a wilderness encounter down the table chain and score it in EHD.

terrain column -> sub-table name -> monster name -> monster row -> EHD
"""
import sys
from typing import Optional

from dice.roller import DiceRoller
from encounters import fixups
from encounters.config import Settings
from encounters.models import EncounterQuery, MonsterRecord
from encounters.table import NOT_FOUND, Table, TableError, load_table


class UnknownTerrainError(KeyError):
    pass


def _warn(message: str) -> None:
    print(f"[WARN] {message}", file=sys.stderr)


def truncate_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


class EncounterResolver:
    def __init__(
        self,
        main_table: Table,
        sub_table: Table,
        monster_table: Table,
        roller: DiceRoller,
        number_col: str = "Number",
        hdn_col: str = "HDN",
        ehd_col: str = "EHD",
    ):
        self.main_table = main_table
        self.sub_table = sub_table
        self.monster_table = monster_table
        self.roller = roller
        self.number_col = self._monster_column(number_col)
        self.hdn_col = self._monster_column(hdn_col)
        self.ehd_col = self._monster_column(ehd_col)

    @classmethod
    def from_settings(cls, settings: Settings, roller: Optional[DiceRoller] = None) -> "EncounterResolver":
        null_entry = settings.null_entry
        return cls(
            load_table(settings.main_table_path, null_entry),
            load_table(settings.sub_table_path, null_entry),
            load_table(settings.monster_table_path, null_entry),
            roller or DiceRoller(settings.seed),
            number_col=settings.monster_number_col,
            hdn_col=settings.monster_hdn_col,
            ehd_col=settings.monster_ehd_col,
        )

    def _monster_column(self, header: str) -> int:
        index = self.monster_table.col_index(header)
        if index == NOT_FOUND:
            raise TableError(f"{self.monster_table.name}: missing column '{header}'")
        return index

    def has_terrain(self, terrain: str) -> bool:
        return self.main_table.col_index(terrain) != NOT_FOUND

    def terrains(self):
        return self.main_table.col_names()

    def monster_record(self, name: str) -> Optional[MonsterRecord]:
        row = self.monster_table.row_index(name)
        if row == NOT_FOUND:
            return None
        return MonsterRecord(
            name=name,
            number_appearing=self.monster_table.cell(row, self.number_col),
            hit_dice_number=self.monster_table.cell(row, self.hdn_col),
            ehd=self.monster_table.cell(row, self.ehd_col),
        )

    # Resolution stages

    def resolve(self, terrain: str) -> EncounterQuery:
        col = self.main_table.col_index(terrain)
        if col == NOT_FOUND:
            raise UnknownTerrainError(terrain)
        query = EncounterQuery(terrain=terrain)
        drawn = self.main_table.random_cell_in_col(col, self.roller)
        query.subtable = fixups.subtable_fixup(terrain, drawn)
        return self._resolve_subtable(query)

    def _resolve_subtable(self, query: EncounterQuery) -> EncounterQuery:
        col = self.sub_table.col_index(query.subtable)
        if col == NOT_FOUND:
            _warn(f"Unknown subtable: {query.subtable}")
            return query
        drawn = self.sub_table.random_cell_in_col(col, self.roller)
        query.monster = fixups.monster_fixup(drawn, self.roller)
        return self._resolve_monster(query)

    def _resolve_monster(self, query: EncounterQuery) -> EncounterQuery:
        name = query.monster
        level = fixups.npc_level(name)
        if level is not None:
            query.npc_level = level
            query.entourage = fixups.npc_entourage(self.roller)
            query.total_ehd = level + query.entourage
            return query

        record = self.monster_record(name)
        if record is None:
            _warn(f"Unknown monster: {name}")
            return query

        query.number_appearing = record.number_appearing
        query.count = record.number_dice.roll(self.roller)
        query.base_ehd = fixups.ehd_fixup(name, record.ehd)
        if query.base_ehd == 0:
            _warn(f"Monster with null EHD: {name}")
        query.hit_dice_number = record.hit_dice_number

        total = query.count * query.base_ehd
        if record.sweep_attack:
            total = truncate_div(total, 4)
        query.total_ehd = total
        return query

    def roll_by_terrain(self, terrain: str) -> int:
        return self.resolve(terrain).total_ehd

    def roll_by_subtable(self, name: str) -> int:
        return self._resolve_subtable(EncounterQuery(subtable=name)).total_ehd

    def roll_by_monster(self, name: str) -> int:
        return self._resolve_monster(EncounterQuery(monster=name)).total_ehd
