import csv
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from dice.roller import DiceRoller

NULL_ENTRY = "-"
NOT_FOUND = -1


class TableError(ValueError):
    """Raised when a table source cannot be used."""


class Table:
    """Rectangular grid of text cells read from a CSV file.

    Row 0 holds the column titles and column 0 holds the row titles; data is
    addressed 1-indexed. Null data cells are stored as ``None`` and are never
    returned by the random lookups.
    """

    def __init__(self, rows: Sequence[Sequence[str]], null_entry: str = NULL_ENTRY, name: str = "table"):
        self.name = name
        if len(rows) < 2:
            raise TableError(f"{name}: need a header row and at least one data row")
        width = len(rows[0])
        if width < 2:
            raise TableError(f"{name}: need a header column and at least one data column")
        grid: List[Tuple[Optional[str], ...]] = []
        for line_no, row in enumerate(rows):
            if len(row) != width:
                raise TableError(
                    f"{name}: row {line_no} has {len(row)} cells, expected {width}"
                )
            cells = [cell.strip() for cell in row]
            if line_no == 0:
                grid.append(tuple(cells))
            else:
                grid.append(tuple([cells[0]] + [None if c == null_entry else c for c in cells[1:]]))
        self._grid = tuple(grid)
        self.empty_rows = frozenset(
            i for i in range(1, self.row_count() + 1)
            if all(cell is None for cell in self._grid[i][1:])
        )
        self.empty_cols = frozenset(
            j for j in range(1, self.col_count() + 1)
            if all(self._grid[i][j] is None for i in range(1, self.row_count() + 1))
        )

    def row_count(self) -> int:
        return len(self._grid) - 1

    def col_count(self) -> int:
        return len(self._grid[0]) - 1

    def row_name(self, index: int) -> str:
        return self._grid[index][0]

    def col_name(self, index: int) -> str:
        return self._grid[0][index]

    def col_names(self) -> List[str]:
        return [self.col_name(j) for j in range(1, self.col_count() + 1)]

    def row_index(self, name: str) -> int:
        for i in range(1, self.row_count() + 1):
            if self._grid[i][0] == name:
                return i
        return NOT_FOUND

    def col_index(self, name: str) -> int:
        for j in range(1, self.col_count() + 1):
            if self._grid[0][j] == name:
                return j
        return NOT_FOUND

    def cell(self, row: int, col: int) -> Optional[str]:
        return self._grid[row][col]

    def column(self, col: int) -> List[Optional[str]]:
        return [self._grid[i][col] for i in range(1, self.row_count() + 1)]

    def random_cell_in_row(self, row: int, roller: DiceRoller) -> str:
        if row in self.empty_rows:
            raise TableError(f"{self.name}: row '{self.row_name(row)}' has no entries")
        while True:
            entry = self._grid[row][roller.roll(self.col_count())]
            if entry is not None:
                return entry

    def random_cell_in_col(self, col: int, roller: DiceRoller) -> str:
        if col in self.empty_cols:
            raise TableError(f"{self.name}: column '{self.col_name(col)}' has no entries")
        while True:
            entry = self._grid[roller.roll(self.row_count())][col]
            if entry is not None:
                return entry


def read_rows(path: Path) -> List[List[str]]:
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            return [row for row in csv.reader(handle) if row]
    except (OSError, UnicodeDecodeError) as exc:
        raise TableError(f"Cannot read table {path}: {exc}") from exc
    except csv.Error as exc:
        raise TableError(f"Malformed table {path}: {exc}") from exc


def load_table(path: Path, null_entry: str = NULL_ENTRY) -> Table:
    path = Path(path)
    rows = read_rows(path)
    if not rows:
        raise TableError(f"Table {path} is empty")
    return Table(rows, null_entry=null_entry, name=path.stem)
