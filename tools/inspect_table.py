#!/usr/bin/env python
"""Print the shape of an encounter table and a few sample rolls."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pydantic import ValidationError

from dice.roller import DiceRoller
from encounters.config import get_settings
from encounters.table import NOT_FOUND, TableError, load_table


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"[ERROR] Invalid settings: {exc}", file=sys.stderr)
        return 1
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("table", nargs="?", default=str(settings.main_table_path), help="CSV table to inspect")
    parser.add_argument("--rolls", type=int, default=6, help="Sample rolls to draw from the last column")
    parser.add_argument("--column", default="Mountain", help="Column name to look up")
    parser.add_argument("--seed", type=int, default=settings.seed)
    args = parser.parse_args(argv)

    try:
        table = load_table(Path(args.table), settings.null_entry)
    except TableError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    roller = DiceRoller(args.seed)
    print(f"Number of rows: {table.row_count()}")
    print(f"Number of columns: {table.col_count()}")
    print()
    print("Column headers:")
    for name in table.col_names():
        print(name)
    print()
    print("Rolls on the last column:")
    try:
        for _ in range(args.rolls):
            print(table.random_cell_in_col(table.col_count(), roller))
    except TableError as exc:
        print(f"[WARN] {exc}", file=sys.stderr)
    print()
    print(f"Index of the {args.column} column:")
    index = table.col_index(args.column)
    print(index if index != NOT_FOUND else "not found")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
