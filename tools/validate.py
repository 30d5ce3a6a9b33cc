#!/usr/bin/env python
"""Check the encounter tables before a simulation run.

Each CSV must match encounters/schemas/table.schema.json and be
rectangular, every terrain entry must name a sub-table, and every sub-table
entry must name a monster (after the usual name fixups) or an NPC type.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import jsonschema
from pydantic import ValidationError

from encounters import fixups
from encounters.config import Settings, get_settings
from encounters.table import NOT_FOUND, Table, TableError, read_rows


def load_schema(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def validate_file(path: Path, schema: dict, null_entry: str = "-") -> Table:
    rows = read_rows(path)
    try:
        jsonschema.validate(rows, schema)
    except jsonschema.ValidationError as exc:
        raise TableError(f"{path.name}: {exc.message}") from exc
    return Table(rows, null_entry=null_entry, name=path.stem)


def empty_column_errors(table: Table) -> List[str]:
    return [f"{table.name}: column '{table.col_name(j)}' has no entries" for j in sorted(table.empty_cols)]


def reference_errors(main: Table, sub: Table, monsters: Table) -> List[str]:
    errors = []
    for j in range(1, main.col_count() + 1):
        terrain = main.col_name(j)
        for entry in sorted({e for e in main.column(j) if e is not None}):
            name = fixups.subtable_fixup(terrain, entry)
            if sub.col_index(name) == NOT_FOUND:
                errors.append(f"{main.name}: {terrain} rolls unknown subtable '{name}'")
    for j in range(1, sub.col_count() + 1):
        for entry in sorted({e for e in sub.column(j) if e is not None}):
            if fixups.npc_level(entry) is not None:
                continue
            for name in fixups.monster_variants(entry):
                if monsters.row_index(name) == NOT_FOUND:
                    errors.append(f"{sub.name}: {sub.col_name(j)} rolls unknown monster '{name}'")
    return errors


def null_ehd_warnings(monsters: Table, ehd_col: str) -> List[str]:
    col = monsters.col_index(ehd_col)
    if col == NOT_FOUND:
        return []
    warnings = []
    for i in range(1, monsters.row_count() + 1):
        name = monsters.row_name(i)
        if monsters.cell(i, col) is None and fixups.ehd_fixup(name, 0) == 0:
            warnings.append(f"{monsters.name}: {name} has no EHD")
    return warnings


def validate_tables(settings: Settings) -> List[str]:
    errors: List[str] = []
    tables = {}
    try:
        schema = load_schema(settings.schema_path)
    except (OSError, ValueError) as exc:
        return [f"Cannot read schema {settings.schema_path}: {exc}"]
    for key, path in (
        ("main", settings.main_table_path),
        ("sub", settings.sub_table_path),
        ("monsters", settings.monster_table_path),
    ):
        try:
            tables[key] = validate_file(path, schema, settings.null_entry)
        except TableError as exc:
            errors.append(str(exc))
    if len(tables) < 3:
        return errors

    errors.extend(empty_column_errors(tables["main"]))
    errors.extend(empty_column_errors(tables["sub"]))
    for header in (settings.monster_number_col, settings.monster_hdn_col, settings.monster_ehd_col):
        if tables["monsters"].col_index(header) == NOT_FOUND:
            errors.append(f"{tables['monsters'].name}: missing column '{header}'")
    errors.extend(reference_errors(tables["main"], tables["sub"], tables["monsters"]))
    for warning in null_ehd_warnings(tables["monsters"], settings.monster_ehd_col):
        print(f"[WARN] {warning}", file=sys.stderr)
    return errors


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--data-dir", help="Directory holding the encounter CSV tables")
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"[ERROR] Invalid settings: {exc}", file=sys.stderr)
        return 1
    if args.data_dir:
        settings = settings.model_copy(update={"data_dir": str(Path(args.data_dir).resolve())})

    errors = validate_tables(settings)
    for error in errors:
        print(f"[ERROR] {error}", file=sys.stderr)
    if errors:
        return 1
    print(f"[OK] Tables in {settings.data_path} are consistent")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
