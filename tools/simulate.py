#!/usr/bin/env python
"""OED wilderness encounter simulator.

Rolls NUM_ENCOUNTERS encounters for one terrain and prints the total EHD of
each, one per line.

Usage:
  python tools/simulate.py Mountain
  python tools/simulate.py Woods --count 200 --seed 7
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterator, Optional, Sequence, TextIO

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pydantic import ValidationError

from dice.roller import DiceRoller
from encounters.config import Settings, get_settings
from encounters.resolver import EncounterResolver
from encounters.table import TableError


class SimulationDriver:
    def __init__(self, resolver: EncounterResolver, num_encounters: int = 1000):
        self.resolver = resolver
        self.num_encounters = num_encounters

    def run(self, terrain: str) -> Iterator[int]:
        for _ in range(self.num_encounters):
            yield self.resolver.roll_by_terrain(terrain)

    def emit(self, terrain: str, out: TextIO) -> int:
        written = 0
        for total_ehd in self.run(terrain):
            out.write(f"{total_ehd}\n")
            written += 1
        return written


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simulate",
        description="Roll wilderness encounters for a terrain and print each encounter's total EHD.",
    )
    parser.add_argument("terrain", help="Terrain column of the main encounter table, e.g. Mountain")
    parser.add_argument("--count", type=int, help="Number of encounters to roll (default from settings)")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible run")
    parser.add_argument("--data-dir", help="Directory holding the encounter CSV tables")
    return parser


def _settings_for(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.count is not None:
        overrides["num_encounters"] = args.count
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.data_dir:
        overrides["data_dir"] = str(Path(args.data_dir).resolve())
    base = get_settings()
    return base.model_copy(update=overrides) if overrides else base


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.count is not None and args.count < 1:
        parser.error("--count must be at least 1")
    try:
        settings = _settings_for(args)
    except ValidationError as exc:
        print(f"[ERROR] Invalid settings: {exc}", file=sys.stderr)
        return 1

    try:
        resolver = EncounterResolver.from_settings(settings, DiceRoller(settings.seed))
    except TableError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    if not resolver.has_terrain(args.terrain):
        print(f"[ERROR] Unknown terrain: {args.terrain}", file=sys.stderr)
        print(f"[INFO] Known terrains: {', '.join(resolver.terrains())}", file=sys.stderr)
        parser.print_usage()
        return 1

    driver = SimulationDriver(resolver, settings.num_encounters)
    try:
        driver.emit(args.terrain, sys.stdout)
    except TableError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
