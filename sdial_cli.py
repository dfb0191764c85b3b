#!/usr/bin/env python3
# SPDX-License-Identifier: GPL-3.0-only
#
# Speed Dial Analysis (SDIAL)
#
# An open-source utility for enumerating the reachable states of a four-wheel
# "speed dial" combination lock, for educational and locksport purposes.
#
# Copyright (C) 2026 knowthebird
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, version 3 only.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#
# USE POLICY:
# This software is intended ONLY for:
#   - Educational use
#   - Locksport
#   - Locksmith training
#   - Locks that you own or have explicit permission to work on
#
# Misuse of this software may violate local, state, or federal law.
# The authors and contributors accept no liability for misuse.
#
# Module: sdial_cli.py
# Purpose: CLI adapter (argument parsing, terminal output).
#
# This adapter owns ALL terminal behavior.
# The core engine should never print to the terminal.

"""
SDIAL CLI Adapter

Responsibilities:
- Parse command-line flags into a normalized search config
- Run the core enumeration and print the rendered report
- Optionally print collision statistics
- Replay a single move string and show the lock state it reaches

Navigation guide (search for these headers / functions):
  - Logging setup (setup_logging)
  - Argument parsing (build_parser)
  - Entry point (run_cli, main)
"""


from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import sdial_core as core

log = logging.getLogger("sdial")


def setup_logging(level: str = "WARNING") -> None:
    lvl = getattr(logging, str(level).upper(), logging.WARNING)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _max_moves_arg(raw: str) -> int:
    value, err = core.parse_max_moves(raw)
    if err:
        raise argparse.ArgumentTypeError(err)
    return int(value)


def build_parser() -> argparse.ArgumentParser:
    defaults = core.default_search_config()
    ap = argparse.ArgumentParser(
        prog="sdial",
        description="Master \"Speed Dial\" lock simulation: enumerate move sequences and their collisions",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {core.SDIAL_CORE_VERSION}")
    ap.add_argument("-m", "--max", dest="max_moves", type=_max_moves_arg, default=defaults["max_moves"],
                    help=f"Maximum number of moves to consider (default {defaults['max_moves']})")
    ap.add_argument("-d", "--dups", dest="show_dups", action="store_true",
                    help="Show all moves when they are duplicates")
    ap.add_argument("-a", "--all", dest="show_all", action="store_true",
                    help="Show all combinations instead of just the best")
    ap.add_argument("-b", "--bests", dest="show_bests", action="store_true",
                    help="Show all of the best candidates, not just the first")
    ap.add_argument("--histogram", action="store_true",
                    help="Show how many states are reached by exactly N sequences")
    ap.add_argument("--replay", metavar="MOVES",
                    help="Show the lock state reached by a move string (e.g. URDL) and exit")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (default WARNING)")
    return ap


def _histogram_lines(report: core.Report) -> List[str]:
    lines = ["", "Collision histogram (sequences: states)"]
    for k, v in core.collision_histogram(report.entries).items():
        lines.append(f"  {k:4}: {v}")
    lines.append("New states by length (length: states)")
    for k, v in core.length_breakdown(report.entries).items():
        lines.append(f"  {k:4}: {v}")
    return lines


def run_cli(args: argparse.Namespace) -> int:
    if args.replay is not None:
        seq, err = core.parse_moves(args.replay)
        if err:
            print(f"[Error] {err}", file=sys.stderr)
            return 1
        print(f"{seq}: {core.replay(seq)}")
        return 0

    cfg = core.normalize_search_config({
        "max_moves": args.max_moves,
        "show_all": args.show_all,
        "show_dups": args.show_dups,
        "show_bests": args.show_bests,
    })

    log.info("enumerating up to %d moves", cfg["max_moves"])
    report = core.build_report(cfg["max_moves"])

    for line in core.format_report(report, cfg["show_all"], cfg["show_dups"], cfg["show_bests"]):
        print(line)

    if args.histogram:
        for line in _histogram_lines(report):
            print(line)

    return 0


def main(argv: Optional[List[str]] = None) -> None:
    ap = build_parser()
    args = ap.parse_args(argv)
    setup_logging(args.log_level)
    rc = run_cli(args)
    if rc:
        raise SystemExit(rc)


if __name__ == "__main__":
    main()
