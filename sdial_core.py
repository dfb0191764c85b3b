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
# Module: sdial_core.py
# Purpose: Core engine (portable, UI-agnostic lock model and enumeration).
#
# This file contains the “business logic” of SDIAL and MUST remain portable.
# Any CLI specific behavior (printing, argument parsing) belongs in an adapter.

"""
SDIAL Core Engine

This module models a "speed dial" lock and exhaustively enumerates the move sequences
that can be entered on it, to measure how many different sequences collapse onto the
same final lock state.

Design goals:
- No direct I/O: no terminal printing, no interactive input, and no filesystem writes.
- Deterministic output: the enumeration order and the report order are fixed, so two runs
  with the same settings always produce the same report.
- Adapter-friendly: the CLI adapter drives the engine by calling:
    - build_report(max_moves)  → Report
    - format_report(report, ...) → list of text lines
    - replay(sequence)  → Lock

Navigation guide (search for these headers / functions):
  - Search config helpers (default_search_config, normalize_search_config)
  - Wheel model (Wheel.advance)
  - Lock model (Lock.slide, replay)
  - Move sequences (MoveSequence, parse_moves)
  - Enumeration and aggregation (enumerate_sequences, aggregate)
  - Reporting (sort_targets, best_targets, build_report, format_report)
  - Collision statistics (collision_histogram, length_breakdown)
"""


from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

log = logging.getLogger(__name__)

LockKey = Tuple[int, ...]
SearchConfig = Dict[str, Any]

SDIAL_CORE_VERSION = "0.1.0"

WHEEL_COUNT = 4
WHEEL_POSITIONS = 5
WHEEL_BIASES = (-1, 0, 1)
WHEEL_CODES = WHEEL_POSITIONS * len(WHEEL_BIASES)

DIRECTION_LETTERS = "URDL"

DEFAULT_MAX_MOVES = 10

# -----------------------
# Search config helpers
# -----------------------

def default_search_config() -> SearchConfig:
    return {
        "max_moves": DEFAULT_MAX_MOVES,
        "show_all": False,     # list every reachable state
        "show_dups": False,    # list every sequence of a colliding state
        "show_bests": False,   # list every tied best state, not just the first
    }


def _coerce_flag(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    if s in ("y", "yes", "1", "true", "t", "on"):
        return True
    if s in ("n", "no", "0", "false", "f", "off", ""):
        return False
    return default


def normalize_search_config(cfg: Optional[Dict[str, Any]]) -> SearchConfig:
    defaults = default_search_config()
    cfg = dict(defaults if not isinstance(cfg, dict) else cfg)

    raw = cfg.get("max_moves", defaults["max_moves"])
    try:
        cfg["max_moves"] = int(raw)
    except (TypeError, ValueError):
        log.warning("ignoring unparseable max_moves %r, using %d", raw, defaults["max_moves"])
        cfg["max_moves"] = defaults["max_moves"]
    if cfg["max_moves"] < 0:
        log.warning("ignoring negative max_moves %d, using %d", cfg["max_moves"], defaults["max_moves"])
        cfg["max_moves"] = defaults["max_moves"]

    for k in ("show_all", "show_dups", "show_bests"):
        cfg[k] = _coerce_flag(cfg.get(k), defaults[k])

    return cfg


# -----------------------
# Input parsing helpers
# -----------------------

def parse_max_moves(raw: str) -> Tuple[Optional[int], Optional[str]]:
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None, f"Expected a whole number of moves, got '{raw}'."
    if value < 0:
        return None, f"Max moves cannot be negative, got {value}."
    return value, None


def parse_moves(raw: str) -> Tuple[Optional[MoveSequence], Optional[str]]:
    r = str(raw).strip().upper()
    if not r:
        return None, "Expected at least one move (letters U, R, D, L)."
    moves = []
    for ch in r:
        idx = DIRECTION_LETTERS.find(ch)
        if idx < 0:
            return None, f"Invalid move '{ch}' (use U, R, D, L)."
        moves.append(idx)
    return MoveSequence(tuple(moves)), None


# -----------------------
# Wheel model
# -----------------------

@dataclass(order=True)
class Wheel:
    """
    One wheel of the lock.

    The wheel has 5 granular positions and leans left, center or right, giving
    15 states packed as ``position * 3 + (bias + 1)``. Any move leaves a given
    wheel with a known lean, advancing the position only when needed.
    """

    code: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.code < WHEEL_CODES:
            raise ValueError(f"wheel code must be 0..{WHEEL_CODES - 1}, got {self.code}")

    @classmethod
    def from_parts(cls, position: int, bias: int) -> "Wheel":
        if not 0 <= position < WHEEL_POSITIONS:
            raise ValueError(f"wheel position must be 0..{WHEEL_POSITIONS - 1}, got {position}")
        if bias not in WHEEL_BIASES:
            raise ValueError(f"wheel bias must be -1, 0 or 1, got {bias}")
        return cls(position * 3 + (bias + 1))

    @property
    def position(self) -> int:
        return self.code // 3

    @property
    def bias(self) -> int:
        return self.code % 3 - 1

    def _set(self, position: int, bias: int) -> None:
        self.code = position * 3 + (bias + 1)

    def reset(self) -> None:
        self._set(0, 0)

    def advance(self, bias: int) -> None:
        # A lean still short of the target only swings over; anything else costs a step.
        if self.bias < bias:
            self._set(self.position, bias)
        else:
            self._set((self.position + 1) % WHEEL_POSITIONS, bias)

    def __str__(self) -> str:
        b = self.bias
        mark = "<" if b < 0 else (">" if b > 0 else "|")
        return f"{self.position}{mark}"


# -----------------------
# Lock model
# -----------------------

def _new_wheels() -> List[Wheel]:
    return [Wheel() for _ in range(WHEEL_COUNT)]


@dataclass(order=True)
class Lock:
    """Four wheels, indexed by the slide direction that centers them (U, R, D, L)."""

    wheels: List[Wheel] = field(default_factory=_new_wheels)

    @classmethod
    def from_key(cls, key: Sequence[int]) -> "Lock":
        if len(key) != WHEEL_COUNT:
            raise ValueError(f"lock key needs {WHEEL_COUNT} wheel codes, got {len(key)}")
        for c in key:
            if not 0 <= int(c) < WHEEL_CODES:
                raise ValueError(f"wheel code must be 0..{WHEEL_CODES - 1}, got {c}")
        return cls([Wheel(int(c)) for c in key])

    def key(self) -> LockKey:
        return tuple(w.code for w in self.wheels)

    def reset(self) -> None:
        for w in self.wheels:
            w.reset()

    def slide(self, direction: int) -> None:
        if not 0 <= direction < WHEEL_COUNT:
            raise ValueError(f"direction must be 0..{WHEEL_COUNT - 1}, got {direction}")
        prior = (direction + WHEEL_COUNT - 1) % WHEEL_COUNT
        nxt = (direction + 1) % WHEEL_COUNT
        self.wheels[prior].advance(-1)
        self.wheels[direction].advance(0)
        self.wheels[nxt].advance(1)

    def __str__(self) -> str:
        return "(" + ",".join(str(w) for w in self.wheels) + ")"


def replay(sequence: "MoveSequence") -> Lock:
    """Apply every move of ``sequence`` to a lock in the reset position."""
    lock = Lock()
    for d in sequence.moves:
        lock.slide(d)
    return lock


# -----------------------
# Move sequences
# -----------------------

@dataclass(frozen=True)
class MoveSequence:
    moves: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.moves)

    def __str__(self) -> str:
        return "".join(DIRECTION_LETTERS[m] for m in self.moves)


# -----------------------
# Enumeration and aggregation
# -----------------------

@dataclass
class Target:
    """How a lock state was reached."""

    lock: Lock
    # number of sequences (up to max moves) arriving at this state
    count: int
    # first sequence enumerated that got here
    first: MoveSequence
    sequences: List[MoveSequence] = field(default_factory=list)


def _decode_sequence(code: int, length: int) -> MoveSequence:
    moves = []
    for _ in range(length):
        moves.append(code & 3)
        code >>= 2
    return MoveSequence(tuple(moves))


def enumerate_sequences(max_moves: int) -> Iterator[MoveSequence]:
    """
    Yield every move sequence of length 1..max_moves.

    Shorter sequences come first. Within a length, sequences follow the base-4
    counter 0..4**n-1 with the first move as the least significant digit.
    """
    if max_moves < 0:
        raise ValueError(f"max_moves cannot be negative, got {max_moves}")
    for length in range(1, max_moves + 1):
        for code in range(1 << (2 * length)):
            yield _decode_sequence(code, length)


def aggregate(max_moves: int) -> Dict[LockKey, Target]:
    """Replay every sequence up to ``max_moves`` and group them by final lock state."""
    targets: Dict[LockKey, Target] = {}
    current_len = 0
    for seq in enumerate_sequences(max_moves):
        if len(seq) != current_len:
            current_len = len(seq)
            log.debug("enumerating %d sequences of length %d (%d states so far)",
                      4 ** current_len, current_len, len(targets))
        lock = replay(seq)
        key = lock.key()
        ent = targets.get(key)
        if ent is None:
            targets[key] = Target(lock=lock, count=1, first=seq, sequences=[seq])
        else:
            ent.count += 1
            ent.sequences.append(seq)
    return targets


def total_sequences(max_moves: int) -> int:
    return sum(4 ** n for n in range(1, max_moves + 1))


def count_duplicates(targets: Dict[LockKey, Target]) -> int:
    return sum(t.count - 1 for t in targets.values())


# -----------------------
# Reporting
# -----------------------

@dataclass
class Report:
    max_moves: int
    total: int
    uniques: int
    dups: int
    entries: List[Target]
    bests: List[Target]


def sort_targets(targets: Dict[LockKey, Target]) -> List[Target]:
    """Fewest colliding sequences first, then shortest first sequence, then lock order."""
    return sorted(targets.values(), key=lambda t: (t.count, len(t.first), t.lock.key()))


def best_targets(entries: List[Target]) -> List[Target]:
    """Leading entries of a sorted list that tie the minimum count."""
    if not entries:
        return []
    best_count = entries[0].count
    out = []
    for t in entries:
        if t.count != best_count:
            break
        out.append(t)
    return out


def build_report(max_moves: int) -> Report:
    targets = aggregate(max_moves)
    entries = sort_targets(targets)
    report = Report(
        max_moves=max_moves,
        total=sum(t.count for t in entries),
        uniques=len(targets),
        dups=count_duplicates(targets),
        entries=entries,
        bests=best_targets(entries),
    )
    log.info("max_moves=%d: %d sequences, %d uniques, %d dups",
             max_moves, report.total, report.uniques, report.dups)
    return report


def _format_sequences(target: Target, show_dups: bool) -> List[str]:
    if not show_dups or target.count <= 1:
        return []
    return [f"   {seq}" for seq in target.sequences]


def format_report(report: Report, show_all: bool = False, show_dups: bool = False,
                  show_bests: bool = False) -> List[str]:
    lines = [
        f"For up to {report.max_moves} moves",
        f"{report.uniques} Uniques",
        f"{report.dups} dups",
    ]

    if show_all:
        for t in report.entries:
            lines.append(f"{t.lock} ({t.count:4} target) {len(t.first):2} ({t.first})")
            lines.extend(_format_sequences(t, show_dups))

    if not report.bests:
        lines.append(f"No reachable states (max moves is {report.max_moves}).")
        return lines

    bests = report.bests if show_bests else report.bests[:1]
    for t in bests:
        lines.append(f"Best: {t.lock} ({t.count} target) ({t.first})")
        lines.extend(_format_sequences(t, show_dups))
    return lines


# -----------------------
# Collision statistics
# -----------------------

def collision_histogram(entries: Sequence[Target]) -> Dict[int, int]:
    """Number of states reached by exactly k sequences, for every k that occurs."""
    counts = np.asarray([t.count for t in entries], dtype=np.int64)
    if counts.size == 0:
        return {}
    bins = np.bincount(counts)
    nz = np.nonzero(bins)[0]
    return {int(k): int(bins[k]) for k in nz}


def length_breakdown(entries: Sequence[Target]) -> Dict[int, int]:
    """Number of states first reached at each sequence length."""
    lengths = np.asarray([len(t.first) for t in entries], dtype=np.int64)
    if lengths.size == 0:
        return {}
    values, freq = np.unique(lengths, return_counts=True)
    return {int(v): int(f) for v, f in zip(values, freq)}
