from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterable, Sequence

ROW_COUNT = 4
ALPHABET = frozenset(string.ascii_lowercase)


class PuzzleError(ValueError):
    """Raised for a puzzle definition that cannot be solved as given."""


@dataclass(frozen=True)
class Letter:
    char: str
    row: int


@dataclass(frozen=True)
class Puzzle:
    rows: tuple[tuple[Letter, ...], ...]

    @property
    def letters(self) -> list[Letter]:
        return [letter for row in self.rows for letter in row]

    @property
    def required_letters(self) -> frozenset[str]:
        return frozenset(letter.char for letter in self.letters)

    @property
    def sides(self) -> list[str]:
        return ["".join(letter.char for letter in row) for row in self.rows]


def parse_puzzle(rows: Sequence[str]) -> Puzzle:
    """Build a Puzzle from four strings, one per side. Case-insensitive."""
    if len(rows) != ROW_COUNT:
        raise PuzzleError(f"Expected {ROW_COUNT} rows, got {len(rows)}")
    parsed = []
    for idx, raw in enumerate(rows):
        side = raw.strip().lower()
        if not side:
            raise PuzzleError(f"Row {idx} is empty")
        bad = sorted(set(side) - ALPHABET)
        if bad:
            raise PuzzleError(f"Row {idx} has characters outside a-z: {''.join(bad)!r}")
        parsed.append(tuple(Letter(ch, idx) for ch in side))
    return Puzzle(tuple(parsed))


def parse_puzzle_path(path: str) -> Puzzle:
    """Parse the ``abc-def-ghi-jkl`` form used in request paths.

    Every side must have the same length.
    """
    sides = path.strip("/").split("-")
    if len(sides) != ROW_COUNT or len({len(s) for s in sides}) != 1:
        raise PuzzleError(f"Malformed puzzle path: {path!r}")
    return parse_puzzle(sides)


def candidates(puzzle: Puzzle, tail: Letter) -> list[Letter]:
    """Letters that may follow ``tail``: anything not on the same side."""
    return [letter for letter in puzzle.letters if letter.row != tail.row]


def letters_of(words: Iterable[str]) -> set[str]:
    out: set[str] = set()
    for word in words:
        out.update(word)
    return out
