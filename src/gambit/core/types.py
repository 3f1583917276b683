"""Square coordinates and board geometry helpers.

Board layout (file, rank), both zero-based:
    a1=(0, 0), b1=(1, 0), ..., h1=(7, 0)
    ...
    a8=(0, 7), ..., h8=(7, 7)
"""

from __future__ import annotations

from typing import NamedTuple, TypeAlias

BOARD_SIZE = 8

Offset: TypeAlias = tuple[int, int]  # (Δfile, Δrank)


class Coords(NamedTuple):
    """A square on the board."""

    file: int
    rank: int

    def offset(self, df: int, dr: int) -> Coords:
        return Coords(self.file + df, self.rank + dr)

    def __str__(self) -> str:
        return square_name(self)


def is_valid_coords(file: int, rank: int) -> bool:
    """Whether (*file*, *rank*) lies on the board."""
    return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE


def is_square_dark(file: int, rank: int) -> bool:
    """Dark squares have file and rank of equal parity (a1 is dark)."""
    return file % 2 == rank % 2


def square_name(sq: Coords) -> str:
    """Human-readable name, e.g. (4, 3) → 'e4'."""
    return chr(ord("a") + sq.file) + str(sq.rank + 1)


def parse_square(name: str) -> Coords:
    """Parse square name, e.g. 'e4' → Coords(4, 3)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Coords(ord(name[0]) - ord("a"), int(name[1]) - 1)


def all_squares() -> list[Coords]:
    """Every square, a1..h1 then a2..h2 and so on."""
    return [Coords(f, r) for r in range(BOARD_SIZE) for f in range(BOARD_SIZE)]
