from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple


FILES = "ABCDEFGH"
_MOVE_RE = re.compile(r"([A-Ha-h][1-8])[- ]?([A-Ha-h][1-8])")


class Square(NamedTuple):
    """Board coordinate.

    Attributes:
        file (int): Column 0..7, ``0`` is the ``A`` file.
        rank (int): Row 0..7 counted from the top; ``0`` is Black's back rank
            (rank digit ``8``), ``7`` is White's (rank digit ``1``).
    """

    file: int
    rank: int

    @property
    def bit_index(self) -> int:
        """Grid and occupancy bit index, ``8 * rank + file``."""
        return 8 * self.rank + self.file

    @property
    def on_board(self) -> bool:
        return 0 <= self.file < 8 and 0 <= self.rank < 8

    def offset(self, df: int, dr: int) -> "Square":
        return Square(self.file + df, self.rank + dr)

    @classmethod
    def from_index(cls, idx: int) -> "Square":
        if idx < 0 or idx > 63:
            raise IndexError(f"square index out of range: {idx}")
        return cls(idx % 8, idx // 8)

    def __str__(self) -> str:
        if not self.on_board:
            return str(tuple(self))
        return square_to_string(self)


ALL_SQUARES = tuple(Square(f, r) for r in range(8) for f in range(8))


def string_to_square(s: str) -> Square:
    """Convert coordinate notation into a square.

    Args:
        s (str): File letter ``A``-``H`` (any case) followed by a rank digit
            ``1``-``8``, e.g. ``"e4"``.

    Returns:
        Square: ``file = letter - 'A'`` and ``rank = 8 - digit``.

    Raises:
        ValueError: If ``s`` is not a valid square name.
    """
    if not isinstance(s, str) or len(s) != 2:
        raise ValueError(f"invalid square: {s!r}")
    letter, digit = s[0].upper(), s[1]
    if letter not in FILES or digit < "1" or digit > "8":
        raise ValueError(f"invalid square: {s!r}")
    return Square(ord(letter) - ord("A"), 8 - int(digit))


def square_to_string(sq: Square) -> str:
    """Convert a square into uppercase coordinate notation.

    Raises:
        ValueError: If ``sq`` is off the board.
    """
    file, rank = sq
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise ValueError(f"invalid square: {tuple(sq)!r}")
    return FILES[file] + str(8 - rank)


@dataclass(frozen=True)
class Move:
    """Origin/destination pair as requested by a caller."""

    from_sq: Square
    to_sq: Square

    def to_string(self) -> str:
        """Render the move like ``"E2-E4"``."""
        return square_to_string(self.from_sq) + "-" + square_to_string(self.to_sq)


def parse_move(text: str) -> Move:
    """Parse a move written as two squares.

    Accepts ``"E2-E4"``, ``"e2e4"`` and ``"e2 e4"``: two squares with at most
    one ``-`` or space between them.

    Raises:
        ValueError: If the text is not in that form.
    """
    m = _MOVE_RE.fullmatch(text.strip())
    if m is None:
        raise ValueError(f"invalid move: {text!r}")
    return Move(string_to_square(m.group(1)), string_to_square(m.group(2)))
