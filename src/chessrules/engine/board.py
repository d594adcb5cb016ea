from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .move import ALL_SQUARES, Square
from .pieces import SYMBOL_TO_PIECE, Color, Piece


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

# Rank a pawn of each color promotes on
PROMOTION_RANK = {Color.WHITE: 0, Color.BLACK: 7}

Snapshot = Tuple[Tuple[Optional[Tuple[Piece, Color]], ...], ...]


def require_on_board(sq: Square) -> None:
    """Raise ``IndexError`` unless ``sq`` is one of the 64 squares."""
    file, rank = sq
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise IndexError(f"square off board: {tuple(sq)!r}")


def _index(sq: Square) -> int:
    require_on_board(sq)
    return 8 * sq[1] + sq[0]


def _bit(sq: Square) -> int:
    return 1 << _index(sq)


@dataclass
class Position:
    """Piece grid plus one occupancy word per color.

    Notes:
    - ``grid`` holds 64 entries indexed by ``8 * rank + file``; rank 0 is
      Black's back rank.
    - ``black``/``white`` use the same bit index. A grid entry is present iff
      exactly one of the two bits is set; the two views only change together.
    """

    grid: List[Optional[Piece]] = field(default_factory=lambda: [None] * 64)
    black: int = 0
    white: int = 0

    @classmethod
    def startpos(cls) -> "Position":
        """Create the standard starting layout."""
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> "Position":
        """Create a position from the piece placement field of a FEN string.

        Only the first field is read; any trailing fields are ignored.
        Uppercase letters are White, lowercase Black. The first rank listed is
        rank digit 8, i.e. internal rank 0.

        Raises:
            ValueError: If the placement is empty or malformed.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        placement = fen.strip().split()[0]
        rows = placement.split("/")
        if len(rows) != 8:
            raise ValueError("FEN board must have 8 ranks")
        pos = cls()
        for rank, row in enumerate(rows):
            file = 0
            for ch in row:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    file += n
                    continue
                piece = SYMBOL_TO_PIECE.get(ch.upper())
                if piece is None:
                    raise ValueError(f"invalid piece in FEN: {ch!r}")
                if file >= 8:
                    raise ValueError("too many squares in FEN rank")
                color = Color.WHITE if ch.isupper() else Color.BLACK
                pos.put(Square(file, rank), piece, color)
                file += 1
            if file != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")
        return pos

    def to_fen(self) -> str:
        """Serialize the piece placement field of FEN."""
        rows: List[str] = []
        for rank in range(8):
            run = 0
            row = []
            for file in range(8):
                sq = Square(file, rank)
                piece = self.piece_at(sq)
                if piece is None:
                    run += 1
                    continue
                if run:
                    row.append(str(run))
                    run = 0
                ch = piece.symbol
                row.append(ch if self.color_at(sq) is Color.WHITE else ch.lower())
            if run:
                row.append(str(run))
            rows.append("".join(row))
        return "/".join(rows)

    def copy(self) -> "Position":
        return Position(grid=list(self.grid), black=self.black, white=self.white)

    # --- Occupancy index ---
    def color_at(self, sq: Square) -> Optional[Color]:
        """Return the color occupying ``sq``, if any."""
        bit = _bit(sq)
        if self.black & bit:
            return Color.BLACK
        if self.white & bit:
            return Color.WHITE
        return None

    def set_color_at(self, sq: Square, color: Optional[Color]) -> None:
        """Set one side's bit for ``sq`` and clear the other; ``None`` clears both."""
        bit = _bit(sq)
        self.black &= ~bit
        self.white &= ~bit
        if color is Color.BLACK:
            self.black |= bit
        elif color is Color.WHITE:
            self.white |= bit

    def occupancy(self, color: Color) -> int:
        return self.black if color is Color.BLACK else self.white

    def squares_of(self, color: Color) -> Iterator[Square]:
        """Yield every square occupied by ``color`` in index order."""
        bb = self.occupancy(color)
        while bb:
            lsb = bb & -bb
            yield Square.from_index(lsb.bit_length() - 1)
            bb ^= lsb

    # --- Grid ---
    def piece_at(self, sq: Square) -> Optional[Piece]:
        return self.grid[_index(sq)]

    def put(self, sq: Square, piece: Piece, color: Color) -> None:
        """Place ``piece`` of ``color`` on ``sq``, replacing any occupant."""
        self.set_color_at(sq, color)
        self.grid[_index(sq)] = piece

    def clear(self, sq: Square) -> None:
        self.set_color_at(sq, None)
        self.grid[_index(sq)] = None

    # --- Mutation ---
    def apply_move(self, from_sq: Square, to_sq: Square, promotion: Piece = Piece.QUEEN) -> None:
        """Relocate the piece on ``from_sq`` to ``to_sq`` in place.

        Whatever stood on ``to_sq`` is overwritten (captured). A pawn arriving
        on its promotion rank becomes ``promotion``. No legality checks are
        made here.

        Raises:
            ValueError: If ``from_sq`` is empty.
        """
        piece = self.piece_at(from_sq)
        color = self.color_at(from_sq)
        if piece is None or color is None:
            raise ValueError(f"no piece to move on {from_sq}")
        if piece is Piece.PAWN and to_sq[1] == PROMOTION_RANK[color]:
            piece = promotion
        self.clear(from_sq)
        self.put(to_sq, piece, color)

    def with_move(
        self, from_sq: Square, to_sq: Square, promotion: Piece = Piece.QUEEN
    ) -> "Position":
        """Return a copy of this position with the move applied.

        The receiver is left untouched.
        """
        scratch = self.copy()
        scratch.apply_move(from_sq, to_sq, promotion)
        return scratch

    # --- Introspection ---
    def snapshot(self) -> Snapshot:
        """Return an immutable 8x8 view, rows by rank, columns by file."""
        rows = []
        for rank in range(8):
            row: List[Optional[Tuple[Piece, Color]]] = []
            for file in range(8):
                sq = Square(file, rank)
                piece = self.grid[sq.bit_index]
                color = self.color_at(sq)
                row.append((piece, color) if piece is not None and color is not None else None)
            rows.append(tuple(row))
        return tuple(rows)

    def validate(self) -> None:
        """Check that the grid and occupancy views agree on every square.

        Raises:
            ValueError: On the first inconsistent square.
        """
        if self.black & self.white:
            raise ValueError("square set in both occupancy words")
        for sq in ALL_SQUARES:
            occupied = bool((self.black | self.white) & (1 << sq.bit_index))
            if occupied != (self.grid[sq.bit_index] is not None):
                raise ValueError(f"grid and occupancy disagree on {sq}")
