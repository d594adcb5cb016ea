from __future__ import annotations

import pytest

from chessrules.engine.board import STARTPOS_FEN, Position
from chessrules.engine.move import ALL_SQUARES, Square, string_to_square
from chessrules.engine.pieces import Color, Piece


def test_startpos_occupancy_words() -> None:
    pos = Position.startpos()
    # Black holds ranks 0-1 (bits 0..15), White ranks 6-7 (bits 48..63)
    assert pos.black == 0x000000000000FFFF
    assert pos.white == 0xFFFF000000000000
    pos.validate()


def test_startpos_pieces() -> None:
    pos = Position.startpos()
    assert pos.piece_at(string_to_square("E8")) is Piece.KING
    assert pos.color_at(string_to_square("E8")) is Color.BLACK
    assert pos.piece_at(string_to_square("D1")) is Piece.QUEEN
    assert pos.color_at(string_to_square("D1")) is Color.WHITE
    assert pos.piece_at(string_to_square("B1")) is Piece.KNIGHT
    assert pos.piece_at(string_to_square("E4")) is None
    assert pos.color_at(string_to_square("E4")) is None


def test_fen_placement_round_trip() -> None:
    assert Position.startpos().to_fen() == STARTPOS_FEN
    fen = "4k3/8/8/8/P7/8/8/R2nK3"
    assert Position.from_fen(fen).to_fen() == fen


def test_from_fen_ignores_trailing_fields() -> None:
    pos = Position.from_fen(STARTPOS_FEN + " b KQkq - 0 1")
    assert pos.to_fen() == STARTPOS_FEN


@pytest.mark.parametrize(
    "fen",
    ["", "8/8/8", "9/8/8/8/8/8/8/8", "7/8/8/8/8/8/8/8", "x7/8/8/8/8/8/8/8", "ppppppppp/8/8/8/8/8/8/8"],
)
def test_from_fen_rejects_malformed(fen: str) -> None:
    with pytest.raises(ValueError):
        Position.from_fen(fen)


def test_set_color_at_keeps_one_bit_per_square() -> None:
    pos = Position()
    s = Square(2, 5)
    pos.set_color_at(s, Color.BLACK)
    assert pos.color_at(s) is Color.BLACK
    pos.set_color_at(s, Color.WHITE)
    assert pos.color_at(s) is Color.WHITE
    assert pos.black == 0
    assert pos.white == 1 << s.bit_index
    pos.set_color_at(s, None)
    assert pos.black == 0 and pos.white == 0


def test_off_board_access_raises_index_error() -> None:
    pos = Position.startpos()
    with pytest.raises(IndexError):
        pos.color_at(Square(8, 0))
    with pytest.raises(IndexError):
        pos.color_at(Square(0, -1))
    with pytest.raises(IndexError):
        pos.set_color_at(Square(-1, 3), Color.WHITE)


def test_apply_move_captures_by_overwrite() -> None:
    pos = Position.from_fen("4k3/8/8/3p4/4P3/8/8/4K3")
    e4, d5 = string_to_square("E4"), string_to_square("D5")
    pos.apply_move(e4, d5)
    assert pos.piece_at(e4) is None and pos.color_at(e4) is None
    assert pos.piece_at(d5) is Piece.PAWN and pos.color_at(d5) is Color.WHITE
    assert len(list(pos.squares_of(Color.BLACK))) == 1
    pos.validate()


def test_apply_move_promotes_pawns_on_their_back_rank() -> None:
    pos = Position.from_fen("4k3/P7/8/8/8/8/7p/4K3")
    pos.apply_move(string_to_square("A7"), string_to_square("A8"), Piece.KNIGHT)
    assert pos.piece_at(string_to_square("A8")) is Piece.KNIGHT
    assert pos.color_at(string_to_square("A8")) is Color.WHITE
    pos.apply_move(string_to_square("H2"), string_to_square("H1"))
    assert pos.piece_at(string_to_square("H1")) is Piece.QUEEN
    assert pos.color_at(string_to_square("H1")) is Color.BLACK
    pos.validate()


def test_apply_move_from_empty_square_raises() -> None:
    pos = Position.startpos()
    with pytest.raises(ValueError):
        pos.apply_move(string_to_square("E4"), string_to_square("E5"))


def test_with_move_leaves_receiver_untouched() -> None:
    pos = Position.startpos()
    before = (list(pos.grid), pos.black, pos.white)
    moved = pos.with_move(string_to_square("E2"), string_to_square("E4"))
    assert (pos.grid, pos.black, pos.white) == before
    assert moved.piece_at(string_to_square("E4")) is Piece.PAWN
    assert moved.piece_at(string_to_square("E2")) is None
    moved.validate()


def test_snapshot_is_read_only_view() -> None:
    pos = Position.startpos()
    snap = pos.snapshot()
    assert len(snap) == 8 and all(len(row) == 8 for row in snap)
    assert snap[0][4] == (Piece.KING, Color.BLACK)
    assert snap[7][3] == (Piece.QUEEN, Color.WHITE)
    assert snap[4][4] is None
    with pytest.raises(TypeError):
        snap[0][0] = None  # type: ignore[index]


def test_validate_detects_inconsistent_views() -> None:
    pos = Position.startpos()
    pos.grid[string_to_square("E4").bit_index] = Piece.PAWN
    with pytest.raises(ValueError):
        pos.validate()

    pos = Position.startpos()
    pos.white |= 1  # A8 already black
    with pytest.raises(ValueError):
        pos.validate()


def test_squares_of_lists_every_piece() -> None:
    pos = Position.startpos()
    whites = list(pos.squares_of(Color.WHITE))
    assert len(whites) == 16
    assert all(s.rank in (6, 7) for s in whites)
    assert set(whites) | set(pos.squares_of(Color.BLACK)) < set(ALL_SQUARES)
