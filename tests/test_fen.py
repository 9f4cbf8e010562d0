import pytest

from board_locator.notation.fen import (
    DEFAULT_POSITION,
    Color,
    FenFormatError,
    Kind,
    Piece,
    fen_to_board,
    fen_to_full,
    fen_to_pieces,
    pieces_to_fen,
    validate_fen,
)

START_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def test_default_position_round_trip():
    assert pieces_to_fen(fen_to_pieces(DEFAULT_POSITION)) == START_PLACEMENT


@pytest.mark.parametrize("placement", [
    "r1bqkb1r/pppppppp/2n2n2/8/4P3/5N2/PPPP1PPP/RNBQKB1R",
    "2r3k1/pp3pp1/4p2p/3pP3/1P1P4/P4N2/5PPP/R5K1",
    "8/8/8/8/8/8/8/8",
])
def test_placements_survive_decode_encode(placement):
    assert pieces_to_fen(fen_to_pieces(placement)) == placement


def test_layout_indexing():
    pieces = fen_to_pieces(DEFAULT_POSITION)
    assert len(pieces) == 64
    assert pieces[0] == Piece(Color.LIGHT, Kind.ROOK)        # a1
    assert pieces[4] == Piece(Color.LIGHT, Kind.KING)        # e1
    assert pieces[8] == Piece(Color.LIGHT, Kind.PAWN)        # a2
    assert pieces[59] == Piece(Color.DARK, Kind.QUEEN)       # d8
    assert pieces[60] == Piece(Color.DARK, Kind.KING)        # e8
    assert all(p is None for p in pieces[16:48])


def test_encode_flushes_empty_runs():
    pieces = [None] * 64
    pieces[7 * 8 + 3] = Piece(Color.DARK, Kind.KING)    # d8
    pieces[0] = Piece(Color.LIGHT, Kind.KING)           # a1
    pieces[7] = Piece(Color.LIGHT, Kind.ROOK)           # h1
    assert pieces_to_fen(pieces) == "3k4/8/8/8/8/8/8/K6R"


def test_trailing_fields_are_ignored():
    assert fen_to_pieces(START_PLACEMENT + " b - - 12 40") == fen_to_pieces(DEFAULT_POSITION)


@pytest.mark.parametrize("fen", [
    "",
    "   ",
    "8/8/8",
    "8/8/8/8/8/8/8/8/8",
    "9/8/8/8/8/8/8/8",
    "0/8/8/8/8/8/8/8",
    "7/8/8/8/8/8/8/8",
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX",
    "rnbqkbnrr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
])
def test_malformed_fen(fen):
    with pytest.raises(FenFormatError):
        fen_to_pieces(fen)


def test_fen_format_error_is_a_value_error():
    assert issubclass(FenFormatError, ValueError)


@pytest.mark.parametrize("length", [0, 63, 65])
def test_wrong_layout_length(length):
    with pytest.raises(ValueError):
        pieces_to_fen([None] * length)


def test_piece_symbols():
    assert Piece(Color.LIGHT, Kind.KNIGHT).symbol == "N"
    assert Piece(Color.DARK, Kind.KNIGHT).symbol == "n"
    assert Piece.from_symbol("q") == Piece(Color.DARK, Kind.QUEEN)
    assert Piece.from_symbol("B") == Piece(Color.LIGHT, Kind.BISHOP)
    assert str(Piece(Color.LIGHT, Kind.KING)) == "K"
    for bad in ("x", "", "Kq"):
        with pytest.raises(ValueError):
            Piece.from_symbol(bad)


def test_fen_to_board_grid():
    board = fen_to_board(DEFAULT_POSITION)
    assert board[0] == list("rnbqkbnr")
    assert board[2] == [None] * 8
    assert board[7][4] == "K"


def test_validate_start_position():
    assert validate_fen(DEFAULT_POSITION) == (True, [])


def test_validate_reports_violations():
    ok, violations = validate_fen("8/8/8/8/8/8/8/8")
    assert not ok
    assert violations == [
        "Light king count = 0 (expected 1)",
        "Dark king count = 0 (expected 1)",
    ]

    ok, violations = validate_fen("P3k3/8/8/8/8/8/8/4K3")
    assert not ok
    assert violations == ["Pawn found on rank 1 or 8 (illegal)"]

    ok, violations = validate_fen("4k3/pppppppp/p7/8/8/8/8/4K3")
    assert violations == ["Dark pawn count = 9 (max 8)"]


def test_validate_malformed_does_not_raise():
    ok, violations = validate_fen("not/a/fen")
    assert not ok
    assert len(violations) == 1


def test_fen_to_full():
    assert fen_to_full(START_PLACEMENT) == DEFAULT_POSITION
    assert fen_to_full("8/8/8/8/8/8/8/8", "b", "", "e3", 4, 20) == "8/8/8/8/8/8/8/8 b - e3 4 20"


def test_fen_to_full_rejects_bad_side():
    with pytest.raises(FenFormatError):
        fen_to_full(START_PLACEMENT, side="x")
