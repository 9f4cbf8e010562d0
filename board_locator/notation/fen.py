"""
FEN Utilities – Piece Layout ↔ Text
===================================

Responsibilities:
  1. Encode a 64-square piece layout as a FEN piece-placement field.
  2. Decode the piece-placement field of a FEN string back into a layout.
  3. Check basic legality of a placement (kings, pawn counts, back ranks).

Layout convention: square index = ``rank * 8 + file`` with rank 0 being
rank 1 (light's home rank) and file 0 being the a-file.  An empty square
is ``None``; an occupied one is a :class:`Piece`.

Light pieces are written in uppercase (``PNBRQK``), dark pieces in
lowercase.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

DEFAULT_POSITION: str = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

SQUARES: int = 64


class FenFormatError(ValueError):
    """Raised when a FEN string cannot be parsed."""


# ── Piece model ───────────────────────────────────────────────────────

class Color(Enum):
    LIGHT = "light"
    DARK = "dark"


class Kind(Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


@dataclass(frozen=True)
class Piece:
    """A coloured chess piece occupying one square."""
    color: Color
    kind: Kind

    @property
    def symbol(self) -> str:
        """FEN letter: uppercase for light, lowercase for dark."""
        letter = self.kind.value
        return letter.upper() if self.color is Color.LIGHT else letter

    @classmethod
    def from_symbol(cls, symbol: str) -> "Piece":
        if len(symbol) != 1:
            raise ValueError(f"Expected a single piece letter, got {symbol!r}")
        try:
            kind = Kind(symbol.lower())
        except ValueError:
            raise ValueError(f"Unknown piece letter {symbol!r}") from None
        color = Color.LIGHT if symbol.isupper() else Color.DARK
        return cls(color, kind)

    def __str__(self) -> str:
        return self.symbol


Layout = List[Optional[Piece]]


# ── Encoding ──────────────────────────────────────────────────────────

def pieces_to_fen(pieces: Sequence[Optional[Piece]]) -> str:
    """Encode a 64-square layout as a FEN piece-placement field.

    Only the placement is produced – no side to move, castling rights
    or clocks.  Use :func:`fen_to_full` to append default values.
    """
    if len(pieces) != SQUARES:
        raise ValueError(
            f"The layout must contain {SQUARES} squares, got {len(pieces)}"
        )

    rows: List[str] = []
    for rank in range(7, -1, -1):
        row_chars: List[str] = []
        empty_count = 0

        for file in range(8):
            piece = pieces[rank * 8 + file]
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                row_chars.append(str(empty_count))
                empty_count = 0
            row_chars.append(piece.symbol)

        if empty_count > 0:
            row_chars.append(str(empty_count))
        rows.append("".join(row_chars))

    return "/".join(rows)


# ── Decoding ──────────────────────────────────────────────────────────

def fen_to_board(fen: str) -> List[List[Optional[str]]]:
    """Parse the placement field into an 8×8 grid of FEN letters.

    Rows are listed rank 8 first; empty squares are ``None``.

    Raises
    ------
    FenFormatError
        If the field does not describe exactly 8 ranks of 8 squares.
    """
    fields = fen.split() if isinstance(fen, str) else []
    if not fields:
        raise FenFormatError("Invalid FEN position: empty string")

    ranks = fields[0].split("/")
    if len(ranks) != 8:
        raise FenFormatError(f"Invalid FEN position: expected 8 ranks, got {len(ranks)}")

    board: List[List[Optional[str]]] = []
    for rank_idx, rank_str in enumerate(ranks):
        row: List[Optional[str]] = []
        for ch in rank_str:
            if ch.isdigit():
                if not "1" <= ch <= "8":
                    raise FenFormatError(f"Invalid FEN position: bad empty count {ch!r}")
                row.extend([None] * int(ch))
            elif ch.lower() in {k.value for k in Kind}:
                row.append(ch)
            else:
                raise FenFormatError(f"Invalid FEN position: unknown character {ch!r}")
        if len(row) != 8:
            raise FenFormatError(
                f"Invalid FEN position: rank {8 - rank_idx} has {len(row)} squares (expected 8)"
            )
        board.append(row)
    return board


def fen_to_pieces(fen: str) -> Layout:
    """Decode a FEN string into a 64-square layout.

    Only the first space-delimited field (piece placement) is read;
    side to move, castling, en passant and clocks are ignored.
    """
    board = fen_to_board(fen)
    pieces: Layout = [None] * SQUARES
    for row_idx, row in enumerate(board):
        rank = 7 - row_idx
        for file, symbol in enumerate(row):
            if symbol is not None:
                pieces[rank * 8 + file] = Piece.from_symbol(symbol)
    return pieces


# ── Validation ────────────────────────────────────────────────────────

def validate_fen(fen: str) -> Tuple[bool, List[str]]:
    """Check basic legality of a FEN position.

    Returns ``(is_valid, list_of_violation_strings)``.  A malformed
    string is reported as a single violation instead of raising.
    """
    try:
        board = fen_to_board(fen)
    except FenFormatError as exc:
        return False, [str(exc)]

    violations: List[str] = []
    all_pieces = [ch for row in board for ch in row if ch is not None]

    # King counts
    wk = all_pieces.count("K")
    bk = all_pieces.count("k")
    if wk != 1:
        violations.append(f"Light king count = {wk} (expected 1)")
    if bk != 1:
        violations.append(f"Dark king count = {bk} (expected 1)")

    # Pawn counts
    wp = all_pieces.count("P")
    bp = all_pieces.count("p")
    if wp > 8:
        violations.append(f"Light pawn count = {wp} (max 8)")
    if bp > 8:
        violations.append(f"Dark pawn count = {bp} (max 8)")

    # Pawns on rank 1 or 8
    for ch in board[0] + board[7]:
        if ch in ("P", "p"):
            violations.append("Pawn found on rank 1 or 8 (illegal)")
            break

    return len(violations) == 0, violations


def fen_to_full(
    placement: str,
    side: str = "w",
    castling: str = "KQkq",
    en_passant: str = "-",
    halfmove: Union[int, str] = 0,
    fullmove: Union[int, str] = 1,
) -> str:
    """Complete a piece-placement field into a six-field FEN record.

    Fields that are not given take their start-of-game values, so a bare
    placement becomes ``"<placement> w KQkq - 0 1"``.
    """
    if side not in ("w", "b"):
        raise FenFormatError(f"Side to move must be 'w' or 'b', got {side!r}")
    return f"{placement} {side} {castling or '-'} {en_passant or '-'} {halfmove} {fullmove}"
