"""
Chessboard Locator – Main Entry Point
=====================================

Commands:

  1. **Find**    – Locate every chessboard in an image and print the
                   candidate rectangles (optionally select one, crop it
                   into 64 squares, or save a debug overlay).
  2. **Render**  – Write a synthetic board image, optionally with a FEN
                   position drawn on it.
  3. **Fen**     – Decode a FEN string, show the board and report
                   legality problems.

Usage examples
--------------

**Detection**::

    python board_locator.py find \\
        --image screenshot.png \\
        --select largest \\
        --save-debug boards.png

**Synthetic board**::

    python board_locator.py render \\
        --output board.png \\
        --tile-size 24 \\
        --fen "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

**FEN check**::

    python board_locator.py fen "8/8/4k3/8/8/4K3/4P3/8 w - - 0 1"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import cv2

from board_locator.console import configure_logging

log = logging.getLogger("board_locator")


# ═══════════════════════════════════════════════════════════════════════
# Find
# ═══════════════════════════════════════════════════════════════════════

def _build_config(args: argparse.Namespace):
    """JSON config file (if any) overlaid with explicit command-line flags."""
    from board_locator.detection.search import SearchConfig

    options = SearchConfig.load(args.config).to_dict() if args.config else {}
    overrides = {
        "max_color_delta": args.max_color_delta,
        "segment_ratio_tolerance": args.segment_ratio_tolerance,
        "min_tile_size": args.min_tile_size,
    }
    options.update({k: v for k, v in overrides.items() if v is not None})
    if args.no_adapt:
        options["adapt_color_during_scan"] = False
    return SearchConfig.from_dict(options)


def cmd_find(args: argparse.Namespace) -> int:
    """Run the board search on an image."""
    from board_locator.detection.extractor import BoardExtractor
    from board_locator.detection.selector import select_board

    try:
        config = _build_config(args)
        extractor = BoardExtractor(args.image, config)
    except (OSError, ValueError) as exc:
        log.error("%s", exc)
        return 1

    candidates = extractor.find_chessboards()
    selected = select_board(candidates, args.select) if args.select else None

    # Output
    if args.json:
        output = {
            "image": str(args.image),
            "config": config.to_dict(),
            "candidates": [c.to_dict() for c in candidates],
            "selected": selected.to_dict() if selected else None,
        }
        print(json.dumps(output, indent=2))
    else:
        print(f"{len(candidates)} candidate(s) in {args.image}")
        for index, cand in enumerate(candidates):
            marker = "*" if cand == selected else " "
            print(f" {marker} #{index}: x={cand.x} y={cand.y} "
                  f"width={cand.width} height={cand.height}")
        if args.select:
            print(f"Selected ({args.select}): "
                  f"{selected.to_dict() if selected else 'none found'}")

    try:
        if args.save_debug:
            extractor.save_debug(args.save_debug, candidates, selected)

        if args.squares_dir:
            board = selected or (candidates[0] if candidates else None)
            if board is None:
                log.warning("No board to split into squares")
            else:
                _write_squares(extractor, board, Path(args.squares_dir))
    except (OSError, ValueError) as exc:
        log.error("%s", exc)
        return 1

    return 0


def _write_squares(extractor, board, out_dir: Path) -> None:
    files = "abcdefgh"
    out_dir.mkdir(parents=True, exist_ok=True)
    squares = extractor.extract_squares(board)
    for index, square in enumerate(squares):
        name = f"{files[index % 8]}{8 - index // 8}.png"
        path = out_dir / name
        if not cv2.imwrite(str(path), square):
            raise ValueError(f"Could not write square image to {path}")
    log.info("Wrote %d squares to %s", len(squares), out_dir)


# ═══════════════════════════════════════════════════════════════════════
# Render
# ═══════════════════════════════════════════════════════════════════════

def _parse_rgb(text: str):
    parts = text.split(",")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Expected R,G,B but got {text!r}")
    try:
        rgb = tuple(int(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected integers in {text!r}") from None
    if any(not 0 <= c <= 255 for c in rgb):
        raise argparse.ArgumentTypeError(f"Channel values must be 0-255: {text!r}")
    return rgb


def cmd_render(args: argparse.Namespace) -> int:
    """Write a synthetic board image."""
    from board_locator.notation.fen import FenFormatError
    from board_locator.rendering.synthetic import BOARD_COLORS, place_boards, render_board

    light, dark = BOARD_COLORS[args.palette % len(BOARD_COLORS)]
    try:
        board = render_board(args.tile_size, light, dark, fen=args.fen)
    except (FenFormatError, ValueError) as exc:
        log.error("%s", exc)
        return 1

    if args.margin < 0:
        log.error("--margin must be >= 0, got %d", args.margin)
        return 1

    size = (board.width + 2 * args.margin, board.height + 2 * args.margin)
    try:
        canvas = place_boards(size, [(board, (args.margin, args.margin))], args.background)
        canvas.save(args.output)
    except (OSError, ValueError) as exc:
        log.error("%s", exc)
        return 1
    log.info("Rendered %dx%d board (tile=%d) to %s",
             board.width, board.height, args.tile_size, args.output)
    return 0


# ═══════════════════════════════════════════════════════════════════════
# FEN
# ═══════════════════════════════════════════════════════════════════════

def cmd_fen(args: argparse.Namespace) -> int:
    """Decode, display and re-encode a FEN position."""
    from board_locator.notation.fen import (
        FenFormatError,
        fen_to_board,
        fen_to_full,
        fen_to_pieces,
        pieces_to_fen,
        validate_fen,
    )

    try:
        board = fen_to_board(args.fen)
        pieces = fen_to_pieces(args.fen)
        placement = pieces_to_fen(pieces)
        full = fen_to_full(placement, *args.fen.split()[1:6])
    except FenFormatError as exc:
        log.error("%s", exc)
        return 1

    for row_idx, row in enumerate(board):
        cells = " ".join(ch or "." for ch in row)
        print(f"{8 - row_idx} {cells}")
    print("  a b c d e f g h")
    print(f"Placement : {placement}")
    print(f"Full FEN  : {full}")

    is_valid, violations = validate_fen(args.fen)
    print(f"Legal     : {is_valid}")
    for violation in violations:
        print(f"  - {violation}")
    return 0


# ═══════════════════════════════════════════════════════════════════════
# CLI
# ═══════════════════════════════════════════════════════════════════════

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="board_locator",
        description="Locate axis-aligned chessboards in raster images.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="Log debug messages")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="Only log warnings and errors")
    sub = parser.add_subparsers(dest="command", help="Available commands")

    # ── find ──
    p_find = sub.add_parser("find", help="Find chessboards in an image")
    p_find.add_argument("--image", required=True,
                        help="Path to the image to search")
    p_find.add_argument("--config", default=None,
                        help="JSON file with search options")
    p_find.add_argument("--max-color-delta", type=float, default=None)
    p_find.add_argument("--segment-ratio-tolerance", type=float, default=None)
    p_find.add_argument("--min-tile-size", type=int, default=None)
    p_find.add_argument("--no-adapt", action="store_true",
                        help="Compare against each run's first pixel only")
    p_find.add_argument("--select", default=None, choices=["largest", "smallest"],
                        help="Pick one board among the candidates")
    p_find.add_argument("--json", action="store_true",
                        help="Print results as JSON")
    p_find.add_argument("--save-debug", default=None,
                        help="Save an annotated image to path")
    p_find.add_argument("--squares-dir", default=None,
                        help="Write the 64 squares of the chosen board here")

    # ── render ──
    p_render = sub.add_parser("render", help="Render a synthetic board")
    p_render.add_argument("--output", required=True)
    p_render.add_argument("--tile-size", type=int, default=24)
    p_render.add_argument("--palette", type=int, default=0,
                          help="Index into the board colour palette")
    p_render.add_argument("--fen", default=None,
                          help="Position to draw on the board")
    p_render.add_argument("--margin", type=int, default=13)
    p_render.add_argument("--background", type=_parse_rgb, default=(0, 0, 0),
                          help="Canvas colour as R,G,B")

    # ── fen ──
    p_fen = sub.add_parser("fen", help="Decode and check a FEN string")
    p_fen.add_argument("fen")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    configure_logging(level)

    dispatch = {
        "find": cmd_find,
        "render": cmd_render,
        "fen": cmd_fen,
    }

    sys.exit(dispatch[args.command](args))


if __name__ == "__main__":
    main()
