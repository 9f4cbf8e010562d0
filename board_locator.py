"""
Root entry point – delegates to the board_locator package.

Usage:
    python board_locator.py find    --image screenshot.png --select largest
    python board_locator.py render  --output board.png --tile-size 24
    python board_locator.py fen     "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
"""

from board_locator.main import main

if __name__ == "__main__":
    main()
