"""Pick one board out of the candidates found by the search."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Union

from board_locator.detection.search import Candidate


class BoardOption(str, Enum):
    LARGEST = "largest"
    SMALLEST = "smallest"

    @classmethod
    def coerce(cls, option: Union["BoardOption", str]) -> "BoardOption":
        if isinstance(option, BoardOption):
            return option
        if isinstance(option, str):
            try:
                return cls(option.lower())
            except ValueError:
                pass
        raise ValueError(f"Invalid board option: {option!r}")


def select_board(
    candidates: Iterable[Candidate],
    option: Union[BoardOption, str] = BoardOption.LARGEST,
) -> Optional[Candidate]:
    """Return the largest or smallest candidate by ``width + height``.

    ``None`` when there are no candidates.  Which of several equally
    sized candidates wins is not specified.
    """
    option = BoardOption.coerce(option)
    ranked = sorted(candidates, key=lambda c: c.size, reverse=True)
    if not ranked:
        return None
    return ranked[0] if option is BoardOption.LARGEST else ranked[-1]
