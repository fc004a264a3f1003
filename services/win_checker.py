"""
Win checker.

Only the lines passing through the last move can have been completed by
it, so `check_win` looks at that move's row, its column, and the
diagonals it lies on. Lines are checked in the order row, column,
forward diagonal, backward diagonal and the first complete one is
reported.

Tie detection belongs to the caller: a board is tied when `check_win`
returns None and the board is full.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board, Mark


class LineKind(str, Enum):
    ROW = "row"
    COLUMN = "column"
    DIAGONAL = "diagonal"


FORWARD = 1    # top-left to bottom-right
BACKWARD = -1  # top-right to bottom-left


@dataclass(frozen=True)
class WinLine:
    """A completed line.

    `index` is the row or column number, or FORWARD/BACKWARD for diagonals.
    """
    kind: LineKind
    index: int

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "index": self.index}

    @classmethod
    def from_dict(cls, data: dict) -> "WinLine":
        return cls(LineKind(data["kind"]), int(data["index"]))


def Row(r: int) -> WinLine:
    return WinLine(LineKind.ROW, r)


def Column(c: int) -> WinLine:
    return WinLine(LineKind.COLUMN, c)


def Diagonal(direction: int) -> WinLine:
    if direction not in (FORWARD, BACKWARD):
        raise ValueError(f"Diagonal direction must be 1 or -1, got {direction}")
    return WinLine(LineKind.DIAGONAL, direction)


def line_cells(line: WinLine, size: int) -> list[int]:
    """Return the board indices covered by `line` on a `size` x `size` board."""
    if line.kind is LineKind.ROW:
        return [size * line.index + c for c in range(size)]
    if line.kind is LineKind.COLUMN:
        return [size * r + line.index for r in range(size)]
    if line.index == FORWARD:
        return [size * i + i for i in range(size)]
    return [size * i + (size - i - 1) for i in range(size)]


def _complete(board: Board, line: WinLine, mark: Mark) -> bool:
    return all(board[i] is mark for i in line_cells(line, board.size))


def check_win(board: Board, move: int) -> Optional[WinLine]:
    """Return the line completed by the mark at `move`, or None."""
    mark = board[move]
    if mark is Mark.EMPTY:
        return None

    size = board.size
    row = board.row_of(move)
    col = board.col_of(move)

    candidates = [Row(row), Column(col)]
    if row == col:
        candidates.append(Diagonal(FORWARD))
    if row + col == size - 1:
        candidates.append(Diagonal(BACKWARD))

    for line in candidates:
        if _complete(board, line, mark):
            return line
    return None
