"""Text rendering of a board for Slack messages.

While the game is open, empty cells show their index so players know
what to pass to `/ttt play`. Once a line is won, empty cells show `_`
and the cells of the winning line are wrapped in backticks.
"""
from typing import Optional

from .board import Board, Mark
from .win_checker import WinLine, line_cells


def draw(board: Board, win_line: Optional[WinLine] = None) -> str:
    size = board.size
    highlighted = set(line_cells(win_line, size)) if win_line else set()

    rows = []
    for r in range(size):
        row = "|"
        for c in range(size):
            index = board.index_of(r, c)
            mark = board[index]
            if mark is Mark.EMPTY:
                symbol = " `_`" if win_line else f" `{index}`"
            elif index in highlighted:
                symbol = f" `{mark.symbol}`"
            else:
                symbol = f" {mark.symbol} "
            row += f" {symbol} |"
        rows.append(row)
    return "\n".join(rows) + "\n"
