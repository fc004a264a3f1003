"""
Board model.

A board is a flat sequence of `size * size` cells; index `i` sits at
row `i // size`, column `i % size`. Boards are immutable: `place` returns
a new board with one cell set.
"""
from __future__ import annotations

import math
from enum import IntEnum
from typing import Iterable, Iterator

from .exceptions import CellOccupied, InvalidBoard, OutOfRange

DEFAULT_SIZE = 3


class Mark(IntEnum):
    EMPTY = 0
    X = 1  # player at index 0
    O = 2  # player at index 1

    @property
    def symbol(self) -> str:
        return " " if self is Mark.EMPTY else self.name


class Board:

    __slots__ = ("_cells", "_size")

    def __init__(self, cells: Iterable[int] | None = None, size: int = DEFAULT_SIZE):
        if cells is None:
            if size < 1:
                raise InvalidBoard(f"Board size must be positive, got {size}")
            cells = [Mark.EMPTY] * (size * size)
        cells = tuple(Mark(c) for c in cells)
        root = math.isqrt(len(cells))
        if root < 1 or root * root != len(cells):
            raise InvalidBoard(f"Board length {len(cells)} is not a perfect square")
        self._cells = cells
        self._size = root

    @classmethod
    def empty(cls, size: int = DEFAULT_SIZE) -> "Board":
        return cls(size=size)

    @property
    def size(self) -> int:
        return self._size

    @property
    def cells(self) -> tuple[Mark, ...]:
        return self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> Mark:
        return self._cells[index]

    def __iter__(self) -> Iterator[Mark]:
        return iter(self._cells)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"Board({[int(c) for c in self._cells]!r})"

    def row_of(self, index: int) -> int:
        return index // self._size

    def col_of(self, index: int) -> int:
        return index % self._size

    def index_of(self, row: int, col: int) -> int:
        return row * self._size + col

    def place(self, index: int, mark: Mark) -> "Board":
        """Return a copy of this board with `mark` at `index`.

        Raises:
            OutOfRange: if index is not in [0, len(board)).
            CellOccupied: if the cell already holds a mark.
        """
        if mark is Mark.EMPTY:
            raise ValueError("Cannot place an empty mark")
        if not 0 <= index < len(self._cells):
            raise OutOfRange(index, len(self._cells))
        if self._cells[index] is not Mark.EMPTY:
            raise CellOccupied(index)
        cells = list(self._cells)
        cells[index] = mark
        return Board(cells)

    def is_full(self) -> bool:
        return Mark.EMPTY not in self._cells

    def empty_cells(self) -> list[int]:
        return [i for i, c in enumerate(self._cells) if c is Mark.EMPTY]

    def to_list(self) -> list[int]:
        return [int(c) for c in self._cells]
