"""
grid.py
-------
Traversability grid: rasterizer, border-opening locator and border sealer.

The grid is a flat row-major bool array (True = free) plus width/height, so
neighbour lookups in the search are plain index arithmetic.
"""

from __future__ import annotations

from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from .config import DEFAULT_CELL_SIZE, DEFAULT_FREE_RATIO, DEFAULT_WHITE_LUMINANCE
from .errors import NoOpeningsFound
from .imaging import luminance


class GridPoint(NamedTuple):
    col: int
    row: int


class TraversabilityGrid:
    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int, cells: np.ndarray):
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1 (got {width}x{height})")
        cells = np.asarray(cells, dtype=bool).ravel()
        if cells.size != width * height:
            raise ValueError(f"Expected {width * height} cells, got {cells.size}")
        self.width = int(width)
        self.height = int(height)
        self.cells = cells.copy()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[bool]]) -> "TraversabilityGrid":
        """Build from nested rows (row 0 first); handy for hand-written grids."""
        arr = np.array(rows, dtype=bool)
        if arr.ndim != 2:
            raise ValueError("Rows must form a rectangle")
        return cls(arr.shape[1], arr.shape[0], arr)

    def index(self, p: Tuple[int, int]) -> int:
        return p[1] * self.width + p[0]

    def contains(self, p: Tuple[int, int]) -> bool:
        return 0 <= p[0] < self.width and 0 <= p[1] < self.height

    def is_free(self, p: Tuple[int, int]) -> bool:
        return self.contains(p) and bool(self.cells[self.index(p)])

    def set_free(self, p: Tuple[int, int], free: bool) -> None:
        self.cells[self.index(p)] = bool(free)

    def is_border(self, p: Tuple[int, int]) -> bool:
        c, r = p
        return c == 0 or r == 0 or c == self.width - 1 or r == self.height - 1

    def as_array(self) -> np.ndarray:
        """HxW view of the cells."""
        return self.cells.reshape(self.height, self.width)

    def free_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def copy(self) -> "TraversabilityGrid":
        return TraversabilityGrid(self.width, self.height, self.cells)

    def __eq__(self, other):
        if not isinstance(other, TraversabilityGrid):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and \
            bool(np.array_equal(self.cells, other.cells))

    def __repr__(self):
        return f"TraversabilityGrid({self.width}x{self.height}, free={self.free_count()})"

    def render(self, free: str = ".", wall: str = "#") -> str:
        return "\n".join("".join(free if v else wall for v in row) for row in self.as_array())


# -------------------- Rasterizer --------------------
def build_grid(cropped: np.ndarray,
               cell_size: int = DEFAULT_CELL_SIZE,
               white_luminance: int = DEFAULT_WHITE_LUMINANCE,
               free_ratio: float = DEFAULT_FREE_RATIO) -> TraversabilityGrid:
    """
    Majority-vote downsampling: a cell is free when more than `free_ratio` of
    the pixels in its block are corridor (luminance > white_luminance).
    Blocks clipped by the image edge only count the pixels they cover.
    """
    cell_size = int(cell_size)
    if cell_size < 1:
        raise ValueError(f"cell_size must be >= 1 (got {cell_size})")
    H, W = cropped.shape[:2]
    gw = (W + cell_size - 1) // cell_size
    gh = (H + cell_size - 1) // cell_size

    white = (luminance(cropped) > int(white_luminance)).astype(np.int32)
    covered = np.ones((H, W), dtype=np.int32)
    pad = ((0, gh * cell_size - H), (0, gw * cell_size - W))
    white = np.pad(white, pad)
    covered = np.pad(covered, pad)

    white_count = white.reshape(gh, cell_size, gw, cell_size).sum(axis=(1, 3))
    total = covered.reshape(gh, cell_size, gw, cell_size).sum(axis=(1, 3))
    ratio = white_count / total
    return TraversabilityGrid(gw, gh, ratio > free_ratio)


# -------------------- Openings --------------------
def border_scan(width: int, height: int) -> List[GridPoint]:
    """
    Border cells in scan order: top row L->R, bottom row L->R,
    left column T->B, right column T->B.
    Corners appear in both their row pass and their column pass.
    """
    return ([GridPoint(c, 0) for c in range(width)]
            + [GridPoint(c, height - 1) for c in range(width)]
            + [GridPoint(0, r) for r in range(height)]
            + [GridPoint(width - 1, r) for r in range(height)])


def border_cells(width: int, height: int) -> List[GridPoint]:
    """Every border cell once, in first-seen scan order."""
    return list(dict.fromkeys(border_scan(width, height)))


def border_openings(grid: TraversabilityGrid) -> List[GridPoint]:
    """Distinct free border cells, in first-seen scan order."""
    return [p for p in border_cells(grid.width, grid.height) if grid.is_free(p)]


def find_openings(grid: TraversabilityGrid) -> Tuple[GridPoint, GridPoint]:
    """
    First and last free border cell in scan order.
    A free bottom-right corner is seen last by the right-column pass, so it wins
    the goal over free left-column cells. At least two distinct free cells are
    needed; a lone free corner does not count twice. When the top-left corner
    is both first and last hit, the goal is the last other free cell.
    With more than two openings this picks the scan-order extremes, which are
    not necessarily the intended entrance and exit.
    """
    hits = [p for p in border_scan(grid.width, grid.height) if grid.is_free(p)]
    distinct = len(set(hits))
    if distinct < 2:
        raise NoOpeningsFound(
            f"Could not find maze entrances ({distinct} free border cell(s), need 2).")
    start = hits[0]
    goal = next(p for p in reversed(hits) if p != start)
    return start, goal


# -------------------- Sealing --------------------
def seal_border(grid: TraversabilityGrid, start: GridPoint, goal: GridPoint) -> int:
    """Wall off every border cell except start and goal. Returns cells closed."""
    keep = {tuple(start), tuple(goal)}
    closed = 0
    for p in border_cells(grid.width, grid.height):
        if tuple(p) in keep:
            continue
        if grid.is_free(p):
            closed += 1
        grid.set_free(p, False)
    return closed
