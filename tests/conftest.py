"""
Pytest configuration and shared fixtures for the maze solver tests.

Maze images are rendered from hand-written grids: '.' is corridor (white),
'#' is wall (black), each cell scaled up to a square block of pixels.
"""

import cv2
import numpy as np
import pytest

from maze_solver.grid import TraversabilityGrid

MAZE_7 = [
    "#.#####",
    "#...#.#",
    "###.#.#",
    "#...#.#",
    "#.###.#",
    "#.....#",
    "#####.#",
]


def parse_rows(rows):
    return [[ch == "." for ch in row] for row in rows]


def render_rows(rows, scale=3):
    """Upscaled BGR image of an ASCII maze."""
    arr = np.array(parse_rows(rows), dtype=bool)
    gray = np.where(arr, 255, 0).astype(np.uint8)
    gray = np.repeat(np.repeat(gray, scale, axis=0), scale, axis=1)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


@pytest.fixture
def maze_rows():
    return list(MAZE_7)


@pytest.fixture
def maze_grid(maze_rows):
    return TraversabilityGrid.from_rows(parse_rows(maze_rows))


@pytest.fixture
def maze_image(maze_rows):
    """The 7x7 maze at 3 px per cell, filling the whole image."""
    return render_rows(maze_rows, scale=3)


@pytest.fixture
def framed_maze_image(maze_rows):
    """The same maze pasted at (10, 7) on a larger white canvas."""
    canvas = np.full((50, 60, 3), 255, dtype=np.uint8)
    maze = render_rows(maze_rows, scale=3)
    canvas[7:7 + maze.shape[0], 10:10 + maze.shape[1]] = maze
    return canvas


@pytest.fixture
def grid_from():
    """Build a TraversabilityGrid from ASCII rows."""
    def _build(rows):
        return TraversabilityGrid.from_rows(parse_rows(rows))
    return _build


@pytest.fixture
def image_from():
    """Render ASCII rows to an upscaled BGR image."""
    return render_rows
