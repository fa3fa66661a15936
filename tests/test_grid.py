"""
Unit tests for the traversability grid: rasterizer, opening locator and sealer.
"""

import numpy as np
import pytest

from maze_solver.errors import NoOpeningsFound
from maze_solver.grid import (GridPoint, TraversabilityGrid, border_cells, border_openings,
                              border_scan, build_grid, find_openings, seal_border)


class TestTraversabilityGrid:
    def test_flat_row_major_storage(self, grid_from):
        grid = grid_from(["..#",
                          "#.."])
        assert (grid.width, grid.height) == (3, 2)
        assert grid.cells.tolist() == [True, True, False, False, True, True]
        assert grid.index((2, 1)) == 5

    def test_is_free_outside_grid(self, grid_from):
        grid = grid_from(["..", ".."])
        assert not grid.is_free((2, 0))
        assert not grid.is_free((-1, 0))

    def test_rejects_wrong_cell_count(self):
        with pytest.raises(ValueError):
            TraversabilityGrid(3, 3, np.ones(8, dtype=bool))

    def test_render(self, grid_from):
        rows = ["#.", ".#"]
        assert grid_from(rows).render() == "#.\n.#"


class TestBuildGrid:
    """Tests for build_grid (majority-vote rasterization)."""

    def test_recovers_rendered_maze(self, maze_image, maze_grid):
        """Should reproduce the grid an image was rendered from."""
        assert build_grid(maze_image, cell_size=3) == maze_grid

    def test_is_deterministic(self, maze_image):
        assert build_grid(maze_image) == build_grid(maze_image)

    def test_dimensions_round_up(self):
        img = np.full((7, 10, 3), 255, dtype=np.uint8)
        grid = build_grid(img, cell_size=3)
        assert (grid.width, grid.height) == (4, 3)

    def test_clipped_edge_blocks_use_covered_pixels(self):
        """A 4x4 white image at cell size 3 has 1-pixel-wide edge blocks that are still free."""
        img = np.full((4, 4, 3), 255, dtype=np.uint8)
        grid = build_grid(img, cell_size=3)
        assert grid.free_count() == 4

    def test_free_ratio_is_strict(self):
        """Exactly 70% corridor is a wall; 80% is free."""
        img = np.zeros((1, 10, 3), dtype=np.uint8)
        img[0, :7] = 255
        assert build_grid(img, cell_size=10).free_count() == 0
        img[0, :8] = 255
        assert build_grid(img, cell_size=10).free_count() == 1

    def test_white_threshold_is_strict(self):
        img = np.zeros((3, 3, 3), dtype=np.uint8)
        img[:] = (0, 255, 0)    # luminance 182
        assert build_grid(img, white_luminance=182).free_count() == 0
        assert build_grid(img, white_luminance=181).free_count() == 1

    def test_thin_wall_line_is_absorbed(self):
        """One dark pixel in a 3x3 block leaves it at 8/9 corridor, still free."""
        img = np.full((3, 3, 3), 255, dtype=np.uint8)
        img[1, 1] = 0
        assert build_grid(img, cell_size=3).free_count() == 1

    def test_rejects_bad_cell_size(self, maze_image):
        with pytest.raises(ValueError):
            build_grid(maze_image, cell_size=0)


class TestOpenings:
    """Tests for border scanning and find_openings."""

    def test_border_scan_order(self):
        """Top row, bottom row, left column, right column; corners in both passes."""
        assert border_scan(3, 3) == [
            (0, 0), (1, 0), (2, 0),
            (0, 2), (1, 2), (2, 2),
            (0, 0), (0, 1), (0, 2),
            (2, 0), (2, 1), (2, 2),
        ]

    def test_border_cells_are_distinct(self):
        assert border_cells(3, 3) == [
            (0, 0), (1, 0), (2, 0),
            (0, 2), (1, 2), (2, 2),
            (0, 1),
            (2, 1),
        ]

    def test_goal_on_bottom_right_corner(self, grid_from):
        """Should pick the bottom-right corner over a free left-column cell."""
        grid = grid_from(["#.##",
                          "#..#",
                          "...#",
                          "###."])
        assert find_openings(grid) == ((1, 0), (3, 3))
        assert border_openings(grid) == [(1, 0), (3, 3), (0, 2)]

    def test_top_left_corner_start_keeps_distinct_goal(self, grid_from):
        grid = grid_from([".##",
                          "#.#",
                          "#.#",
                          "#.#"])
        assert find_openings(grid) == ((0, 0), (1, 3))

    def test_finds_both_openings(self, maze_grid):
        assert find_openings(maze_grid) == (GridPoint(1, 0), GridPoint(5, 6))

    def test_scan_order_extremes_with_many_openings(self, grid_from):
        grid = grid_from(["#.#.#",
                          ".....",
                          "#...#",
                          "##.##"])
        assert border_openings(grid) == [(1, 0), (3, 0), (2, 3), (0, 1), (4, 1)]
        assert find_openings(grid) == ((1, 0), (4, 1))

    def test_too_few_openings(self, grid_from):
        grid = grid_from(["#.###",
                          "#...#",
                          "#####"])
        with pytest.raises(NoOpeningsFound):
            find_openings(grid)

    def test_single_free_corner_is_one_opening(self, grid_from):
        grid = grid_from([".##",
                          "#.#",
                          "###"])
        assert border_openings(grid) == [(0, 0)]
        with pytest.raises(NoOpeningsFound):
            find_openings(grid)


class TestSealBorder:
    """Tests for seal_border."""

    def test_only_start_and_goal_stay_open(self, grid_from):
        grid = grid_from([".....",
                          ".....",
                          ".....",
                          "....."])
        start, goal = find_openings(grid)
        closed = seal_border(grid, start, goal)
        for p in border_cells(grid.width, grid.height):
            assert grid.is_free(p) == (p in (start, goal))
        assert closed == 14 - 2

    def test_interior_untouched(self, maze_grid):
        before = maze_grid.as_array()[1:-1, 1:-1].copy()
        seal_border(maze_grid, GridPoint(1, 0), GridPoint(5, 6))
        assert np.array_equal(maze_grid.as_array()[1:-1, 1:-1], before)
        assert maze_grid.is_free((1, 0))
        assert maze_grid.is_free((5, 6))
