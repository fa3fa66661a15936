"""
Unit tests for mapping a grid path back onto the image and drawing it.
"""

import numpy as np
import pytest

from maze_solver.imaging import BoundingBox
from maze_solver.overlay import (default_thickness, draw_path, normalize_path,
                                 path_length_px, project_points, render_overlay)


class TestNormalizePath:
    def test_cell_centres(self):
        pts = normalize_path([(0, 0), (6, 6)], cell_size=3, crop_w=21, crop_h=21)
        assert pts[0] == pytest.approx((1.5 / 20, 1.5 / 20))
        assert pts[1] == pytest.approx((19.5 / 20, 19.5 / 20))

    def test_centres_past_the_crop_are_clamped(self):
        """The last cell of a clipped column has its centre outside the crop."""
        pts = normalize_path([(1, 0)], cell_size=3, crop_w=4, crop_h=4)
        assert pts[0] == pytest.approx((1.0, 0.5))

    def test_single_pixel_crop(self):
        assert normalize_path([(0, 0)], cell_size=3, crop_w=1, crop_h=1) == [(0.0, 0.0)]


class TestProjectPoints:
    def test_offsets_by_bbox_origin(self):
        box = BoundingBox(10, 7, 30, 27)
        assert project_points([(0.0, 0.0), (0.5, 1.0)], box) == [(10, 7), (20, 27)]

    def test_out_of_range_is_clamped(self):
        box = BoundingBox(0, 0, 9, 9)
        assert project_points([(-0.5, 1.5)], box) == [(0, 9)]


class TestDrawing:
    """Tests for draw_path / render_overlay."""

    def test_original_is_not_modified(self, maze_image):
        before = maze_image.copy()
        box = BoundingBox(0, 0, 20, 20)
        out, points, pixels = render_overlay(maze_image, box, [(1, 0), (1, 1), (2, 1)], 3)
        assert np.array_equal(maze_image, before)
        assert out.shape == maze_image.shape
        assert not np.array_equal(out, maze_image)
        assert len(points) == len(pixels) == 3

    def test_pixels_stay_inside_bbox(self, framed_maze_image):
        box = BoundingBox(10, 7, 30, 27)
        _, _, pixels = render_overlay(framed_maze_image, box, [(0, 0), (6, 0), (6, 6)], 3)
        for x, y in pixels:
            assert box.min_x <= x <= box.max_x
            assert box.min_y <= y <= box.max_y

    def test_path_is_drawn_in_red(self):
        img = np.full((40, 40, 3), 255, dtype=np.uint8)
        out = draw_path(img, [(5, 20), (35, 20)], markers=False)
        b, g, r = (int(v) for v in out[20, 20])
        assert r > 200 and g < 60 and b < 60

    def test_single_point_only_gets_markers(self):
        img = np.full((20, 20, 3), 255, dtype=np.uint8)
        out = draw_path(img, [(10, 10)])
        assert not np.array_equal(out, img)

    def test_default_thickness(self):
        assert default_thickness(np.zeros((10, 100, 3), np.uint8)) == 3
        assert default_thickness(np.zeros((10, 1000, 3), np.uint8)) == 5


def test_path_length_px():
    assert path_length_px([(0, 0), (3, 4), (3, 10)]) == pytest.approx(11.0)
    assert path_length_px([(1, 1)]) == 0.0
