"""
overlay.py
----------
Map a grid path back into the original image and draw it.

Grid cells -> cell centres in the crop -> normalised [0,1] coordinates ->
pixels in the original image (bbox origin + n * crop span).
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from .config import (GOAL_COLOR_BGR, MARKER_RADIUS_PX, MIN_PATH_THICKNESS_PX,
                     PATH_COLOR_BGR, START_COLOR_BGR)
from .imaging import BoundingBox


def normalize_path(path: Sequence[Tuple[int, int]], cell_size: int,
                   crop_w: int, crop_h: int) -> List[Tuple[float, float]]:
    """Cell centres clamped into the crop, as fractions of the crop span."""
    span_x, span_y = crop_w - 1, crop_h - 1
    out = []
    for c, r in path:
        cx = min(max((c + 0.5) * cell_size, 0.0), float(span_x))
        cy = min(max((r + 0.5) * cell_size, 0.0), float(span_y))
        out.append((cx / span_x if span_x > 0 else 0.0,
                    cy / span_y if span_y > 0 else 0.0))
    return out


def project_points(points: Sequence[Tuple[float, float]],
                   bbox: BoundingBox) -> List[Tuple[int, int]]:
    """Normalised crop coordinates -> integer pixels in the original image."""
    span_x, span_y = bbox.width - 1, bbox.height - 1
    out = []
    for nx, ny in points:
        nx = min(max(nx, 0.0), 1.0)
        ny = min(max(ny, 0.0), 1.0)
        out.append((int(round(bbox.min_x + nx * span_x)),
                    int(round(bbox.min_y + ny * span_y))))
    return out


def default_thickness(img: np.ndarray) -> int:
    return max(MIN_PATH_THICKNESS_PX, img.shape[1] // 200)


def path_length_px(pixels: Sequence[Tuple[int, int]]) -> float:
    length = 0.0
    for (x0, y0), (x1, y1) in zip(pixels[:-1], pixels[1:]):
        length += float(((x1 - x0) ** 2 + (y1 - y0) ** 2) ** 0.5)
    return length


def draw_path(base_bgr: np.ndarray, pixels: Sequence[Tuple[int, int]],
              color=PATH_COLOR_BGR, thickness: Optional[int] = None,
              markers: bool = True) -> np.ndarray:
    """Polyline + start/goal dots on a copy of base_bgr."""
    out = base_bgr.copy()
    if thickness is None:
        thickness = default_thickness(out)
    if len(pixels) >= 2:
        pts = np.asarray(pixels, dtype=np.int32).reshape(-1, 1, 2)
        cv2.polylines(out, [pts], isClosed=False, color=tuple(int(c) for c in color),
                      thickness=int(thickness), lineType=cv2.LINE_AA)
    if markers and pixels:
        cv2.circle(out, tuple(map(int, pixels[0])), MARKER_RADIUS_PX, START_COLOR_BGR, -1)
        cv2.circle(out, tuple(map(int, pixels[-1])), MARKER_RADIUS_PX, GOAL_COLOR_BGR, -1)
    return out


def render_overlay(img: np.ndarray, bbox: BoundingBox,
                   path: Sequence[Tuple[int, int]], cell_size: int,
                   color=PATH_COLOR_BGR, thickness: Optional[int] = None):
    """
    Draw the solved path on a copy of the original image.
    Returns (overlay_bgr, normalised_points, path_pixels_in_original_space).
    """
    points = normalize_path(path, cell_size, bbox.width, bbox.height)
    pixels = project_points(points, bbox)
    return draw_path(img, pixels, color=color, thickness=thickness), points, pixels
