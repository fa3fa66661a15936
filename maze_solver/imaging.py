"""
imaging.py
----------
Image I/O and the frame extractor.

Images are OpenCV BGR arrays (uint8, HxWx3). Everything here returns new
arrays; inputs are never written to.
"""

from __future__ import annotations

import os
from typing import NamedTuple, Union

import cv2
import numpy as np

from .config import DEFAULT_BBOX_PADDING, DEFAULT_WALL_LUMINANCE
from .errors import EmptyOrUnloadableImage

# Rec. 709 weights, applied to R, G, B
LUMA_R, LUMA_G, LUMA_B = 0.2126, 0.7152, 0.0722


class BoundingBox(NamedTuple):
    """Inclusive pixel rectangle."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def origin(self):
        return (self.min_x, self.min_y)


# -------------------- Loading / encoding --------------------
def to_bgr(img: np.ndarray) -> np.ndarray:
    """Normalise grayscale / BGRA input to 3-channel BGR uint8."""
    if img is None or img.size == 0:
        raise EmptyOrUnloadableImage("Image is empty.")
    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    if img.ndim == 3 and img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
    if img.ndim == 3 and img.shape[2] == 3:
        return img
    raise EmptyOrUnloadableImage(f"Unsupported image shape: {img.shape}")


def load_image(path: Union[str, os.PathLike]) -> np.ndarray:
    """Read PNG/JPEG/BMP/WebP from disk."""
    path = os.fspath(path)
    if not os.path.exists(path):
        raise EmptyOrUnloadableImage(f"Image not found: {path}")
    img = cv2.imread(path, cv2.IMREAD_COLOR)
    if img is None:
        raise EmptyOrUnloadableImage(f"Failed to load image: {path}")
    return to_bgr(img)


def decode_image(data: bytes) -> np.ndarray:
    """Decode an encoded image held in memory (e.g. an upload)."""
    if not data:
        raise EmptyOrUnloadableImage("No image data.")
    buf = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buf, cv2.IMREAD_COLOR)
    if img is None:
        raise EmptyOrUnloadableImage("Failed to decode image data.")
    return to_bgr(img)


def encode_png(img: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", img)
    if not ok:
        raise RuntimeError("PNG encoding failed.")
    return buf.tobytes()


def save_png(path: Union[str, os.PathLike], img: np.ndarray) -> None:
    path = os.fspath(path)
    if not cv2.imwrite(path, img):
        raise OSError(f"Could not write image: {path}")


# -------------------- Luminance --------------------
def luminance(img: np.ndarray) -> np.ndarray:
    """Integer luminance per pixel (truncated toward zero), shape HxW."""
    bgr = img.astype(np.float64)
    lum = LUMA_R * bgr[..., 2] + LUMA_G * bgr[..., 1] + LUMA_B * bgr[..., 0]
    return lum.astype(np.int32)


# -------------------- Frame extractor --------------------
def find_maze_bbox(img: np.ndarray,
                   wall_luminance: int = DEFAULT_WALL_LUMINANCE,
                   padding: int = DEFAULT_BBOX_PADDING) -> BoundingBox:
    """
    Bounding box of every dark (wall/frame) pixel, grown by `padding` and
    clamped to the image. Falls back to the whole image when nothing is dark.
    """
    H, W = img.shape[:2]
    dark = luminance(img) < int(wall_luminance)
    ys, xs = np.nonzero(dark)
    if xs.size == 0:
        return BoundingBox(0, 0, W - 1, H - 1)
    return BoundingBox(max(0, int(xs.min()) - padding),
                       max(0, int(ys.min()) - padding),
                       min(W - 1, int(xs.max()) + padding),
                       min(H - 1, int(ys.max()) + padding))


def crop(img: np.ndarray, bbox: BoundingBox) -> np.ndarray:
    return img[bbox.min_y:bbox.max_y + 1, bbox.min_x:bbox.max_x + 1].copy()
