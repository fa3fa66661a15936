"""
config.py
---------
Tunables for the maze solver and a small loader for YAML/JSON overrides.

The defaults reproduce the behaviour the solver was tuned against; changing
them changes which cells are considered free, so keep regression images
around when you touch them.

Example config (YAML):

    cell_size: 4
    wall_luminance: 190
    white_luminance: 225
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Tuple

import yaml

# -------------------- Tunables / constants --------------------
DEFAULT_CELL_SIZE        = 3      # px per grid cell
DEFAULT_WALL_LUMINANCE   = 200    # below -> wall/frame pixel (bbox search)
DEFAULT_WHITE_LUMINANCE  = 230    # above -> corridor pixel (rasterizer)
DEFAULT_FREE_RATIO       = 0.7    # a cell is free iff corridor share > this
DEFAULT_BBOX_PADDING     = 2      # px added around the detected frame

PATH_COLOR_BGR   = (0, 0, 255)    # red polyline
START_COLOR_BGR  = (0, 255, 0)
GOAL_COLOR_BGR   = (0, 0, 255)
MIN_PATH_THICKNESS_PX = 3
MARKER_RADIUS_PX      = 6

GEMINI_MODEL = "gemini-2.0-flash-exp"
GEMINI_API_KEY_ENV = "GEMINI_API_KEY"


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer (got {value!r})")


@dataclass(frozen=True)
class SolverConfig:
    cell_size: int = DEFAULT_CELL_SIZE
    wall_luminance: int = DEFAULT_WALL_LUMINANCE
    white_luminance: int = DEFAULT_WHITE_LUMINANCE
    free_ratio: float = DEFAULT_FREE_RATIO
    bbox_padding: int = DEFAULT_BBOX_PADDING
    path_color: Tuple[int, int, int] = PATH_COLOR_BGR
    path_thickness: Optional[int] = None   # None -> max(3, width // 200)

    def validate(self) -> "SolverConfig":
        for name in ("cell_size", "wall_luminance", "white_luminance", "bbox_padding"):
            _require_int(name, getattr(self, name))
        if self.cell_size < 1:
            raise ValueError(f"cell_size must be >= 1 (got {self.cell_size})")
        for name in ("wall_luminance", "white_luminance"):
            v = getattr(self, name)
            if not 0 <= v <= 255:
                raise ValueError(f"{name} must be within 0..255 (got {v})")
        if isinstance(self.free_ratio, bool) or not isinstance(self.free_ratio, (int, float)):
            raise ValueError(f"free_ratio must be a number (got {self.free_ratio!r})")
        if not 0.0 <= self.free_ratio < 1.0:
            raise ValueError(f"free_ratio must be within [0, 1) (got {self.free_ratio})")
        if self.bbox_padding < 0:
            raise ValueError(f"bbox_padding must be >= 0 (got {self.bbox_padding})")
        if self.path_thickness is not None:
            _require_int("path_thickness", self.path_thickness)
            if self.path_thickness < 1:
                raise ValueError(f"path_thickness must be >= 1 (got {self.path_thickness})")
        if len(tuple(self.path_color)) != 3:
            raise ValueError("path_color must be a (B, G, R) triple")
        for c in self.path_color:
            _require_int("path_color", c)
        return self

    def with_overrides(self, **overrides: Any) -> "SolverConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes).validate()


def config_from_dict(data: Dict[str, Any]) -> SolverConfig:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level.")
    known = {f.name for f in fields(SolverConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    if "path_color" in data:
        color = data["path_color"]
        if not isinstance(color, (list, tuple)):
            raise ValueError(f"path_color must be a (B, G, R) triple (got {color!r})")
        data = dict(data, path_color=tuple(color))
    return SolverConfig(**data).validate()


def load_config(path) -> SolverConfig:
    """
    Load solver settings from a YAML or JSON file.
    JSON is picked by the ".json" extension; everything else goes through YAML.
    """
    path = os.fspath(path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        if path.lower().endswith(".json"):
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    return config_from_dict(data)
