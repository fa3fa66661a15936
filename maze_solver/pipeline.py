"""
pipeline.py
-----------
End-to-end maze solve:

  1) crop to the maze frame (luminance bbox)
  2) rasterize into a traversability grid
  3) pick the two border openings
  4) seal the rest of the border
  5) BFS shortest path
  6) run-length compress into moves, draw the overlay

Each stage raises a MazeSolverError subclass on failure and nothing later
runs. No module state is touched, so independent images can be solved
concurrently.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from .config import SolverConfig
from .grid import (GridPoint, TraversabilityGrid, border_openings, build_grid,
                   find_openings, seal_border)
from .imaging import BoundingBox, crop, encode_png, find_maze_bbox, load_image, to_bgr
from .moves import Move, format_moves, moves_to_commands, moves_to_records, path_to_moves
from .overlay import path_length_px, render_overlay
from .search import bfs_path


@dataclass(frozen=True)
class SolveReport:
    image_w: int
    image_h: int
    bbox: Tuple[int, int, int, int]
    grid_w: int
    grid_h: int
    free_cell_pct: float
    border_openings: int
    path_cells: int
    moves: int
    turns: int
    length_px: float

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["bbox"] = list(self.bbox)
        return d


@dataclass(frozen=True)
class MazeSolution:
    bbox: BoundingBox
    grid: TraversabilityGrid
    start: GridPoint
    goal: GridPoint
    path: Tuple[GridPoint, ...]
    moves: List[Move]
    points: List[Tuple[float, float]]    # normalised [0,1] within the crop
    pixels: List[Tuple[int, int]]        # path in original image pixels
    overlay: np.ndarray
    report: SolveReport

    def moves_records(self) -> List[Dict[str, Any]]:
        return moves_to_records(self.moves)

    def commands(self) -> List[str]:
        return moves_to_commands(self.moves)

    def overlay_png(self) -> bytes:
        return encode_png(self.overlay)


def _log(verbose: bool, msg: str) -> None:
    if verbose:
        print(msg)


def solve_maze(image: np.ndarray, config: Optional[SolverConfig] = None,
               verbose: bool = False) -> MazeSolution:
    """Solve an already-loaded BGR image. See module docstring for stages."""
    cfg = (config or SolverConfig()).validate()
    img = to_bgr(image)
    H, W = img.shape[:2]

    _log(verbose, "[1/6] Cropping maze...")
    bbox = find_maze_bbox(img, wall_luminance=cfg.wall_luminance, padding=cfg.bbox_padding)
    maze = crop(img, bbox)
    _log(verbose, f"  Original size: {W}×{H} → cropped {bbox.width}×{bbox.height}")

    _log(verbose, "[2/6] Building grid...")
    grid = build_grid(maze, cell_size=cfg.cell_size,
                      white_luminance=cfg.white_luminance, free_ratio=cfg.free_ratio)
    free_pct = 100.0 * grid.free_count() / (grid.width * grid.height)
    _log(verbose, f"✓ Grid: {grid.width}×{grid.height}, {free_pct:.1f}% free")

    _log(verbose, "[3/6] Locating openings...")
    candidates = border_openings(grid)
    start, goal = find_openings(grid)
    _log(verbose, f"  Start: {tuple(start)}, Goal: {tuple(goal)} ({len(candidates)} candidates)")
    if len(candidates) > 2:
        _log(verbose, "  ⚠️ More than two border openings; using first/last in scan order")

    _log(verbose, "[4/6] Sealing border...")
    closed = seal_border(grid, start, goal)
    _log(verbose, f"  Closed {closed} border cell(s)")

    _log(verbose, "[5/6] Finding path (BFS)...")
    path = bfs_path(grid, start, goal)
    moves = path_to_moves(path)
    _log(verbose, f"✓ Solved path: {len(path)} cells, {len(moves)} moves: {format_moves(moves)}")

    _log(verbose, "[6/6] Drawing solution...")
    overlay, points, pixels = render_overlay(img, bbox, path, cfg.cell_size,
                                             color=cfg.path_color,
                                             thickness=cfg.path_thickness)

    report = SolveReport(
        image_w=W, image_h=H, bbox=tuple(bbox),
        grid_w=grid.width, grid_h=grid.height,
        free_cell_pct=round(free_pct, 3),
        border_openings=len(candidates),
        path_cells=len(path), moves=len(moves),
        turns=max(0, len(moves) - 1),
        length_px=round(path_length_px(pixels), 3),
    )
    return MazeSolution(bbox=bbox, grid=grid, start=start, goal=goal, path=path,
                        moves=moves, points=points, pixels=pixels,
                        overlay=overlay, report=report)


def solve_maze_file(path: Union[str, os.PathLike], config: Optional[SolverConfig] = None,
                    verbose: bool = False) -> MazeSolution:
    _log(verbose, f"Loading {os.fspath(path)}")
    return solve_maze(load_image(path), config=config, verbose=verbose)
