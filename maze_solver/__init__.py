"""
maze_solver - solve photographed or scanned mazes on a rasterized grid.

Stages: frame extraction -> grid rasterization -> opening location ->
border sealing -> BFS -> move compression -> overlay rendering.
"""

from .config import SolverConfig, load_config
from .errors import EmptyOrUnloadableImage, MazeSolverError, NoOpeningsFound, NoPathFound
from .grid import (GridPoint, TraversabilityGrid, border_openings, build_grid,
                   find_openings, seal_border)
from .imaging import BoundingBox, crop, decode_image, encode_png, find_maze_bbox, load_image
from .moves import Move, expand_moves, moves_to_commands, moves_to_json, path_to_moves
from .overlay import render_overlay
from .pipeline import MazeSolution, SolveReport, solve_maze, solve_maze_file
from .search import bfs_path

__version__ = "0.1.0"

__all__ = [
    "SolverConfig", "load_config",
    "MazeSolverError", "EmptyOrUnloadableImage", "NoOpeningsFound", "NoPathFound",
    "GridPoint", "TraversabilityGrid", "build_grid", "border_openings",
    "find_openings", "seal_border",
    "BoundingBox", "find_maze_bbox", "crop", "load_image", "decode_image", "encode_png",
    "Move", "path_to_moves", "expand_moves", "moves_to_json", "moves_to_commands",
    "render_overlay", "bfs_path",
    "MazeSolution", "SolveReport", "solve_maze", "solve_maze_file",
]
