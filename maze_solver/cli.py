#!/usr/bin/env python3
"""
Command line front-end for the maze solver.

Usage examples:
  - Solve and save the overlay:
      maze-solve maze.png --output solved.png

  - Coarser grid, plus all the side files:
      maze-solve maze.jpg --cell-size 4 --moves-json moves.json \
          --path-csv path.csv --directions directions.txt --report-json report.json

  - Ask Gemini for driving instructions (needs GEMINI_API_KEY):
      maze-solve maze.png --explain

Returns a non-zero exit code on failure (unreadable image, no openings, no path).
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .config import SolverConfig, load_config
from .errors import MazeSolverError
from .export import save_png, write_directions, write_moves_json, write_path_csv, write_report_json
from .moves import format_moves, moves_to_json
from .navigation import request_navigation_instructions
from .pipeline import solve_maze_file


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="maze-solve",
                                 description="Solve a maze image with BFS on a rasterized grid.")
    ap.add_argument("image", help="Path to a maze image (PNG/JPEG/BMP/WebP).")
    ap.add_argument("--config", type=str, default="", help="YAML/JSON file with solver settings.")
    ap.add_argument("--cell-size", type=int, default=None, help="Pixels per grid cell (default 3).")
    ap.add_argument("--wall-luminance", type=int, default=None,
                    help="Pixels darker than this bound the maze frame (default 200).")
    ap.add_argument("--white-luminance", type=int, default=None,
                    help="Pixels brighter than this count as corridor (default 230).")
    ap.add_argument("--thickness", type=int, default=None, help="Path line thickness in pixels.")
    ap.add_argument("--output", type=str, default="solved.png",
                    help="Where to save the annotated image ('' to skip).")
    ap.add_argument("--moves-json", type=str, default="", help="Write the move list as JSON.")
    ap.add_argument("--path-csv", type=str, default="", help="Write the per-cell path as CSV.")
    ap.add_argument("--directions", type=str, default="", help="Write FORWARD/TURN commands.")
    ap.add_argument("--report-json", type=str, default="", help="Write the solve report as JSON.")
    ap.add_argument("--explain", action="store_true",
                    help="Ask Gemini to turn the moves into driving instructions.")
    ap.add_argument("--quiet", action="store_true", help="Only print the move list.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    verbose = not args.quiet

    try:
        cfg = load_config(args.config) if args.config else SolverConfig()
        cfg = cfg.with_overrides(cell_size=args.cell_size,
                                 wall_luminance=args.wall_luminance,
                                 white_luminance=args.white_luminance,
                                 path_thickness=args.thickness)
        sol = solve_maze_file(args.image, config=cfg, verbose=verbose)

        if args.output:
            save_png(args.output, sol.overlay)
            if verbose:
                print(f"✓ Saved {args.output}")
        if args.moves_json:
            write_moves_json(args.moves_json, sol.moves)
            if verbose:
                print(f"✓ Saved {args.moves_json}")
        if args.path_csv:
            write_path_csv(args.path_csv, sol.path, sol.pixels)
            if verbose:
                print(f"✓ Saved {args.path_csv}")
        if args.directions:
            write_directions(args.directions, sol.moves)
            if verbose:
                print(f"✓ Saved {args.directions}")
        if args.report_json:
            write_report_json(args.report_json, sol.report.to_dict())
            if verbose:
                print(f"✓ Saved {args.report_json}")

        print(moves_to_json(sol.moves))
        if verbose:
            print(f"[OK] {len(sol.path)} cells, {len(sol.moves)} moves: {format_moves(sol.moves)}")

        if args.explain:
            if not sol.moves:
                print("[i] Start and goal coincide; nothing to explain.")
            else:
                print(request_navigation_instructions(sol.moves))
    except (MazeSolverError, ValueError, OSError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
