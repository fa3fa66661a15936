"""Writers for solve results: moves JSON, per-cell CSV, directions text, report JSON."""

from __future__ import annotations

import csv
import json
import os
from typing import Any, Dict, List, Sequence, Tuple, Union

from .imaging import save_png
from .moves import Move, direction_from_delta, moves_to_commands, moves_to_records

PathLike = Union[str, os.PathLike]

__all__ = ["write_moves_json", "write_path_csv", "write_directions",
           "write_report_json", "save_png"]


def write_moves_json(path: PathLike, moves: Sequence[Move]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(moves_to_records(moves), f, indent=2)


def write_path_csv(path: PathLike, cells: Sequence[Tuple[int, int]],
                   pixels: Sequence[Tuple[int, int]]) -> None:
    """One row per cell; direction is the step taken from that cell (GOAL on the last)."""
    if len(cells) != len(pixels):
        raise ValueError("cells and pixels must have the same length")
    with open(path, "w", newline="") as f:
        wri = csv.writer(f)
        wri.writerow(["step", "col", "row", "x_px", "y_px", "direction"])
        for i, (cell, (px, py)) in enumerate(zip(cells, pixels)):
            if i + 1 < len(cells):
                nxt = cells[i + 1]
                direction = direction_from_delta(nxt[0] - cell[0], nxt[1] - cell[1]) or "?"
            else:
                direction = "GOAL"
            wri.writerow([i, cell[0], cell[1], px, py, direction])


def write_directions(path: PathLike, moves: Sequence[Move]) -> None:
    commands: List[str] = moves_to_commands(moves)
    with open(path, "w", encoding="utf-8") as f:
        f.write("Robot Navigation Commands:\n")
        f.write("=" * 30 + "\n")
        for i, cmd in enumerate(commands, 1):
            f.write(f"{i}. {cmd}\n")
        f.write(f"\nTotal moves: {len(moves)}\n")
        f.write(f"Total cells: {sum(m.steps for m in moves)}\n")


def write_report_json(path: PathLike, report: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as jf:
        json.dump(report, jf, indent=2)
