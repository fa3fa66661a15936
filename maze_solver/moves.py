"""
moves.py
--------
Run-length move lists for a cell path, plus the forms they are handed out in:
JSON records ([{"dir": "E", "steps": 5}, ...]) and relative robot commands
(FORWARD n / TURN LEFT / TURN RIGHT).
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, NamedTuple, Sequence, Tuple

from .grid import GridPoint

DELTAS = {"N": (0, -1), "E": (1, 0), "S": (0, 1), "W": (-1, 0)}
_DIR_FROM_DELTA = {d: name for name, d in DELTAS.items()}
CLOCKWISE = ("N", "E", "S", "W")


class Move(NamedTuple):
    direction: str
    steps: int


def direction_from_delta(dx: int, dy: int):
    """N/E/S/W for a single-cell axis step, else None."""
    return _DIR_FROM_DELTA.get((dx, dy))


def path_to_moves(path: Sequence[Tuple[int, int]]) -> List[Move]:
    """Compress a cell path. Non unit steps are skipped; < 2 points -> []."""
    if len(path) < 2:
        return []
    moves: List[Move] = []
    cur_dir, cur_steps = None, 0
    prev = path[0]
    for p in path[1:]:
        d = direction_from_delta(p[0] - prev[0], p[1] - prev[1])
        prev = p
        if d is None:
            continue  # skip weird jumps
        if d == cur_dir:
            cur_steps += 1
        else:
            if cur_steps:
                moves.append(Move(cur_dir, cur_steps))
            cur_dir, cur_steps = d, 1
    if cur_steps:
        moves.append(Move(cur_dir, cur_steps))
    return moves


def expand_moves(start: Tuple[int, int], moves: Iterable[Move]) -> Tuple[GridPoint, ...]:
    """Walk the moves from start, one cell at a time."""
    x, y = start
    out = [GridPoint(x, y)]
    for m in moves:
        dx, dy = DELTAS[m.direction]
        for _ in range(int(m.steps)):
            x, y = x + dx, y + dy
            out.append(GridPoint(x, y))
    return tuple(out)


# -------------------- Serialisation --------------------
def moves_to_records(moves: Iterable[Move]) -> List[Dict[str, Any]]:
    return [{"dir": m.direction, "steps": int(m.steps)} for m in moves]


def moves_to_json(moves: Iterable[Move]) -> str:
    return json.dumps(moves_to_records(moves), separators=(",", ":"))


def moves_from_records(records: Iterable[Dict[str, Any]]) -> List[Move]:
    out = []
    for i, rec in enumerate(records):
        d = rec.get("dir", rec.get("direction"))
        steps = rec.get("steps")
        if d not in DELTAS:
            raise ValueError(f"Move {i}: unknown direction {d!r}")
        if isinstance(steps, bool) or not isinstance(steps, int) or steps < 1:
            raise ValueError(f"Move {i}: steps must be a positive integer (got {steps!r})")
        out.append(Move(d, steps))
    return out


# -------------------- Robot commands --------------------
def _turns(cur: str, new: str) -> List[str]:
    diff = (CLOCKWISE.index(new) - CLOCKWISE.index(cur)) % 4
    if diff == 1:
        return ["TURN RIGHT"]
    if diff == 3:
        return ["TURN LEFT"]
    if diff == 2:
        return ["TURN RIGHT", "TURN RIGHT"]
    return []


def moves_to_commands(moves: Sequence[Move]) -> List[str]:
    """
    Commands relative to the robot's heading, which starts out facing the
    direction of the first move.
    """
    cmds: List[str] = []
    heading = None
    for m in moves:
        if heading is not None:
            cmds.extend(_turns(heading, m.direction))
        cmds.append(f"FORWARD {int(m.steps)}")
        heading = m.direction
    return cmds


def format_moves(moves: Sequence[Move]) -> str:
    """Short human form, e.g. 'E4 S2 W1'."""
    return " ".join(f"{m.direction}{m.steps}" for m in moves)
