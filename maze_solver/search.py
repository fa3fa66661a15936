"""Breadth-first shortest path over the 4-connected free cells of a grid."""

from __future__ import annotations

from collections import deque
from typing import Tuple

import numpy as np

from .errors import NoPathFound
from .grid import GridPoint, TraversabilityGrid

# E, W, S, N
N4 = ((1, 0), (-1, 0), (0, 1), (0, -1))


def bfs_path(grid: TraversabilityGrid, start: Tuple[int, int],
             goal: Tuple[int, int]) -> Tuple[GridPoint, ...]:
    """
    Minimum-hop path from start to goal inclusive.
    Raises NoPathFound when the goal cannot be reached.
    """
    w, h = grid.width, grid.height
    start, goal = GridPoint(*start), GridPoint(*goal)
    for name, p in (("start", start), ("goal", goal)):
        if not grid.contains(p):
            raise NoPathFound(f"No path found: {name} {tuple(p)} is outside the {w}x{h} grid.")
        if not grid.is_free(p):
            raise NoPathFound(f"No path found: {name} {tuple(p)} is a wall cell.")

    cells = grid.cells
    dist = np.full(w * h, -1, dtype=np.int64)
    parent = np.full(w * h, -1, dtype=np.int64)
    s, g = grid.index(start), grid.index(goal)
    dist[s] = 0
    dq = deque([s])
    while dq:
        u = dq.popleft()
        if u == g:
            break
        x, y = u % w, u // w
        for dx, dy in N4:
            nx, ny = x + dx, y + dy
            if not (0 <= nx < w and 0 <= ny < h):
                continue
            v = ny * w + nx
            if not cells[v] or dist[v] != -1:
                continue
            dist[v] = dist[u] + 1
            parent[v] = u
            dq.append(v)

    if dist[g] == -1:
        raise NoPathFound(f"No path found by BFS from {tuple(start)} to {tuple(goal)}.")

    path = [g]
    while path[-1] != s:
        path.append(int(parent[path[-1]]))
    path.reverse()
    return tuple(GridPoint(i % w, i // w) for i in path)
