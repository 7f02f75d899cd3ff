# cube_engine/brute_force.py
# Heuristic-free reference solvers. Fine for short scrambles and for
# cross-checking IDA* results; hopeless beyond ~6 moves.
from __future__ import annotations
from collections import deque
from typing import Dict, List, Optional

from cube_engine.cube_state import ALL_MOVES, CubeState, Move

DEFAULT_DFS_DEPTH = 8
DEFAULT_IDDFS_DEPTH = 7


def _dfs(cube: CubeState, path: List[Move], remaining: int) -> bool:
    if cube.is_solved():
        return True
    if remaining == 0:
        return False
    for m in ALL_MOVES:
        cube.apply_move(m)
        path.append(m)
        if _dfs(cube, path, remaining - 1):
            return True
        path.pop()
        cube.invert_move(m)
    return False


def dfs_solve(cube: CubeState, max_depth: int = DEFAULT_DFS_DEPTH) -> Optional[List[Move]]:
    """First solution of at most `max_depth` moves in move order; not necessarily shortest."""
    work = cube.copy()
    path: List[Move] = []
    if _dfs(work, path, max_depth):
        return path
    return None


def iddfs_solve(cube: CubeState, max_depth: int = DEFAULT_IDDFS_DEPTH) -> Optional[List[Move]]:
    """Shortest solution of at most `max_depth` moves, or None."""
    for limit in range(max_depth + 1):
        found = dfs_solve(cube, limit)
        if found is not None:
            return found
    return None


def bfs_solve(cube: CubeState, max_depth: Optional[int] = None) -> Optional[List[Move]]:
    """Shortest solution via queue + visited set on the full state."""
    root = cube.copy()
    move_done: Dict[CubeState, Optional[Move]] = {root: None}
    q = deque([(root, 0)])
    goal = None
    while q:
        node, depth = q.popleft()
        if node.is_solved():
            goal = node
            break
        if max_depth is not None and depth >= max_depth:
            continue
        for m in ALL_MOVES:
            nxt = node.copy()
            nxt.apply_move(m)
            if nxt not in move_done:
                move_done[nxt] = m
                q.append((nxt, depth + 1))

    if goal is None:
        return None
    moves: List[Move] = []
    cur = goal.copy()
    while cur != root:
        m = move_done[cur]
        moves.append(m)
        cur.invert_move(m)
    moves.reverse()
    return moves
