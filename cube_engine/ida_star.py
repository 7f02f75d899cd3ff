# cube_engine/ida_star.py
# IDA* over CubeState with a pattern database as h(n).
from __future__ import annotations
import heapq
import itertools
import time
from typing import Callable, Dict, List, Optional, Set, Tuple

from cube_engine.cube_state import ALL_MOVES, CubeState, Move
from cube_engine.pattern_db import PatternDatabase

# --------------------------
# Tunables
# --------------------------
DEFAULT_MAX_BOUND = 20       # God's number (half-turn metric)
NO_BOUND = 1 << 30


class IDAStarSolver:
    """
    Each pass is a best-first sweep (smallest f = depth + h first, ties on
    smaller h) that never queues a child with f above the current bound.
    The smallest f that overflowed becomes the next bound. Per-pass
    structures are dropped between passes.

    The heuristic must be admissible for the returned solution to be
    optimal; a partially built table breaks that promise.
    """

    def __init__(self,
                 cube: CubeState,
                 database: PatternDatabase,
                 max_bound: int = DEFAULT_MAX_BOUND,
                 should_stop: Optional[Callable[[], bool]] = None,
                 progress: Optional[Callable[[Dict], None]] = None):
        self.cube = cube.copy()
        self.database = database
        self.max_bound = max_bound
        self.should_stop = should_stop
        self.progress = progress

        # per-pass structures
        self.visited: Set[CubeState] = set()
        self.move_done: Dict[CubeState, Optional[Move]] = {}

        # results / stats
        self.status: Optional[str] = None
        self.bound = 0
        self.passes = 0
        self.expanded = 0
        self.solution: Optional[List[Move]] = None
        self.solved_cube: Optional[CubeState] = None
        self._t0 = time.monotonic()

    def heuristic(self, state: CubeState) -> int:
        return self.database.get_moves(state)

    def _reset_structures(self) -> None:
        self.visited.clear()
        self.move_done.clear()

    # --------------------------
    # One bounded pass
    # --------------------------
    def _search(self, bound: int) -> Tuple[Optional[CubeState], int]:
        """
        Returns (goal, bound) when the solved state is settled, otherwise
        (None, next_bound) where next_bound is NO_BOUND if nothing overflowed.
        """
        tie = itertools.count()
        root = self.cube.copy()
        h0 = self.heuristic(root)
        pq = [(h0, h0, next(tie), root, 0, None)]
        next_bound = NO_BOUND

        while pq:
            _, _, _, node, depth, move = heapq.heappop(pq)
            if node in self.visited:
                continue
            self.visited.add(node)
            self.move_done[node] = move
            self.expanded += 1

            if node.is_solved():
                return node, bound

            new_depth = depth + 1
            for m in ALL_MOVES:
                child = node.copy()
                child.apply_move(m)
                if child in self.visited:
                    continue
                est = self.heuristic(child)
                f = new_depth + est
                if f > bound:
                    if f < next_bound:
                        next_bound = f
                else:
                    heapq.heappush(pq, (f, est, next(tie), child, new_depth, m))

        return None, next_bound

    def _emit(self, bound: int, next_bound: int, found: bool) -> None:
        if self.progress is None:
            return
        self.progress({
            "event": "pass",
            "pass": self.passes,
            "bound": bound,
            "next_bound": None if next_bound == NO_BOUND else next_bound,
            "found": found,
            "settled": len(self.visited),
            "expanded": self.expanded,
            "elapsed": round(time.monotonic() - self._t0, 3),
        })

    # --------------------------
    # Driver loop
    # --------------------------
    def solve(self) -> Optional[List[Move]]:
        """Move list reaching solved from the cube (empty if already solved), or None."""
        self._t0 = time.monotonic()
        if self.cube.is_solved():
            self.status = "solved"
            self.solution = []
            self.solved_cube = self.cube.copy()
            return []

        bound = self.heuristic(self.cube)
        goal = None
        while True:
            if self.should_stop is not None and self.should_stop():
                self.status = "stopped"
                return None
            if bound > self.max_bound:
                self.status = "exhausted"
                return None

            self.bound = bound
            self.passes += 1
            goal, result = self._search(bound)
            self._emit(bound, result if goal is None else bound, goal is not None)
            if goal is not None:
                break
            if result == NO_BOUND:
                self.status = "exhausted"
                return None
            self._reset_structures()
            bound = result

        self.solution = self._reconstruct(goal)
        self.solved_cube = goal
        self.status = "solved"
        return self.solution

    def _reconstruct(self, goal: CubeState) -> List[Move]:
        # walk back to the root through recorded moves, then flip
        moves: List[Move] = []
        cur = goal.copy()
        while cur != self.cube:
            m = self.move_done[cur]
            moves.append(m)
            cur.invert_move(m)
        moves.reverse()
        return moves
