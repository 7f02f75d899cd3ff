# cube_engine/pattern_db.py
# Nibble-packed pattern databases; the corner database and its BFS builder.
from __future__ import annotations
import enum
import os
import time
from collections import deque
from typing import Callable, Dict, Optional, Tuple

from cube_engine.corners import NUM_CORNERS, corner_configuration
from cube_engine.cube_state import ALL_MOVES, CubeState
from cube_engine.io_utils import atomic_write_bytes
from cube_engine.nibble import NibbleArray
from cube_engine.permutation import PermutationIndexer, factorial

# --------------------------
# Tunables
# --------------------------
UNKNOWN = 0x0F               # sentinel of a fresh table
CORNER_DIAMETER = 11         # max moves to solve any corner configuration
CORNER_ORIENTATIONS = 3 ** (NUM_CORNERS - 1)                       # 2187
CORNER_DB_SIZE = factorial(NUM_CORNERS) * CORNER_ORIENTATIONS     # 88,179,840

ProgressFn = Callable[[Dict], None]
StopFn = Callable[[], bool]


class LoadResult(enum.Enum):
    LOADED = "loaded"
    NOT_FOUND = "not_found"
    CORRUPT = "corrupt"


class PatternDatabase:
    """
    Table of `size` move counts, one nibble each. Entries only ever go down
    (minimum wins). Subclasses map a cube state to its table index.
    """

    def __init__(self, size: int, init_value: int = UNKNOWN):
        if not 0 <= init_value <= 0x0F:
            raise ValueError(f"init_value must fit in a nibble, got {init_value}")
        self.size = size
        self.init_value = init_value
        self.num_items = 0
        self._nibbles = NibbleArray(size, init_value)

    def index(self, state: CubeState) -> int:
        raise NotImplementedError

    # --- lookups / updates ---

    def get_moves_at(self, ind: int) -> int:
        return self._nibbles.get(ind)

    def get_moves(self, state: CubeState) -> int:
        return self._nibbles.get(self.index(state))

    def set_moves(self, ind: int, num_moves: int) -> bool:
        """Store `num_moves` at `ind` if it beats the current entry."""
        if not 0 <= num_moves <= 0x0F:
            raise ValueError(f"move count must be in [0, 15], got {num_moves}")
        old = self._nibbles.get(ind)
        if num_moves >= old:
            return False
        if old == self.init_value:
            self.num_items += 1
        self._nibbles.set(ind, num_moves)
        return True

    def set_moves_for(self, state: CubeState, num_moves: int) -> bool:
        return self.set_moves(self.index(state), num_moves)

    def is_full(self) -> bool:
        return self.num_items == self.size

    def reset(self) -> None:
        if self.num_items != 0:
            self._nibbles.fill(self.init_value)
            self.num_items = 0

    @property
    def storage_size(self) -> int:
        return self._nibbles.storage_size

    # --- persistence (raw nibble buffer, no header) ---

    def save(self, path: str) -> None:
        atomic_write_bytes(path, self._nibbles.data)

    def load(self, path: str) -> LoadResult:
        """
        NOT_FOUND when there is no file, CORRUPT when its length is not the
        exact buffer length or the read comes up short. The table is only
        replaced on LOADED.
        """
        expected = self._nibbles.storage_size
        try:
            if os.path.getsize(path) != expected:
                return LoadResult.CORRUPT
            with open(path, "rb") as f:
                payload = f.read(expected + 1)
        except FileNotFoundError:
            return LoadResult.NOT_FOUND
        if len(payload) != expected:
            return LoadResult.CORRUPT

        self._nibbles.data[:] = payload
        self.num_items = self.size
        return LoadResult.LOADED


class CornerPatternDatabase(PatternDatabase):
    """
    index = rank(corner identities by slot) * 3^7 + twists of slots 0..6
    (base 3, slot 0 most significant). Slot 7's twist follows from the
    others, edges are ignored.
    """

    def __init__(self, init_value: int = UNKNOWN):
        super().__init__(CORNER_DB_SIZE, init_value)
        self.indexer = PermutationIndexer(NUM_CORNERS)

    def index(self, state: CubeState) -> int:
        idents, oris = corner_configuration(state)
        twist = 0
        for o in oris[:NUM_CORNERS - 1]:
            twist = twist * 3 + o
        return self.indexer.rank(idents) * CORNER_ORIENTATIONS + twist


# --------------------------
# Builder
# --------------------------
def build_corner_database(max_depth: int = CORNER_DIAMETER,
                          init_value: Optional[int] = None,
                          progress: Optional[ProgressFn] = None,
                          should_stop: Optional[StopFn] = None) -> Optional[CornerPatternDatabase]:
    """
    Layered BFS from the solved cube. Each layer is drained completely before
    the next one starts, so the first depth written to an entry is its
    minimum. Unreached entries keep `init_value` (default max_depth + 1),
    which is still a lower bound for them. Returns None if stopped.
    """
    if not 0 <= max_depth < 0x0F:
        raise ValueError(f"max_depth must be in [0, 14], got {max_depth}")
    if init_value is None:
        init_value = min(max_depth + 1, UNKNOWN)
    if init_value <= max_depth:
        raise ValueError(f"init_value {init_value} must exceed max_depth {max_depth}")

    db = CornerPatternDatabase(init_value)
    cube = CubeState()
    db.set_moves_for(cube, 0)

    q = deque([cube])
    depth = 0
    t0 = time.monotonic()

    while q and depth < max_depth:
        if should_stop is not None and should_stop():
            return None
        depth += 1
        n = len(q)
        for _ in range(n):
            node = q.popleft()
            for move in ALL_MOVES:
                nxt = node.copy()
                nxt.apply_move(move)
                ind = db.index(nxt)
                if db.get_moves_at(ind) > depth:
                    db.set_moves(ind, depth)
                    q.append(nxt)

        if progress is not None:
            progress({
                "event": "layer",
                "depth": depth,
                "frontier": len(q),
                "recorded": db.num_items,
                "elapsed": round(time.monotonic() - t0, 3),
            })

    return db


def load_or_build(path: str,
                  max_depth: int = CORNER_DIAMETER,
                  progress: Optional[ProgressFn] = None,
                  should_stop: Optional[StopFn] = None) -> Tuple[Optional[CornerPatternDatabase], LoadResult]:
    """
    Load `path`; build and save it when absent. A corrupt file is reported
    back untouched so the caller decides whether to rebuild.
    """
    db = CornerPatternDatabase()
    status = db.load(path)
    if status is LoadResult.LOADED:
        return db, status
    if status is LoadResult.CORRUPT:
        return None, status

    built = build_corner_database(max_depth, progress=progress, should_stop=should_stop)
    if built is not None:
        built.save(path)
    return built, status
