# cube_engine/driver.py  (corner-database IDA* cube solver driver)
# Loads (or builds) the corner pattern database, scrambles a cube from
# notation or a seeded shuffle, solves it and writes results/solution.json.
# Cooperative run-control (pause/resume/stop via logs/runctl.json) is checked
# between BFS layers and between IDA* passes.

from __future__ import annotations
import argparse
import json
import os
import random
import sys
import time
from collections import deque
from typing import Dict, List, Optional

from cube_engine.brute_force import bfs_solve, dfs_solve, iddfs_solve
from cube_engine.cube_state import CubeState, format_moves, parse_moves, random_scramble
from cube_engine.ida_star import DEFAULT_MAX_BOUND, IDAStarSolver
from cube_engine.io_utils import atomic_write_json, ensure_dir, load_json, sha1_file
from cube_engine.pattern_db import (
    CornerPatternDatabase,
    LoadResult,
    build_corner_database,
)

# ---------- defaults ----------
DEFAULT_DB_PATH = os.environ.get("CUBE_DB_PATH") or os.path.join("databases", "corner.db")
DEFAULT_LOGS_DIR = os.environ.get("CUBE_LOGS_DIR") or "logs"
DEFAULT_RESULTS_DIR = os.environ.get("CUBE_RESULTS_DIR") or "results"
DEFAULT_BUILD_DEPTH = 6        # full corner space is 11, takes hours in pure Python
DEFAULT_SHUFFLE = 5
DEFAULT_BRUTE_DEPTH = 6

EXIT_SOLVED = 0
EXIT_UNSOLVED = 1
EXIT_BAD_INPUT = 2


# ---------- run control (pause/resume/stop) ----------
class RunControl:
    """Polls a small JSON file {"state": "run"|"pause"|"stop"}; re-reads only on mtime change."""

    def __init__(self, path: str, emit_event=None, poll=0.05):
        self.path = path
        self.emit_event = emit_event
        self.poll = poll
        self._mtime = -1.0
        self._state = "run"

    def init(self):
        """Create the control file with state=run if missing (idempotent)."""
        ensure_dir(os.path.dirname(self.path))
        if not os.path.exists(self.path):
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"state": "run", "ts": time.time()}, f, ensure_ascii=False)
        print(f"[runctl] RUNCTL_PATH = {self.path}", flush=True)

    def state(self) -> str:
        try:
            m = os.path.getmtime(self.path)
        except OSError:
            return self._state
        if m != self._mtime:
            self._mtime = m
            try:
                s = load_json(self.path)
                self._state = str(s.get("state", "run")).lower()
            except (OSError, ValueError, AttributeError):
                self._state = "run"
        return self._state

    def _event(self, name: str):
        if self.emit_event is not None:
            self.emit_event({"event": name, "ts": time.time()})

    def should_stop(self) -> bool:
        """True on stop; blocks while paused."""
        ctl = self.state()
        if ctl == "stop":
            self._event("stopped")
            return True
        if ctl != "pause":
            return False
        self._event("paused")
        while True:
            time.sleep(self.poll)
            ctl = self.state()
            if ctl == "stop":
                self._event("stopped")
                return True
            if ctl == "run":
                self._event("resumed")
                return False


# ---------- progress emitters ----------
def make_emit_progress(logs_dir: str, tail: deque):
    ensure_dir(logs_dir)
    stream_path = os.path.join(logs_dir, "progress.jsonl")
    summary_path = os.path.join(logs_dir, "progress.json")

    def emit(payload: Dict):
        payload = dict(payload, ts=round(time.time(), 3))
        with open(stream_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")
        tail.append(payload)
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

        # console echo (concise)
        ev = payload.get("event")
        if ev == "layer":
            print(f"[build] depth {payload['depth']} | frontier {payload['frontier']} "
                  f"| recorded {payload['recorded']} | {payload['elapsed']}s", flush=True)
        elif ev == "pass":
            line = f"[ida] pass {payload['pass']} bound {payload['bound']} | expanded {payload['expanded']}"
            if payload.get("found"):
                line += " | found"
            elif payload.get("next_bound") is not None:
                line += f" | next {payload['next_bound']}"
            print(line, flush=True)
        elif ev in ("paused", "resumed", "stopped"):
            print(f"[runctl] {ev}", flush=True)

    return emit


# ---------- database ----------
def obtain_database(args, emit, runctl: RunControl):
    """
    Returns (db, status) where status is one of
      "loaded", "built", "corrupt", "stopped_by_user".
    """
    db_path = args.db
    if not args.rebuild:
        db = CornerPatternDatabase()
        res = db.load(db_path)
        if res is LoadResult.LOADED:
            emit({"event": "database", "status": "loaded", "path": db_path})
            return db, "loaded"
        if res is LoadResult.CORRUPT:
            emit({"event": "database", "status": "corrupt", "path": db_path})
            return None, "corrupt"
        del db

    print(f"[build] corner database -> {db_path} (depth {args.build_depth})", flush=True)
    db = build_corner_database(args.build_depth, progress=emit, should_stop=runctl.should_stop)
    if db is None:
        return None, "stopped_by_user"
    db.save(db_path)
    emit({"event": "database", "status": "built", "path": db_path, "recorded": db.num_items})
    return db, "built"


# ---------- solving ----------
def run_solve(cube: CubeState, args, db, emit, runctl: RunControl):
    """Returns (status, solution, stats)."""
    if args.method == "ida":
        solver = IDAStarSolver(cube, db, max_bound=args.max_bound,
                               should_stop=runctl.should_stop, progress=emit)
        solution = solver.solve()
        stats = {"bound": solver.bound, "passes": solver.passes, "expanded": solver.expanded}
        status = "stopped_by_user" if solver.status == "stopped" else solver.status
        return status, solution, stats

    fn = {"iddfs": iddfs_solve, "dfs": dfs_solve, "bfs": bfs_solve}[args.method]
    solution = fn(cube, args.max_depth)
    return ("solved" if solution is not None else "exhausted"), solution, {}


def write_result(path: str, payload: Dict):
    atomic_write_json(path, payload)


# ---------- CLI ----------
def build_argparser():
    p = argparse.ArgumentParser(
        description=(
            "3x3x3 cube solver: IDA* with a corner pattern database.\n\n"
            "Examples:\n"
            "  python run_solver.py \"R U F L\"\n"
            "  python run_solver.py --shuffle 7 --rng-seed 42\n"
            "  python run_solver.py \"R U2 F'\" --db databases/corner.db --build-depth 7\n"
            "  python run_solver.py \"R U F L\" --method iddfs --max-depth 5\n"
            "  python run_solver.py --rebuild --build-depth 8 --shuffle 0\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    p.add_argument("scramble", nargs="?", default=None,
                   help="Scramble in standard notation, e.g. \"R U2 F' L\". Omit to shuffle randomly.")

    p.add_argument("--shuffle", type=int, default=DEFAULT_SHUFFLE, metavar="N",
                   help=f"Random scramble length when no scramble is given (default: {DEFAULT_SHUFFLE}).")

    p.add_argument("--rng-seed", type=int, default=None,
                   help="Seed for the random scramble. Omit for a fresh seed.")

    p.add_argument("--method", choices=["ida", "iddfs", "bfs", "dfs"], default="ida",
                   help="Search method (default: ida).")

    p.add_argument("--db", default=DEFAULT_DB_PATH, metavar="PATH",
                   help=f"Corner pattern database file (default: {DEFAULT_DB_PATH}).")

    p.add_argument("--build-depth", type=int, default=DEFAULT_BUILD_DEPTH, metavar="D",
                   help=f"BFS depth when the database has to be built (default: {DEFAULT_BUILD_DEPTH}, full: 11).")

    p.add_argument("--rebuild", action="store_true",
                   help="Build the database even if the file exists.")

    p.add_argument("--max-bound", type=int, default=DEFAULT_MAX_BOUND, metavar="F",
                   help=f"Give up once the IDA* bound exceeds F (default: {DEFAULT_MAX_BOUND}).")

    p.add_argument("--max-depth", type=int, default=DEFAULT_BRUTE_DEPTH, metavar="D",
                   help=f"Depth limit for iddfs/bfs/dfs (default: {DEFAULT_BRUTE_DEPTH}).")

    p.add_argument("--logs-dir", default=DEFAULT_LOGS_DIR, metavar="DIR",
                   help="progress.jsonl / progress.json / runctl.json location.")

    p.add_argument("--results-dir", default=DEFAULT_RESULTS_DIR, metavar="DIR",
                   help="Where solution.json is written.")

    p.add_argument("--show", action="store_true",
                   help="Print the scrambled cube as a planar net.")

    return p


# ---------- driver ----------
def main(argv: Optional[List[str]] = None) -> int:
    p = build_argparser()
    args = p.parse_args(argv)

    ensure_dir(args.logs_dir)
    ensure_dir(args.results_dir)

    tail = deque(maxlen=256)
    emit = make_emit_progress(args.logs_dir, tail)
    runctl_path = os.environ.get("CUBE_RUNCTL") or os.path.join(args.logs_dir, "runctl.json")
    runctl = RunControl(runctl_path, emit_event=emit)
    runctl.init()

    # scramble
    cube = CubeState()
    if args.scramble is not None:
        try:
            scramble = parse_moves(args.scramble)
        except ValueError as e:
            sys.stderr.write(f"Bad scramble: {e}\n")
            return EXIT_BAD_INPUT
        cube.apply_moves(scramble)
        seed_label = None
    else:
        seed = args.rng_seed if args.rng_seed is not None else random.randrange(1 << 31)
        scramble = random_scramble(cube, max(0, args.shuffle), random.Random(seed))
        seed_label = seed

    print(f"Scramble: {format_moves(scramble) or '(none)'}", flush=True)
    if args.show:
        print(cube.render(), flush=True)

    # heuristic
    db = None
    db_status = None
    if args.method == "ida":
        db, db_status = obtain_database(args, emit, runctl)
        if db_status == "corrupt":
            sys.stderr.write(f"Corner database is corrupt (size mismatch): {args.db}\n"
                             f"Delete it or pass --rebuild.\n")
            return EXIT_BAD_INPUT
        if db is None:
            emit({"event": "progress", "status": db_status})
            return EXIT_UNSOLVED

    t0 = time.monotonic()
    status, solution, stats = run_solve(cube, args, db, emit, runctl)
    elapsed = round(time.monotonic() - t0, 3)

    if solution is not None:
        check = cube.copy()
        check.apply_moves(solution)
        assert check.is_solved(), "solution does not solve the cube"
        print(f"Solution ({len(solution)} moves): {format_moves(solution)}", flush=True)
    else:
        print(f"No solution ({status})", flush=True)

    payload = {
        "schema": "cube_solution/1.0",
        "method": args.method,
        "status": status,
        "scramble": [m.notation for m in scramble],
        "seed": seed_label,
        "solution": None if solution is None else [m.notation for m in solution],
        "moves": None if solution is None else len(solution),
        "elapsed": elapsed,
        "timestamp": time.time(),
    }
    payload.update(stats)
    if db is not None:
        payload["database"] = args.db
        payload["database_status"] = db_status
        payload["database_sha1"] = sha1_file(args.db)

    write_result(os.path.join(args.results_dir, "solution.json"), payload)
    emit({"event": "progress", "status": status, "moves": payload["moves"], "elapsed": elapsed})

    return EXIT_SOLVED if status == "solved" else EXIT_UNSOLVED


if __name__ == "__main__":
    sys.exit(main())
