from cube_engine.brute_force import bfs_solve, dfs_solve, iddfs_solve
from cube_engine.cube_state import CubeState, Move, parse_moves


def scrambled(text):
    cube = CubeState()
    cube.apply_moves(parse_moves(text))
    return cube


def solves(cube, moves):
    check = cube.copy()
    check.apply_moves(moves)
    return check.is_solved()


def test_iddfs_finds_shortest():
    cube = scrambled("R U")
    solution = iddfs_solve(cube, 4)
    assert solution == [Move.UPRIME, Move.RPRIME]
    assert cube == scrambled("R U")


def test_iddfs_gives_up_past_limit():
    assert iddfs_solve(scrambled("R U F"), 2) is None


def test_dfs_respects_depth():
    cube = scrambled("F D'")
    solution = dfs_solve(cube, 2)
    assert len(solution) == 2
    assert solves(cube, solution)
    assert dfs_solve(cube, 1) is None


def test_bfs_finds_shortest():
    cube = scrambled("L B2")
    solution = bfs_solve(cube, 3)
    assert solution == [Move.B2, Move.LPRIME]
    assert bfs_solve(cube, 1) is None


def test_solved_input():
    for fn in (iddfs_solve, dfs_solve, bfs_solve):
        assert fn(CubeState(), 2) == []
