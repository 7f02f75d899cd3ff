import random

import pytest

from cube_engine.cube_state import (
    ALL_MOVES, Color, CubeState, Face, Move, format_moves, parse_moves, random_scramble,
)


def scrambled(seed=7, count=25):
    cube = CubeState()
    random_scramble(cube, count, random.Random(seed))
    return cube


def test_new_cube_is_solved():
    cube = CubeState()
    assert cube.is_solved()
    assert cube.stickers() == "W" * 9 + "G" * 9 + "R" * 9 + "B" * 9 + "O" * 9 + "Y" * 9


def test_every_move_unsolves():
    for m in ALL_MOVES:
        cube = CubeState()
        cube.apply_move(m)
        assert not cube.is_solved(), m


def test_move_then_inverse_is_identity():
    base = scrambled()
    for m in ALL_MOVES:
        cube = base.copy()
        cube.apply_move(m)
        cube.invert_move(m)
        assert cube == base, m


def test_quarter_turns_order_four_half_turns_order_two():
    base = scrambled(seed=3)
    for m in ALL_MOVES:
        cube = base.copy()
        order = 2 if m.is_half_turn else 4
        for i in range(order):
            if i:
                assert cube != base, m
            cube.apply_move(m)
        assert cube == base, m


def test_half_turn_is_two_quarters_and_prime_is_three():
    for face_moves in zip(ALL_MOVES[0::3], ALL_MOVES[1::3], ALL_MOVES[2::3]):
        q, prime, half = face_moves
        a, b, c = CubeState(), CubeState(), CubeState()
        a.apply_moves([q, q])
        b.apply_move(half)
        assert a == b
        a.apply_move(q)
        c.apply_move(prime)
        assert a == c


def test_opposite_faces_commute():
    for x, y in ((Move.R, Move.L), (Move.U, Move.D), (Move.F, Move.B)):
        a, b = CubeState(), CubeState()
        a.apply_moves([x, y])
        b.apply_moves([y, x])
        assert a == b


def test_sexy_move_has_order_six():
    seq = parse_moves("R U R' U'")
    cube = CubeState()
    for i in range(6):
        cube.apply_moves(seq)
        if i < 5:
            assert not cube.is_solved()
    assert cube.is_solved()


def test_sticker_counts_survive_scrambles():
    for seed in range(5):
        letters = scrambled(seed=seed, count=60).stickers()
        assert len(letters) == 54
        for c in Color:
            assert letters.count(c.letter) == 9


def test_centers_never_move():
    cube = scrambled()
    for f in Face:
        assert cube.get_color(f, 1, 1) == f.color


def test_set_color_ignores_center():
    cube = CubeState()
    cube.set_color(Face.UP, 1, 1, Color.RED)
    assert cube.get_color(Face.UP, 1, 1) == Color.WHITE
    cube.set_color(Face.UP, 0, 1, Color.RED)
    assert cube.get_color(Face.UP, 0, 1) == Color.RED
    assert not cube.is_solved()


def test_invalid_move_leaves_state_untouched():
    cube = scrambled()
    before = cube.copy()
    with pytest.raises(ValueError):
        cube.apply_move("R")
    with pytest.raises(ValueError):
        cube.invert_move(3)
    assert cube == before


def test_copy_is_independent():
    a = CubeState()
    b = a.copy()
    b.apply_move(Move.F)
    assert a.is_solved()
    assert not b.is_solved()


def test_equal_states_hash_equal():
    a, b = CubeState(), CubeState()
    a.apply_moves([Move.R, Move.U])
    b.apply_moves([Move.R, Move.U])
    assert a == b and hash(a) == hash(b)
    assert len({a, b, CubeState()}) == 2


def test_parse_and_format_notation():
    moves = parse_moves("R U2 F' L")
    assert moves == [Move.R, Move.U2, Move.FPRIME, Move.L]
    assert parse_moves("R,U2, F'") == moves[:3]
    assert format_moves(moves) == "R U2 F' L"
    assert [m.notation for m in ALL_MOVES][:3] == ["L", "L'", "L2"]
    assert Move.RPRIME.inverse is Move.R
    assert Move.B2.inverse is Move.B2
    assert Move.DPRIME.turns == 3


@pytest.mark.parametrize("bad", ["X", "R3", "r", "R''"])
def test_parse_rejects_unknown_moves(bad):
    with pytest.raises(ValueError):
        parse_moves(bad)


def test_seeded_scramble_is_reproducible():
    a, b = CubeState(), CubeState()
    ma = random_scramble(a, 12, random.Random(99))
    mb = random_scramble(b, 12, random.Random(99))
    assert ma == mb and a == b
    replay = CubeState()
    replay.apply_moves(ma)
    assert replay == a


def test_render_net_layout():
    lines = CubeState().render().splitlines()
    assert len(lines) == 11
    assert lines[0] == "       W W W"
    assert lines[4] == "G G G  R R R  B B B  O O O"
    assert lines[-1] == "       Y Y Y"
