import random

import pytest

from cube_engine.corners import (
    CORNER_NAMES, NUM_CORNERS, corner_colors, corner_configuration,
    corner_identity, corner_orientation,
)
from cube_engine.cube_state import CubeState, Move, random_scramble

SOLVED_IDENTITIES = [0, 1, 3, 2, 4, 5, 6, 7]


def test_solved_cube_corners():
    cube = CubeState()
    idents, oris = corner_configuration(cube)
    assert idents == SOLVED_IDENTITIES
    assert oris == [0] * NUM_CORNERS
    assert corner_colors(cube, 0) == "WRB"
    assert corner_colors(cube, 7) == "YOG"
    assert len(CORNER_NAMES) == NUM_CORNERS


def test_u_turn_cycles_top_corners_without_twist():
    cube = CubeState()
    cube.apply_move(Move.U)
    idents, oris = corner_configuration(cube)
    # UFR <- UBR <- UBL <- UFL <- UFR
    assert idents == [2, 0, 1, 3, 4, 5, 6, 7]
    assert oris == [0] * NUM_CORNERS


def test_r_turn_leaves_left_corners_alone():
    cube = CubeState()
    cube.apply_move(Move.R)
    idents, oris = corner_configuration(cube)
    for slot in (1, 2, 5, 7):
        assert idents[slot] == SOLVED_IDENTITIES[slot]
        assert oris[slot] == 0
    assert sorted(idents) == list(range(8))
    assert any(o != 0 for o in oris)


def test_configuration_matches_single_slot_queries():
    cube = CubeState()
    random_scramble(cube, 30, random.Random(5))
    idents, oris = corner_configuration(cube)
    assert sorted(idents) == list(range(8))
    for slot in range(NUM_CORNERS):
        assert corner_identity(cube, slot) == idents[slot]
        assert corner_orientation(cube, slot) == oris[slot]
        assert oris[slot] in (0, 1, 2)


@pytest.mark.parametrize("slot", [-1, 8])
def test_slot_out_of_range(slot):
    with pytest.raises(IndexError):
        corner_identity(CubeState(), slot)
