# cube_engine/corners.py
from __future__ import annotations
from typing import List, Tuple

from cube_engine.cube_state import Color, CubeState, Face

Sticker = Tuple[Face, int, int]

# Three fixed sticker coordinates per corner slot. The first sticker is
# always on UP or DOWN, which makes orientation 0 the solved alignment.
CORNER_STICKERS: Tuple[Tuple[Sticker, Sticker, Sticker], ...] = (
    ((Face.UP, 2, 2), (Face.FRONT, 0, 2), (Face.RIGHT, 0, 0)),   # 0 UFR
    ((Face.UP, 2, 0), (Face.FRONT, 0, 0), (Face.LEFT, 0, 2)),    # 1 UFL
    ((Face.UP, 0, 0), (Face.BACK, 0, 2), (Face.LEFT, 0, 0)),     # 2 UBL
    ((Face.UP, 0, 2), (Face.BACK, 0, 0), (Face.RIGHT, 0, 2)),    # 3 UBR
    ((Face.DOWN, 0, 2), (Face.FRONT, 2, 2), (Face.RIGHT, 2, 0)), # 4 DFR
    ((Face.DOWN, 0, 0), (Face.FRONT, 2, 0), (Face.LEFT, 2, 2)),  # 5 DFL
    ((Face.DOWN, 2, 2), (Face.BACK, 2, 0), (Face.RIGHT, 2, 2)),  # 6 DBR
    ((Face.DOWN, 2, 0), (Face.BACK, 2, 2), (Face.LEFT, 2, 0)),   # 7 DBL
)
CORNER_NAMES = ("UFR", "UFL", "UBL", "UBR", "DFR", "DFL", "DBR", "DBL")
NUM_CORNERS = len(CORNER_STICKERS)

# one bit per color axis: white/yellow -> 4, red/orange -> 2, blue/green -> 1
_IDENTITY_BIT = {
    Color.WHITE: 0, Color.YELLOW: 4,
    Color.RED: 0, Color.ORANGE: 2,
    Color.BLUE: 0, Color.GREEN: 1,
}
_REFERENCE_AXIS = (Color.WHITE, Color.YELLOW)


def _slot_stickers(slot: int) -> Tuple[Sticker, Sticker, Sticker]:
    if not 0 <= slot < NUM_CORNERS:
        raise IndexError(f"corner slot out of range: {slot}")
    return CORNER_STICKERS[slot]


def _slot_colors(cube: CubeState, slot: int) -> Tuple[Color, Color, Color]:
    a, b, c = _slot_stickers(slot)
    return cube.get_color(*a), cube.get_color(*b), cube.get_color(*c)


def corner_colors(cube: CubeState, slot: int) -> str:
    return "".join(c.letter for c in _slot_colors(cube, slot))


def corner_identity(cube: CubeState, slot: int) -> int:
    """Which physical corner (0..7) sits in `slot`, from its color set."""
    ident = 0
    for c in _slot_colors(cube, slot):
        ident |= _IDENTITY_BIT[c]
    return ident


def _orientation_of(colors: Tuple[Color, Color, Color]) -> int:
    for pos, c in enumerate(colors):
        if c in _REFERENCE_AXIS:
            return pos
    raise ValueError(f"corner has no white/yellow sticker: {colors}")


def corner_orientation(cube: CubeState, slot: int) -> int:
    """0, 1 or 2: position of the white/yellow sticker in the fixed order."""
    return _orientation_of(_slot_colors(cube, slot))


def corner_configuration(cube: CubeState) -> Tuple[List[int], List[int]]:
    """(identities, orientations) for slots 0..7 in one pass."""
    idents: List[int] = []
    oris: List[int] = []
    bits = _IDENTITY_BIT
    for slot in range(NUM_CORNERS):
        colors = _slot_colors(cube, slot)
        idents.append(bits[colors[0]] | bits[colors[1]] | bits[colors[2]])
        oris.append(_orientation_of(colors))
    return idents, oris
