# cube_engine/cube_state.py
# Bit-packed 3x3x3 cube: one 64-bit word per face, 8 perimeter stickers as
# one-hot color bytes, center implicit. 18 face moves (quarter, prime, half).
from __future__ import annotations
import enum
import random
from typing import Iterable, List, Optional, Tuple

# --- faces, colors, moves -----------------------------------------------------

class Face(enum.IntEnum):
    UP = 0
    LEFT = 1
    FRONT = 2
    RIGHT = 3
    BACK = 4
    DOWN = 5

    @property
    def color(self) -> "Color": return Color(int(self))


class Color(enum.IntEnum):
    WHITE = 0
    GREEN = 1
    RED = 2
    BLUE = 3
    ORANGE = 4
    YELLOW = 5

    @property
    def letter(self) -> str: return _COLOR_LETTERS[self]


_COLOR_LETTERS = "WGRBOY"


class Move(enum.Enum):
    L = 0
    LPRIME = 1
    L2 = 2
    R = 3
    RPRIME = 4
    R2 = 5
    U = 6
    UPRIME = 7
    U2 = 8
    D = 9
    DPRIME = 10
    D2 = 11
    F = 12
    FPRIME = 13
    F2 = 14
    B = 15
    BPRIME = 16
    B2 = 17

    @property
    def face(self) -> Face: return _FACE_BY_LETTER[self.name[0]]

    @property
    def turns(self) -> int:
        """Clockwise quarter turns: 1 for X, 3 for X', 2 for X2."""
        return (1, 3, 2)[self.value % 3]

    @property
    def is_half_turn(self) -> bool: return self.value % 3 == 2

    @property
    def inverse(self) -> "Move":
        kind = self.value % 3
        if kind == 2:
            return self
        return Move(self.value + 1 if kind == 0 else self.value - 1)

    @property
    def notation(self) -> str:
        return self.name[0] + ("", "'", "2")[self.value % 3]

    @staticmethod
    def parse(text: str) -> "Move":
        tok = text.strip()
        mv = _MOVES_BY_NOTATION.get(tok)
        if mv is None:
            raise ValueError(f"Unknown move: {text!r}")
        return mv

    def __str__(self): return self.notation


_FACE_BY_LETTER = {"U": Face.UP, "L": Face.LEFT, "F": Face.FRONT,
                   "R": Face.RIGHT, "B": Face.BACK, "D": Face.DOWN}

ALL_MOVES: Tuple[Move, ...] = tuple(Move)
_MOVES_BY_NOTATION = {m.notation: m for m in ALL_MOVES}


def parse_moves(text: str) -> List[Move]:
    """'R U2 F' L' (spaces or commas) -> [Move.R, Move.U2, Move.FPRIME, Move.L]."""
    return [Move.parse(tok) for tok in text.replace(",", " ").split()]


def format_moves(moves: Iterable[Move]) -> str:
    return " ".join(m.notation for m in moves)

# --- bit layout ---------------------------------------------------------------
#   0 1 2
#   7 8 3     8 = center, not stored
#   6 5 4
_LAYOUT = ((0, 1, 2),
           (7, 8, 3),
           (6, 5, 4))

ONE_8 = 0xFF
ONE_24 = 0xFFFFFF
MASK_64 = (1 << 64) - 1

_ONEHOT_TO_COLOR = {1 << int(c): c for c in Color}


def _solved_word(side: int) -> int:
    clr = 1 << side
    word = 0
    for i in range(8):
        word |= clr << (8 * i)
    return word


SOLVED_FACES: Tuple[int, ...] = tuple(_solved_word(s) for s in range(6))


class CubeState:
    """
    Value type over the 54 stickers. Moves mutate in place; call copy()
    before branching. Equality and hashing cover every sticker.
    """

    __slots__ = ("faces",)

    def __init__(self, faces: Optional[Iterable[int]] = None):
        self.faces: List[int] = list(SOLVED_FACES if faces is None else faces)
        if len(self.faces) != 6:
            raise ValueError("CubeState needs exactly 6 face words")

    def copy(self) -> "CubeState":
        return CubeState(self.faces)

    # --- sticker access ---

    def get_color(self, face: Face, row: int, col: int) -> Color:
        idx = _LAYOUT[row][col]
        if idx == 8:
            return Color(int(face))
        return _ONEHOT_TO_COLOR[(self.faces[face] >> (8 * idx)) & ONE_8]

    def set_color(self, face: Face, row: int, col: int, color: Color) -> None:
        idx = _LAYOUT[row][col]
        if idx == 8:
            return
        word = self.faces[face] & ~(ONE_8 << (8 * idx))
        self.faces[face] = word | ((1 << int(color)) << (8 * idx))

    def is_solved(self) -> bool:
        return tuple(self.faces) == SOLVED_FACES

    def stickers(self) -> str:
        """54 color letters, faces in Face order, each face row-major."""
        return "".join(self.get_color(f, r, c).letter
                       for f in Face for r in range(3) for c in range(3))

    # --- moves ---

    def apply_move(self, move: Move) -> None:
        if not isinstance(move, Move):
            raise ValueError(f"Not a move: {move!r}")
        turn = _QUARTER_TURNS[move.face]
        for _ in range(move.turns):
            turn(self)

    def apply_moves(self, moves: Iterable[Move]) -> None:
        for m in moves:
            self.apply_move(m)

    def invert_move(self, move: Move) -> None:
        if not isinstance(move, Move):
            raise ValueError(f"Not a move: {move!r}")
        self.apply_move(move.inverse)

    # --- equality / hashing ---

    def key(self) -> Tuple[int, ...]:
        return tuple(self.faces)

    def __eq__(self, other):
        if not isinstance(other, CubeState):
            return NotImplemented
        return self.faces == other.faces

    def __hash__(self):
        return hash(tuple(self.faces))

    def __repr__(self):
        return f"CubeState({self.stickers()})"

    # --- text view ---

    def render(self) -> str:
        """Planar cross: UP above, LEFT FRONT RIGHT BACK in a row, DOWN below."""
        def row(face: Face, r: int) -> str:
            return " ".join(self.get_color(face, r, c).letter for c in range(3))

        pad = " " * 7
        lines = []
        for r in range(3):
            lines.append(pad + row(Face.UP, r))
        lines.append("")
        for r in range(3):
            lines.append("  ".join(row(f, r) for f in (Face.LEFT, Face.FRONT, Face.RIGHT, Face.BACK)))
        lines.append("")
        for r in range(3):
            lines.append(pad + row(Face.DOWN, r))
        return "\n".join(lines)

    def __str__(self): return self.render()

# --- quarter turns (clockwise, looking at the face) ---------------------------

def _rotate_face(cube: CubeState, ind: int) -> None:
    side = cube.faces[ind]
    cube.faces[ind] = ((side << 16) | (side >> 48)) & MASK_64


def _sticker(cube: CubeState, side: int, idx: int) -> int:
    return (cube.faces[side] >> (8 * idx)) & ONE_8


def _put(cube: CubeState, side: int, idx: int, clr: int) -> None:
    cube.faces[side] = (cube.faces[side] & ~(ONE_8 << (8 * idx))) | (clr << (8 * idx))


def _copy_strip(cube: CubeState, dst: int, dst_idx: Tuple[int, int, int],
                src: int, src_idx: Tuple[int, int, int]) -> None:
    clrs = [_sticker(cube, src, i) for i in src_idx]
    for i, clr in zip(dst_idx, clrs):
        _put(cube, dst, i, clr)


def _turn_u(cube: CubeState) -> None:
    _rotate_face(cube, Face.UP)
    f = cube.faces
    temp = f[Face.FRONT] & ONE_24
    f[Face.FRONT] = (f[Face.FRONT] & ~ONE_24) | (f[Face.RIGHT] & ONE_24)
    f[Face.RIGHT] = (f[Face.RIGHT] & ~ONE_24) | (f[Face.BACK] & ONE_24)
    f[Face.BACK] = (f[Face.BACK] & ~ONE_24) | (f[Face.LEFT] & ONE_24)
    f[Face.LEFT] = (f[Face.LEFT] & ~ONE_24) | temp


def _turn_l(cube: CubeState) -> None:
    _rotate_face(cube, Face.LEFT)
    saved = [_sticker(cube, Face.FRONT, i) for i in (0, 6, 7)]
    _copy_strip(cube, Face.FRONT, (0, 7, 6), Face.UP, (0, 7, 6))
    _copy_strip(cube, Face.UP, (0, 7, 6), Face.BACK, (4, 3, 2))
    _copy_strip(cube, Face.BACK, (4, 3, 2), Face.DOWN, (0, 7, 6))
    for i, clr in zip((0, 6, 7), saved):
        _put(cube, Face.DOWN, i, clr)


def _turn_f(cube: CubeState) -> None:
    _rotate_face(cube, Face.FRONT)
    saved = [_sticker(cube, Face.UP, i) for i in (4, 5, 6)]
    _copy_strip(cube, Face.UP, (4, 5, 6), Face.LEFT, (2, 3, 4))
    _copy_strip(cube, Face.LEFT, (2, 3, 4), Face.DOWN, (0, 1, 2))
    _copy_strip(cube, Face.DOWN, (0, 1, 2), Face.RIGHT, (6, 7, 0))
    for i, clr in zip((6, 7, 0), saved):
        _put(cube, Face.RIGHT, i, clr)


def _turn_r(cube: CubeState) -> None:
    _rotate_face(cube, Face.RIGHT)
    saved = [_sticker(cube, Face.UP, i) for i in (2, 3, 4)]
    _copy_strip(cube, Face.UP, (2, 3, 4), Face.FRONT, (2, 3, 4))
    _copy_strip(cube, Face.FRONT, (2, 3, 4), Face.DOWN, (2, 3, 4))
    _copy_strip(cube, Face.DOWN, (2, 3, 4), Face.BACK, (6, 7, 0))
    for i, clr in zip((6, 7, 0), saved):
        _put(cube, Face.BACK, i, clr)


def _turn_b(cube: CubeState) -> None:
    _rotate_face(cube, Face.BACK)
    saved = [_sticker(cube, Face.UP, i) for i in (0, 1, 2)]
    _copy_strip(cube, Face.UP, (0, 1, 2), Face.RIGHT, (2, 3, 4))
    _copy_strip(cube, Face.RIGHT, (2, 3, 4), Face.DOWN, (4, 5, 6))
    _copy_strip(cube, Face.DOWN, (4, 5, 6), Face.LEFT, (6, 7, 0))
    for i, clr in zip((6, 7, 0), saved):
        _put(cube, Face.LEFT, i, clr)


def _turn_d(cube: CubeState) -> None:
    _rotate_face(cube, Face.DOWN)
    saved = [_sticker(cube, Face.FRONT, i) for i in (4, 5, 6)]
    _copy_strip(cube, Face.FRONT, (4, 5, 6), Face.LEFT, (4, 5, 6))
    _copy_strip(cube, Face.LEFT, (4, 5, 6), Face.BACK, (4, 5, 6))
    _copy_strip(cube, Face.BACK, (4, 5, 6), Face.RIGHT, (4, 5, 6))
    for i, clr in zip((4, 5, 6), saved):
        _put(cube, Face.RIGHT, i, clr)


_QUARTER_TURNS = {
    Face.UP: _turn_u,
    Face.LEFT: _turn_l,
    Face.FRONT: _turn_f,
    Face.RIGHT: _turn_r,
    Face.BACK: _turn_b,
    Face.DOWN: _turn_d,
}

# --- scrambles ----------------------------------------------------------------

def random_scramble(cube: CubeState, count: int, rng: random.Random) -> List[Move]:
    """Apply `count` moves drawn from `rng` (caller-seeded) and return them."""
    moves = [rng.choice(ALL_MOVES) for _ in range(count)]
    cube.apply_moves(moves)
    return moves
