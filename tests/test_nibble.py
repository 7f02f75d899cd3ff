import pytest

from cube_engine.nibble import NibbleArray


def test_buffer_is_half_the_cells_rounded_up():
    assert NibbleArray(10).storage_size == 5
    assert NibbleArray(11).storage_size == 6
    assert len(NibbleArray(11)) == 11


def test_init_value_fills_both_nibbles():
    arr = NibbleArray(5, init_value=0xA)
    assert bytes(arr.data) == b"\xaa\xaa\xaa"
    assert [arr.get(i) for i in range(5)] == [0xA] * 5


def test_even_high_odd_low():
    arr = NibbleArray(4, init_value=0)
    arr.set(0, 3)
    arr.set(1, 9)
    assert arr.data[0] == 0x39
    assert arr.get(0) == 3 and arr.get(1) == 9


def test_neighbours_are_isolated():
    arr = NibbleArray(9, init_value=0xF)
    for i in range(9):
        arr.set(i, i)
    for i in range(9):
        assert arr.get(i) == i
    arr.set(4, 0xC)
    assert [arr.get(i) for i in (3, 4, 5)] == [3, 0xC, 5]


def test_only_low_bits_are_stored():
    arr = NibbleArray(2, init_value=0)
    arr.set(1, 0x1E)
    assert arr.get(1) == 0xE
    assert arr.get(0) == 0


def test_fill_resets_everything():
    arr = NibbleArray(7, init_value=1)
    arr.set(6, 9)
    arr.fill(4)
    assert [arr.get(i) for i in range(7)] == [4] * 7


@pytest.mark.parametrize("pos", [-1, 6, 100])
def test_out_of_range(pos):
    arr = NibbleArray(6)
    with pytest.raises(IndexError):
        arr.get(pos)
    with pytest.raises(IndexError):
        arr.set(pos, 1)


def test_size_must_be_positive():
    with pytest.raises(ValueError):
        NibbleArray(0)
