import itertools

import pytest

from cube_engine.permutation import PermutationIndexer, choose, factorial, pick


def test_counting_helpers():
    assert factorial(0) == 1
    assert factorial(8) == 40320
    assert pick(8, 7) == 40320
    assert pick(12, 7) == 3991680
    assert choose(12, 7) == 792
    assert pick(3, 4) == 0 and choose(3, -1) == 0


def test_full_permutations_of_eight_are_a_bijection():
    idx = PermutationIndexer(8)
    ranks = [idx.rank(p) for p in itertools.permutations(range(8))]
    assert idx.size == 40320
    assert sorted(ranks) == list(range(40320))
    # lexicographic order
    assert ranks == list(range(40320))


def test_partial_permutations_seven_of_eight_are_a_bijection():
    idx = PermutationIndexer(8, 7)
    ranks = {idx.rank(p) for p in itertools.permutations(range(8), 7)}
    assert idx.size == 40320
    assert ranks == set(range(40320))


def test_partial_small_case():
    idx = PermutationIndexer(4, 2)
    assert idx.rank((0, 1)) == 0
    assert idx.rank((0, 2)) == 1
    assert idx.rank((1, 0)) == 3
    assert idx.rank((3, 2)) == idx.size - 1 == 11


def test_large_n_without_popcount_table():
    idx = PermutationIndexer(22, 3)
    assert idx._ones is None
    assert idx.rank((0, 1, 2)) == 0
    assert idx.rank((21, 20, 19)) == idx.size - 1


@pytest.mark.parametrize("perm", [(0, 1, 2), (0, 0, 1, 2), (0, 1, 2, 4), (0, 1, 2, -1)])
def test_rank_rejects_bad_input(perm):
    with pytest.raises(ValueError):
        PermutationIndexer(4).rank(perm)


def test_constructor_rejects_bad_shape():
    with pytest.raises(ValueError):
        PermutationIndexer(3, 4)
    with pytest.raises(ValueError):
        PermutationIndexer(0)
