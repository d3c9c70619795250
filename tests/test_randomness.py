from __future__ import annotations

from collections import Counter
from itertools import permutations

from rally.core import PythonRandomSource, seeded_random


def test_shuffle_is_a_permutation_in_place():
    items = list(range(20))
    seeded_random(3).shuffle(items)
    assert sorted(items) == list(range(20))
    assert items != list(range(20))


def test_shuffle_handles_empty_and_single_lists():
    rand = seeded_random(1)
    empty: list[int] = []
    single = [42]
    rand.shuffle(empty)
    rand.shuffle(single)
    assert empty == []
    assert single == [42]


def test_shuffle_is_close_to_uniform_over_small_lists():
    rand = seeded_random(2024)
    counts: Counter[tuple[str, ...]] = Counter()
    trials = 6000
    for _ in range(trials):
        items = ["a", "b", "c"]
        rand.shuffle(items)
        counts[tuple(items)] += 1

    assert set(counts) == set(permutations("abc"))
    expected = trials / 6
    assert all(abs(c - expected) < expected * 0.15 for c in counts.values())


def test_spawned_streams_are_deterministic_and_independent():
    a = seeded_random(9).spawn("draw")
    b = seeded_random(9).spawn("draw")
    other = seeded_random(9).spawn("other")
    seq_a = [a.randint(0, 1000) for _ in range(10)]
    seq_b = [b.randint(0, 1000) for _ in range(10)]
    seq_other = [other.randint(0, 1000) for _ in range(10)]
    assert seq_a == seq_b
    assert seq_a != seq_other


def test_unseeded_spawn_stays_unseeded():
    child = PythonRandomSource(seed=None).spawn("draw")
    assert isinstance(child, PythonRandomSource)
    assert 0 <= child.randint(0, 5) <= 5
