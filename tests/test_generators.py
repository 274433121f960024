"""Tests for the generator facade."""

import gc
import math
import weakref
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

import combogen.generators as generators_module
import combogen.permutations as permutations_module
from combogen import (
    CombinationGenerator,
    PermutationGenerator,
    WorkerPool,
    new_combination_generator,
    new_permutation_generator,
)

# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #

LETTERS = tuple("ABCDEFGH")


def _perm_expected_abc():
    return [
        ["A", "B", "C"],
        ["A", "C", "B"],
        ["B", "C", "A"],
        ["B", "A", "C"],
        ["C", "A", "B"],
        ["C", "B", "A"],
    ]


# ------------------------------------------------------------------ #
# Combination generator
# ------------------------------------------------------------------ #


class TestCombinationGenerator:
    def setup_method(self):
        self.combination = new_combination_generator("A", "B", "C")

    def test_generate(self):
        assert self.combination.generate(2) == [["A", "B"], ["A", "C"], ["B", "C"]]

    def test_generate_to_word(self):
        assert self.combination.generate_to_word(2) == ["AB", "AC", "BC"]

    def test_no_reversed_word(self):
        words = self.combination.generate_to_word(2)
        assert words[0][::-1] not in words

    def test_full_length_is_whole_set(self):
        assert self.combination.generate(3) == [["A", "B", "C"]]

    @pytest.mark.parametrize("p", range(1, 9))
    def test_count_matches_binomial(self, p):
        gen = new_combination_generator(*LETTERS)
        result = gen.generate(p)
        assert len(result) == math.comb(8, p) == gen.count(p)

    def test_mode_and_type(self):
        assert isinstance(self.combination, CombinationGenerator)
        assert self.combination.mode == "combination"


# ------------------------------------------------------------------ #
# Permutation generator
# ------------------------------------------------------------------ #


class TestPermutationGenerator:
    def setup_method(self):
        self.permutation = new_permutation_generator("A", "B")

    def test_generate_pair(self):
        assert self.permutation.generate(2) == [["A", "B"], ["B", "A"]]

    def test_generate_to_word_pair(self):
        assert self.permutation.generate_to_word(2) == ["AB", "BA"]

    def test_reversed_word_present(self):
        words = self.permutation.generate_to_word(2)
        assert words[0][::-1] in words

    def test_full_length_order(self):
        gen = new_permutation_generator("A", "B", "C")
        assert gen.generate(3) == _perm_expected_abc()

    def test_length_one(self):
        gen = new_permutation_generator("A", "B", "C")
        assert gen.generate(1) == [["A"], ["B"], ["C"]]

    def test_eight_choose_seven_count(self):
        gen = new_permutation_generator(*LETTERS)
        assert len(gen.generate(7)) == math.factorial(8) // math.factorial(1)

    def test_orderings_of_each_set_appear_once(self):
        gen = new_permutation_generator(*"ABCDE")
        result = gen.generate(3)
        combos = new_combination_generator(*"ABCDE").generate(3)
        assert len({tuple(r) for r in result}) == len(result) == math.perm(5, 3)
        assert {frozenset(r) for r in result} == {frozenset(c) for c in combos}

    def test_mode_and_type(self):
        assert isinstance(self.permutation, PermutationGenerator)
        assert self.permutation.mode == "permutation"


# ------------------------------------------------------------------ #
# Words and separators
# ------------------------------------------------------------------ #


class TestWords:
    def test_split_reconstructs_values(self):
        gen = new_permutation_generator(*"ABCD")
        values = gen.generate(3)
        words = gen.generate_to_word(3, "/")
        assert [w.split("/") for w in words] == values

    def test_space_separator_concatenates(self):
        gen = new_combination_generator("x", "y")
        assert gen.generate_to_word(2, " ") == ["xy"]

    def test_non_string_elements(self):
        gen = new_combination_generator(1, 2, 3)
        assert gen.generate_to_word(2, "+") == ["1+2", "1+3", "2+3"]


# ------------------------------------------------------------------ #
# Chunking and pool invariance
# ------------------------------------------------------------------ #


class TestParallelInvariance:
    @pytest.mark.parametrize("chunk_limit", [1, 5, 64, 1000])
    @pytest.mark.parametrize("n_jobs", [1, 3])
    def test_permutations_independent_of_chunking(self, chunk_limit, n_jobs):
        baseline = new_permutation_generator(*"ABCDEF", pool=WorkerPool(n_jobs=1))
        gen = new_permutation_generator(
            *"ABCDEF", pool=WorkerPool(n_jobs=n_jobs), chunk_limit=chunk_limit
        )
        assert gen.generate(4) == baseline.generate(4)
        assert gen.generate_to_word(4, ",") == baseline.generate_to_word(4, ",")

    @pytest.mark.parametrize("chunk_limit", [1, 7, 1000])
    def test_combinations_independent_of_chunking(self, chunk_limit):
        baseline = new_combination_generator(*LETTERS).generate(4)
        gen = new_combination_generator(
            *LETTERS, pool=WorkerPool(n_jobs=2), chunk_limit=chunk_limit
        )
        assert gen.generate(4) == baseline

    def test_concurrent_callers_share_instance(self):
        gen = new_permutation_generator(
            *"ABCDE", pool=WorkerPool(n_jobs=2), chunk_limit=8
        )
        expected = gen.generate(3)
        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(lambda _: gen.generate(3), range(8)))
        assert all(result == expected for result in results)

    def test_repeated_calls_are_identical(self):
        gen = new_combination_generator(*"ABCD")
        assert gen.generate(2) == gen.generate(2)


# ------------------------------------------------------------------ #
# Attributes and warnings
# ------------------------------------------------------------------ #


class TestAttributes:
    def test_elements_and_n(self):
        gen = new_combination_generator("A", "B", "C")
        assert gen.elements == ("A", "B", "C")
        assert gen.n == 3

    def test_elements_from_iterable(self):
        gen = PermutationGenerator(iter("XYZ"))
        assert gen.elements == ("X", "Y", "Z")

    def test_injected_pool_is_kept(self):
        pool = WorkerPool(n_jobs=2)
        assert new_permutation_generator("A", pool=pool).pool is pool

    def test_chunk_limit_explicit(self):
        assert new_combination_generator("A", chunk_limit=12).chunk_limit == 12

    def test_chunk_limit_rejects_zero(self):
        with pytest.raises(ValueError, match="chunk_limit"):
            new_combination_generator("A", chunk_limit=0)

    def test_repr(self):
        gen = new_combination_generator("A", "B", pool=WorkerPool(n_jobs=1))
        assert repr(gen).startswith(
            "CombinationGenerator(n=2, pool=WorkerPool(n_jobs=1"
        )

    def test_count_permutation(self):
        assert new_permutation_generator(*LETTERS).count(3) == 8 * 7 * 6

    def test_large_result_warns(self, monkeypatch):
        monkeypatch.setattr(generators_module, "LARGE_RESULT_THRESHOLD", 5)
        gen = new_permutation_generator("A", "B", "C")
        with pytest.warns(UserWarning, match="held in memory"):
            gen.generate(3)

    def test_numpy_integer_chunk_limit(self):
        gen = new_combination_generator("A", "B", "C", chunk_limit=np.int64(2))
        assert gen.chunk_limit == 2
        assert gen.generate(2) == [["A", "B"], ["A", "C"], ["B", "C"]]


# ------------------------------------------------------------------ #
# Per-request state
# ------------------------------------------------------------------ #


class TestNoRetainedState:
    def test_rotation_schedule_released_after_generate(self, monkeypatch):
        refs = []
        build = permutations_module.rotation_schedule

        def tracking_schedule(p):
            schedule = build(p)
            refs.append(weakref.ref(schedule))
            return schedule

        monkeypatch.setattr(
            permutations_module, "rotation_schedule", tracking_schedule
        )
        gen = new_permutation_generator(*"ABCDEF", pool=WorkerPool(n_jobs=1))
        assert len(gen.generate(5)) == 720
        gc.collect()
        assert len(refs) == 1
        assert refs[0]() is None
