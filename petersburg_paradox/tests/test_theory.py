"""Tests for closed-form game quantities."""

import numpy as np
import pandas as pd
import pytest

from petersburg_paradox.game import PetersburgGame
from petersburg_paradox.theory import flip_count_pmf, flip_count_table, truncated_expected_payoff


class TestFlipCountPmf:
    def test_geometric_halving(self):
        assert flip_count_pmf(1) == pytest.approx(0.5)
        assert flip_count_pmf(2) == pytest.approx(0.25)
        assert flip_count_pmf(10) == pytest.approx(0.5**10)

    def test_outside_support(self):
        assert flip_count_pmf(0) == 0.0

    def test_array_input(self):
        np.testing.assert_allclose(flip_count_pmf(np.array([1, 2, 3])), [0.5, 0.25, 0.125])

    def test_sums_to_one(self):
        assert np.sum(flip_count_pmf(np.arange(1, 60))) == pytest.approx(1.0)


class TestTruncatedExpectedPayoff:
    @pytest.mark.parametrize("max_flips", [0, 1, 5, 40])
    def test_each_flip_contributes_one(self, max_flips):
        assert truncated_expected_payoff(max_flips) == pytest.approx(max_flips)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            truncated_expected_payoff(-1)


class TestFlipCountTable:
    def test_explicit_counts(self):
        table = flip_count_table([1, 1, 2, 3, 7], max_flips=3)

        assert isinstance(table, pd.DataFrame)
        assert table.index.name == "flips"
        assert list(table.index) == [1, 2, 3]
        assert list(table["observed"]) == [2, 1, 1]
        np.testing.assert_allclose(table["observed_frequency"], [0.4, 0.2, 0.2])
        np.testing.assert_allclose(table["expected_frequency"], [0.5, 0.25, 0.125])

    def test_simulated_counts_follow_law(self):
        counts = PetersburgGame(seed=31).flip_counts(100_000)
        table = flip_count_table(counts, max_flips=5)

        assert table.loc[1, "observed_frequency"] == pytest.approx(0.5, abs=0.01)
        assert table.loc[2, "observed_frequency"] == pytest.approx(0.25, abs=0.01)
        assert np.all(np.abs(table["difference"]) < 0.01)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            flip_count_table([])
