"""Tests for the Monte Carlo engine."""

import threading
from unittest.mock import Mock

import numpy as np
import pandas as pd
import pytest

from petersburg_paradox.config import SimulationConfig
from petersburg_paradox.game import PetersburgGame
from petersburg_paradox.monte_carlo import MonteCarloEngine, SimulationResults
from petersburg_paradox.summary_statistics import calculate_moment_statistics


class TestMonteCarloEngine:
    """Test the sequential sample-set engine."""

    def test_default_config(self):
        """Engine defaults to the reference run size."""
        engine = MonteCarloEngine()
        assert engine.config.num_samples == 500
        assert engine.config.num_trials == 1_000_000
        assert isinstance(engine.game, PetersburgGame)

    def test_run_produces_full_sample_set(self, small_config):
        results = MonteCarloEngine(small_config).run()

        assert isinstance(results, SimulationResults)
        assert results.num_samples == 20
        assert results.sample_means.dtype == np.float64
        assert results.num_trials == 1_000
        assert results.cancelled is False
        assert results.execution_time >= 0

    def test_every_sample_mean_at_least_two(self, small_config):
        results = MonteCarloEngine(small_config).run()
        assert np.all(results.sample_means >= 2.0)

    def test_statistics_match_aggregator(self, small_config):
        """Engine statistics are exactly the aggregator over its sample set."""
        results = MonteCarloEngine(small_config).run()
        assert results.statistics == calculate_moment_statistics(results.sample_means)

    def test_reproducible_with_seed(self, small_config):
        results1 = MonteCarloEngine(small_config).run()
        results2 = MonteCarloEngine(small_config).run()
        np.testing.assert_array_equal(results1.sample_means, results2.sample_means)

    def test_iterative_method(self):
        config = SimulationConfig(num_samples=5, num_trials=200, seed=3, method="iterative")
        results = MonteCarloEngine(config).run()

        assert results.num_samples == 5
        assert np.all(results.sample_means >= 2.0)

    def test_single_trial_samples_are_powers_of_two(self):
        config = SimulationConfig(num_samples=50, num_trials=1, seed=17)
        results = MonteCarloEngine(config).run()

        exponents = np.log2(results.sample_means)
        np.testing.assert_array_equal(exponents, np.round(exponents))
        assert results.sample_means.min() >= 2.0

    def test_injected_game_is_used(self):
        """An explicitly passed simulator owns the generator."""
        config = SimulationConfig(num_samples=3, num_trials=10, seed=1)
        game = PetersburgGame(seed=555)
        engine = MonteCarloEngine(config, game=game)

        assert engine.game is game
        expected = PetersburgGame(seed=555).play_samples(3, 10)
        np.testing.assert_array_equal(engine.run().sample_means, expected)

    def test_progress_bar(self):
        config = SimulationConfig(num_samples=4, num_trials=10, seed=1, progress_bar=True)
        results = MonteCarloEngine(config).run()
        assert results.num_samples == 4


class TestProgressCallback:
    """Test progress callbacks during a run."""

    def test_called_once_per_decile(self, small_config):
        callback = Mock()
        MonteCarloEngine(small_config).run(progress_callback=callback)

        completed = [call.args[0] for call in callback.call_args_list]
        assert completed == [2, 4, 6, 8, 10, 12, 14, 16, 18, 20]
        for call in callback.call_args_list:
            assert call.args[1] == 20
            assert call.args[2] >= 0

    def test_callback_does_not_change_results(self, small_config):
        """Progress reporting never touches the generator."""
        without = MonteCarloEngine(small_config).run()
        with_cb = MonteCarloEngine(small_config).run(progress_callback=Mock())
        np.testing.assert_array_equal(without.sample_means, with_cb.sample_means)

    def test_fewer_samples_than_deciles(self):
        config = SimulationConfig(num_samples=4, num_trials=10, seed=2)
        callback = Mock()
        MonteCarloEngine(config).run(progress_callback=callback)

        completed = [call.args[0] for call in callback.call_args_list]
        assert completed == [1, 2, 3, 4]


class TestCancellation:
    """Test cooperative cancellation."""

    def test_cancel_before_start(self, small_config):
        event = threading.Event()
        event.set()

        results = MonteCarloEngine(small_config).run(cancel_event=event)

        assert results.cancelled is True
        assert results.num_samples == 0
        assert results.statistics is None
        assert "cancelled" in results.summary()

    def test_cancel_mid_run(self, small_config):
        """Cancelling from the first decile callback keeps two samples."""
        event = threading.Event()

        def callback(completed, total, elapsed):
            event.set()

        results = MonteCarloEngine(small_config).run(progress_callback=callback, cancel_event=event)

        assert results.cancelled is True
        assert results.num_samples == 2
        assert results.statistics is not None
        assert results.statistics.num_samples == 2

    def test_unset_event_runs_to_completion(self, small_config):
        results = MonteCarloEngine(small_config).run(cancel_event=threading.Event())
        assert results.cancelled is False
        assert results.num_samples == 20


class TestSimulationResults:
    """Test the results container."""

    def test_summary_report(self, small_config):
        results = MonteCarloEngine(small_config).run()
        summary = results.summary()

        assert summary.startswith("Through 20 samples of 1000 trials each")
        assert "Excess Kurtosis:" in summary

    def test_to_dataframe(self, small_config):
        results = MonteCarloEngine(small_config).run()
        df = results.to_dataframe()

        assert isinstance(df, pd.DataFrame)
        assert df.index.name == "sample"
        assert len(df) == 20
        np.testing.assert_array_equal(df["sample_mean"].to_numpy(), results.sample_means)

    def test_num_samples_property(self):
        results = SimulationResults(
            sample_means=np.array([2.0, 4.0]),
            statistics=None,
            num_trials=1,
            execution_time=0.0,
            config=SimulationConfig(num_samples=2, num_trials=1),
        )
        assert results.num_samples == 2

    @pytest.mark.parametrize("num_samples", [2, 3])
    def test_minimum_sample_sets(self, num_samples):
        config = SimulationConfig(num_samples=num_samples, num_trials=5, seed=4)
        results = MonteCarloEngine(config).run()
        assert results.statistics is not None
        assert results.statistics.num_samples == num_samples
