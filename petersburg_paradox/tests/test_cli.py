"""Tests for the command-line program."""

import pandas as pd
import pytest

from petersburg_paradox.cli import _build_parser, load_run_config, main
from petersburg_paradox.config import ConfigurationError

SMALL_RUN = ["--num-samples", "20", "--num-trials", "100", "--seed", "1"]


class TestMain:
    def test_small_run(self, capsys):
        exit_code = main(SMALL_RUN)
        out = capsys.readouterr().out

        assert exit_code == 0
        assert out.startswith("Calculating payoffs:")
        assert out.count("percent done.") == 10
        assert "100 percent done." in out
        assert "Through 20 samples of 100 trials each" in out
        for label in ("Mean:", "Median:", "Standard Deviation:", "Range:", "Skewness:", "Excess Kurtosis:"):
            assert out.count(label) == 1

    def test_help_documents_program(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])

        assert exc_info.value.code == 0
        assert "--num-samples" in capsys.readouterr().out
        assert main.__doc__ is not None

    def test_quiet_run(self, capsys):
        assert main(SMALL_RUN + ["--quiet"]) == 0
        out = capsys.readouterr().out

        assert "percent done." not in out
        assert "Calculating payoffs" not in out
        assert "Mean:" in out

    def test_reproducible_output(self, capsys):
        main(SMALL_RUN + ["--quiet"])
        first = capsys.readouterr().out
        main(SMALL_RUN + ["--quiet"])
        second = capsys.readouterr().out
        assert first == second

    def test_zero_trials_fails_fast(self, capsys):
        exit_code = main(["--num-trials", "0"])
        err = capsys.readouterr().err

        assert exit_code == 2
        assert "simulation.num_trials" in err

    def test_single_sample_fails_fast(self, capsys):
        assert main(["--num-samples", "1"]) == 2
        assert "simulation.num_samples" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "absent.yaml")]) == 2
        assert "not found" in capsys.readouterr().err

    def test_invalid_config_file(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("simulation:\n  num_trials: 0\n", encoding="utf-8")

        assert main(["--config", str(path)]) == 2
        assert "num_trials" in capsys.readouterr().err

    def test_export_csv(self, tmp_path, capsys):
        out_csv = tmp_path / "means.csv"
        assert main(SMALL_RUN + ["--quiet", "--export-csv", str(out_csv)]) == 0

        df = pd.read_csv(out_csv)
        assert len(df) == 20
        assert (df["sample_mean"] >= 2.0).all()

    def test_export_from_config_file(self, tmp_path, capsys):
        path = tmp_path / "run.yaml"
        path.write_text(
            "simulation:\n  num_samples: 10\n  num_trials: 50\n  seed: 3\n"
            f"output:\n  output_directory: {tmp_path.as_posix()}\n  export_sample_means: true\n",
            encoding="utf-8",
        )

        assert main(["--config", str(path)]) == 0
        assert (tmp_path / "sample_means.csv").exists()
        assert "Wrote 10 sample means" in capsys.readouterr().out

    def test_iterative_method(self, capsys):
        assert main(["--num-samples", "3", "--num-trials", "20", "--method", "iterative", "--quiet"]) == 0
        assert "Through 3 samples of 20 trials each" in capsys.readouterr().out


class TestLoadRunConfig:
    def test_defaults_without_arguments(self):
        config = load_run_config(_build_parser().parse_args([]))

        assert config.simulation.num_samples == 500
        assert config.simulation.num_trials == 1_000_000
        assert config.simulation.seed is None

    def test_cli_overrides_config_file(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("simulation:\n  num_samples: 30\n  num_trials: 10\n", encoding="utf-8")

        args = _build_parser().parse_args(["--config", str(path), "--num-trials", "99"])
        config = load_run_config(args)

        assert config.simulation.num_samples == 30
        assert config.simulation.num_trials == 99

    def test_invalid_values_raise_configuration_error(self):
        args = _build_parser().parse_args(["--num-trials", "0"])
        with pytest.raises(ConfigurationError):
            load_run_config(args)
