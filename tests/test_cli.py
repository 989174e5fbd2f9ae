from pathlib import Path

import pandas as pd
from typer.testing import CliRunner

import calc
import plot
from adc_clock_calc import enumerate_clock_frequencies, preferred_frequencies

CONFIG_DIR = Path(__file__).parent.parent / "config"

runner = CliRunner()


def test_clocks_top():
    result = runner.invoke(calc.app, ["clocks", "--top", "3"])
    assert result.exit_code == 0, result.output
    assert "80.000000" in result.output
    assert f"{len(enumerate_clock_frequencies())} clock frequencies" in result.output


def test_clocks_preferred_only():
    result = runner.invoke(calc.app, ["--preferred-only", "clocks"])
    assert result.exit_code == 0, result.output
    expected = set(preferred_frequencies()) & enumerate_clock_frequencies()
    assert f"{len(expected)} clock frequencies" in result.output


def test_optimal():
    result = runner.invoke(
        calc.app, ["optimal", "200000", "--policy", "prefer-high-clock"]
    )
    assert result.exit_code == 0, result.output
    assert "Optimal ADC Settings:" in result.output
    assert "Fadc_ker_ck" in result.output


def test_optimal_needs_target():
    result = runner.invoke(calc.app, ["optimal"])
    assert result.exit_code != 0


def test_optimal_empty_menu(tmp_path):
    config_filename = tmp_path / "empty.py"
    config_filename.write_text("sampling_times = []\ntarget_sample_rate = 200_000\n")
    result = runner.invoke(calc.app, ["--config", str(config_filename), "optimal"])
    assert result.exit_code == 1
    assert "No candidate to rank" in result.output


def test_optimal_unknown_policy_in_config(tmp_path):
    config_filename = tmp_path / "bad_policy.py"
    config_filename.write_text(
        "policy = \"fastest\"\ntarget_sample_rate = 200_000\n"
    )
    result = runner.invoke(calc.app, ["--config", str(config_filename), "optimal"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)
    assert "Unknown policy" in result.output


def test_multiple_csv(tmp_path):
    output_filename = tmp_path / "settings.csv"
    result = runner.invoke(
        calc.app,
        ["multiple", "200000", "--max-results", "3", "--output", str(output_filename)],
    )
    assert result.exit_code == 0, result.output

    df = pd.read_csv(output_filename)
    assert len(df) == 3
    errors = list(df["Error"])
    assert errors == sorted(errors)


def test_multiple_from_config(tmp_path):
    output_filename = tmp_path / "settings.csv"
    result = runner.invoke(
        calc.app,
        [
            "--config",
            str(CONFIG_DIR / "stm32h7_custom.py"),
            "multiple",
            "--output",
            str(output_filename),
        ],
    )
    assert result.exit_code == 0, result.output

    df = pd.read_csv(output_filename)
    assert len(df) == 5
    assert set(df["Sampling Time"]) <= {2.5, 8.5, 16.5, 32.5}


def test_candidates_and_plot(tmp_path):
    csv_filename = tmp_path / "candidates.csv"
    result = runner.invoke(
        calc.app,
        ["--preferred-only", "candidates", "200000", "--output", str(csv_filename)],
    )
    assert result.exit_code == 0, result.output

    df = pd.read_csv(csv_filename)
    expected = set(preferred_frequencies()) & enumerate_clock_frequencies()
    assert len(df) == len(expected) * 8
    assert set(df["Clock Frequency"]) == expected

    for command in ("plot-candidates", "plot-errors"):
        json_filename = tmp_path / f"{command}.json"
        result = runner.invoke(
            plot.app,
            [
                "--json-output",
                "--output-filename",
                str(json_filename),
                command,
                str(csv_filename),
            ],
        )
        assert result.exit_code == 0, result.output
        assert json_filename.exists()


def test_candidates_needs_output():
    result = runner.invoke(calc.app, ["candidates", "200000"])
    assert result.exit_code != 0
