#!/usr/bin/env python3
"""Search STM32H7 ADC clock and sampling time settings."""

from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pandas as pd
import typer
from rich import print
from rich.table import Table
from typing_extensions import Annotated

from adc_clock_calc import (
    ADCConfig,
    ConfigOptimizer,
    EmptyCandidateSetError,
    OptimizationPolicy,
    load_config,
    menu_from_config,
    preferred_frequencies,
)

app = typer.Typer()


def _get_target(ctx: typer.Context, target_sample_rate: Optional[float]) -> float:
    """Get the target sample rate from the command line, or from the configuration."""
    if target_sample_rate is not None:
        return target_sample_rate
    if "target_sample_rate" in ctx.obj.config:
        return float(ctx.obj.config["target_sample_rate"])
    raise typer.BadParameter("Missing target sample rate")


def _to_dataframe(configs: List[ADCConfig], target_sample_rate: float) -> pd.DataFrame:
    """Tabulate configurations, one row each."""
    return pd.DataFrame(
        {
            "Clock Frequency": [c.clock_frequency for c in configs],
            "Sampling Time": [c.sampling_time for c in configs],
            "Conversion Time": [c.conversion_time for c in configs],
            "Achieved Sample Rate": [c.achieved_sample_rate for c in configs],
            "Error": [c.error(target_sample_rate) for c in configs],
        }
    )


@app.command()
def clocks(
    ctx: typer.Context,
    top: Annotated[
        Optional[int],
        typer.Option(min=1, help="Only list this many of the highest frequencies"),
    ] = None,
) -> None:
    """List the reachable ADC kernel clock frequencies."""
    frequencies = ctx.obj.optimizer.frequencies
    count = len(frequencies)
    if top is not None:
        frequencies = frequencies[:top]

    table = Table(title="Fadc_ker_ck")
    table.add_column("Index", justify="right")
    table.add_column("Frequency (MHz)", justify="right")

    for i, frequency in enumerate(frequencies):
        table.add_row(str(i), f"{frequency / 1_000_000:.6f}")

    print(table)
    print(f"{count} clock frequencies")


@app.command()
def optimal(
    ctx: typer.Context,
    target_sample_rate: Annotated[
        Optional[float],
        typer.Argument(help="The target sample rate, in Hz"),
    ] = None,
    policy: Annotated[
        Optional[OptimizationPolicy],
        typer.Option(help="The ranking policy"),
    ] = None,
) -> None:
    """Find the best setting for a target sample rate."""
    target = _get_target(ctx, target_sample_rate)
    if policy is None:
        name = ctx.obj.config.get("policy", "balanced")
        try:
            policy = OptimizationPolicy(name)
        except ValueError:
            raise typer.BadParameter(f"Unknown policy {name!r}")

    try:
        config = ctx.obj.optimizer.find_optimal_settings(target, policy)
    except EmptyCandidateSetError as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    print(str(config))


@app.command()
def multiple(
    ctx: typer.Context,
    target_sample_rate: Annotated[
        Optional[float],
        typer.Argument(help="The target sample rate, in Hz"),
    ] = None,
    max_results: Annotated[
        Optional[int],
        typer.Option(min=1, help="The maximum number of settings to show"),
    ] = None,
    output_filename: Annotated[
        Optional[Path],
        typer.Option("--output", help="Also write the settings to this CSV file"),
    ] = None,
) -> None:
    """List the best settings for a target sample rate."""
    target = _get_target(ctx, target_sample_rate)
    if max_results is None:
        max_results = int(ctx.obj.config.get("max_results", 5))

    configs = ctx.obj.optimizer.find_multiple_settings(target, max_results)

    table = Table(title=f"ADC settings for {target:.0f} Hz")
    table.add_column("Fadc_ker_ck (MHz)", justify="right")
    table.add_column("Sampling Time (cycles)", justify="right")
    table.add_column("Conversion Time (µs)", justify="right")
    table.add_column("Sample Rate (Hz)", justify="right")
    table.add_column("Error (Hz)", justify="right")

    for c in configs:
        table.add_row(
            f"{c.clock_frequency / 1_000_000.0}",
            f"{c.sampling_time}",
            f"{c.conversion_time * 1_000_000:.2f}",
            f"{c.achieved_sample_rate:.0f}",
            f"{c.error(target):.0f}",
        )

    print(table)

    if output_filename is not None:
        _to_dataframe(configs, target).to_csv(output_filename, index=False)


@app.command()
def candidates(
    ctx: typer.Context,
    output_filename: Annotated[
        Path,
        typer.Option("--output", help="The CSV file to write the candidates to"),
    ],
    target_sample_rate: Annotated[
        Optional[float],
        typer.Argument(help="The target sample rate, in Hz"),
    ] = None,
) -> None:
    """Export every candidate setting, along with its error, to a CSV file."""
    target = _get_target(ctx, target_sample_rate)
    configs = ctx.obj.optimizer.candidates()
    _to_dataframe(configs, target).to_csv(output_filename, index=False)
    print(f"{len(configs)} candidates written to {output_filename}")


@app.callback()
def main(
    ctx: typer.Context,
    config_filename: Annotated[
        Optional[Path],
        typer.Option("--config", help="The configuration file to use"),
    ] = None,
    preferred_only: Annotated[
        bool,
        typer.Option(help="Only consider round clock frequencies"),
    ] = False,
):
    """Search STM32H7 ADC clock and sampling time settings."""
    config: Dict[str, Any] = {}
    if config_filename is not None:
        config = load_config(config_filename)

    optimizer = ConfigOptimizer(menu_from_config(config))
    if preferred_only:
        optimizer = optimizer.restricted_to(preferred_frequencies())

    ctx.obj = SimpleNamespace(config=config, optimizer=optimizer)


if __name__ == "__main__":
    app()
