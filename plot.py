#!/usr/bin/env python3
"""Plot ADC candidate settings."""

from pathlib import Path
from types import SimpleNamespace
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import typer

app = typer.Typer()


def _render(ctx: typer.Context, fig: go.Figure):
    """Render the given figure to HTML."""
    fig.update_layout(template="plotly_white")

    fig.update_xaxes(
        mirror=True,
        ticks="outside",
        showline=True,
        linecolor="black",
        gridcolor="lightgrey",
    )
    fig.update_yaxes(
        mirror=True,
        ticks="outside",
        showline=True,
        linecolor="black",
        gridcolor="lightgrey",
    )

    if ctx.obj.json_output:
        fig.write_json(
            ctx.obj.output_filename,
        )
    else:
        fig.write_html(ctx.obj.output_filename, auto_open=True)


def _load_candidates(input_file: Path) -> pd.DataFrame:
    """Load a candidate export, with the clock in MHz."""
    df = pd.read_csv(input_file)
    df["Clock Frequency (MHz)"] = df["Clock Frequency"] / 1_000_000
    df["Sampling Time"] = df["Sampling Time"].astype(str)  # Discrete colors
    return df


@app.command()
def plot_candidates(ctx: typer.Context, input_file: Path):
    """Plot the achieved sample rate of each candidate."""
    df = _load_candidates(input_file)

    fig = px.scatter(
        df,
        x="Clock Frequency (MHz)",
        y="Achieved Sample Rate",
        color="Sampling Time",
        log_y=True,
        title=ctx.obj.graph_title,
    )

    _render(ctx, fig)


@app.command()
def plot_errors(
    ctx: typer.Context, input_file: Path, max_error: Optional[float] = None
):
    """Plot the sample rate error of each candidate."""
    df = _load_candidates(input_file)

    if max_error is not None:
        df = df[df["Error"] <= max_error]

    fig = px.scatter(
        df,
        x="Clock Frequency (MHz)",
        y="Error",
        color="Sampling Time",
        title=ctx.obj.graph_title,
    )
    fig.update_yaxes(title_text="Error (Hz)")

    _render(ctx, fig)


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = False,
    output_filename: Path = Path("/tmp/render.html"),
    graph_title: Optional[str] = None,
):
    """Plotting tools for ADC candidate settings."""
    ctx.obj = SimpleNamespace(
        json_output=json_output,
        output_filename=output_filename,
        graph_title=graph_title,
    )


if __name__ == "__main__":
    app()
