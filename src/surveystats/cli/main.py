"""Main CLI entrypoint using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import pandas as pd
import typer

from surveystats import __version__
from surveystats.cli.design import design_app

app = typer.Typer(
    name="surveystats",
    help="Hypothesis testing toolkit for between-subjects survey experiments.",
    add_completion=False,
)

app.add_typer(design_app, name="design")

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"surveystats {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """surveystats: hypothesis testing for survey experiments."""
    pass


def _echo_table(title: str, df: pd.DataFrame) -> None:
    typer.secho(f"\n== {title} ==", bold=True)
    if df.empty:
        typer.echo("  (none)")
        return
    with pd.option_context("display.max_columns", None, "display.width", 200):
        typer.echo(df.to_string(index=False, float_format=lambda v: f"{v:.4g}"))


@app.command()
def analyze(
    data: Path = typer.Option(..., "--data", help="Path to responses (.csv or .parquet)"),
    design: Optional[Path] = typer.Option(
        None, "--design", help="Path to design YAML (default: bundled formality study)"
    ),
    condition_col: Optional[str] = typer.Option(
        None, "--condition-col", help="Override the design's condition column"
    ),
    group_a: Optional[str] = typer.Option(None, "--group-a", help="Override the first condition level"),
    group_b: Optional[str] = typer.Option(None, "--group-b", help="Override the second condition level"),
    alpha: float = typer.Option(0.05, "--alpha", help="Significance threshold"),
    p_adjust: str = typer.Option("holm", "--p-adjust", help="Multiple-comparison correction"),
    no_progression: bool = typer.Option(False, "--no-progression", help="Skip per-batch progression"),
    no_exploratory: bool = typer.Option(
        False, "--no-exploratory", help="Skip predictor x outcome grid"
    ),
    output_format: str = typer.Option("table", "--format", help="Output format: table or json"),
):
    """
    Run the full two-condition analysis and print the report.

    Computes descriptives, Welch t-tests, Mann-Whitney U, Levene and
    Shapiro-Wilk checks per measure, corrects p-values across the measure
    family and classifies each pre-registered hypothesis.

    Examples:
        surveystats analyze --data responses.csv

        surveystats analyze \\
            --data responses.parquet \\
            --design my_study.yaml \\
            --alpha 0.01 \\
            --format json
    """
    from surveystats.analysis import AnalysisConfig, run_analysis
    from surveystats.analysis.reports import build_all_tables
    from surveystats.data import load_table
    from surveystats.design import ConditionSpec, default_design, load_design

    if output_format not in ("table", "json"):
        typer.secho(f"Error: --format must be 'table' or 'json', got {output_format}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        config = AnalysisConfig(
            alpha=alpha,
            p_adjust=p_adjust,
            include_progression=not no_progression,
            include_exploratory=not no_exploratory,
        )
        study = load_design(design) if design is not None else default_design()
        overrides = {
            name: value
            for name, value in (("column", condition_col), ("group_a", group_a), ("group_b", group_b))
            if value
        }
        if overrides:
            conditions = ConditionSpec(**{**study.conditions.model_dump(), **overrides})
            study = study.model_copy(update={"conditions": conditions})

        df = load_table(data)
        report = run_analysis(df, study, config)
        tables = build_all_tables(report)
    except Exception as e:
        typer.secho(f"\n✗ Analysis failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        payload = {
            name: json.loads(table.to_json(orient="records"))
            for name, table in tables.items()
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    for name, table in tables.items():
        _echo_table(name.replace("_", " ").title(), table)

    typer.secho("\n✓ Analysis complete!", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
