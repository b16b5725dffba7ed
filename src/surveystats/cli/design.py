"""CLI commands for inspecting and validating study designs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from surveystats.design import default_design, load_design
from surveystats.design.yaml_utils import dump_yaml

design_app = typer.Typer(
    name="design",
    help="Inspect and validate study design files.",
    add_completion=False,
)


@design_app.command("show")
def design_show(
    design: Optional[Path] = typer.Option(
        None, "--design", help="Path to design YAML (default: bundled formality study)"
    ),
):
    """Print a study design as normalized YAML."""
    study = load_design(design) if design is not None else default_design()
    payload = study.model_dump(mode="json", by_alias=False)
    typer.echo(dump_yaml(payload))


@design_app.command("validate")
def design_validate(design: Path = typer.Argument(..., help="Path to design YAML")):
    """Validate a design file and emit actionable errors."""
    try:
        study = load_design(design)
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except ValidationError as e:
        typer.secho("validation failed:", fg=typer.colors.RED, err=True)
        for err in e.errors():
            loc = ".".join(str(part) for part in err["loc"])
            typer.secho(f"  - {loc}: {err['msg']}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(
        f"validation passed: {len(study.measures)} measures, {len(study.hypotheses)} hypotheses",
        fg=typer.colors.GREEN,
    )
