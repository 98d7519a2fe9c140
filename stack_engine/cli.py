"""Stack Engine CLI."""

import json
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

console = Console()


def _load_assessment(path: str):
    from .pipeline.assessment import AssessmentInput

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return AssessmentInput.model_validate(data)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")
    except ValidationError as e:
        raise click.ClickException(f"Invalid assessment: {e}")


def _load_bundle(catalog: str):
    from .catalog.loader import load_catalog
    from .errors import CatalogFormatError

    try:
        return load_catalog(Path(catalog) if catalog else None)
    except CatalogFormatError as e:
        raise click.ClickException(str(e))


@click.group()
def main():
    """Stack Engine - tool stack recommendations from an assessment."""
    pass


@main.command()
def version():
    """Show version."""
    from . import __version__
    console.print(f"stack-engine v{__version__}")


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--catalog", "-c", type=click.Path(exists=True, dir_okay=False), help="Catalog JSON file")
def match(names: tuple, catalog: str):
    """Resolve free-text tool names against the catalog."""
    from .config import EngineConfig
    from .matching.resolver import ToolNameResolver

    bundle = _load_bundle(catalog)
    config = EngineConfig.from_env()
    resolver = ToolNameResolver(min_confidence=config.fuzzy_min_confidence)
    results = resolver.resolve(list(names), bundle.catalog.get_all_tools())

    table = Table()
    table.add_column("Input")
    table.add_column("Tool")
    table.add_column("Confidence")
    table.add_column("Matched On", style="dim")

    for name, result in results.items():
        if result is None:
            table.add_row(name, "[red]unmatched[/red]", "-", "-")
            continue
        conf = result.confidence
        conf_style = "green" if conf >= 0.9 else "yellow" if conf >= 0.75 else "red"
        table.add_row(
            name,
            result.tool.display_name,
            f"[{conf_style}]{conf:.0%}[/{conf_style}]",
            result.matched_on,
        )

    console.print(table)


@main.command()
@click.argument("scenario")
@click.option("--assessment", "-a", type=click.Path(exists=True, dir_okay=False), required=True,
              help="Assessment JSON file")
def weights(scenario: str, assessment: str):
    """Show the weight profile for a scenario type."""
    from .catalog.types import ScenarioType
    from .scoring.weights import WeightProfileBuilder

    scenario_type = ScenarioType.lookup(scenario)
    if scenario_type is None:
        valid = ", ".join(s.value for s in ScenarioType)
        raise click.BadParameter(f"Unknown scenario {scenario!r} (expected one of {valid})")

    parsed = _load_assessment(assessment)
    profile = WeightProfileBuilder().build(scenario_type, parsed.weight_signals())

    console.print(f"\n[bold]Weights for {scenario_type.value}[/bold]\n")
    for dimension, value in profile.to_dict().items():
        console.print(f"  {dimension:<12} {value:.3f}")
    console.print()


@main.command()
@click.option("--assessment", "-a", type=click.Path(exists=True, dir_okay=False), required=True,
              help="Assessment JSON file")
@click.option("--catalog", "-c", type=click.Path(exists=True, dir_okay=False), help="Catalog JSON file")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def recommend(assessment: str, catalog: str, as_json: bool):
    """Build stack scenarios for an assessment."""
    from .catalog.snapshot import Collaborators
    from .config import EngineConfig
    from .errors import InfrastructureError
    from .logging import EngineLogger
    from .pipeline.decision import DecisionPipeline

    parsed = _load_assessment(assessment)
    bundle = _load_bundle(catalog)
    config = EngineConfig.from_env()
    # Keep structured events off stdout unless asked for
    engine_logger = EngineLogger(level="ERROR" if as_json else config.log_level)

    pipeline = DecisionPipeline(Collaborators.from_bundle(bundle), config, engine_logger)
    try:
        result = pipeline.run(parsed)
    except InfrastructureError as e:
        raise click.ClickException(f"Collaborator failure: {e}")

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.unmatched:
        console.print(f"[yellow]Unmatched tools: {', '.join(result.unmatched)}[/yellow]")
    if result.anchor_tool:
        console.print(f"Anchor: [cyan]{result.anchor_tool.display_name}[/cyan]")
    for warning in result.warnings:
        console.print(f"[red]{warning}[/red]")

    for scenario in result.scenarios:
        console.print(f"\n[bold]{scenario.title}[/bold] ({scenario.scenario_type.value})")

        table = Table()
        table.add_column("Tool")
        table.add_column("Category", style="dim")
        table.add_column("Score")
        table.add_column("Cost/user")

        for scored in scenario.scored_tools:
            cost = scored.tool.estimated_cost_per_user
            table.add_row(
                scored.tool.display_name,
                scored.tool.category.value,
                f"{scored.composite_score:.1f}",
                "-" if cost is None else f"${cost:.0f}",
            )
        console.print(table)

        console.print(f"  Monthly cost per user: ${scenario.estimated_monthly_cost_per_user:.2f}")
        console.print(f"  Complexity reduction: {scenario.complexity_reduction_score}%")
        if scenario.displacement_list:
            console.print(f"  Displaces: {', '.join(scenario.displacement_list)}")

    if result.displacement_suggestions:
        console.print("\n[bold]Current stack overlaps:[/bold]")
        for suggestion in result.displacement_suggestions:
            console.print(f"  {suggestion.reason}")


if __name__ == "__main__":
    main()
