"""Click CLI entry point for fsmviz."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import click

from fsmviz import __version__
from fsmviz.config import FORMATS, RenderConfig, is_initialized, load_config_or_default, save_config
from fsmviz.definition import DefinitionError, load_definition
from fsmviz.models import Automaton

EXTENSIONS = {
    "svg": ".svg",
    "dot": ".dot",
    "mermaid": ".mmd",
    "html": ".html",
    "plantuml": ".puml",
    "json": ".json",
}


@click.group()
@click.version_option(version=__version__, prog_name="fsmviz")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """fsmviz: draw finite state machines as SVG and other formats."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--width", type=int, default=800, show_default=True)
@click.option("--height", type=int, default=600, show_default=True)
@click.option("--format", "fmt", type=click.Choice(FORMATS), default="svg", show_default=True)
@click.option("--output-dir", default="", help="Directory for rendered files")
def init(width: int, height: int, fmt: str, output_dir: str) -> None:
    """Write default render settings to .fsmviz/config.json."""
    project_root = Path.cwd()
    if is_initialized(project_root):
        click.echo("Warning: Project is already initialized. Updating configuration.")

    config = RenderConfig(width=width, height=height, format=fmt, output_dir=output_dir)
    errors = config.validate()
    if errors:
        raise click.BadParameter("; ".join(errors))

    path = save_config(config, project_root)
    click.echo(f"Config:  {path}")


@cli.command()
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(FORMATS), default=None)
@click.option("--width", type=int, default=None)
@click.option("--height", type=int, default=None)
@click.option("--output", "-o", "output", type=click.Path(dir_okay=False), default=None)
@click.option("--stdout", "to_stdout", is_flag=True, default=False, help="Write to stdout")
@click.pass_context
def render(
    ctx: click.Context,
    definition: str,
    fmt: str | None,
    width: int | None,
    height: int | None,
    output: str | None,
    to_stdout: bool,
) -> None:
    """Render a state machine definition file."""
    if to_stdout and output:
        click.echo("Error: --stdout and --output are mutually exclusive", err=True)
        ctx.exit(2)
        return

    project_root = Path.cwd()
    try:
        config = load_config_or_default(project_root)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
        return

    fmt = fmt or config.format
    width = width if width is not None else config.width
    height = height if height is not None else config.height
    if width <= 0 or height <= 0:
        click.echo("Error: width and height must be positive", err=True)
        ctx.exit(2)
        return

    try:
        automaton = load_definition(Path(definition))
        content = _exporter(fmt, width, height)(automaton)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
        return

    if to_stdout:
        click.echo(content)
        return

    if output:
        target = Path(output)
    else:
        out_dir = project_root / config.output_dir if config.output_dir else Path(definition).parent
        target = out_dir / (Path(definition).stem + EXTENSIONS[fmt])
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content if content.endswith("\n") else content + "\n", encoding="utf-8")
    click.echo(f"Wrote {target}")


@cli.command()
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.option("--strict", is_flag=True, default=False, help="Exit non-zero when issues are found")
@click.pass_context
def check(ctx: click.Context, definition: str, strict: bool) -> None:
    """Report unreachable and dead-end states."""
    from fsmviz.graph import dead_end_states, unreachable_states

    try:
        automaton = load_definition(Path(definition))
    except DefinitionError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
        return

    click.echo(
        f"{len(automaton.states)} states, {len(automaton.transitions)} transitions"
    )
    unreachable = unreachable_states(automaton)
    dead_ends = dead_end_states(automaton)

    if unreachable:
        click.echo(f"Unreachable states: {', '.join(map(str, unreachable))}")
    if dead_ends:
        click.echo(f"Dead-end states: {', '.join(map(str, dead_ends))}")
    if not unreachable and not dead_ends:
        click.echo("No issues found.")
    elif strict:
        ctx.exit(1)


def _exporter(fmt: str, width: int, height: int) -> Callable[[Automaton], str]:
    from fsmviz.exporters.dot import export_dot
    from fsmviz.exporters.json_export import export_json
    from fsmviz.exporters.mermaid import export_mermaid, export_mermaid_html
    from fsmviz.exporters.plantuml import export_plantuml
    from fsmviz.exporters.svg import export_svg

    exporters: dict[str, Callable[[Automaton], str]] = {
        "svg": lambda a: export_svg(a, width, height),
        "dot": export_dot,
        "mermaid": export_mermaid,
        "html": export_mermaid_html,
        "plantuml": export_plantuml,
        "json": export_json,
    }
    return exporters[fmt]


def main() -> None:
    cli()
