"""Command-line interface for classtest."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from classtest import __version__
from classtest.config import ClassTestConfig, create_example_config
from classtest.exceptions import StructuralError, TargetLoadError
from classtest.loader import load_class
from classtest.models import RunReport, TestStatus

# Run lines own stdout, everything else goes to stderr
console = Console(stderr=True)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def print_banner() -> None:
    """Print the classtest banner."""
    console.print(
        Panel.fit(
            "[bold blue]classtest[/bold blue] - single-class test runner",
            subtitle=f"v{__version__}",
        )
    )


def setup_logging(verbose: bool) -> None:
    """Route classtest log records to a rich handler on stderr."""
    logger = logging.getLogger("classtest")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=console, show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _load_config(config_path: Optional[str]) -> ClassTestConfig:
    try:
        if config_path:
            return ClassTestConfig.from_file(config_path)
        return ClassTestConfig.load_or_default()
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(EXIT_USAGE)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        sys.exit(EXIT_USAGE)


def _build_runner(target: str, config: ClassTestConfig, color: Optional[bool] = None):
    from classtest.core.runner import TestRunner

    try:
        cls = load_class(target)
        return TestRunner(cls, config=config, color=color)
    except TargetLoadError as e:
        console.print(f"[red]Error loading target:[/red] {e}")
        sys.exit(EXIT_USAGE)
    except StructuralError as e:
        console.print(f"[red]Invalid test class:[/red] {e}")
        sys.exit(EXIT_USAGE)


@click.group()
@click.version_option(version=__version__, prog_name="classtest")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False),
    help="Path to configuration file (default: nearest classtest.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """classtest - run the tagged tests of a single class.

    TARGET arguments name a class as 'package.module:ClassName' or
    'path/to/file.py:ClassName'.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config
    setup_logging(verbose)


@main.command()
@click.argument("target")
@click.option(
    "--color/--no-color",
    default=None,
    help="Force colored diagnostics on or off (default: from config)",
)
@click.option("--quiet", "-q", is_flag=True, help="Skip the summary table")
@click.pass_context
def run(ctx: click.Context, target: str, color: Optional[bool], quiet: bool) -> None:
    """Run the tests of TARGET and report each on stdout."""
    config = _load_config(ctx.obj.get("config_path"))
    runner = _build_runner(target, config, color)

    report = runner.run()

    if config.output.show_summary and not quiet:
        _display_results_summary(report, show_durations=config.output.show_durations)

    sys.exit(EXIT_OK if report.success else EXIT_FAILED)


@main.command()
@click.argument("target")
@click.pass_context
def plan(ctx: click.Context, target: str) -> None:
    """Show the execution order of TARGET without running it."""
    print_banner()

    config = _load_config(ctx.obj.get("config_path"))
    runner = _build_runner(target, config)

    groups = runner.scheduler.get_groups(runner.plan)

    table = Table(title=f"Execution plan for {runner.class_name}")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Test")
    table.add_column("Priority", justify="right")

    position = 1
    for entry in groups["prioritized"]:
        table.add_row(str(position), entry.name, str(entry.declared_priority))
        position += 1
    for entry in groups["unprioritized"]:
        declared = entry.declared_priority
        label = "-" if declared is None else f"{declared} (out of range)"
        table.add_row(str(position), entry.name, f"[dim]{label}[/dim]")
        position += 1

    console.print(table)
    console.print(f"before_each: {runner.before.name if runner.before else '-'}")
    console.print(f"after_each: {runner.after.name if runner.after else '-'}")


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="classtest.json",
    help="Output path for configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
def init(output: str, force: bool) -> None:
    """Initialize a new classtest configuration file."""
    print_banner()

    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(
            f"[yellow]Configuration file already exists:[/yellow] {output_path}"
        )
        console.print("Use --force to overwrite")
        sys.exit(EXIT_FAILED)

    try:
        create_example_config(output_path)
        console.print(f"[green]Created configuration file:[/green] {output_path}")
    except OSError as e:
        console.print(f"[red]Error creating configuration:[/red] {e}")
        sys.exit(EXIT_FAILED)


def _display_results_summary(report: RunReport, show_durations: bool = False) -> None:
    """Display a summary of test results."""
    console.print("\n" + "=" * 50)
    console.print(f"[bold]{report.class_name} Summary[/bold]")
    console.print("=" * 50)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Total Tests", str(report.total))
    table.add_row("Passed", f"[green]{report.passed}[/green]")
    table.add_row("Failed", f"[red]{report.failed}[/red]")
    table.add_row("Errors", f"[yellow]{report.errors}[/yellow]")

    if report.total > 0:
        pass_rate = (report.passed / report.total) * 100
        table.add_row("Pass Rate", f"{pass_rate:.1f}%")

    console.print(table)

    if show_durations:
        durations = Table(title="Durations")
        durations.add_column("Test")
        durations.add_column("Status")
        durations.add_column("Time", justify="right", style="dim")
        for result in report.results:
            durations.add_row(result.name, result.status.value, f"{result.duration_ms}ms")
        console.print(durations)

    if report.success:
        console.print("\n[green]All tests passed![/green]")
    else:
        console.print("\n[red]Some tests failed![/red]")
        for result in report.results:
            if result.status == TestStatus.FAILED:
                console.print(f"  [red]✗[/red] {result.name}")
            elif result.status == TestStatus.ERROR:
                console.print(f"  [yellow]![/yellow] {result.name}")


if __name__ == "__main__":
    main()
