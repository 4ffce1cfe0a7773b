"""CLI interface for the Markov algorithm interpreter."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from markov.config import MarkovSettings, RunnerSettings, get_settings, set_settings
from markov.engine.runner import Runner, drive
from markov.formatters import format_as_json
from markov.models.run import RunResult, Termination
from markov.rules import (
    EMPTY_WORD,
    MalformedStatement,
    MarkovError,
    Rule,
    Ruleset,
    compile_rule,
    list_yaml_algorithms,
    parse_rules_file,
    parse_yaml_algorithms_file,
)

console = Console()

YAML_SUFFIXES = {".yaml", ".yml"}

TERMINATION_LABELS = {
    Termination.NATURAL: "[green]no rule applies[/green]",
    Termination.EXPLICIT: "[green]terminating rule applied[/green]",
    Termination.STOPPED: "[yellow]stopped[/yellow]",
}


def setup_logging(log_level: str) -> None:
    """Configure logging with rich handler."""
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _display_word(word: str) -> str:
    """Show the empty word as its marker."""
    return escape(word) if word else f"[dim]{EMPTY_WORD}[/dim]"


def _load_rules(path: Path, algorithm: str | None) -> list[Rule]:
    """Load rules from a YAML algorithm file or a plain statements file."""
    if path.suffix.lower() in YAML_SUFFIXES:
        name = algorithm or get_settings().default_algorithm
        return parse_yaml_algorithms_file(path, name)
    return parse_rules_file(path)


def _fail(message: str) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    sys.exit(1)


def _configure_settings(max_steps: int | None, stop_on_stall: bool | None) -> None:
    """Configure interpreter settings from CLI options, falling back to the current ones."""
    current = get_settings()
    runner_settings = RunnerSettings(
        max_steps=max_steps if max_steps is not None else current.runner.max_steps,
        stop_on_stall=stop_on_stall if stop_on_stall is not None else current.runner.stop_on_stall,
    )
    set_settings(
        MarkovSettings(runner=runner_settings, default_algorithm=current.default_algorithm)
    )


def display_trace(result: RunResult) -> None:
    """Display every step of a run as a table."""
    table = Table(title="\n[bold cyan]Steps[/bold cyan]", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Rule", style="cyan")
    table.add_column("Context")

    for index, step in enumerate(result.steps):
        rule = escape(step.rule) if step.rule else "[dim]initial[/dim]"
        table.add_row(str(index), rule, _display_word(step.context))

    console.print(table)


def display_result(result: RunResult) -> None:
    """Display the outcome of a run."""
    label = TERMINATION_LABELS.get(result.termination, "[yellow]running[/yellow]")
    console.print(f"\nHalted: {label} after [bold]{result.step_count}[/bold] step(s)")
    if result.stalled:
        console.print("[yellow]The last step made no progress.[/yellow]")
    console.print(f"Result: {_display_word(result.context)}")


def _print_algorithms(path: Path) -> None:
    """Print the algorithms defined in a YAML rules file."""
    if path.suffix.lower() not in YAML_SUFFIXES:
        _fail(f"{path} is not a YAML algorithm file")

    try:
        algorithms = list_yaml_algorithms(path)
    except MarkovError as e:
        _fail(str(e))

    console.print(f"\n[bold blue]Algorithms in {escape(str(path))}[/bold blue]\n")
    for name, description in algorithms.items():
        console.print(f"  [cyan]•[/cyan] {escape(name)}")
        if description:
            console.print(f"    [dim]{escape(description)}[/dim]")


def _run_to_result(runner: Runner, unbounded: bool) -> RunResult:
    """Run unbounded or under the configured step budget."""
    if unbounded:
        runner.run()
        return runner.result()
    return drive(runner)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Set the logging level",
)
def main(log_level: str) -> None:
    """Markov (normal) algorithm interpreter."""
    setup_logging(log_level.upper())


@main.command()
@click.argument("rules", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("context", type=str)
@click.option(
    "--algorithm",
    type=str,
    default=None,
    help="Algorithm to load from a YAML rules file (default: from settings)",
)
@click.option(
    "--max-steps",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of steps before stopping (default: from settings)",
)
@click.option(
    "--stop-on-stall/--no-stop-on-stall",
    default=None,
    help="Stop as soon as a step leaves the context unchanged (default: from settings)",
)
@click.option(
    "--unbounded",
    is_flag=True,
    default=False,
    help="Run without a step limit; a non-terminating algorithm never returns",
)
@click.option(
    "--trace",
    is_flag=True,
    default=False,
    help="Show every step (console format only)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default="console",
    help="Output format (default: console)",
)
def run(
    rules: Path,
    context: str,
    algorithm: str | None,
    max_steps: int | None,
    stop_on_stall: bool | None,
    unbounded: bool,
    trace: bool,
    output_format: str,
) -> None:
    """Run the algorithm in RULES over CONTEXT."""
    _configure_settings(max_steps, stop_on_stall)

    try:
        ruleset = Ruleset.from_rules(_load_rules(rules, algorithm))
    except MarkovError as e:
        _fail(str(e))

    runner = Runner(ruleset, context)
    result = _run_to_result(runner, unbounded)

    if output_format.lower() == "json":
        print(format_as_json(result, pretty=True))
        return

    if trace:
        display_trace(result)
    display_result(result)


@main.command()
@click.argument("rules", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--algorithm",
    type=str,
    default=None,
    help="Algorithm to load from a YAML rules file (default: from settings)",
)
@click.option(
    "--list-algorithms",
    is_flag=True,
    default=False,
    help="List the algorithms in a YAML rules file instead of showing rules",
)
def show(rules: Path, algorithm: str | None, list_algorithms: bool) -> None:
    """Show the compiled rules in RULES."""
    if list_algorithms:
        _print_algorithms(rules)
        return

    try:
        loaded = _load_rules(rules, algorithm)
    except MarkovError as e:
        _fail(str(e))

    if not loaded:
        console.print("[dim]No rules[/dim]")
        return

    console.print(f"[dim]{len(loaded)} rule(s):[/dim]")
    for index, rule in enumerate(loaded, 1):
        console.print(f"  {index:3d}. {escape(str(rule))}", highlight=False)


@main.command()
@click.argument("statements", nargs=-1, required=True)
def check(statements: tuple[str, ...]) -> None:
    """Compile each STATEMENT and report its canonical form or error."""
    failed = 0
    for statement in statements:
        try:
            rule = compile_rule(statement)
        except MalformedStatement as e:
            failed += 1
            console.print(f"[red]✗[/red] {escape(str(e))}", highlight=False)
            continue
        console.print(f"[green]✓[/green] {escape(str(rule))}", highlight=False)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
