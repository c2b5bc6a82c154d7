"""CLI for the calcgraph calculator.

Usage:
    python -m calcgraph eval "2pi + sqrt(16)"        # Evaluate and record
    python -m calcgraph eval "x^2 - 1" --x 3         # Substitute x
    python -m calcgraph graph "sin(x)" --resolution 20
    python -m calcgraph history                      # Past calculations
    python -m calcgraph clear                        # Forget history
    python -m calcgraph repl                         # Interactive session
"""

from __future__ import annotations

import math
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from calcgraph import config
from calcgraph.evaluator import evaluate
from calcgraph.graph import GraphDomain, sample
from calcgraph.models import EvaluationError, History
from calcgraph.notation import normalize, prettify

app = typer.Typer(
    name="calcgraph",
    help="Expression calculator with graph sampling",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_WORDS = ("quit", "exit", "q")


def _calculate(expression: str, history: History, x: Optional[float] = None) -> Optional[str]:
    """Evaluate typed input, report failures, and return the result text.

    Returns None when the expression is malformed or the result is NaN.
    """
    normalized = normalize(expression)
    try:
        result = evaluate(normalized, x=x, answer=history.last_answer)
    except EvaluationError as e:
        console.print(f"[red]Syntax error:[/red] {e} [dim]({e.kind.value})[/dim]")
        return None
    if math.isnan(float(result)):
        console.print(f"[red]Math error:[/red] {prettify(normalized)} is undefined")
        return None
    return result


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '2pi + sqrt(16)'"),
    x: Optional[float] = typer.Option(None, "--x", "-x", help="Value substituted for x"),
    no_history: bool = typer.Option(False, "--no-history", help="Do not record the result"),
) -> None:
    """Evaluate an expression and print the result."""
    path = config.history_path()
    history = History.load(path)

    result = _calculate(expression, history, x=x)
    if result is None:
        raise typer.Exit(1)

    typer.echo(result)
    if not no_history:
        history.record(prettify(normalize(expression)), result)
        history.save(path)


@app.command("graph")
def cmd_graph(
    expression: str = typer.Argument(help="Template in x, e.g. 'x^2 - 1'"),
    x_min: Optional[float] = typer.Option(None, "--x-min", help="Left edge of the domain"),
    x_max: Optional[float] = typer.Option(None, "--x-max", help="Right edge of the domain"),
    y_min: Optional[float] = typer.Option(None, "--y-min", help="Bottom of the visible range"),
    y_max: Optional[float] = typer.Option(None, "--y-max", help="Top of the visible range"),
    resolution: Optional[int] = typer.Option(None, "--resolution", "-r", help="Number of intervals"),
) -> None:
    """Sample an expression across a domain of x values."""
    low, high = config.default_domain()
    try:
        domain = GraphDomain(
            x_min=low if x_min is None else x_min,
            x_max=high if x_max is None else x_max,
            y_min=low if y_min is None else y_min,
            y_max=high if y_max is None else y_max,
            resolution=resolution or config.default_resolution(),
        )
    except ValueError as e:
        console.print(f"[red]Invalid domain:[/red] {e}")
        raise typer.Exit(1)

    normalized = normalize(expression)
    history = History.load(config.history_path())
    points = sample(normalized, domain, answer=history.last_answer)

    table = Table(title=f"y = {prettify(normalized)}", show_header=True, header_style="bold")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right", min_width=12)

    for p in points:
        if p.failed:
            y = "[red]error[/red]"
        elif p.visible(domain):
            y = f"{p.y:.6g}"
        else:
            y = f"[dim]{p.y:.6g}[/dim]"
        table.add_row(f"{p.x:.6g}", y)

    console.print()
    console.print(table)
    failed = sum(1 for p in points if p.failed)
    if failed == len(points):
        console.print("[red]Expression failed at every sample[/red]")
        raise typer.Exit(1)
    if failed:
        console.print(f"  [yellow]{failed}/{len(points)} samples failed[/yellow]")
    console.print()


@app.command("history")
def cmd_history(
    limit: int = typer.Option(20, "--limit", "-n", help="Show at most this many recent entries"),
) -> None:
    """List recorded calculations, oldest first."""
    history = History.load(config.history_path())
    if not history.entries:
        console.print("[yellow]No calculations yet.[/yellow]")
        return

    table = Table(title="History", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Expression", min_width=20)
    table.add_column("Result", style="green", justify="right")
    table.add_column("Time", style="dim")

    start = max(len(history) - limit, 0)
    for i, entry in enumerate(history.entries[start:], start + 1):
        table.add_row(str(i), entry.expression, entry.result, entry.timestamp or "--")

    console.print()
    console.print(table)
    console.print()


@app.command("clear")
def cmd_clear() -> None:
    """Delete the recorded history."""
    path = config.history_path()
    if path.exists():
        path.unlink()
    console.print("History cleared")


@app.command("repl")
def cmd_repl() -> None:
    """Evaluate expressions interactively until 'quit' or end of input."""
    path = config.history_path()
    history = History.load(path)
    console.print("[dim]Enter an expression, 'ans' reuses the last result, 'quit' exits.[/dim]")

    while True:
        try:
            expression = typer.prompt(">", prompt_suffix=" ").strip()
        except (EOFError, typer.Abort):
            break
        if expression.lower() in _QUIT_WORDS:
            break
        if not expression:
            continue

        result = _calculate(expression, history)
        if result is None:
            continue
        typer.echo(result)
        history.record(prettify(normalize(expression)), result)
        history.save(path)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
