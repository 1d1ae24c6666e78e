"""
codegraph-reactive CLI

- check: Classify an importable interface class
- scan: Classify every class in Python source files (no import)
- wrappers: Show recognized reactive wrapper types

Examples:
    codegraph-reactive check myapp.repositories:UserRepository --verbose
    codegraph-reactive scan ./src --only-reactive
    codegraph-reactive wrappers
"""

import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from codegraph_reactive.config import ReactiveSettings, load_settings
from codegraph_reactive.detector import ReactiveDetector, is_reactive
from codegraph_reactive.errors import ReactiveError
from codegraph_reactive.introspection.runtime import load_interface
from codegraph_reactive.introspection.source import scan_file
from codegraph_reactive.logging import get_logger, log_performance, setup_logging
from codegraph_reactive.registry.wrappers import ReactiveWrappers
from codegraph_reactive.types.enums import RepositoryType

app = typer.Typer(name="codegraph-reactive", help="Reactive repository detection", add_completion=False)
console = Console()
logger = get_logger(__name__)


class _State:
    settings: ReactiveSettings
    registry: ReactiveWrappers


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (default: from settings)"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json/console (default: from settings)"),
):
    """Decide whether repository interfaces need a reactive implementation."""
    state = _State()
    try:
        state.settings = load_settings()
        setup_logging(level=log_level or state.settings.log_level, format=log_format or state.settings.log_format)
        state.registry = ReactiveWrappers.from_settings(state.settings)
    except ReactiveError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)
    ctx.obj = state


@app.command()
def check(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Interface class, e.g. 'myapp.repositories:UserRepository'"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List every method"),
):
    """
    Classify an importable interface class.

    Examples:
        codegraph-reactive check myapp.repositories:UserRepository
    """
    state: _State = ctx.obj
    detector = ReactiveDetector(state.registry, state.settings.include_inherited)

    try:
        interface = load_interface(target)
        signatures = detector.signatures(interface)
        reactive = {m.name for m in detector.reactive_methods(interface)}
        repository_type = detector.repository_type(interface)
    except ReactiveError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"{target}: {_styled(repository_type)}")

    if verbose:
        table = Table(title=f"Methods of {interface.__qualname__}")
        table.add_column("Method", style="cyan")
        table.add_column("Returns")
        table.add_column("Parameters")
        table.add_column("Reactive", justify="center")
        for signature in signatures:
            table.add_row(
                signature.name,
                signature.return_type,
                ", ".join(signature.parameter_types),
                "✅" if signature.name in reactive else "",
            )
        console.print(table)


@app.command()
def scan(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Python file or directory"),
    only_reactive: bool = typer.Option(False, "--only-reactive", help="Show reactive classes only"),
):
    """
    Classify every top-level class in Python source, without importing it.

    Classes without methods are not reported.
    """
    state: _State = ctx.obj
    registry = state.registry

    if not path.exists():
        console.print(f"[red]❌ Path not found: {path}[/red]")
        raise typer.Exit(1)

    files = sorted(path.rglob("*.py")) if path.is_dir() else [path]
    start = time.perf_counter()

    table = Table(title="Repository types")
    table.add_column("File")
    table.add_column("Class", style="cyan")
    table.add_column("Methods", justify="right")
    table.add_column("Type")

    found = 0
    for file in files:
        try:
            classes = scan_file(file, include_inherited=state.settings.include_inherited)
        except ReactiveError as e:
            console.print(f"[yellow]⚠️  Skipped {file}: {escape(str(e))}[/yellow]")
            continue

        for class_name, signatures in classes.items():
            if not signatures:
                continue
            repository_type = RepositoryType.of(is_reactive(signatures, registry.is_available(), registry.supports))
            if only_reactive and repository_type is not RepositoryType.REACTIVE:
                continue
            found += 1
            table.add_row(str(file), class_name, str(len(signatures)), _styled(repository_type))

    log_performance(
        logger,
        "scan",
        (time.perf_counter() - start) * 1000,
        files_scanned=len(files),
        classes_reported=found,
    )

    if found:
        console.print(table)
    else:
        console.print("No classes found.")


@app.command()
def wrappers(ctx: typer.Context):
    """Show reactive libraries, their availability and wrapper types."""
    state: _State = ctx.obj
    registry = state.registry

    table = Table(title="Reactive wrapper types")
    table.add_column("Library", style="cyan")
    table.add_column("Available", justify="center")
    table.add_column("Wrapper types")

    for status in registry.describe():
        table.add_row(
            status.library.value,
            "✅" if status.available else "❌",
            "\n".join(status.wrapper_types),
        )
    if registry.extra_types:
        table.add_row("(extra)", "✅", "\n".join(sorted(registry.extra_types)))

    console.print(table)
    console.print(f"Registry available: {'yes' if registry.is_available() else 'no'}")


def _styled(repository_type: RepositoryType) -> str:
    if repository_type is RepositoryType.REACTIVE:
        return "[magenta]REACTIVE[/magenta]"
    return "[green]IMPERATIVE[/green]"


def run() -> None:
    app()


if __name__ == "__main__":
    run()
