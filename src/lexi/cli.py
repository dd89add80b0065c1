"""Typer-based CLI for the Lexi English-to-code compiler."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console

from . import __version__
from .commands.compile import CompileHandler
from .commands.config import ConfigHandler
from .commands.profile import ProfileHandler
from .compiler import DEFAULT_TARGET, LexiCompiler
from .config import CONFIG_ENV_VAR, ConfigStore
from .exceptions import LexiError
from .logging_utils import configure_logging
from .scaffold import init_project

app = typer.Typer(help="Lexi - English-to-code compiler powered by AI", no_args_is_help=True)
config_app = typer.Typer(help="Manage configuration of the active profile", no_args_is_help=True)
profile_app = typer.Typer(help="Manage named configuration profiles", no_args_is_help=True)
app.add_typer(config_app, name="config")
app.add_typer(profile_app, name="profile")

err_console = Console(stderr=True)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Turn domain errors into a message on stderr and exit status 1."""
    try:
        yield
    except LexiError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}", highlight=False)
        raise typer.Exit(code=1)


def _store(ctx: typer.Context) -> ConfigStore:
    return ctx.obj["store"]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lexi {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None, "--config", envvar=CONFIG_ENV_VAR, help="Path to the profile JSON file (default ~/.lexi/config.json)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    configure_logging(verbose)
    ctx.obj = {"store": ConfigStore(config_path)}


@app.command()
def compile(
    ctx: typer.Context,
    input: Path = typer.Argument(..., help="Input .lxi file"),
    target: str = typer.Option(DEFAULT_TARGET, "--target", "-t", help="Target language"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
    run: bool = typer.Option(False, "--run", "-r", help="Compile and run immediately"),
) -> None:
    """Compile a .lxi file to source code."""
    with exit_on_error():
        CompileHandler(LexiCompiler(_store(ctx))).run(input, target, output, run)


@app.command()
def init(project_name: str = typer.Argument(..., help="Project name")) -> None:
    """Create a new Lexi project."""
    console = Console()
    with exit_on_error():
        root = init_project(project_name)
    console.print(f"[bold]Created new Lexi project:[/bold] {root.name}")
    console.print(f"   {root.name}/")
    console.print("   ├── src/main.lxi")
    console.print("   ├── build/")
    console.print("   ├── lexi.config.json")
    console.print("   └── README.md")
    console.print()
    console.print("Next steps:")
    console.print(f"   cd {root.name}")
    console.print("   lexi config init  # Configure your AI provider")
    console.print("   lexi compile src/main.lxi")


@config_app.command("set")
def config_set(ctx: typer.Context, key: str, value: str) -> None:
    """Set a configuration value on the active profile."""
    with exit_on_error():
        ConfigHandler(_store(ctx)).set(key, value)


@config_app.command("list")
def config_list(ctx: typer.Context) -> None:
    """List the active configuration."""
    with exit_on_error():
        ConfigHandler(_store(ctx)).list()


@config_app.command("init")
def config_init(ctx: typer.Context) -> None:
    """Show the configuration setup guide."""
    ConfigHandler(_store(ctx)).init()


@profile_app.command("list")
def profile_list(ctx: typer.Context) -> None:
    """List all profiles."""
    with exit_on_error():
        ProfileHandler(_store(ctx)).list()


@profile_app.command("use")
def profile_use(ctx: typer.Context, name: str) -> None:
    """Switch to an existing profile."""
    with exit_on_error():
        ProfileHandler(_store(ctx)).use(name)


@profile_app.command("create")
def profile_create(ctx: typer.Context, name: str) -> None:
    """Create a new profile and switch to it."""
    with exit_on_error():
        ProfileHandler(_store(ctx)).create(name)


@profile_app.command("delete")
def profile_delete(ctx: typer.Context, name: str) -> None:
    """Delete a profile."""
    with exit_on_error():
        ProfileHandler(_store(ctx)).delete(name)


@profile_app.command("current")
def profile_current(ctx: typer.Context) -> None:
    """Show the active profile."""
    with exit_on_error():
        ProfileHandler(_store(ctx)).current()


@profile_app.command("set")
def profile_set(ctx: typer.Context, profile: str, key: str, value: str) -> None:
    """Set a configuration value for a specific profile."""
    with exit_on_error():
        ProfileHandler(_store(ctx)).set(profile, key, value)


def main() -> None:
    app(prog_name="lexi")


if __name__ == "__main__":
    main()
