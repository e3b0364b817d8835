"""CLI commands for igor - a dotfiles tracking helper."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from igor import core

from . import __version__
from .core import (
    ensure_config,
    init_dotfiles,
    resolve_dotfiles_dir,
    track_file,
    update_paths,
)
from .exceptions import IgorError, TrackedFileDict

# Global app and console instances
app = typer.Typer(help="Igor is your helpful assistant to manage dotfiles")
console = Console()


def _installed_version() -> str:
    try:
        return get_version("igor")
    except PackageNotFoundError:
        return __version__


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"igor {_installed_version()}")
        raise typer.Exit()


def _print_tracked_file(tracked: TrackedFileDict) -> None:
    """Show a freshly tracked file."""
    table = Table(show_header=False, box=None)
    table.add_column(style="cyan")
    table.add_column()
    table.add_row("path", tracked["path"])
    table.add_row("name", tracked["name"])
    table.add_row("folder", "yes" if tracked["folder"] else "no")
    console.print(table)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    show_config_path: Annotated[
        bool,
        typer.Option(
            "--show-config-path", help="Print the location of the igor config file."
        ),
    ] = False,
    show_version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show igor version and exit.",
        ),
    ] = None,
) -> None:
    """Igor is your helpful assistant to manage dotfiles."""
    try:
        update_paths()
    except IgorError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if show_config_path:
        # Plain stdout so the path can be piped
        typer.echo(str(core.CONFIG_FILE))
    elif ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


# ============================================================================
# MAIN COMMANDS
# ============================================================================


@app.command()
def add(
    file_name: Annotated[
        str, typer.Argument(help="File or folder to be tracked by igor")
    ],
) -> None:
    """Add a new file to be tracked by igor."""
    try:
        config = ensure_config()
        tracked = track_file(config, file_name)
    except IgorError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _print_tracked_file(tracked)


@app.command()
def init(
    path: Annotated[
        Optional[str],
        typer.Option(
            "--path",
            "-p",
            help="Where to create the dotfiles folder. Defaults to your home "
            "directory.",
        ),
    ] = None,
    name: Annotated[
        Optional[str],
        typer.Option(
            "--name",
            "-n",
            help="Name of the dotfiles folder if you don't want it to be "
            "called .dotfiles",
        ),
    ] = None,
) -> None:
    """Create a new folder for your dotfiles and let igor track its own config."""
    dotfiles_dir = resolve_dotfiles_dir(path, name)
    typer.secho(f"Initializing dotfiles folder {dotfiles_dir}...", fg=typer.colors.BLUE)

    try:
        linked = init_dotfiles(dotfiles_dir)
    except IgorError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if linked:
        typer.secho(
            "Dotfiles folder initialized successfully", fg=typer.colors.GREEN, bold=True
        )
        typer.secho("Next steps:", fg=typer.colors.CYAN)
        typer.echo("  Track files: igor add <file_name>")
        typer.echo(f"  Put {dotfiles_dir} under version control")
    else:
        typer.secho(f"Left {core.CONFIG_FILE} as it is", fg=typer.colors.YELLOW)


@app.command()
def version() -> None:
    """Show igor version."""
    typer.secho(f"igor version {_installed_version()}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
