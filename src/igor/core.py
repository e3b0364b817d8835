"""Core functionality for igor - a dotfiles tracking helper."""

import os
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import typer
import yaml

from .exceptions import (
    ConfigDict,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    IgorDirectoryError,
    IgorFileOperationError,
    IgorHomeDirError,
    IgorSymlinkError,
    IgorValidationError,
    TrackedFileDict,
)

# Constants
APP_NAME = "Igor"
CONFIG_FILENAME = "igorrc.yml"
DEFAULT_DOTFILES_NAME = ".dotfiles"
CONFIG_DIR_ENV = "IGOR_CONFIG_DIR"

PathLike = Union[str, Path]


# ============================================================================
# PATH MANAGEMENT
# ============================================================================


def get_home_dir() -> Path:
    """Get the home directory, respecting environment variables for testing."""
    if os.environ.get("HOME"):
        return Path(os.environ["HOME"])
    try:
        return Path.home()
    except RuntimeError as e:
        raise IgorHomeDirError(f"Could not determine home directory: {e}") from e


def get_config_dir() -> Path:
    """
    Get the OS-standard config folder for igor.

    On Linux this is ~/.config/igor (or $XDG_CONFIG_HOME/igor), on macOS
    ~/Library/Application Support/Igor and on Windows %APPDATA%\\Igor.
    Setting IGOR_CONFIG_DIR overrides the location.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path(typer.get_app_dir(APP_NAME))


def get_igor_paths(home_dir: Optional[Path] = None) -> Dict[str, Path]:
    """Get all igor-related paths based on home directory."""
    if home_dir is None:
        home_dir = get_home_dir()

    config_dir = get_config_dir()

    return {
        "home": home_dir,
        "config_dir": config_dir,
        "config_file": config_dir / CONFIG_FILENAME,
        "dotfiles_dir": home_dir / DEFAULT_DOTFILES_NAME,
    }


def update_paths(home_dir: Optional[Path] = None) -> None:
    """Update global paths. Useful for testing or when HOME changes."""
    global HOME, CONFIG_DIR, CONFIG_FILE, DOTFILES_DIR
    paths = get_igor_paths(home_dir)
    HOME = paths["home"]
    CONFIG_DIR = paths["config_dir"]
    CONFIG_FILE = paths["config_file"]
    DOTFILES_DIR = paths["dotfiles_dir"]


# Global paths - can be overridden for testing
_paths = get_igor_paths()
HOME = _paths["home"]
CONFIG_DIR = _paths["config_dir"]
CONFIG_FILE = _paths["config_file"]
DOTFILES_DIR = _paths["dotfiles_dir"]


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def ensure_dir(path: Path, description: str) -> None:
    """Create a directory (and its parents) unless it already exists."""
    if path.is_dir():
        return
    if path.exists():
        raise IgorDirectoryError(f"Could not create {description}: {path} is a file")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IgorDirectoryError(f"Could not create {description} {path}: {e}") from e


def _absolute(path: PathLike) -> Path:
    return Path(os.path.normpath(os.path.abspath(Path(path).expanduser())))


# ============================================================================
# CONFIGURATION MANAGEMENT
# ============================================================================


def new_config() -> ConfigDict:
    """Return an empty configuration."""
    return {"tracked_files": []}


def _parse_tracked_file(entry: Any, config_path: Path) -> TrackedFileDict:
    if not isinstance(entry, dict):
        raise ConfigParseError(
            f"Failed to parse config file {config_path}: "
            f"tracked file entry must be a mapping, got {entry!r}"
        )
    path = entry.get("path")
    name = entry.get("name")
    folder = entry.get("folder")
    if not isinstance(path, str) or not isinstance(name, str):
        raise ConfigParseError(
            f"Failed to parse config file {config_path}: "
            f"tracked file entry needs string 'path' and 'name': {entry!r}"
        )
    if not isinstance(folder, bool):
        raise ConfigParseError(
            f"Failed to parse config file {config_path}: "
            f"'folder' must be true or false in {entry!r}"
        )
    return {"path": path, "name": name, "folder": folder}


def load_config(path: Optional[PathLike] = None) -> ConfigDict:
    """Load configuration from the igor config file."""
    config_path = Path(path) if path is not None else CONFIG_FILE

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigReadError(f"Failed to open config file {config_path}: {e}") from e
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Failed to parse config file {config_path}: {e}") from e

    # An empty file is an empty config
    if data is None:
        return new_config()
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Failed to parse config file {config_path}: expected a mapping"
        )

    entries = data.get("tracked_files")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise ConfigParseError(
            f"Failed to parse config file {config_path}: "
            "'tracked_files' must be a list"
        )

    return {
        "tracked_files": [_parse_tracked_file(e, config_path) for e in entries]
    }


def save_config(config: ConfigDict, path: Optional[PathLike] = None) -> None:
    """Save configuration to the igor config file, following symlinks."""
    config_path = Path(path) if path is not None else CONFIG_FILE
    data = {"tracked_files": [dict(tf) for tf in config["tracked_files"]]}

    try:
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False, default_flow_style=False)
    except OSError as e:
        raise ConfigWriteError(f"Failed to write config file {config_path}: {e}") from e


def ensure_config() -> ConfigDict:
    """Load the config file, creating the config folder and file if missing."""
    ensure_dir(CONFIG_DIR, "igor config folder")
    if not CONFIG_FILE.exists():
        config = new_config()
        save_config(config)
        return config
    return load_config()


# ============================================================================
# TRACKED FILE MANAGEMENT
# ============================================================================


def resolve_tracked_path(path: PathLike, cwd: Optional[Path] = None) -> Path:
    """Turn a user supplied path into an absolute, normalized path."""
    target = Path(path).expanduser()
    if not target.is_absolute():
        if cwd is None:
            try:
                cwd = Path.cwd()
            except OSError as e:
                raise IgorFileOperationError(
                    f"Failed to read current directory: {e}"
                ) from e
        target = cwd / target
    target = Path(os.path.normpath(target))

    if not target.name:
        raise IgorValidationError(f"Cannot track {path}: path has no file name")
    return target


def _is_folder(path: Path) -> bool:
    # Unreadable paths are still tracked, as plain files
    try:
        return path.is_dir()
    except OSError:
        return False


def track_file(
    config: ConfigDict, path: PathLike, quiet: bool = False
) -> TrackedFileDict:
    """
    Register a file or folder in the config and save it.

    The path does not need to exist. Paths are recorded as given, so the same
    file can be tracked more than once.
    """
    target = resolve_tracked_path(path)
    tracked: TrackedFileDict = {
        "path": str(target),
        "name": target.name,
        "folder": _is_folder(target),
    }
    config["tracked_files"].append(tracked)
    save_config(config)

    if not quiet:
        kind = "folder" if tracked["folder"] else "file"
        typer.secho(f"Tracking {kind} {tracked['name']}", fg=typer.colors.GREEN)
    return tracked


# ============================================================================
# DOTFILES FOLDER INITIALIZATION
# ============================================================================


def resolve_dotfiles_dir(
    path: Optional[PathLike] = None, name: Optional[str] = None
) -> Path:
    """Work out where the dotfiles folder lives, defaulting to ~/.dotfiles."""
    if not path and not name:
        return DOTFILES_DIR
    base = _absolute(path) if path else HOME
    return base / (name or DEFAULT_DOTFILES_NAME)


def _copy_config(src: Path, dest: Path) -> None:
    try:
        shutil.copy2(src, dest)
    except OSError as e:
        raise IgorFileOperationError(
            f"Failed to move {CONFIG_FILENAME} to dotfiles folder: {e}"
        ) from e


def _create_symlink(link: Path, target: Path) -> None:
    try:
        link.symlink_to(target)
    except OSError as e:
        raise IgorSymlinkError(
            f"Failed to create symlink {link} -> {target}: {e}"
        ) from e


def _replace_with_symlink(link: Path, target: Path) -> None:
    try:
        link.unlink()
    except OSError as e:
        raise IgorSymlinkError(f"Could not remove {link}: {e}") from e
    _create_symlink(link, target)


def init_dotfiles(
    dotfiles_dir: PathLike,
    confirm: Optional[Callable[[str], bool]] = None,
    quiet: bool = False,
) -> bool:
    """
    Create the dotfiles folder and let igor track its own config.

    The real igorrc.yml lives in the dotfiles folder and the OS config path is
    a symlink to it. When something is already at the OS config path the user
    is asked before it is replaced.

    Returns True if the symlink is in place afterwards, False if the user
    declined to replace what was there.
    """
    if confirm is None:
        confirm = typer.confirm

    dotfiles_dir = _absolute(dotfiles_dir)
    link = CONFIG_FILE
    target = dotfiles_dir / CONFIG_FILENAME

    if _absolute(link) == target:
        raise IgorValidationError(
            f"Dotfiles folder {dotfiles_dir} cannot be the igor config folder"
        )

    ensure_dir(dotfiles_dir, "dotfiles folder")
    ensure_dir(CONFIG_DIR, "igor config folder")

    if link.is_symlink():
        try:
            already_linked = link.resolve() == target.resolve()
        except (OSError, RuntimeError) as e:
            raise IgorSymlinkError(f"Could not resolve symlink {link}: {e}") from e

        if already_linked:
            if not target.exists():
                save_config(new_config(), target)
            if not quiet:
                typer.secho(
                    f"{link} already points to {target}", fg=typer.colors.YELLOW
                )
            return True

        if not confirm(f"Symlink for {CONFIG_FILENAME} exists. Replace it?"):
            if not quiet:
                typer.secho("Not replacing symlink", fg=typer.colors.YELLOW)
            return False

        if not target.exists():
            # Keep whatever the old link pointed at, if anything
            if link.exists():
                _copy_config(link, target)
            else:
                save_config(new_config(), target)
        _replace_with_symlink(link, target)

    elif link.is_dir():
        raise IgorSymlinkError(f"Cannot create symlink: {link} is a directory")

    elif link.exists():
        if not confirm(
            "Config file exists in the symlinked location. "
            "Track it and replace it with a symlink?"
        ):
            if not quiet:
                typer.secho("Not replacing config file", fg=typer.colors.YELLOW)
            return False

        _copy_config(link, target)
        _replace_with_symlink(link, target)

    else:
        if not target.exists():
            save_config(new_config(), target)
        _create_symlink(link, target)

    if not quiet:
        typer.secho(f"Linked {link} -> {target}", fg=typer.colors.GREEN)
    return True
