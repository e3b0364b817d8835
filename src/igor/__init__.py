"""
igor - your helpful assistant to manage dotfiles.

igor keeps a list of the files and folders you want under version control
in a central dotfiles folder, and tracks its own config file there too by
symlinking it into the OS config location.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .core import (
    ensure_config,
    init_dotfiles,
    load_config,
    new_config,
    resolve_dotfiles_dir,
    save_config,
    track_file,
)

__all__ = [
    "new_config",
    "load_config",
    "save_config",
    "ensure_config",
    "track_file",
    "resolve_dotfiles_dir",
    "init_dotfiles",
]
