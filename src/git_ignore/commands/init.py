"""Init command -- create the user configuration file."""

from __future__ import annotations

import typer

from git_ignore.commands import exit_on_error
from git_ignore.output import info, suggest, success, warning


def init_command(
    force: bool = typer.Option(
        False, "--force", help="Overwrite an existing configuration."
    ),
) -> None:
    """Initialize an empty user configuration.

    An existing configuration is kept unless ``--force`` is given.
    """
    from git_ignore.config import user_config_path
    from git_ignore.storage import FileStorage
    from git_ignore.user_data import UserConfig

    path = user_config_path()
    existed = path.is_file()
    with exit_on_error():
        _, created = UserConfig.init(FileStorage(path), force=force)

    if not created:
        info(f"Config already exists at {path}")
        suggest("Use --force to overwrite it.")
        return
    if existed:
        warning(f"Overwrote existing config at {path}")
    else:
        success(f"Created config at {path}")
