"""Alias commands -- manage named groups of templates.

An alias expands to an ordered list of other names (remote templates,
custom templates or other aliases) when used with ``get``.

Example::

    git-ignore alias add web node go
    git-ignore get web
    git-ignore alias remove web
"""

from __future__ import annotations

import typer

from git_ignore.commands import exit_on_error, load_cache, load_user_config
from git_ignore.output import info, print_table, success, warning


alias_app = typer.Typer(no_args_is_help=True)


@alias_app.command("list")
def alias_list() -> None:
    """List user-defined aliases."""
    with exit_on_error():
        config = load_user_config()
    aliases = config.aliases
    if not aliases:
        info("No aliases defined.")
        return
    rows = [[name, ", ".join(members)] for name, members in sorted(aliases.items())]
    print_table(["Alias", "Templates"], rows, title="Aliases")


@alias_app.command("ls")
def alias_ls() -> None:
    """Alias for ``alias list``."""
    alias_list()


@alias_app.command("add")
def alias_add(
    name: str = typer.Argument(help="Alias name."),
    members: list[str] = typer.Argument(help="Templates the alias expands to, in order."),
    force: bool = typer.Option(
        False, "--force", "-f", help="Replace an existing alias of the same name."
    ),
) -> None:
    """Create an alias for one or more templates."""
    from git_ignore.resolver import Resolver

    with exit_on_error():
        config = load_user_config()
        config.add_alias(name, members, overwrite=force)
        universe = Resolver(load_cache(), config).universe()

    success(f"Created alias {name} for {', '.join(config.alias_members(name))}")
    unknown = [m for m in config.alias_members(name) if m not in universe]
    if unknown:
        warning(f"Not in the template catalog (yet): {', '.join(unknown)}")


@alias_app.command("remove")
def alias_remove(name: str = typer.Argument(help="Alias name.")) -> None:
    """Remove an alias. Removing an unknown alias is not an error."""
    with exit_on_error():
        removed = load_user_config().remove_alias(name)
    if removed:
        success(f"Removed alias {name}")
    else:
        info(f"No alias named {name} found")


@alias_app.command("rm")
def alias_rm(name: str = typer.Argument(help="Alias name.")) -> None:
    """Alias for ``alias remove``."""
    alias_remove(name)
