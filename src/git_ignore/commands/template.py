"""Template commands -- manage custom templates.

Custom templates are stored in the user config and take precedence over
remote templates of the same name.

Example::

    git-ignore template add secrets ./secrets.gitignore
    printf '.env\n' | git-ignore template add env -
    git-ignore template remove secrets
"""

from __future__ import annotations

import sys

import typer

from git_ignore.commands import exit_on_error, load_user_config
from git_ignore.exceptions import StorageError
from git_ignore.output import info, print_table, success


template_app = typer.Typer(no_args_is_help=True)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    try:
        with open(source, encoding="utf-8") as f:
            return f.read()
    except OSError as exc:
        raise StorageError(f"Cannot read {source}: {exc}") from exc


@template_app.command("list")
def template_list() -> None:
    """List custom templates."""
    with exit_on_error():
        config = load_user_config()
    templates = config.custom_templates
    if not templates:
        info("No custom templates defined.")
        return
    rows = [
        [name, str(len(content.splitlines()))]
        for name, content in sorted(templates.items())
    ]
    print_table(["Template", "Lines"], rows, title="Custom templates")


@template_app.command("ls")
def template_ls() -> None:
    """Alias for ``template list``."""
    template_list()


@template_app.command("add")
def template_add(
    name: str = typer.Argument(help="Template name."),
    source: str = typer.Argument(help="File to read the template from ('-' for stdin)."),
) -> None:
    """Add or replace a custom template."""
    with exit_on_error():
        content = _read_source(source)
        load_user_config().add_custom_template(name, content)
    success(f"Saved template {name}")


@template_app.command("remove")
def template_remove(name: str = typer.Argument(help="Template name.")) -> None:
    """Remove a custom template. Removing an unknown template is not an error."""
    with exit_on_error():
        removed = load_user_config().remove_custom_template(name)
    if removed:
        success(f"Removed template {name}")
    else:
        info(f"No template named {name} found")


@template_app.command("rm")
def template_rm(name: str = typer.Argument(help="Template name.")) -> None:
    """Alias for ``template remove``."""
    template_remove(name)
