"""Catalog commands -- ``update``, ``list`` and ``get``.

``list`` prefix-matches names across the remote catalog, aliases and
custom templates. ``get`` assembles the content of exactly-named
templates, fetching any missing remote bodies into the cache.

Example::

    git-ignore update
    git-ignore list py ru
    git-ignore get python rust > .gitignore
    git-ignore get --auto -o .gitignore --append
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from git_ignore.commands import ensure_catalog, exit_on_error, load_cache, load_user_config, open_client
from git_ignore.exceptions import UnknownTemplateError
from git_ignore.exit_codes import EXIT_INVALID_USAGE, EXIT_IO_FAILURE
from git_ignore.models import Query, QueryMode, TemplateOrigin
from git_ignore.output import debug, error, format_response, print_data, print_names, success

_ORIGIN_STYLES = {
    TemplateOrigin.ALIAS: "yellow",
    TemplateOrigin.CUSTOM: "blue",
}


def update_command(
    ctx: typer.Context,
    prefetch: bool = typer.Option(
        False, "--all", "-a", help="Also download every template body."
    ),
    status: bool = typer.Option(
        False, "--status", help="Show cache status without contacting the server."
    ),
) -> None:
    """Update the template catalog from the remote server.

    Replaces the cached list of template names and drops cached bodies of
    templates that no longer exist. On failure the previous cache is kept.
    """
    cache = load_cache()
    if status:
        format_response(cache.stats())
        return

    with exit_on_error(), open_client(ctx) as client:
        cache.refresh(client, prefetch=prefetch)
    success(f"Update successful: {len(cache.all_names)} templates available.")


def list_command(
    ctx: typer.Context,
    templates: Optional[list[str]] = typer.Argument(
        None, help="Name prefixes to search for (all templates if omitted)."
    ),
    simple: bool = typer.Option(
        False, "--simple", "-s", help="Ignore user aliases and custom templates."
    ),
) -> None:
    """List templates whose names start with any of the given prefixes."""
    from git_ignore.resolver import Resolver

    with exit_on_error():
        cache = load_cache()
        config = None if simple else load_user_config()
        if not cache.has_catalog:
            with open_client(ctx) as client:
                ensure_catalog(cache, client)

        resolver = Resolver(cache, config)
        names = resolver.list_names(Query(names=templates or [], mode=QueryMode.LIST, simple=simple))

    styles = {}
    for name in names:
        style = _ORIGIN_STYLES.get(resolver.origin(name, simple))
        if style:
            styles[name] = style
    print_names(names, styles)


def get_command(
    ctx: typer.Context,
    templates: Optional[list[str]] = typer.Argument(
        None, help="Exact template, alias or custom template names."
    ),
    simple: bool = typer.Option(
        False, "--simple", "-s", help="Ignore user aliases and custom templates."
    ),
    auto: bool = typer.Option(
        False, "--auto", "-a", help="Add templates detected from files in the current directory."
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout."
    ),
    append: bool = typer.Option(
        False, "--append", help="Append to --output instead of overwriting it."
    ),
) -> None:
    """Print the combined content of the named templates.

    Every name must match exactly. If any name is unknown nothing is
    printed and the command fails.
    """
    from git_ignore.detector import detect_templates
    from git_ignore.resolver import Resolver

    names = list(templates or [])
    if auto:
        detected = detect_templates(Path.cwd())
        debug(f"Detected templates: {', '.join(detected) or 'none'}")
        names.extend(n for n in detected if n not in names)
    if not names:
        error("No templates given. Pass template names or use --auto.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    with exit_on_error():
        cache = load_cache()
        config = None if simple else load_user_config()
        with open_client(ctx) as client:
            refresh_error = ensure_catalog(cache, client)
            try:
                text = Resolver(cache, config, client).get_text(
                    Query(names=names, mode=QueryMode.GET, simple=simple)
                )
            except UnknownTemplateError:
                # Without a catalog every remote name looks unknown.
                if refresh_error is not None and not cache.has_catalog:
                    raise refresh_error from None
                raise

    if output_file is None:
        print_data(text.rstrip("\n"))
        return

    mode = "a" if append else "w"
    try:
        with open(output_file, mode, encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        error(f"Cannot write {output_file}: {exc}")
        raise typer.Exit(code=EXIT_IO_FAILURE) from None
    success(f"Wrote {len(names)} template(s) to {output_file}")
