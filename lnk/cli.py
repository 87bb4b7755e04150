"""CLI entry point: lnk.

Usage:
    lnk typescript          # link the global typescript, installing it if needed
    lnk -D eslint           # same, but record it under devDependencies
    lnk '*'                 # link every module listed in dependencies
    lnk -D -L '*'           # ... and devDependencies, installing latest versions
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from lnk.core.config import Settings
from lnk.core.logging import setup_logging
from lnk.exceptions import LinkerError
from lnk.linker import Linker
from lnk.models import LinkOptions
from lnk.npm import NpmClient
from lnk.progress import INSTALLED, INSTALLING, LINKED, UPDATED, LinkEvent

_EVENT_LINES = {
    INSTALLING: '⏳ Installing "{spec}"...',
    INSTALLED: '🆗 Installed "{spec}".',
    LINKED: '✅ Linked "{spec}".',
    UPDATED: '🔄 Updated "{spec}".',
}


def _echo_event(event: LinkEvent) -> None:
    template = _EVENT_LINES.get(event.kind)
    if template:
        click.echo(template.format(spec=event.spec))


@click.command()
@click.argument("module", required=False)
@click.option("-D", "--dev", "target_dev", is_flag=True, help="Target devDependencies")
@click.option(
    "-L", "--latest", "force_latest", is_flag=True,
    help="Install 'latest' even for modules pinned in package.json",
)
@click.option(
    "--no-refresh", is_flag=True,
    help="Leave the recorded version of already-linked modules untouched",
)
@click.option(
    "-C", "--cwd", "project_dir", default=".", type=click.Path(file_okay=False),
    help="Project directory containing package.json",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    module: str | None,
    target_dev: bool,
    force_latest: bool,
    no_refresh: bool,
    project_dir: str,
    verbose: bool,
) -> None:
    """Link a globally installed npm MODULE into ./node_modules.

    MODULE is installed globally first if missing. Pass '*' to link every
    module listed in package.json.
    """
    if not module:
        raise click.UsageError("⚠️ Must provide a module name.")

    settings = Settings.from_env()
    setup_logging(settings, verbose=verbose)

    options = LinkOptions(
        target_dev=target_dev,
        force_latest=force_latest,
        refresh_version_on_existing_link=settings.refresh_existing and not no_refresh,
    )

    linker = Linker(NpmClient(settings.npm_command))
    linker.progress.callbacks.append(_echo_event)

    try:
        asyncio.run(linker.link(module, Path(project_dir).resolve(), options))
    except (LinkerError, ValueError) as e:
        click.echo(f"⚠️ {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
