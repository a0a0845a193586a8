"""CLI entry point for git-setup-submodules."""

import logging
from pathlib import Path

import click

from . import __version__
from .config import CONFIG_FILE
from .errors import SetupError
from .submodules import setup_submodules


@click.command()
@click.option(
    "-C",
    "--repo",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Host repository (default: current directory).",
)
@click.option(
    "-c",
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    default=CONFIG_FILE,
    show_default=True,
    help="Submodule configuration file, relative to the host repository.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every git command.")
@click.version_option(__version__)
def main(repo: Path | None, config: Path, verbose: bool) -> None:
    """Add the submodules listed in the configuration file.

    Submodule URLs are derived from the origin of the host repository.
    Modules you cannot read are skipped. Added submodules are left
    unstaged so you can review them before committing.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        setup_submodules(repo=repo, config=config)
    except SetupError as e:
        click.echo(str(e), err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
