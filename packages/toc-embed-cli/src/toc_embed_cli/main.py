# SPDX-License-Identifier: MIT
"""CLI entry point for the toc-embed command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from toc_embed import EmbedError, embed_libraries, load_config
from toc_embed.orchestrator import EmbedResult

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


def report(result: EmbedResult, addon_path: Path) -> None:
    """Print a summary of an embedding run."""
    if result.nothing_to_embed:
        echo_info(f"Nothing to embed for {result.addon_name}.")
        return

    echo_success(f"Embedded into {result.addon_name}: {', '.join(result.embedded)}")
    if result.runtime_added:
        echo_info("  Added shared runtime library")
    for manifest_path in result.manifests_rewritten:
        echo_info(f"  Rewrote manifest: {manifest_path.relative_to(addon_path)}")
    for script in result.scripts_rewritten:
        echo_info(
            f"  Injected into {script.path.relative_to(addon_path)}: {', '.join(script.injected)}"
        )


@click.command()
@click.version_option(package_name="toc-embed")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.argument(
    "addon_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
def cli(verbose: bool, addon_path: Path) -> None:
    """Embed the library dependencies of the AddOn at ADDON_PATH.

    Dependencies that are themselves embeddable libraries are vendored as
    git submodules, merged into the AddOn's TOC files and acquired in the
    scripts that use them.

    \b
    Examples:
        toc-embed AddOns/MyAddOn
        toc-embed -v AddOns/MyAddOn
    """
    configure_logging(verbose)
    addon_path = addon_path.resolve()

    try:
        config = load_config(addon_path)
        result = embed_libraries(addon_path, config)
    except EmbedError as e:
        echo_error(str(e))
        raise SystemExit(1)

    report(result, addon_path)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)
    except Exception as e:
        echo_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
