"""vhbundle CLI entrypoint (Typer)."""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="vhbundle",
    add_completion=False,
    no_args_is_help=True,
    help="Bundle a module directory into a fingerprinted JavaScript module table.",
)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log discovered files and build steps."),
) -> None:
    """vhbundle CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("version")
def version() -> None:
    """Print the installed vhbundle version."""
    from vhbundle import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `vhbundle --help` is fast.
    """
    from vhbundle.cli.commands import bundle as bundle_cmd
    from vhbundle.cli.commands import integrity as integrity_cmd
    from vhbundle.cli.commands import inventory as inventory_cmd
    from vhbundle.cli.commands import verify as verify_cmd

    bundle_cmd.register(app)
    integrity_cmd.register(app)
    inventory_cmd.register(app)
    verify_cmd.register(app)


_register_commands()
