"""`vhbundle integrity` command: print the bundle's integrity digest."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from vhbundle.cli.commands._common import make_config, parse_specifier
from vhbundle.core.errors import BundleError
from vhbundle.resolver import PIPELINE_MODULES, PIPELINE_ROOM, build_for


def register(app: typer.Typer) -> None:
    @app.command("integrity")
    def integrity(
        specifier: str = typer.Argument(..., help="Module root and entry point, as ROOT[:ENTRY]."),
        base: str = typer.Option(".", "--base", help="Directory ROOT is relative to."),
        mode: str = typer.Option("room", "--mode", help="Table shape to fingerprint: room|modules."),
        node: Optional[str] = typer.Option(None, "--node", help="Node.js executable for TypeScript."),
        node_path: Optional[str] = typer.Option(None, "--node-path", help="Directory providing node_modules/typescript."),
    ) -> None:
        """Print the integrity digest of ROOT[:ENTRY]."""
        if mode not in {"room", "modules"}:
            raise typer.BadParameter("mode must be 'room' or 'modules'")

        spec = parse_specifier(specifier)
        cfg = make_config(node=node, node_path=node_path)
        pipeline = PIPELINE_ROOM if mode == "room" else PIPELINE_MODULES
        try:
            result = build_for(spec, Path(base), pipeline, config=cfg)
        except BundleError as e:
            raise typer.BadParameter(str(e)) from e

        typer.echo(result.integrity)
