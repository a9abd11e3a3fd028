"""`vhbundle inventory` command: tabulate the modules of a bundle."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from vhbundle.bundle.manifest import inventory as build_inventory
from vhbundle.cli.commands._common import make_config, parse_specifier
from vhbundle.core.errors import BundleError
from vhbundle.resolver import PIPELINE_MODULES, PIPELINE_ROOM, build_for


def register(app: typer.Typer) -> None:
    @app.command("inventory")
    def inventory(
        specifier: str = typer.Argument(..., help="Module root and entry point, as ROOT[:ENTRY]."),
        base: str = typer.Option(".", "--base", help="Directory ROOT is relative to."),
        mode: str = typer.Option("room", "--mode", help="Table shape: room|modules."),
        csv: Optional[str] = typer.Option(None, "--csv", help="Write the table as CSV instead of printing it."),
        node: Optional[str] = typer.Option(None, "--node", help="Node.js executable for TypeScript."),
        node_path: Optional[str] = typer.Option(None, "--node-path", help="Directory providing node_modules/typescript."),
    ) -> None:
        """List every bundled module with its type, size and sha256."""
        if mode not in {"room", "modules"}:
            raise typer.BadParameter("mode must be 'room' or 'modules'")

        spec = parse_specifier(specifier)
        cfg = make_config(node=node, node_path=node_path)
        pipeline = PIPELINE_ROOM if mode == "room" else PIPELINE_MODULES
        try:
            result = build_for(spec, Path(base), pipeline, config=cfg)
        except BundleError as e:
            raise typer.BadParameter(str(e)) from e

        df = build_inventory(result.modules)
        if csv:
            out_path = Path(csv)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(out_path, index=False, lineterminator="\n")
            typer.echo(str(out_path))
            return
        typer.echo(df.to_string(index=False))
