"""`vhbundle verify` command.

Rebuilds the bundle described by a manifest.json (written by
`vhbundle bundle --manifest`) and compares per-module sha256 and integrity.
Exit code 1 if anything changed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from vhbundle.bundle.manifest import read_manifest, verify_manifest
from vhbundle.cli.commands._common import make_config
from vhbundle.core.errors import BundleError


def register(app: typer.Typer) -> None:
    @app.command("verify")
    def verify(
        manifest: str = typer.Argument(..., help="Path to a manifest.json."),
        node: Optional[str] = typer.Option(None, "--node", help="Node.js executable for TypeScript."),
        node_path: Optional[str] = typer.Option(None, "--node-path", help="Directory providing node_modules/typescript."),
    ) -> None:
        """Check that a module directory still matches its manifest."""
        cfg = make_config(node=node, node_path=node_path)
        try:
            problems = verify_manifest(read_manifest(Path(manifest)), config=cfg)
        except (BundleError, ValueError) as e:
            raise typer.BadParameter(str(e)) from e

        if problems:
            for line in problems:
                typer.echo(line)
            raise typer.Exit(code=1)
        typer.echo("OK")
