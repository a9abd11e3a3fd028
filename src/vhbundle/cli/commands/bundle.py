"""`vhbundle bundle` command.

Builds the generated module for `ROOT[:ENTRY]` exactly as the host resolver
would and writes it to `--out` (or stdout).

Modes map to host pipelines:
- room:      `varhub-room` (entry point required)
- modules:   `varhub-modules` (flat, entry point optional)
- integrity: `varhub-modules-integrity` (digest only)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from vhbundle.bundle.manifest import build_manifest, write_manifest
from vhbundle.cli.commands._common import make_config, parse_specifier
from vhbundle.core.errors import BundleError
from vhbundle.resolver import PIPELINE_INTEGRITY, PIPELINE_MODULES, PIPELINE_ROOM, build_for, render

MODE_PIPELINES = {
    "room": PIPELINE_ROOM,
    "modules": PIPELINE_MODULES,
    "integrity": PIPELINE_INTEGRITY,
}


def register(app: typer.Typer) -> None:
    @app.command("bundle")
    def bundle(
        specifier: str = typer.Argument(..., help="Module root and entry point, as ROOT[:ENTRY]."),
        base: str = typer.Option(".", "--base", help="Directory ROOT is relative to."),
        mode: str = typer.Option("room", "--mode", help="Bundle mode: room|modules|integrity."),
        out: Optional[str] = typer.Option(None, "--out", help="Output file (default: stdout)."),
        manifest: Optional[str] = typer.Option(None, "--manifest", help="Also write a manifest.json here."),
        node: Optional[str] = typer.Option(None, "--node", help="Node.js executable for TypeScript."),
        node_path: Optional[str] = typer.Option(None, "--node-path", help="Directory providing node_modules/typescript."),
        jobs: Optional[int] = typer.Option(None, "--jobs", "-j", help="Parallel file transforms."),
    ) -> None:
        """Generate the bundled module source for ROOT[:ENTRY]."""
        if mode not in MODE_PIPELINES:
            raise typer.BadParameter("mode must be 'room', 'modules' or 'integrity'")

        spec = parse_specifier(specifier)
        cfg = make_config(node=node, node_path=node_path, jobs=jobs)
        pipeline = MODE_PIPELINES[mode]

        try:
            result = build_for(spec, Path(base), pipeline, config=cfg)
        except BundleError as e:
            raise typer.BadParameter(str(e)) from e
        artifact = render(result, pipeline)

        if manifest:
            write_manifest(Path(manifest), build_manifest(result))

        if out:
            out_path = Path(out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(artifact.code, encoding="utf-8")
            typer.echo(str(out_path))
        else:
            typer.echo(artifact.code)
