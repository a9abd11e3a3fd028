"""TypeScript -> JavaScript via the `typescript` npm package.

The compiler runs in a Node.js subprocess with a fixed configuration:
ESNext modules, JSX as React, no source maps, comments removed. Syntax
diagnostics are reported back and raised as `TranspileError`.

The request/response travel as JSON over stdin/stdout:
    in:  {"source": str, "fileName": str}
    out: {"outputText": str, "diagnostics": [{"code": int, "message": str, "line": int|null}]}
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path

from vhbundle.config import BundleConfig
from vhbundle.core.errors import TranspileError

logger = logging.getLogger(__name__)

_TRANSPILE_JS = r"""
const ts = require("typescript");
let input = "";
process.stdin.setEncoding("utf8");
process.stdin.on("data", (chunk) => { input += chunk; });
process.stdin.on("end", () => {
    const {source, fileName} = JSON.parse(input);
    const result = ts.transpileModule(source, {
        compilerOptions: {
            jsx: ts.JsxEmit.React,
            noEmit: false,
            module: ts.ModuleKind.ESNext,
            sourceMap: false,
            mapRoot: "/",
            removeComments: true,
        },
        fileName,
        reportDiagnostics: true,
    });
    const diagnostics = (result.diagnostics || []).map((d) => ({
        code: d.code,
        message: ts.flattenDiagnosticMessageText(d.messageText, "\n"),
        line: d.file && d.start !== undefined
            ? d.file.getLineAndCharacterOfPosition(d.start).line + 1
            : null,
    }));
    process.stdout.write(JSON.stringify({outputText: result.outputText, diagnostics}));
});
"""


def _format_diagnostic(filename: str, diag: dict) -> str:
    line = diag.get("line")
    where = f"{filename}:{line}" if line is not None else filename
    return f"{where}: TS{diag.get('code')}: {diag.get('message')}"


def transpile_typescript(source: str, filename: str | Path, config: BundleConfig | None = None) -> str:
    """Transpile TypeScript `source` to JavaScript.

    Raises:
        TranspileError: the compiler reported diagnostics, or Node.js /
            the `typescript` package could not be run.
    """
    cfg = config or BundleConfig()
    filename = str(filename)

    env = dict(os.environ)
    cwd = None
    if cfg.node_path:
        cwd = cfg.node_path
        node_modules = str(Path(cfg.node_path) / "node_modules")
        env["NODE_PATH"] = os.pathsep.join(p for p in (node_modules, env.get("NODE_PATH", "")) if p)

    payload = json.dumps({"source": source, "fileName": filename})
    logger.debug("transpiling %s with %s", filename, cfg.node)
    try:
        proc = subprocess.run(
            [cfg.node, "-e", _TRANSPILE_JS],
            input=payload,
            capture_output=True,
            text=True,
            encoding="utf-8",
            cwd=cwd,
            env=env,
            timeout=cfg.timeout_s,
            check=False,
        )
    except FileNotFoundError as e:
        raise TranspileError(filename, [f"Node.js executable not found: {cfg.node}"]) from e
    except subprocess.TimeoutExpired as e:
        raise TranspileError(filename, [f"TypeScript compiler timed out after {cfg.timeout_s}s"]) from e

    if proc.returncode != 0:
        err = proc.stderr.strip().splitlines()
        raise TranspileError(filename, err[-1:] or [f"node exited with status {proc.returncode}"])

    try:
        result = json.loads(proc.stdout)
    except json.JSONDecodeError as e:
        raise TranspileError(filename, [f"unreadable compiler output: {e}"]) from e

    diagnostics = result.get("diagnostics") or []
    if diagnostics:
        raise TranspileError(filename, [_format_diagnostic(filename, d) for d in diagnostics])

    return result["outputText"]
