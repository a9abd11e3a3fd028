"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import vhbundle` to fail.

To keep the suite robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers
# =============================================================================


def fake_transpile(source: str, filename: str) -> str:
    """Stand-in for the TypeScript compiler: drops `: number` annotations."""
    return source.replace(": number", "")


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create `files` (relative name -> content) under `root`."""
    for name, content in files.items():
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_text(content, encoding="utf-8")
    return root


DEMO_FILES: dict[str, str | bytes] = {
    "index.ts": "export const answer: number = 42;\n",
    "lib/util.js": "export function twice(x) { return x * 2; }\n",
    "data.json": '{ "a" : [1, 2],\n  "b": "x" }\n',
    "readme.txt": "hello room\n",
    "img.png": bytes([0, 255, 128]),
}


@pytest.fixture()
def demo_root(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "mods", DEMO_FILES)


def _has_node_typescript() -> bool:
    node = shutil.which("node")
    if node is None:
        return False
    proc = subprocess.run([node, "-e", "require('typescript')"], capture_output=True, check=False)
    return proc.returncode == 0


requires_node = pytest.mark.skipif(shutil.which("node") is None, reason="Node.js not installed")
requires_typescript = pytest.mark.skipif(not _has_node_typescript(), reason="Node.js `typescript` package not available")
