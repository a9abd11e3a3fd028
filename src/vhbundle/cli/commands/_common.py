"""Shared option handling for CLI commands."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

import typer

from vhbundle.config import BundleConfig
from vhbundle.core.model import BundleSpecifier


def parse_specifier(text: str) -> BundleSpecifier:
    try:
        return BundleSpecifier.parse(text)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def make_config(*, node: Optional[str] = None, node_path: Optional[str] = None, jobs: Optional[int] = None) -> BundleConfig:
    """Environment defaults overridden by explicit CLI options."""
    try:
        cfg = BundleConfig.from_env()
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    if node:
        cfg = replace(cfg, node=node)
    if node_path:
        cfg = replace(cfg, node_path=node_path)
    if jobs is not None:
        if jobs < 1:
            raise typer.BadParameter("--jobs must be >= 1")
        cfg = replace(cfg, max_workers=jobs)
    return cfg
