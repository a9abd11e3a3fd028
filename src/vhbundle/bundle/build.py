"""Bundle assembly: walk -> resolve entry -> transform -> fingerprint.

Two table shapes are produced:

- flat (`BundleMode.MODULES`, legacy): `{"/name": record, ...}`; the entry
  point is optional and matched against names without their leading `/`
- room (`BundleMode.ROOM`): `{"main": <canonical entry>, "source": {"name": record, ...}}`;
  the entry point is required

The entry point is validated before any file is read, so a bad entry never
costs a transpile. No partial bundle is ever returned: the first failing
transform aborts the build.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Sequence

from vhbundle.bundle.integrity import fingerprint
from vhbundle.bundle.serialize import to_source
from vhbundle.config import BundleConfig
from vhbundle.core.errors import EmptyModuleSet
from vhbundle.core.model import FileLocation, ModuleRecord, module_table_value, room_table_value
from vhbundle.core.names import strip_root_slash
from vhbundle.core.resolve import is_entry_module, resolve_entry
from vhbundle.io.transform import Transpiler, transform_file
from vhbundle.io.walk import walk_tree

logger = logging.getLogger(__name__)


class BundleMode(str, Enum):
    MODULES = "modules"
    ROOM = "room"


@dataclass(frozen=True)
class BundleResult:
    root: Path
    mode: BundleMode
    entry: str | None
    main: str | None
    modules: dict[str, ModuleRecord]
    locations: tuple[FileLocation, ...]
    integrity: str

    def table_value(self) -> dict[str, Any]:
        if self.mode is BundleMode.ROOM:
            if self.main is None:
                raise ValueError("room bundle: main must be set")
            return room_table_value(self.main, self.modules)
        return module_table_value(self.modules)

    def to_source(self) -> str:
        return to_source(self.table_value())

    @property
    def source_paths(self) -> list[str]:
        return sorted(str(loc.path) for loc in self.locations)


def transform_all(
    locations: Sequence[FileLocation],
    main: str | None,
    *,
    transpile: Transpiler | None = None,
    config: BundleConfig | None = None,
) -> dict[str, ModuleRecord]:
    """Transform every location concurrently; return records sorted by module name."""
    cfg = config or BundleConfig()
    records: dict[str, ModuleRecord] = {}
    with ThreadPoolExecutor(max_workers=cfg.max_workers) as pool:
        futures = {
            pool.submit(
                transform_file,
                loc,
                is_entry_module(strip_root_slash(loc.module_name), main),
                transpile=transpile,
                config=cfg,
            ): loc
            for loc in locations
        }
        try:
            for fut in as_completed(futures):
                records[futures[fut].module_name] = fut.result()
        except BaseException:
            for fut in futures:
                fut.cancel()
            raise
    return {name: records[name] for name in sorted(records)}


def _build(
    root: str | Path,
    entry: str | None,
    *,
    mode: BundleMode,
    label: str | None,
    transpile: Transpiler | None,
    config: BundleConfig | None,
) -> BundleResult:
    root = Path(root)
    label = label if label is not None else str(root)
    prefix = "/" if mode is BundleMode.MODULES else ""

    locations = walk_tree(root, prefix)
    if not locations:
        raise EmptyModuleSet(label)
    names = [strip_root_slash(loc.module_name) for loc in locations]

    if mode is BundleMode.ROOM or entry:
        main = resolve_entry(entry, names, root=label)
    else:
        main = None

    modules = transform_all(locations, main, transpile=transpile, config=config)
    table = room_table_value(main, modules) if mode is BundleMode.ROOM else module_table_value(modules)
    integrity = fingerprint(table)
    logger.info("bundled %s (%s): %d modules, integrity %s", label, mode.value, len(modules), integrity)

    return BundleResult(
        root=root,
        mode=mode,
        entry=entry,
        main=main,
        modules=modules,
        locations=tuple(locations),
        integrity=integrity,
    )


def build_modules(
    root: str | Path,
    entry: str | None = None,
    *,
    label: str | None = None,
    transpile: Transpiler | None = None,
    config: BundleConfig | None = None,
) -> BundleResult:
    """Build a flat `"/name" -> record` bundle of `root`."""
    return _build(root, entry, mode=BundleMode.MODULES, label=label, transpile=transpile, config=config)


def build_room(
    root: str | Path,
    entry: str | None,
    *,
    label: str | None = None,
    transpile: Transpiler | None = None,
    config: BundleConfig | None = None,
) -> BundleResult:
    """Build a `{main, source}` bundle of `root` with a required entry point."""
    return _build(root, entry, mode=BundleMode.ROOM, label=label, transpile=transpile, config=config)
