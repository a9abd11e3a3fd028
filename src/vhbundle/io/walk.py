"""Directory walker: root directory -> flat list of (path, module name)."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from vhbundle.core.errors import DirectoryUnreadable, FileUnreadable
from vhbundle.core.model import FileLocation

logger = logging.getLogger(__name__)


def walk_tree(root: str | Path, prefix: str = "") -> list[FileLocation]:
    """Recursively list regular files under `root`.

    Module names are `prefix` + the `/`-joined relative path. Symlinks, devices
    and other special entries are skipped. Output order follows the directory
    listing and carries no meaning.

    Raises:
        DirectoryUnreadable: `root` (or a nested directory) cannot be listed.
        FileUnreadable: an entry cannot be stat'ed.
    """
    root = Path(root)
    try:
        with os.scandir(root) as it:
            entries = list(it)
    except OSError as e:
        raise DirectoryUnreadable(root, e.strerror or str(e)) from e

    out: list[FileLocation] = []
    for entry in entries:
        try:
            is_file = entry.is_file(follow_symlinks=False)
            is_dir = not is_file and entry.is_dir(follow_symlinks=False)
        except OSError as e:
            raise FileUnreadable(entry.path, e.strerror or str(e)) from e

        if is_file:
            name = prefix + entry.name
            logger.debug("discovered %s -> %s", entry.path, name)
            out.append(FileLocation(path=Path(entry.path), module_name=name))
        elif is_dir:
            out.extend(walk_tree(entry.path, prefix + entry.name + "/"))
    return out
