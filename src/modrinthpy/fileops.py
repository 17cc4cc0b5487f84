"""
modrinthpy.fileops
------------------

Disk writes for downloaded version files.

Data is written beside its destination under a temporary name and moved into
place with os.replace(), so readers only ever see the old file or the complete
new one.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import *

from .exceptions import DownloadError


def _flush_to_disk(handle) -> None:
    handle.flush()
    try:
        os.fsync(handle.fileno())
    except (OSError, AttributeError):
        # some filesystems refuse fsync
        pass


def atomic_write(dest_path: Union[str, Path], data: bytes, *, tmp_suffix: str = ".part") -> int:
    """
    Replace `dest_path` with `data` in a single step.

    Missing parent directories are created. On failure the temporary file is
    removed and the previous content of `dest_path`, if any, is left alone.

    Returns
    -------
    int
        Number of bytes written.

    Raises
    ------
    DownloadError
        Wrapping the OSError that stopped the write.
    """
    target = Path(dest_path)
    staging: Optional[Path] = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, staging_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=tmp_suffix, dir=target.parent)
        staging = Path(staging_name)
        with os.fdopen(fd, "wb") as handle:
            written = handle.write(data)
            _flush_to_disk(handle)
        os.replace(staging, target)
    except OSError as exc:
        if staging is not None:
            try:
                staging.unlink()
            except OSError:
                pass
        raise DownloadError(f"could not write {target}: {exc}") from exc
    return written


def safe_filename(name: Optional[str]) -> Optional[str]:
    """
    Reduce a server-supplied file name to its final path component.

    Directory parts (either separator) are dropped so the name cannot point
    outside the download directory. Returns None when nothing usable is left.
    """
    if not name:
        return None
    base = os.path.basename(str(name).replace("\\", "/")).strip()
    if base in ("", ".", ".."):
        return None
    return base
