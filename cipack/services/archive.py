"""Release archive packaging.

Naming convention (downstream jobs depend on it):

    <bin>-<version>-<target>.tar.gz

The archive holds exactly one member, the binary, stored under its bare name
so that extracting it yields ``./<bin>``. Files are written under a temporary
name and renamed into place so a reader never sees a half-written archive.
"""

from __future__ import annotations

import hashlib
import json
import os
import tarfile
from pathlib import Path

__all__ = [
    "archive_name",
    "create_archive",
    "sha256_file",
    "write_manifest",
    "write_text_atomic",
]


def archive_name(bin_name: str, version: str, target: str) -> str:
    return f"{bin_name}-{version}-{target}.tar.gz"


def _tmp_path(path: Path) -> Path:
    return path.with_name(f"{path.name}.tmp")


def _normalize_owner(info: tarfile.TarInfo) -> tarfile.TarInfo:
    # Only the mode bits are meaningful once extracted on another machine.
    info.uid = 0
    info.gid = 0
    info.uname = ""
    info.gname = ""
    return info


def create_archive(binary: Path, dest: Path, *, arcname: str) -> Path:
    """Write ``dest`` as a gzip tarball containing only ``binary``.

    Raises:
        FileNotFoundError: binary does not exist.
        OSError, tarfile.TarError: the archive could not be written. No
            temporary file is left behind.
    """
    if not binary.is_file():
        raise FileNotFoundError(f"Binary not found: {binary}")

    dest.parent.mkdir(parents=True, exist_ok=True)
    tmp = _tmp_path(dest)
    try:
        with tarfile.open(tmp, "w:gz") as tar:
            tar.add(binary, arcname=arcname, recursive=False, filter=_normalize_owner)
        os.replace(tmp, dest)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return dest


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def write_text_atomic(path: Path, content: str) -> None:
    tmp = _tmp_path(path)
    try:
        tmp.write_text(content, encoding="utf-8")
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def write_manifest(
    path: Path,
    *,
    archive: Path,
    bin_name: str,
    version: str,
    target: str,
) -> Path:
    """Describe a release archive in JSON (size + sha256 for verification)."""
    manifest = {
        "schema": 1,
        "name": bin_name,
        "version": version,
        "target": target,
        "archive": archive.name,
        "size": archive.stat().st_size,
        "sha256": sha256_file(archive),
    }
    write_text_atomic(path, json.dumps(manifest, indent=2, sort_keys=True) + "\n")
    return path
