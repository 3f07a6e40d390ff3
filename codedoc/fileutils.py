"""Filesystem helpers for job directories and uploaded archives."""

from __future__ import annotations

import os
import shutil
import zipfile
from pathlib import Path


class UnsupportedArchiveError(ValueError):
    """Raised for archive formats that cannot be extracted."""

    def __init__(self, extension: str) -> None:
        super().__init__(f"unsupported archive format: {extension}")
        self.extension = extension


def create_dir(path: str | os.PathLike[str]) -> None:
    """Create a directory and its parents; existing directories are fine."""
    os.makedirs(path, mode=0o755, exist_ok=True)


def _extension(path: str | os.PathLike[str]) -> str:
    name = os.path.basename(os.fspath(path))
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def extract_archive(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Extract the archive at src into dest. Only .zip archives are supported."""
    ext = _extension(src).lower()
    if ext != ".zip":
        raise UnsupportedArchiveError(ext)
    _extract_zip(src, dest)


def _extract_zip(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    dest_root = Path(dest)
    with zipfile.ZipFile(src) as archive:
        dest_root.mkdir(parents=True, exist_ok=True)
        root = dest_root.resolve()
        for info in archive.infolist():
            target = dest_root / info.filename.lstrip("/")
            if not target.resolve().is_relative_to(root):
                raise ValueError(f"archive entry escapes destination: {info.filename}")
            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(info) as source, open(target, "wb") as out:
                shutil.copyfileobj(source, out)
            mode = (info.external_attr >> 16) & 0o777
            if mode:
                os.chmod(target, mode)


def cleanup_dir(path: str | os.PathLike[str]) -> None:
    """Remove path and everything below it; a missing path is not an error."""
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
    except FileNotFoundError:
        pass