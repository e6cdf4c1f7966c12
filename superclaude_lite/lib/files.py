from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def path_exists(path: str | Path) -> bool:
    # Dangling symlinks count as present.
    return os.path.lexists(path)


def _clear(path: Path) -> None:
    """Remove whatever sits at ``path`` so a different kind of entry can take its place."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def copy_link(src: str | Path, dst: str | Path) -> None:
    """Recreate the symlink ``src`` at ``dst`` with the same (unresolved) target."""
    d = Path(dst)
    if path_exists(d):
        _clear(d)
    d.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(os.readlink(src), d)


def copy_tree(src: str | Path, dst: str | Path) -> None:
    """Copy ``src`` into ``dst``, merging with existing content.

    Symlinks are recreated as links instead of being followed.
    """
    s = Path(src)
    d = Path(dst)
    if not s.is_dir():
        raise FileNotFoundError(str(src))

    if d.is_symlink() or (path_exists(d) and not d.is_dir()):
        _clear(d)
    d.mkdir(parents=True, exist_ok=True)

    for root, dirs, files in os.walk(s):
        rel = Path(root).relative_to(s)
        for name in dirs + files:
            item = Path(root) / name
            out = d / rel / name
            if item.is_symlink():
                copy_link(item, out)
            elif item.is_dir():
                if out.is_symlink() or (path_exists(out) and not out.is_dir()):
                    _clear(out)
                out.mkdir(exist_ok=True)
            else:
                if out.is_symlink() or out.is_dir():
                    _clear(out)
                shutil.copy2(item, out)


def copy_path(src: str | Path, dst: str | Path) -> None:
    """Copy a file, symlink or directory tree from ``src`` to ``dst``."""
    s = Path(src)
    if s.is_symlink():
        copy_link(s, dst)
    elif s.is_dir():
        copy_tree(s, dst)
    else:
        d = Path(dst)
        if d.is_symlink() or d.is_dir():
            _clear(d)
        d.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(s, d)


def copy_markdown_files(src_dir: str | Path, dst_dir: str | Path) -> int:
    """Copy every ``*.md`` under ``src_dir`` keeping relative layout. Returns the count."""
    s = Path(src_dir)
    d = Path(dst_dir)
    if not s.is_dir():
        raise FileNotFoundError(str(src_dir))

    count = 0
    for item in sorted(s.rglob("*")):
        if not item.is_file() or item.suffix.lower() != ".md":
            continue
        out = d / item.relative_to(s)
        out.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(item, out)
        count += 1

    logger.info("Copied %d markdown files %s -> %s", count, s, d)
    return count


def nearest_existing_dir(path: str | Path) -> Path:
    p = Path(path).absolute()
    while not p.exists() and p.parent != p:
        p = p.parent
    return p


def check_write_permissions(path: str | Path) -> None:
    """Raise PermissionError unless ``path`` (or the ancestor that would hold it) is writable."""
    base = nearest_existing_dir(path)
    if not base.is_dir() or not os.access(base, os.W_OK | os.X_OK):
        raise PermissionError(f"target directory is not writable: {base}")
