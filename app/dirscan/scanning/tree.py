"""Directory tree rendering.

Renders the full hierarchy under a root, independent of any file
filters, using box-drawing connectors::

    ├── docs/
    │   └── index.md (1.20 KB)
    └── README.md (512.00 B)
"""

import os
from collections.abc import Iterator
from pathlib import Path

from dirscan.utils.formatting import format_bytes

TEE = "├── "
CORNER = "└── "
PIPE = "│   "
SPACE = "    "


def _sort_key(entry: os.DirEntry[str]) -> tuple[str, str]:
    return (entry.name.casefold(), entry.name)


def _is_dir(entry: os.DirEntry[str], follow_symlinks: bool) -> bool:
    try:
        return entry.is_dir(follow_symlinks=follow_symlinks)
    except OSError:
        return False


def _file_label(entry: os.DirEntry[str], follow_symlinks: bool) -> str:
    try:
        size = format_bytes(entry.stat(follow_symlinks=follow_symlinks).st_size)
    except OSError:
        size = "unavailable"
    return f"{entry.name} ({size})"


def iter_tree(
    directory: Path,
    max_depth: int | None = None,
    *,
    follow_symlinks: bool = True,
    _depth: int = 0,
    _prefix: str = "",
    _ancestors: frozenset[str] | None = None,
) -> Iterator[str]:
    """Yield the tree lines for ``directory``, depth-first.

    Directories are listed before files at every level; each group is
    sorted by name (case-folded, ties by exact name). A directory that
    cannot be listed yields a single error line in its place.

    Args:
        directory: Directory to render.
        max_depth: Levels below the root whose contents are listed
            (None = unbounded). Depth 0 lists only the root's children.
        follow_symlinks: Treat links to directories as directories.

    Yields:
        One rendered line per entry, without trailing newline.
    """
    if _ancestors is None:
        _ancestors = frozenset({os.path.realpath(directory)})

    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        yield f"{_prefix}{CORNER}[Error reading directory: {e.strerror or e}]"
        return

    directories = sorted((e for e in entries if _is_dir(e, follow_symlinks)), key=_sort_key)
    files = sorted((e for e in entries if not _is_dir(e, follow_symlinks)), key=_sort_key)
    ordered = [(e, True) for e in directories] + [(e, False) for e in files]

    for index, (entry, is_dir) in enumerate(ordered):
        is_last = index == len(ordered) - 1
        connector = CORNER if is_last else TEE
        child_prefix = _prefix + (SPACE if is_last else PIPE)

        if not is_dir:
            yield f"{_prefix}{connector}{_file_label(entry, follow_symlinks)}"
            continue

        yield f"{_prefix}{connector}{entry.name}/"
        if max_depth is not None and _depth + 1 > max_depth:
            continue

        canonical = os.path.realpath(entry.path)
        if canonical in _ancestors:
            yield f"{child_prefix}{CORNER}[Symlink loop, not descending]"
            continue

        yield from iter_tree(
            Path(entry.path),
            max_depth,
            follow_symlinks=follow_symlinks,
            _depth=_depth + 1,
            _prefix=child_prefix,
            _ancestors=_ancestors | {canonical},
        )


def render_tree(
    root: Path, max_depth: int | None = None, *, follow_symlinks: bool = True
) -> list[str]:
    """Render the hierarchy under ``root`` as a list of lines."""
    return list(iter_tree(root, max_depth, follow_symlinks=follow_symlinks))
