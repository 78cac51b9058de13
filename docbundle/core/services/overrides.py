"""
Override resolution — nearest-first lookup along a bounded directory chain.

Given a project directory somewhere under the projects root, a name is
looked up in the project's own directory first, then in each parent,
ending at the projects root itself.  Directories above the root are
never inspected.

    projects/                     ← checked last
    projects/team/                ← checked second
    projects/team/app/            ← checked first (start_dir)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

PathPredicate = Callable[[Path], bool]


def _exists(path: Path) -> bool:
    return path.exists()


def _within(path: Path, root: Path) -> bool:
    return path == root or path.is_relative_to(root)


def override_chain(start_dir: Path, root: Path) -> list[Path]:
    """Directories searched for overrides, nearest first.

    Empty when ``start_dir`` is not inside ``root``.
    """
    root = root.resolve()
    current = start_dir.resolve()
    chain: list[Path] = []

    while _within(current, root):
        chain.append(current)
        if current == root:
            break
        current = current.parent

    return chain


def resolve_override(
    start_dir: Path,
    root: Path,
    name: str | Path,
    predicate: PathPredicate = _exists,
) -> Path | None:
    """Return the nearest ``<dir>/<name>`` satisfying ``predicate``, or None.

    Args:
        start_dir: Directory the walk starts from (usually the project's).
        root: Upper bound of the walk; checked, never passed.
        name: File or relative path looked up at each level.
        predicate: Test applied to each candidate (default: exists).

    Returns:
        The matching candidate path, or None when nothing on the chain
        matches.  None is not an error; callers choose the fallback.
    """
    for directory in override_chain(start_dir, root):
        candidate = directory / name
        if predicate(candidate):
            logger.debug("Override for %s found at %s", name, candidate)
            return candidate
    return None
