"""
Link publishing — optional symlinks from a build's output to elsewhere.

``link_to`` points at a path outside the workspace (usually inside the
real project checkout).  The output document is linked there, and the
metadata directory is linked next to it:

    target .claude missing or a symlink → link the whole .claude
    target .claude is a real directory  → link only .claude/skills

Everything here is best-effort: problems are warnings and never fail
the build.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docbundle.core.models.workspace import META_DIRNAME, META_SKILLS_DIRNAME, output_meta_dir
from docbundle.core.services.events import Reporter

logger = logging.getLogger(__name__)


def create_symlink(source: Path, target_path: str | Path, reporter: Reporter) -> bool:
    """Point ``target_path`` at ``source``.

    An existing symlink at the target is replaced; any other existing
    file or directory is left alone.

    Returns:
        True if the link was created.
    """
    target = Path(target_path).expanduser().absolute()
    source_abs = source.absolute()

    if not target.parent.is_dir():
        reporter.warning(f"  ⚠️  Skipping symlink: Target directory does not exist: {target.parent}")
        return False

    try:
        if target.is_symlink():
            target.unlink()
        elif target.exists():
            reporter.warning(f"  ⚠️  Skipping symlink: Target exists and is not a symlink: {target}")
            return False

        target.symlink_to(source_abs)
    except OSError as e:
        logger.debug("Symlink %s → %s failed", target, source_abs, exc_info=True)
        reporter.warning(f"  ⚠️  Failed to create symlink: {e}")
        return False

    reporter.info(f"  → Linked to {target}")
    return True


def publish_links(output: Path, link_to: str, reporter: Reporter) -> list[Path]:
    """Link the output document (and its metadata directory) to ``link_to``.

    Returns:
        Targets that were linked successfully.
    """
    linked: list[Path] = []
    if create_symlink(output, link_to, reporter):
        linked.append(Path(link_to).expanduser().absolute())

    meta_dir = output_meta_dir(output)
    if not meta_dir.is_dir():
        return linked

    target_meta = Path(link_to).expanduser().absolute().parent / META_DIRNAME
    if not target_meta.exists() or target_meta.is_symlink():
        if create_symlink(meta_dir, target_meta, reporter):
            linked.append(target_meta)
        return linked

    skills_dir = meta_dir / META_SKILLS_DIRNAME
    if skills_dir.is_dir():
        target_skills = target_meta / META_SKILLS_DIRNAME
        if create_symlink(skills_dir, target_skills, reporter):
            linked.append(target_skills)
    return linked
