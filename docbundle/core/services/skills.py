"""
Skill synchronization — mirror configured skill directories next to an output.

Destination layout::

    <output dir>/.claude/skills/<skill>/...

Sources are resolved nearest first:

    projects/team/app/skills/<skill>    (project's own directory)
    projects/team/skills/<skill>        (each parent)
    projects/skills/<skill>             (projects root)
    skills/<skill>                      (common fallback)

Stale skill directories are removed before anything is copied, so the
destination always ends up matching the configured list exactly.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from docbundle.core.models.build import BuildSpec
from docbundle.core.models.workspace import (
    COMMON_SKILLS_DIRNAME,
    SKILL_VERSION_FILENAME,
    Workspace,
    output_skills_dir,
)
from docbundle.core.services.events import Reporter
from docbundle.core.services.overrides import resolve_override

logger = logging.getLogger(__name__)


@dataclass
class SkillSource:
    """Resolved source of one configured skill."""

    name: str
    path: Path | None = None
    overridden: bool = False

    @property
    def found(self) -> bool:
        return self.path is not None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": str(self.path) if self.path else None,
            "overridden": self.overridden,
        }


@dataclass
class SkillSyncResult:
    """What a synchronization pass did."""

    destination: Path | None = None
    copied: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    versions: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "destination": str(self.destination) if self.destination else None,
            "copied": self.copied,
            "removed": self.removed,
            "missing": self.missing,
            "versions": self.versions,
        }


def resolve_skill(name: str, project_dir: Path, workspace: Workspace) -> SkillSource:
    """Find the source directory for skill ``name``."""
    override = resolve_override(
        project_dir,
        workspace.projects_root,
        Path(COMMON_SKILLS_DIRNAME) / name,
        Path.is_dir,
    )
    if override is not None:
        return SkillSource(name=name, path=override, overridden=True)

    fallback = workspace.common_skills_dir / name
    if fallback.is_dir():
        return SkillSource(name=name, path=fallback)
    return SkillSource(name=name)


def skill_version(skill_dir: Path) -> str | None:
    """Read the optional version marker of a skill directory."""
    marker = skill_dir / SKILL_VERSION_FILENAME
    if not marker.is_file():
        return None
    version = marker.read_text(encoding="utf-8").strip()
    return version or None


def remove_stale_skills(skills_dir: Path, configured: list[str], reporter: Reporter) -> list[str]:
    """Delete skill directories that are not in ``configured``."""
    if not skills_dir.is_dir():
        return []

    wanted = set(configured)
    removed: list[str] = []
    for entry in sorted(skills_dir.iterdir()):
        if not entry.is_dir() or entry.name in wanted:
            continue
        if entry.is_symlink():
            entry.unlink()
        else:
            shutil.rmtree(entry)
        removed.append(entry.name)
        reporter.info(f"  → Removed: {entry.name}")
        logger.info("Removed stale skill %s", entry)
    return removed


def _replace_tree(source: Path, dest: Path) -> None:
    if dest.is_symlink() or dest.is_file():
        dest.unlink()
    elif dest.exists():
        shutil.rmtree(dest)
    shutil.copytree(source, dest)


def sync_skills(spec: BuildSpec, workspace: Workspace, reporter: Reporter | None = None) -> SkillSyncResult:
    """Make ``<output dir>/.claude/skills`` mirror ``spec.skills``.

    When ``spec.skills`` is None the destination is not created, but an
    existing one is still emptied of stale skills.
    """
    reporter = reporter or Reporter()
    output = workspace.path(spec.output)
    skills_dir = output_skills_dir(output)
    configured = list(spec.skills or [])
    result = SkillSyncResult(destination=skills_dir)

    if spec.skills is not None:
        skills_dir.mkdir(parents=True, exist_ok=True)

    result.removed = remove_stale_skills(skills_dir, configured, reporter)

    project_dir = workspace.project_dir(spec.project)
    for name in configured:
        source = resolve_skill(name, project_dir, workspace)
        if source.path is None:
            result.missing.append(name)
            reporter.warning(f"  ⚠️  Skill not found: {name}")
            continue

        _replace_tree(source.path, skills_dir / name)
        result.copied.append(name)

        version = skill_version(source.path)
        if version:
            result.versions[name] = version
            reporter.info(f"  → Skill: {name} (v{version})")
        else:
            reporter.info(f"  → Skill: {name}")

    return result
