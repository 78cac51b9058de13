"""
Workspace model — the fixed directory layout docbundle works against.

Every name that the builder writes and the reconciler later scans for
is defined here, once.  Services never hard-code these strings.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel

# ── Layout names ────────────────────────────────────────────────

CONFIG_FILENAME = "builds.yml"
PROJECTS_DIRNAME = "projects"
COMMON_DIRNAME = "common"
HEADER_FILENAME = "_editing-instructions.md"
COMMON_SKILLS_DIRNAME = "skills"

OUTPUT_FILENAME = "CLAUDE.local.md"
META_DIRNAME = ".claude"
META_SKILLS_DIRNAME = "skills"
SKILL_VERSION_FILENAME = "VERSION"


class Workspace(BaseModel):
    """A workspace root plus the paths derived from it.

    All relative paths in ``builds.yml`` are interpreted against ``root``.
    """

    root: Path

    @classmethod
    def at(cls, root: Path) -> Workspace:
        """Create a workspace for ``root`` (resolved to an absolute path)."""
        return cls(root=root.resolve())

    @property
    def projects_root(self) -> Path:
        return self.root / PROJECTS_DIRNAME

    @property
    def common_dir(self) -> Path:
        return self.root / COMMON_DIRNAME

    @property
    def header_path(self) -> Path:
        return self.common_dir / HEADER_FILENAME

    @property
    def common_skills_dir(self) -> Path:
        return self.root / COMMON_SKILLS_DIRNAME

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def path(self, configured: str | Path) -> Path:
        """Resolve a configured path against the workspace root."""
        p = Path(configured)
        if not p.is_absolute():
            p = self.root / p
        return p.resolve()

    def project_dir(self, configured: str | Path) -> Path:
        """Directory holding a configured project file.

        Symlinks are not followed: a linked project file still starts its
        override walk from the directory the link lives in.
        """
        p = Path(configured)
        if not p.is_absolute():
            p = self.root / p
        return Path(os.path.normpath(p)).parent

    def relative(self, path: Path) -> str:
        """Render ``path`` relative to the root when possible (for messages)."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)


def output_meta_dir(output: Path) -> Path:
    """The metadata directory that sits next to an output document."""
    return output.parent / META_DIRNAME


def output_skills_dir(output: Path) -> Path:
    """Where synchronized skills for an output document live."""
    return output_meta_dir(output) / META_SKILLS_DIRNAME


def is_output_file(path: Path) -> bool:
    """True if ``path`` carries the generated output document name."""
    return path.name == OUTPUT_FILENAME


def is_meta_dir(path: Path) -> bool:
    """True if ``path`` carries the generated metadata directory name."""
    return path.name == META_DIRNAME
