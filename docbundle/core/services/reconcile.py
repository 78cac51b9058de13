"""
Orphan reconciliation — delete generated artifacts nobody configures anymore.

There is no manifest.  Generated artifacts are recognized by name alone
(``CLAUDE.local.md`` files and ``.claude`` directories, see
``models.workspace``) and compared against the paths the current
configuration would produce.

Rules:
    output file not configured       → deleted
    metadata dir not configured      → deleted if empty or holding only
                                       the skills subdirectory; otherwise
                                       kept with a warning (user content)
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from docbundle.core.models.build import BuildSpec
from docbundle.core.models.workspace import (
    META_DIRNAME,
    META_SKILLS_DIRNAME,
    Workspace,
    is_meta_dir,
    is_output_file,
    output_meta_dir,
)
from docbundle.core.services.events import Reporter

logger = logging.getLogger(__name__)


@dataclass
class DiscoveredArtifacts:
    """Generated-looking paths found on disk."""

    outputs: list[Path] = field(default_factory=list)
    meta_dirs: list[Path] = field(default_factory=list)


@dataclass
class ReconcileResult:
    """What a reconciliation pass removed and what it refused to remove."""

    removed_outputs: list[str] = field(default_factory=list)
    removed_meta_dirs: list[str] = field(default_factory=list)
    preserved_meta_dirs: list[str] = field(default_factory=list)

    @property
    def removed(self) -> int:
        return len(self.removed_outputs) + len(self.removed_meta_dirs)

    def to_dict(self) -> dict:
        return {
            "removed_outputs": self.removed_outputs,
            "removed_meta_dirs": self.removed_meta_dirs,
            "preserved_meta_dirs": self.preserved_meta_dirs,
        }


def configured_artifacts(specs: list[BuildSpec], workspace: Workspace) -> tuple[set[Path], set[Path]]:
    """Output files and metadata directories the configuration owns."""
    outputs = {workspace.path(spec.output) for spec in specs}
    meta_dirs = {output_meta_dir(output) for output in outputs}
    return outputs, meta_dirs


def discover_artifacts(root: Path) -> DiscoveredArtifacts:
    """Walk ``root`` for generated output files and metadata directories.

    Symlinks are never reported.  Hidden directories other than the
    metadata directory are skipped, and metadata directories are not
    descended into.
    """
    found = DiscoveredArtifacts()

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)

        keep: list[str] = []
        for name in sorted(dirnames):
            path = current / name
            if path.is_symlink():
                continue
            if is_meta_dir(path):
                found.meta_dirs.append(path)
                continue
            if name.startswith("."):
                continue
            keep.append(name)
        dirnames[:] = keep

        for name in sorted(filenames):
            path = current / name
            if is_output_file(path) and not path.is_symlink():
                found.outputs.append(path)

    return found


def _only_generated_content(meta_dir: Path) -> bool:
    children = list(meta_dir.iterdir())
    if not children:
        return True
    return len(children) == 1 and children[0].name == META_SKILLS_DIRNAME


def reconcile_orphans(
    specs: list[BuildSpec],
    workspace: Workspace,
    reporter: Reporter | None = None,
) -> ReconcileResult:
    """Remove outputs and metadata directories not produced by ``specs``."""
    reporter = reporter or Reporter()
    result = ReconcileResult()
    outputs, meta_dirs = configured_artifacts(specs, workspace)
    discovered = discover_artifacts(workspace.root)

    for path in discovered.outputs:
        if path.resolve() in outputs:
            continue
        rel = workspace.relative(path)
        reporter.info(f"🗑️  Removing orphaned: {rel}")
        path.unlink()
        result.removed_outputs.append(rel)

    for path in discovered.meta_dirs:
        if path.resolve() in meta_dirs:
            continue
        rel = workspace.relative(path)
        if _only_generated_content(path):
            reporter.info(f"🗑️  Removing orphaned {META_DIRNAME}: {rel}")
            shutil.rmtree(path)
            result.removed_meta_dirs.append(rel)
        else:
            reporter.warning(f"⚠️  Skipping {META_DIRNAME} with user content: {rel}")
            result.preserved_meta_dirs.append(rel)

    logger.info(
        "Reconciled %s: %d removed, %d preserved",
        workspace.root,
        result.removed,
        len(result.preserved_meta_dirs),
    )
    return result
