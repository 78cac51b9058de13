"""
Content assembly — header + project body + common sections.

Chunks are joined with a blank line between them:

    header            (optional, shared by every build)
    project file      (required; missing → ProjectFileMissing)
    common sections   (each resolved through the override chain)

A common section is looked up by its basename, nearest first, from the
project's directory up to the projects root.  Without an override the
configured path is used verbatim.  Sections that resolve to nothing are
skipped with a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from docbundle.core.errors import ProjectFileMissing
from docbundle.core.models.build import BuildSpec
from docbundle.core.models.workspace import Workspace
from docbundle.core.services.events import Reporter
from docbundle.core.services.overrides import resolve_override

logger = logging.getLogger(__name__)

SEPARATOR = b"\n"


@dataclass
class SectionSource:
    """Where one configured common section came from."""

    configured: str
    path: Path
    overridden: bool = False
    found: bool = True

    def to_dict(self) -> dict:
        return {
            "configured": self.configured,
            "path": str(self.path),
            "overridden": self.overridden,
            "found": self.found,
        }


@dataclass
class AssembledContent:
    """Result of assembling one build."""

    content: bytes = b""
    header: Path | None = None
    project: Path | None = None
    sections: list[SectionSource] = field(default_factory=list)

    @property
    def line_count(self) -> int:
        return len(self.content.splitlines())


def resolve_section(configured: str, project_dir: Path, workspace: Workspace) -> SectionSource:
    """Resolve one configured common section to a concrete file."""
    filename = Path(configured).name
    override = resolve_override(project_dir, workspace.projects_root, filename, Path.is_file)
    if override is not None:
        return SectionSource(configured=configured, path=override, overridden=True)

    fallback = workspace.path(configured)
    return SectionSource(configured=configured, path=fallback, found=fallback.is_file())


def resolve_sources(spec: BuildSpec, workspace: Workspace) -> AssembledContent:
    """Resolve every input of a build without reading any content."""
    project_path = workspace.path(spec.project)
    project_dir = workspace.project_dir(spec.project)
    header = workspace.header_path
    return AssembledContent(
        header=header if header.is_file() else None,
        project=project_path,
        sections=[resolve_section(c, project_dir, workspace) for c in spec.common],
    )


def assemble(spec: BuildSpec, workspace: Workspace, reporter: Reporter | None = None) -> AssembledContent:
    """Assemble the output document for ``spec``.

    Raises:
        ProjectFileMissing: If the project file does not exist.
    """
    reporter = reporter or Reporter()
    result = resolve_sources(spec, workspace)

    assert result.project is not None
    if not result.project.is_file():
        raise ProjectFileMissing(spec.project, result.project)

    chunks: list[bytes] = []
    if result.header is not None:
        chunks.append(result.header.read_bytes())

    chunks.append(result.project.read_bytes())

    for section in result.sections:
        if not section.found:
            reporter.warning(f"⚠️  File not found: {workspace.relative(section.path)}")
            continue
        logger.debug("Section %s → %s", section.configured, section.path)
        chunks.append(section.path.read_bytes())

    result.content = SEPARATOR.join(chunks)
    return result


def write_output(spec: BuildSpec, workspace: Workspace, content: bytes) -> Path:
    """Write assembled content to the build's output path."""
    output = workspace.path(spec.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(content)
    logger.info("Wrote %d bytes to %s", len(content), output)
    return output
