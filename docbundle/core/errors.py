"""
Build errors.

Only ``ProjectFileMissing`` ever leaves a service: it fails one build.
Everything else (missing sections, missing skills, bad symlink targets,
user content in a metadata directory) is reported as a warning event.
"""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Base class for errors that fail a single build."""


class ProjectFileMissing(BuildError):
    """Raised when a build's project file does not exist."""

    def __init__(self, configured: str, path: Path) -> None:
        super().__init__(f"Project file not found: {configured}")
        self.configured = configured
        self.path = path
