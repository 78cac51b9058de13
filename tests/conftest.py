"""
Shared test fixtures and configuration.
"""

from pathlib import Path
from typing import Callable

import pytest
import yaml

from docbundle.core.models.workspace import Workspace


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """An empty workspace with the standard top-level directories."""
    for name in ("common", "projects/test-project", "skills"):
        (tmp_path / name).mkdir(parents=True)
    return Workspace.at(tmp_path)


@pytest.fixture
def write_file(workspace: Workspace) -> Callable[[str, str], Path]:
    """Create a file (and its parents) relative to the workspace root."""

    def _write(rel: str, content: str) -> Path:
        path = workspace.root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def write_builds(workspace: Workspace) -> Callable[[list[dict]], Path]:
    """Write builds.yml with the given build entries."""

    def _write(builds: list[dict]) -> Path:
        path = workspace.config_path
        path.write_text(yaml.safe_dump({"builds": builds}, sort_keys=False))
        return path

    return _write
