"""
Plan use case — show where every input of every build resolves to.

Read-only: nothing is assembled or written.  Useful to answer "which
copy of this section will my project actually get?"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from docbundle.core.config.loader import ConfigError, find_config_file, load_config
from docbundle.core.models.build import BuildSpec
from docbundle.core.models.workspace import Workspace, output_skills_dir
from docbundle.core.services.assembler import SectionSource, resolve_sources
from docbundle.core.services.skills import SkillSource, resolve_skill


@dataclass
class BuildPlan:
    """Resolved inputs of one build."""

    spec: BuildSpec
    output: Path
    project: Path
    project_found: bool = False
    header: Path | None = None
    sections: list[SectionSource] = field(default_factory=list)
    skills_dir: Path | None = None
    skills: list[SkillSource] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.spec.name,
            "output": str(self.output),
            "project": str(self.project),
            "project_found": self.project_found,
            "header": str(self.header) if self.header else None,
            "sections": [s.to_dict() for s in self.sections],
            "skills_dir": str(self.skills_dir) if self.skills_dir else None,
            "skills": [s.to_dict() for s in self.skills],
            "link_to": self.spec.link_to,
        }


@dataclass
class InspectResult:
    """Resolved plans for every configured build."""

    workspace: Workspace | None = None
    plans: list[BuildPlan] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "workspace": str(self.workspace.root) if self.workspace else None,
            "builds": [p.to_dict() for p in self.plans],
        }


def plan_build(spec: BuildSpec, workspace: Workspace) -> BuildPlan:
    """Resolve the inputs of one build without touching the output tree."""
    sources = resolve_sources(spec, workspace)
    assert sources.project is not None
    output = workspace.path(spec.output)

    plan = BuildPlan(
        spec=spec,
        output=output,
        project=sources.project,
        project_found=sources.project.is_file(),
        header=sources.header,
        sections=sources.sections,
    )
    if spec.skills is not None:
        plan.skills_dir = output_skills_dir(output)
        plan.skills = [resolve_skill(s, workspace.project_dir(spec.project), workspace) for s in spec.skills]
    return plan


def inspect_builds(config_path: Path | None = None) -> InspectResult:
    """Resolve every build in builds.yml."""
    result = InspectResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.error = "No builds.yml found."
        return result

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.workspace = Workspace.at(config_path.parent)
    result.plans = [plan_build(spec, result.workspace) for spec in config.builds]
    return result
