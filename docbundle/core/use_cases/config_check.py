"""
Config check use case — validate builds.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from docbundle.core.config.loader import ConfigError, find_config_file, load_config
from docbundle.core.models.build import BuildsConfig
from docbundle.core.models.workspace import OUTPUT_FILENAME, Workspace
from docbundle.core.services.assembler import resolve_sources
from docbundle.core.services.skills import resolve_skill


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: BuildsConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "build_count": len(self.config.builds) if self.config else 0,
        }


def _duplicates(values: list) -> list:
    return sorted({v for v in values if values.count(v) > 1}, key=str)


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate builds configuration and report issues.

    Errors make the configuration invalid; warnings describe things the
    build would skip (missing sections, missing skills) or outputs the
    reconciler could never clean up.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        result.errors.append("No builds.yml found.")
        return result

    result.config_path = config_path

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    workspace = Workspace.at(config_path.parent)

    if not config.builds:
        result.warnings.append("No builds defined. Every generated file would be removed.")

    # Names and outputs must be unique
    dupes = _duplicates([b.name for b in config.builds])
    if dupes:
        result.errors.append(f"Duplicate build names: {', '.join(dupes)}")

    outputs = [workspace.path(b.output) for b in config.builds]
    out_dupes = _duplicates(outputs)
    if out_dupes:
        result.errors.append(
            f"Duplicate outputs: {', '.join(workspace.relative(p) for p in out_dupes)}"
        )

    for build in config.builds:
        if workspace.path(build.output).name != OUTPUT_FILENAME:
            result.warnings.append(
                f"Build '{build.name}' output is not named {OUTPUT_FILENAME}; "
                "it will never be cleaned up as an orphan."
            )

        sources = resolve_sources(build, workspace)
        if sources.project is None or not sources.project.is_file():
            result.errors.append(f"Build '{build.name}' project file not found: {build.project}")
            continue

        for section in sources.sections:
            if not section.found:
                result.warnings.append(
                    f"Build '{build.name}' section not found: {section.configured}"
                )

        project_dir = workspace.project_dir(build.project)
        for skill in build.skills or []:
            if not resolve_skill(skill, project_dir, workspace).found:
                result.warnings.append(f"Build '{build.name}' skill not found: {skill}")

    result.valid = len(result.errors) == 0
    return result
