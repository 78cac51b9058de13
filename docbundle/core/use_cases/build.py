"""
Build use case — reconcile the output tree, then run every build.

Sequence for one run:

    1. reconcile orphans against the full configuration (once)
    2. for each build, in configured order:
         assemble → write → sync skills → publish links
    3. tally successes

Only a missing project file fails a build, and a name passed to ``only``
that matches no build counts as one more failure.  Missing sections,
missing skills, and link problems are warnings; nothing aborts the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from docbundle.core.config.loader import ConfigError, find_config_file, load_config
from docbundle.core.errors import ProjectFileMissing
from docbundle.core.models.build import BuildSpec
from docbundle.core.models.workspace import CONFIG_FILENAME, Workspace
from docbundle.core.services.assembler import assemble, write_output
from docbundle.core.services.events import EventCallback, Reporter
from docbundle.core.services.links import publish_links
from docbundle.core.services.reconcile import ReconcileResult, reconcile_orphans
from docbundle.core.services.skills import SkillSyncResult, sync_skills

logger = logging.getLogger(__name__)


@dataclass
class BuildOutcome:
    """Result of a single build."""

    name: str
    ok: bool = False
    output: Path | None = None
    line_count: int = 0
    skills: SkillSyncResult | None = None
    linked: list[Path] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"name": self.name, "ok": self.ok}
        if self.error:
            result["error"] = self.error
            return result
        result["output"] = str(self.output) if self.output else None
        result["lines"] = self.line_count
        if self.skills:
            result["skills"] = self.skills.to_dict()
        result["linked"] = [str(p) for p in self.linked]
        return result


@dataclass
class RunReport:
    """Result of a full reconcile + build run."""

    workspace: Workspace | None = None
    reconcile: ReconcileResult | None = None
    builds: list[BuildOutcome] = field(default_factory=list)
    reporter: Reporter = field(default_factory=Reporter)

    @property
    def succeeded(self) -> int:
        return sum(1 for b in self.builds if b.ok)

    @property
    def total(self) -> int:
        return len(self.builds)

    @property
    def ok(self) -> bool:
        return self.succeeded == self.total

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "workspace": str(self.workspace.root) if self.workspace else None,
            "succeeded": self.succeeded,
            "total": self.total,
            "reconcile": self.reconcile.to_dict() if self.reconcile else None,
            "builds": [b.to_dict() for b in self.builds],
            "events": [e.to_dict() for e in self.reporter.events],
        }


def build_one(spec: BuildSpec, workspace: Workspace, reporter: Reporter) -> BuildOutcome:
    """Assemble, write, and sync skills for one build."""
    outcome = BuildOutcome(name=spec.name)

    try:
        assembled = assemble(spec, workspace, reporter)
    except ProjectFileMissing as e:
        reporter.warning(f"⚠️  {e}")
        outcome.error = str(e)
        return outcome

    output = write_output(spec, workspace, assembled.content)
    outcome.output = output
    outcome.line_count = assembled.line_count
    reporter.info(f"✓ Built {spec.name}")
    reporter.info(f"  → {spec.output} ({assembled.line_count} lines)")

    outcome.skills = sync_skills(spec, workspace, reporter)

    if spec.link_to:
        outcome.linked = publish_links(output, spec.link_to, reporter)

    outcome.ok = True
    return outcome


def run_all(
    specs: list[BuildSpec],
    workspace: Workspace,
    on_event: EventCallback | None = None,
    only: list[str] | None = None,
    reporter: Reporter | None = None,
) -> RunReport:
    """Reconcile orphans, then run the builds in configured order.

    Args:
        specs: Every configured build (reconciliation always uses all).
        workspace: Workspace the paths are relative to.
        on_event: Optional callback receiving each event as it happens.
        only: Optional build names to run; others are left as they are.
        reporter: Existing reporter to continue (``on_event`` is then ignored).

    Returns:
        RunReport; ``ok`` is True only if every selected build succeeded
        and every name in ``only`` matched a configured build.
    """
    reporter = reporter or Reporter(on_event=on_event)
    report = RunReport(workspace=workspace, reporter=reporter)

    report.reconcile = reconcile_orphans(specs, workspace, reporter)

    selected = [s for s in specs if only is None or s.name in only]
    for spec in selected:
        report.builds.append(build_one(spec, workspace, reporter))

    # A requested name with no build counts as a failed build
    for name in sorted(set(only or []) - {s.name for s in specs}):
        reporter.warning(f"⚠️  No build named: {name}")
        report.builds.append(BuildOutcome(name=name, error=f"No build named: {name}"))

    logger.info("%d/%d builds succeeded", report.succeeded, report.total)
    return report


def _open_workspace(config_path: Path | None, reporter: Reporter) -> tuple[Workspace, list[BuildSpec]]:
    if config_path is None:
        config_path = find_config_file()

    workspace = Workspace.at(config_path.parent if config_path else Path.cwd())
    if config_path is None or not config_path.is_file():
        reporter.warning(f"⚠️  Configuration file not found: {config_path or CONFIG_FILENAME}")
        return workspace, []

    try:
        return workspace, list(load_config(config_path).builds)
    except ConfigError as e:
        reporter.warning(f"⚠️  {e}")
        return workspace, []


def run_build(
    config_path: Path | None = None,
    on_event: EventCallback | None = None,
    only: list[str] | None = None,
) -> RunReport:
    """Load builds.yml (or find it) and run everything it describes.

    An absent or unreadable configuration means zero builds; the
    reconciliation pass still runs, so every generated artifact under
    the workspace is treated as an orphan.
    """
    reporter = Reporter(on_event=on_event)
    workspace, specs = _open_workspace(config_path, reporter)
    return run_all(specs, workspace, only=only, reporter=reporter)


def run_clean(
    config_path: Path | None = None,
    on_event: EventCallback | None = None,
) -> RunReport:
    """Run only the reconciliation pass."""
    reporter = Reporter(on_event=on_event)
    workspace, specs = _open_workspace(config_path, reporter)
    report = RunReport(workspace=workspace, reporter=reporter)
    report.reconcile = reconcile_orphans(specs, workspace, reporter)
    return report
