"""
docbundle — CLI entrypoint.

Usage:
    python -m docbundle.main --help
    python -m docbundle.main build
    python -m docbundle.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from docbundle import __version__
from docbundle.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)
from docbundle.core.services.events import BuildEvent


def echo_event(event: BuildEvent) -> None:
    """Print one build event: info to stdout, warnings to stderr."""
    if event.level == "warning":
        click.secho(event.message, fg="yellow", err=True)
    else:
        click.echo(event.message)


@click.group()
@click.version_option(version=__version__, prog_name="docbundle")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to builds.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """docbundle — assemble per-project documentation bundles."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--only", "only", multiple=True, help="Build only the named build(s).")
@click.pass_context
def build(ctx: click.Context, as_json: bool, only: tuple[str, ...]) -> None:
    """Remove orphaned outputs, then assemble every configured build.

    Examples:

        docbundle build

        docbundle build --only "Project 1"
    """
    from docbundle.core.use_cases.build import run_build

    if not as_json:
        click.echo("Building documentation bundles...")
        click.echo()

    report = run_build(
        config_path=ctx.obj.get("config_path"),
        on_event=None if as_json else echo_event,
        only=list(only) if only else None,
    )

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(0 if report.ok else 1)

    click.echo()
    color = "green" if report.ok else "red"
    click.secho(
        f"{report.succeeded}/{report.total} files built successfully",
        fg=color,
        bold=True,
    )
    sys.exit(0 if report.ok else 1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def clean(ctx: click.Context, as_json: bool) -> None:
    """Remove generated files no longer referenced by builds.yml."""
    from docbundle.core.use_cases.build import run_clean

    report = run_clean(
        config_path=ctx.obj.get("config_path"),
        on_event=None if as_json else echo_event,
    )

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    assert report.reconcile is not None
    if report.reconcile.removed == 0 and not ctx.obj.get("quiet"):
        click.secho("✨ Nothing to clean", fg="green")


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_builds(ctx: click.Context, as_json: bool) -> None:
    """Show each build and where its sections and skills resolve from."""
    from docbundle.core.use_cases.plan import inspect_builds

    result = inspect_builds(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    workspace = result.workspace
    assert workspace is not None

    if not result.plans:
        click.echo("No builds configured.")
        return

    for plan in result.plans:
        click.secho(f"\n📄 {plan.spec.name}", fg="cyan", bold=True)
        click.echo(f"   → {workspace.relative(plan.output)}")

        if plan.header:
            click.echo(f"   header:  {workspace.relative(plan.header)}")
        if plan.project_found:
            click.echo(f"   project: {workspace.relative(plan.project)}")
        else:
            click.secho(f"   project: {plan.spec.project} (not found)", fg="red")

        for section in plan.sections:
            rel = workspace.relative(section.path)
            if not section.found:
                click.secho(f"   ✗ {section.configured} (not found)", fg="yellow")
            elif section.overridden:
                click.secho(f"   ✓ {section.configured} ", fg="green", nl=False)
                click.echo(f"(override: {rel})")
            else:
                click.secho(f"   ✓ {section.configured}", fg="green")

        for skill in plan.skills:
            if skill.path is None:
                click.secho(f"   ✗ skill {skill.name} (not found)", fg="yellow")
            else:
                label = "override" if skill.overridden else "common"
                click.echo(f"   ⚙ skill {skill.name} ({label}: {workspace.relative(skill.path)})")

        if plan.spec.link_to:
            click.echo(f"   🔗 {plan.spec.link_to}")

    click.echo()


# ── Register sub-command groups from docbundle/ui/cli/ ───────────

from docbundle.ui.cli.config import config

cli.add_command(config)


if __name__ == "__main__":
    cli()
