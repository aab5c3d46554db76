"""
buildplan — CLI entrypoint.

Usage:
    python -m buildplan.main --help
    python -m buildplan.main check
    python -m buildplan.main plan --json
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from buildplan import __version__
from buildplan.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    LOG_LEVEL_ENV,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="buildplan")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to buildplan.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """buildplan — validate module descriptors and emit a build plan."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


def _descriptor_paths(ctx: click.Context, files: tuple[str, ...]) -> list[Path] | None:
    """Positional files win over --config; neither means auto-detect."""
    if files:
        return [Path(f) for f in files]
    config_path: Path | None = ctx.obj.get("config_path")
    return [config_path] if config_path else None


def _echo_violations(violations: list) -> None:
    click.secho(f"❌ {len(violations)} descriptor violation(s):", fg="red", bold=True)
    for v in violations:
        click.echo(f"   • [{v.kind}] {v.message}")


@cli.command()
@click.argument("files", nargs=-1, type=click.Path(exists=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, files: tuple[str, ...], as_json: bool) -> None:
    """Validate module descriptors and list every violation."""
    from buildplan.core.use_cases.check import check_descriptors

    result = check_descriptors(_descriptor_paths(ctx, files))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if result.valid:
        click.secho("✅ Descriptors are valid", fg="green", bold=True)
        click.echo(f"   Modules: {len(result.modules)}")
        if ctx.obj.get("verbose"):
            for source in result.sources:
                click.echo(f"   Source: {source}")
    else:
        _echo_violations(result.violations)

    if result.warnings and not ctx.obj.get("quiet"):
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


@cli.command()
@click.argument("files", nargs=-1, type=click.Path(exists=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--output",
    "-o",
    "output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the plan as JSON to this file.",
)
@click.pass_context
def plan(
    ctx: click.Context,
    files: tuple[str, ...],
    as_json: bool,
    output: str | None,
) -> None:
    """Resolve descriptors into an ordered build plan.

    Examples:

        buildplan plan

        buildplan plan lib.yml app.yml --json

        buildplan plan --output build/plan.json
    """
    from buildplan.core.use_cases.plan import run_plan

    result = run_plan(
        _descriptor_paths(ctx, files),
        output=Path(output) if output else None,
    )

    if as_json:
        payload = result.plan.to_dict() if result.ok else result.to_dict()
        click.echo(json.dumps(payload, indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if result.violations:
        _echo_violations(result.violations)
        sys.exit(1)

    build_plan = result.plan
    assert build_plan is not None  # guaranteed after the checks above
    quiet = ctx.obj.get("quiet", False)

    if not quiet:
        click.secho(f"\n📋 Build plan ({len(build_plan.order)} modules)", fg="cyan", bold=True)
        click.echo(f"   Toolchain floor: {build_plan.toolchain_floor or '-'}")
        click.echo()

    click.secho("   Order:", fg="white", bold=True)
    for i, name in enumerate(build_plan.order, 1):
        click.echo(f"     {i}. {name}")

    if build_plan.test_suites:
        click.echo()
        click.secho(f"   Test suites: {len(build_plan.test_suites)}", fg="white", bold=True)
        for suite in build_plan.test_suites:
            engine = f" [{suite.engine}]" if suite.engine else ""
            click.echo(f"     • {suite.module}:{suite.name} ({suite.type}){engine}")

    if ctx.obj.get("verbose") and build_plan.external_dependencies:
        click.echo()
        click.secho("   External dependencies:", fg="white", bold=True)
        for coordinate in build_plan.external_dependencies:
            click.echo(f"     • {coordinate}")

    if result.output_path and not quiet:
        click.echo()
        click.secho(f"   💾 Plan saved to {result.output_path}", fg="cyan")

    click.echo()


if __name__ == "__main__":
    cli()
