"""
PassGuard CLI
==============

Click-based command-line interface for the password policy engine.

Usage::

    python -m passguard check "Fixia2024Secure!"
    python -m passguard score "Password123!"
    python -m passguard -o json -f report.json batch candidates.txt

Exit status is 1 when any checked candidate violates the policy.

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from shared.config import GuardConfig
from shared.console import GuardConsole
from shared.logger import GuardLogger
from shared.models import CheckResult

from passguard import __version__
from passguard.core.engine import PasswordPolicyEngine
from passguard.core.models import StrengthReport
from passguard.output.console import PassGuardConsoleOutput
from passguard.output.report import PassGuardReportGenerator, build_check_result


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.version_option(__version__, prog_name="passguard")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a PassGuard configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the JSON report to this file instead of stdout.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and console output.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """PassGuard -- password policy and strength engine.

    Validate candidates against the password policy and estimate their
    strength for a strength meter.
    """
    ctx.ensure_object(dict)

    try:
        guard_config = GuardConfig.load(config)
    except ValueError as exc:
        raise click.UsageError(f"Configuración inválida: {exc}") from exc
    ctx.obj["config"] = guard_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet

    console = GuardConsole(quiet=quiet or output != "console")
    ctx.obj["console"] = console
    ctx.obj["engine"] = PasswordPolicyEngine(guard_config)
    ctx.obj["display"] = PassGuardConsoleOutput(console)
    ctx.obj["reporter"] = PassGuardReportGenerator(version=__version__)
    ctx.obj["logger"] = GuardLogger.from_config("cli", guard_config)

    console.banner(version=__version__)


def _handle_json(ctx: click.Context, result: CheckResult) -> None:
    """Write *result* to the output file, or to stdout."""
    reporter: PassGuardReportGenerator = ctx.obj["reporter"]
    output_file = ctx.obj["output_file"]

    if output_file:
        path = reporter.generate_json(result, Path(output_file))
        if not ctx.obj["quiet"]:
            click.echo(f"Informe JSON guardado en: {path}", err=True)
    else:
        click.echo(json.dumps(
            reporter.to_dict(result),
            indent=2,
            ensure_ascii=False,
            default=str,
        ))


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("password")
@click.pass_context
def check(ctx: click.Context, password: str) -> None:
    """Validate PASSWORD against the policy and show its strength."""
    engine: PasswordPolicyEngine = ctx.obj["engine"]
    display: PassGuardConsoleOutput = ctx.obj["display"]

    report = engine.assess(password)

    if ctx.obj["output_format"] == "console":
        display.display_report(report)
    else:
        _handle_json(ctx, build_check_result([report], report.password_masked))

    if not report.compliant:
        ctx.exit(1)


@cli.command()
@click.argument("password")
@click.pass_context
def score(ctx: click.Context, password: str) -> None:
    """Print the strength score (0-100) and label of PASSWORD."""
    engine: PasswordPolicyEngine = ctx.obj["engine"]
    value = engine.score(password)
    click.echo(f"{value} {engine.label(value)}")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def batch(ctx: click.Context, file: str) -> None:
    """Check every line of FILE (one candidate per line).

    Blank lines are skipped; leading and trailing spaces are part of the
    candidate.
    """
    engine: PasswordPolicyEngine = ctx.obj["engine"]
    display: PassGuardConsoleOutput = ctx.obj["display"]
    logger: GuardLogger = ctx.obj["logger"]

    reports: list[tuple[int, StrengthReport]] = []
    with logger.timed(f"batch check of {Path(file).name}"):
        with open(file, encoding="utf-8") as fh:
            for line_no, line in enumerate(fh, start=1):
                candidate = line.rstrip("\r\n")
                if not candidate:
                    continue
                reports.append((line_no, engine.assess(candidate)))

    failed = sum(1 for _, report in reports if not report.compliant)
    logger.info("Batch finished", checked=len(reports), failed=failed)

    if ctx.obj["output_format"] == "console":
        display.display_batch(reports)
        display.console.info(
            f"{len(reports) - failed}/{len(reports)} contraseñas cumplen la política"
        )
    else:
        _handle_json(
            ctx, build_check_result([r for _, r in reports], Path(file).name)
        )

    if failed:
        ctx.exit(1)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the PassGuard CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
