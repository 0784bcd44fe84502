"""CLI entry point: cbom-scan.

Subcommands:
    cbom-scan run [PROJECT_ROOT]    # Scan a project and write the consolidated CBOM
    cbom-scan languages             # List supported languages

Every ``run`` option falls back to the environment variable used by the
GitHub Action wrapper (GITHUB_WORKSPACE, CBOMKIT_*, GITHUB_OUTPUT).
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
import structlog

from cbom_scanner.core.config import ScanSettings
from cbom_scanner.core.logging import setup_logging
from cbom_scanner.exceptions import CBOMScannerError
from cbom_scanner.models.language import Language
from cbom_scanner.orchestrator import ScanOrchestrator
from cbom_scanner.progress import ProgressTracker
from cbom_scanner.selector import LanguageSelector
from cbom_scanner.writer import ReportWriter

log = structlog.get_logger(__name__)

_STATUS_ICONS = {
    "completed": "+",
    "failed": "!",
    "running": "~",
    "pending": ".",
}


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option(
    "--log-level",
    envvar="CBOM_SCANNER_LOG_LEVEL",
    default="INFO",
    show_default=True,
    help="Log level (ignored with --verbose)",
)
@click.option(
    "--log-format",
    envvar="CBOM_SCANNER_LOG_FORMAT",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default="console",
    show_default=True,
)
def main(verbose: bool, log_level: str, log_format: str) -> None:
    """cbom-scan: Build a Cryptography Bill of Materials for a source tree."""
    setup_logging(level="DEBUG" if verbose else log_level, fmt=log_format)


@main.command("run")
@click.argument("project_root", required=False, envvar="GITHUB_WORKSPACE")
@click.option("--output-dir", envvar="CBOMKIT_OUTPUT_DIR", default=None,
              help="Output directory [default: cbom]")
@click.option("--exclude", envvar="CBOMKIT_EXCLUDE", default=None,
              help="Comma-separated path substrings to exclude")
@click.option("--languages", envvar="CBOMKIT_LANGUAGES", default=None,
              help="Comma-separated languages [default: all]")
@click.option("--results-sink", envvar="GITHUB_OUTPUT", default=None,
              help="File to append the 'pattern=<glob>' line to")
@click.option("--java-require-build", envvar="CBOMKIT_JAVA_REQUIRE_BUILD", default=None,
              help="'true' to require compiled classes before scanning Java [default: true]")
@click.option("--java-jar-dir", envvar="CBOMKIT_JAVA_JAR_DIR", default=None,
              help="Extra directory to search for Java dependency jars")
@click.option("--workers", envvar="CBOMKIT_MAX_WORKERS", type=int, default=None,
              help="Languages scanned in parallel [default: 1]")
@click.option("--per-language", is_flag=True,
              help="Also write one cbom_<language>.json per scanned language")
def run(
    project_root: str | None,
    output_dir: str | None,
    exclude: str | None,
    languages: str | None,
    results_sink: str | None,
    java_require_build: str | None,
    java_jar_dir: str | None,
    workers: int | None,
    per_language: bool,
) -> None:
    """Scan PROJECT_ROOT and write the consolidated CBOM."""
    orchestrator: ScanOrchestrator | None = None
    try:
        settings = ScanSettings.build(
            project_root=project_root,
            output_dir=output_dir,
            languages=languages,
            exclude=exclude,
            results_sink=results_sink,
            java_require_build=java_require_build,
            java_jar_dir=java_jar_dir,
            home=Path.home(),
            max_workers=workers,
        )
        config = settings.scan_configuration
        log.info(
            "run.start",
            project_root=str(settings.project_root),
            output_dir=str(settings.output_dir),
            languages=[lang.value for lang in config.languages],
        )

        targets = LanguageSelector(settings).select()
        orchestrator = ScanOrchestrator(max_workers=settings.max_workers)
        cbom, stats = orchestrator.run_all(targets, config.exclusion_patterns)

        writer = ReportWriter(settings.output_dir, settings.results_sink)
        writer.remove_stale()
        written = [writer.write(cbom)]
        if per_language:
            for fragment in orchestrator.fragments:
                written.append(writer.write(fragment.cbom, fragment.language.value))
        writer.publish_pattern()
    except CBOMScannerError as e:
        log.error("run.failed", error=str(e))
        if orchestrator is not None:
            _echo_progress(orchestrator.progress)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"Scanned {stats.files_scanned} files with {stats.lines_scanned} lines "
        f"in {stats.elapsed_seconds} seconds."
    )
    click.echo(f"Assets: {len(cbom)}")
    for path in written:
        click.echo(f"  CBOM: {path}")
    _echo_progress(orchestrator.progress)


@main.command("languages")
def languages_cmd() -> None:
    """List supported languages in scan order."""
    for language in Language:
        click.echo(language.value)


def _echo_progress(progress: ProgressTracker) -> None:
    summary = progress.get_summary()
    if not summary["phases"]:
        return
    click.echo(f"\nPipeline summary (total: {summary['total_duration']}s):")
    for p in summary["phases"]:
        icon = _STATUS_ICONS.get(p["status"], "?")
        duration = f" ({p['duration']}s)" if p["duration"] else ""
        detail = f" - {p['detail']}" if p["detail"] else ""
        error = f" ERROR: {p['error']}" if p["error"] else ""
        click.echo(f"  [{icon}] {p['phase']}{duration}{detail}{error}")


if __name__ == "__main__":
    main()
