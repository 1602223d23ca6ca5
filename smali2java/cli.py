"""
smali2java CLI
===============

Click-based command-line interface.  Scans a directory tree for smali
files, translates each one concurrently, and writes every rendered unit
to stdout.  Status output, the summary table, and logs go to stderr.

Usage::

    # Translate everything below the current directory
    smali2java

    # Translate a decoded APK tree
    smali2java ./out/smali

    # Also write .java files and a JSON report
    smali2java ./out/smali --output-dir java/ --report report.json

    # Machine-readable run report on stdout
    smali2java ./out/smali --json

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from shared.config import Smali2JavaConfig
from shared.console import Smali2JavaConsole
from shared.logger import Smali2JavaLogger

from smali2java import __version__
from smali2java.core.engine import TranslationEngine
from smali2java.core.models import TranslationAborted
from smali2java.output.console import TranslationConsoleOutput
from smali2java.output.report import TranslationReportGenerator


@click.command("smali2java")
@click.argument("path", required=False, type=click.Path(exists=True))
@click.option(
    "--path_to_smali", "--path-to-smali",
    "path_option",
    type=click.Path(exists=True),
    default=None,
    help="Root directory to scan (same as PATH).",
)
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML configuration file.  Default: config.toml in the project root.",
)
@click.option(
    "--output-dir", "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Also write one .java file per input, mirroring the input tree.",
)
@click.option(
    "--report", "-r",
    "report_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write a JSON run report to this path.",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the JSON run report to stdout instead of the rendered units.",
)
@click.option(
    "--stdout/--no-stdout",
    "echo_units",
    default=True,
    help="Print rendered units to stdout (default: on).",
)
@click.option(
    "--workers", "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of files translated at once.",
)
@click.option(
    "--extension", "-e",
    default=None,
    help="Input file extension (default: .smali).",
)
@click.option(
    "--static-field-reads",
    is_flag=True,
    default=False,
    help="Translate sget* instructions into assignments.",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    default=False,
    help="Emit nothing and exit non-zero if any file fails.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Only print rendered units; suppress summary and info logs.",
)
def smali2java_cli(
    path: str | None,
    path_option: str | None,
    config_path: str | None,
    output_dir: str | None,
    report_path: str | None,
    json_output: bool,
    echo_units: bool,
    workers: int | None,
    extension: str | None,
    static_field_reads: bool,
    fail_fast: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Translate smali files into a readable Java-like rendering.

    PATH is the directory to scan (or a single smali file).  Defaults to
    the configured root, which is the current directory.

    Examples:

    \b
        smali2java ./out/smali
        smali2java ./out/smali -o java/ --no-stdout
        smali2java Foo.smali --static-field-reads
        smali2java --path_to_smali ./out/smali
    """
    console = Smali2JavaConsole(quiet=quiet)

    if config_path is not None:
        try:
            config = Smali2JavaConfig.load(config_path)
        except (OSError, ValueError) as exc:
            console.error(f"Cannot load configuration: {exc}")
            sys.exit(1)
    else:
        try:
            config = Smali2JavaConfig.load()
        except Exception:
            config = Smali2JavaConfig()

    config = config.with_overrides(
        translator={
            "root": path or path_option,
            "extension": extension,
            "output_dir": output_dir,
            "static_field_reads": static_field_reads or None,
            "fail_fast": fail_fast or None,
        },
        global_settings={"max_workers": workers},
    )

    if verbose or config.global_settings.debug:
        log_level = "DEBUG"
    elif quiet:
        log_level = "WARNING"
    else:
        log_level = config.global_settings.log_level
    logger = Smali2JavaLogger(
        "engine",
        log_level=log_level,
        log_file=config.global_settings.log_file or None,
        json_logs=config.global_settings.log_json,
    )

    engine = TranslationEngine(config=config, logger=logger)

    if not quiet and not json_output:
        console.banner(version=__version__)

    try:
        run = asyncio.run(engine.translate())
    except KeyboardInterrupt:
        console.warning("Translation interrupted by user.")
        sys.exit(130)
    except TranslationAborted as exc:
        console.error(f"Translation aborted: {exc}")
        sys.exit(1)
    except FileNotFoundError as exc:
        console.error(str(exc))
        sys.exit(1)

    report_gen = TranslationReportGenerator()

    if json_output:
        click.echo(json.dumps(report_gen.build_report(run), indent=2, default=str))
    elif echo_units:
        for file in run.succeeded:
            if file.unit is not None and file.unit.lines:
                click.echo(file.unit.render())

    if config.translator.output_dir:
        written = report_gen.write_sources(run, config.translator.output_dir)
        console.success(
            f"Wrote {len(written)} .java file(s) to {config.translator.output_dir}"
        )

    if report_path:
        saved = report_gen.generate_json(run, report_path)
        console.success(f"JSON report saved: {saved}")

    if not quiet:
        TranslationConsoleOutput(console=console).display(run, show_files=verbose)

    if not run.files:
        console.warning(
            f"No {config.translator.extension} files found under {config.translator.root}"
        )

    if run.failed:
        sys.exit(1)


def main() -> None:
    """Entry point for the ``smali2java`` console script."""
    smali2java_cli()


if __name__ == "__main__":
    main()
