"""Command-line interface for coverage summaries.

Usage:
    covsummary                 # Build tests and print the coverage summary
    covsummary summary         # Same as above
    covsummary artifacts       # List the test binaries used for the report
    covsummary command         # Print the report command without running it

Environment variables:
    COVSUMMARY_PROFDATA       - Profile data file (default: json5format.profdata)
    COVSUMMARY_MANIFEST_PATH  - Cargo.toml to build (default: cargo's discovery)
    COVSUMMARY_IGNORE_REGEX   - Filenames hidden from the report
    COVSUMMARY_CHECK_PROFILE  - Check the profile exists before building
    COVSUMMARY_LOG_LEVEL      - Log level for diagnostics (default: WARNING)

See ``covsummary.config.CoverageConfig.from_env`` for the full list.
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from .config import CoverageConfig
from .logging import (
    DEFAULT_LOG_LEVEL,
    configure_logging,
    get_logger,
    log_error,
    log_warning,
)
from .orchestration import generate_summary, list_artifacts, show_report_command
from .validation import CoverageError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = get_logger(__name__)

app = App(
    name="covsummary",
    help="Coverage summary for instrumented cargo test builds",
    version="0.1.0",
)

ProfilePath = typ.Annotated[Path | None, Parameter(name="--profdata")]
ManifestPath = typ.Annotated[Path | None, Parameter(name="--manifest-path")]
IgnoreRegex = typ.Annotated[str | None, Parameter(name="--ignore-regex")]
LogLevelOption = typ.Annotated[
    str | None, Parameter(name="--log-level", env_var="COVSUMMARY_LOG_LEVEL")
]


def _setup_logging(log_level: str | None) -> None:
    normalized, invalid = configure_logging(log_level or DEFAULT_LOG_LEVEL, force=True)
    if invalid:
        log_warning(
            logger,
            "Invalid log level %r, falling back to %s",
            log_level,
            normalized,
        )


def _run(
    action: cabc.Callable[[CoverageConfig], int],
    *,
    profdata: Path | None,
    manifest_path: Path | None,
    ignore_regex: str | None,
    check_profile: bool | None,
    log_level: str | None,
) -> int:
    """Configure logging, resolve configuration and run ``action``.

    Returns:
        The action's exit code, or the failing stage's exit code when a
        ``CoverageError`` is raised.

    """
    _setup_logging(log_level)
    try:
        cfg = CoverageConfig.from_env().with_overrides(
            profile_path=profdata,
            manifest_path=manifest_path,
            ignore_filename_regex=ignore_regex,
            check_profile=check_profile,
        )
        return action(cfg)
    except CoverageError as exc:
        log_error(logger, "%s", exc)
        return exc.exit_code


@app.command
def summary(
    *,
    profdata: ProfilePath = None,
    manifest_path: ManifestPath = None,
    ignore_regex: IgnoreRegex = None,
    check_profile: bool | None = None,
    log_level: LogLevelOption = None,
) -> int:
    """Build the tests with instrumentation and print the coverage summary.

    Args:
        profdata: Profile data recorded by a previous instrumented test run.
        manifest_path: Cargo.toml of the project to build.
        ignore_regex: Source filenames matching this pattern are not reported.
        check_profile: Fail before building when the profile is missing.
        log_level: Log level for pipeline diagnostics.

    Returns:
        The report tool's exit code, or non-zero when a pipeline stage fails.

    """
    return _run(
        generate_summary,
        profdata=profdata,
        manifest_path=manifest_path,
        ignore_regex=ignore_regex,
        check_profile=check_profile,
        log_level=log_level,
    )


app.default(summary)


@app.command
def artifacts(
    *,
    profdata: ProfilePath = None,
    manifest_path: ManifestPath = None,
    check_profile: bool | None = None,
    log_level: LogLevelOption = None,
) -> int:
    """List the test binaries the coverage report is generated from.

    Args:
        profdata: Profile data recorded by a previous instrumented test run.
        manifest_path: Cargo.toml of the project to build.
        check_profile: Fail before building when the profile is missing.
        log_level: Log level for pipeline diagnostics.

    Returns:
        Exit code (0 for success, non-zero for failure).

    """
    return _run(
        list_artifacts,
        profdata=profdata,
        manifest_path=manifest_path,
        ignore_regex=None,
        check_profile=check_profile,
        log_level=log_level,
    )


@app.command
def command(
    *,
    profdata: ProfilePath = None,
    manifest_path: ManifestPath = None,
    ignore_regex: IgnoreRegex = None,
    check_profile: bool | None = None,
    log_level: LogLevelOption = None,
) -> int:
    """Print the coverage report command without running it.

    Args:
        profdata: Profile data recorded by a previous instrumented test run.
        manifest_path: Cargo.toml of the project to build.
        ignore_regex: Source filenames matching this pattern are not reported.
        check_profile: Fail before building when the profile is missing.
        log_level: Log level for pipeline diagnostics.

    Returns:
        Exit code (0 for success, non-zero for failure).

    """
    return _run(
        show_report_command,
        profdata=profdata,
        manifest_path=manifest_path,
        ignore_regex=ignore_regex,
        check_profile=check_profile,
        log_level=log_level,
    )


def main() -> int:
    """Entry point for the CLI."""
    return app()


if __name__ == "__main__":
    sys.exit(main())
