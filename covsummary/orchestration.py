"""High-level orchestration for CLI commands."""

from __future__ import annotations

import shlex
import typing as typ

from .artifacts import extract_artifacts
from .build import stream_build_messages
from .report import report_command, run_report
from .validation import require_exe, require_profile

if typ.TYPE_CHECKING:
    from .config import CoverageConfig


def collect_artifacts(cfg: CoverageConfig) -> list[str]:
    """Build the instrumented tests and return the usable test binaries.

    Args:
        cfg: Pipeline configuration.

    Returns:
        Filtered artifact paths in build order.

    Raises:
        ExecutableNotFoundError: If cargo is not installed.
        ProfileNotFoundError: If ``cfg.check_profile`` is set and the profile
            is missing.
        BuildFailedError: If the build fails.
        MetadataParseError: If the build output is malformed.

    """
    require_exe(cfg.cargo)
    if cfg.check_profile:
        require_profile(cfg.profile_path)

    return extract_artifacts(
        stream_build_messages(cfg), exclude_marker=cfg.exclude_marker
    )


def generate_summary(cfg: CoverageConfig) -> int:
    """Build the tests and print the coverage summary.

    Returns:
        The report tool's exit code.

    """
    artifacts = collect_artifacts(cfg)
    return run_report(report_command(artifacts, cfg))


def list_artifacts(cfg: CoverageConfig) -> int:
    """Print the artifacts the report would be generated from.

    Returns:
        Exit code (always 0; failures raise).

    """
    for artifact in collect_artifacts(cfg):
        print(artifact)
    return 0


def show_report_command(cfg: CoverageConfig) -> int:
    """Print the report command without running it.

    Returns:
        Exit code (always 0; failures raise).

    """
    print(shlex.join(report_command(collect_artifacts(cfg), cfg)))
    return 0
