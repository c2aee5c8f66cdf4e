"""Coverage report invocation.

The report tool (``cargo cov -- report``, a thin wrapper over
``llvm-cov report``) merges the profile with the test binaries and prints
the summary. Its output is never captured and its exit status is returned
unchanged.
"""

from __future__ import annotations

import subprocess
import typing as typ

from .logging import get_logger, log_info

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import CoverageConfig

logger = get_logger(__name__)

REPORT_SUBCOMMAND = "report"
OBJECT_FLAG = "-object"
SUMMARY_ONLY_FLAG = "--summary-only"


def report_command(artifacts: cabc.Iterable[str], cfg: CoverageConfig) -> list[str]:
    """Assemble the report tool's argv.

    Args:
        artifacts: Object files to merge, in the order they should be listed.
        cfg: Configuration providing the tool prefix, profile and ignore
            pattern.

    Returns:
        ``[*prefix, "report", "-object", a1, "-object", a2, ...,
        "--instr-profile=<profile>", "--summary-only",
        "--ignore-filename-regex=<regex>"]``.

    """
    cmd = [*cfg.report_tool, REPORT_SUBCOMMAND]
    for artifact in artifacts:
        cmd.extend([OBJECT_FLAG, artifact])
    cmd.extend(
        [
            f"--instr-profile={cfg.profile_path}",
            SUMMARY_ONLY_FLAG,
            f"--ignore-filename-regex={cfg.ignore_filename_regex}",
        ]
    )
    return cmd


def run_report(cmd: cabc.Sequence[str]) -> int:
    """Run the report tool with inherited stdout/stderr.

    Returns:
        The report tool's exit status.

    """
    log_info(logger, "Running coverage report: %s", " ".join(cmd))
    # S603: argv assembled from configuration and build output, no shell
    result = subprocess.run(list(cmd), check=False)  # noqa: S603
    return result.returncode
