"""Coverage summaries for instrumented cargo test builds.

The pipeline builds a project's tests with coverage instrumentation,
collects the resulting test binaries from cargo's JSON build messages and
runs the coverage report tool over them. The primary entrypoints are:

- generate_summary: Build, collect artifacts and print the summary report
- collect_artifacts: Build and return the filtered test binaries
- list_artifacts: Print the filtered test binaries
- show_report_command: Print the report command without running it

For lower-level operations, import directly from submodules:

- covsummary.build: Instrumented build driver
- covsummary.metadata: Typed cargo build messages
- covsummary.artifacts: Artifact selection and filtering
- covsummary.report: Report command assembly and execution

"""

from __future__ import annotations

from .config import CoverageConfig
from .orchestration import (
    collect_artifacts,
    generate_summary,
    list_artifacts,
    show_report_command,
)
from .validation import (
    BuildFailedError,
    CoverageError,
    ExecutableNotFoundError,
    MetadataParseError,
    ProfileNotFoundError,
)

__all__ = [
    "BuildFailedError",
    "CoverageConfig",
    "CoverageError",
    "ExecutableNotFoundError",
    "MetadataParseError",
    "ProfileNotFoundError",
    "collect_artifacts",
    "generate_summary",
    "list_artifacts",
    "show_report_command",
]
