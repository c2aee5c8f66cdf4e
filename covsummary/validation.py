"""Errors and pre-flight checks for the coverage pipeline.

Every failure the pipeline raises derives from ``CoverageError`` and carries
the process exit code the command line should finish with. Report tool
failures are not exceptions: their exit status is returned unchanged.

Custom Exceptions
-----------------
- ``CoverageError``: Base exception for all package errors
- ``ExecutableNotFoundError``: Raised when a required CLI tool is missing
- ``BuildFailedError``: Raised when the instrumented test build fails
- ``MetadataParseError``: Raised when a build message line is malformed
- ``ProfileNotFoundError``: Raised by the opt-in profile pre-flight check

Examples
--------
Verify cargo is available before building:

    require_exe("cargo")

"""

from __future__ import annotations

import shutil
from pathlib import Path


class CoverageError(Exception):
    """Base exception for all covsummary errors."""

    exit_code: int = 1


class ExecutableNotFoundError(CoverageError):
    """Required CLI tool is not installed."""


class BuildFailedError(CoverageError):
    """The instrumented test build exited with a non-zero status.

    Parameters
    ----------
    returncode : int
        Exit status reported by the build tool.

    """

    def __init__(self, returncode: int) -> None:
        """Record the build's exit status as the pipeline's exit code."""
        self.returncode = returncode
        # Signal deaths surface as negative return codes.
        self.exit_code = returncode if returncode > 0 else 1
        super().__init__(f"Test build failed with exit status {returncode}")


class MetadataParseError(CoverageError):
    """A build metadata line could not be decoded.

    Attributes
    ----------
    line_number : int
        One-based position of the offending line in the build output.
    line : str
        The offending line, without its trailing newline.

    """

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        """Describe which line failed to decode and why."""
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"Malformed build metadata on line {line_number}: {reason}: {line!r}"
        )


class ProfileNotFoundError(CoverageError):
    """The instrumentation profile does not exist."""


def require_exe(name: str) -> None:
    """Verify a CLI tool is available in PATH.

    Parameters
    ----------
    name : str
        Name of the executable to check for.

    Raises
    ------
    ExecutableNotFoundError
        If the executable is not found in PATH.

    """
    if shutil.which(name) is None:
        msg = f"Required executable '{name}' not found in PATH"
        raise ExecutableNotFoundError(msg)


def require_profile(path: Path) -> None:
    """Fail early when the profile data file is missing.

    Raises
    ------
    ProfileNotFoundError
        If ``path`` is not an existing regular file.

    """
    if not Path(path).is_file():
        msg = f"Profile data file '{path}' does not exist"
        raise ProfileNotFoundError(msg)
