"""Instrumented test build driver.

Runs ``cargo test --no-run`` with coverage instrumentation and yields the
build's JSON messages as they arrive on stdout. Cargo's progress output and
any rendered compiler diagnostics go to stderr.

Examples
--------
Print every test binary the build produces:

    for message in stream_build_messages(CoverageConfig()):
        if message.is_test:
            print(*message.filenames, sep="\\n")

"""

from __future__ import annotations

import os
import subprocess
import sys
import typing as typ

from .logging import get_logger, log_debug, log_error, log_info
from .metadata import decode_build_message
from .validation import BuildFailedError, MetadataParseError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import CoverageConfig
    from .metadata import BuildMessage

logger = get_logger(__name__)


def build_command(cfg: CoverageConfig) -> list[str]:
    """Return the argv for the instrumented, compile-only test build."""
    cmd = [cfg.cargo, "test", "--tests", "--no-run", "--message-format=json"]
    if cfg.manifest_path is not None:
        cmd.extend(["--manifest-path", str(cfg.manifest_path)])
    return cmd


def build_env(
    cfg: CoverageConfig, base: cabc.Mapping[str, str] | None = None
) -> dict[str, str]:
    """Return the build environment with coverage instrumentation enabled.

    Args:
        cfg: Configuration providing the instrumentation flags.
        base: Environment to start from; defaults to ``os.environ``.

    Returns:
        A copy of ``base`` whose ``RUSTFLAGS`` is replaced by
        ``cfg.instrument_flags``.

    """
    env = dict(os.environ if base is None else base)
    env["RUSTFLAGS"] = cfg.instrument_flags
    return env


def _echo_diagnostic(message: BuildMessage) -> None:
    """Forward a rendered compiler diagnostic to stderr."""
    if message.reason != "compiler-message" or message.message is None:
        return
    if message.message.rendered:
        sys.stderr.write(message.message.rendered)
        sys.stderr.flush()


def _decode_stream(
    lines: cabc.Iterable[str],
) -> cabc.Iterator[BuildMessage]:
    for line_number, line in enumerate(lines, start=1):
        # Cargo never emits blank lines; tolerate a trailing one.
        if not line.strip():
            continue
        message = decode_build_message(line, line_number=line_number)
        _echo_diagnostic(message)
        yield message


def stream_build_messages(cfg: CoverageConfig) -> cabc.Iterator[BuildMessage]:
    """Run the instrumented test build and yield its messages.

    Messages are decoded line by line while the build runs, so a malformed
    line stops the build immediately instead of after it finishes.

    Args:
        cfg: Configuration for the build.

    Yields:
        One ``BuildMessage`` per line of build output.

    Raises:
        MetadataParseError: If a line of build output is malformed. The
            build process is killed before the error propagates.
        BuildFailedError: If the build exits with a non-zero status.

    """
    cmd = build_command(cfg)
    log_info(logger, "Running instrumented test build: %s", " ".join(cmd))
    # S603: argv assembled from configuration, no shell involved
    with subprocess.Popen(  # noqa: S603
        cmd,
        stdout=subprocess.PIPE,
        text=True,
        env=build_env(cfg),
    ) as proc:
        if proc.stdout is None:  # pragma: no cover - stdout is always piped
            msg = "build process stdout was not captured"
            raise RuntimeError(msg)
        try:
            yield from _decode_stream(proc.stdout)
        except MetadataParseError:
            proc.kill()
            raise
        returncode = proc.wait()

    if returncode != 0:
        log_error(logger, "Test build exited with status %d", returncode)
        raise BuildFailedError(returncode)
    log_debug(logger, "Test build finished successfully")
