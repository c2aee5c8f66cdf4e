"""Shared fixtures for unit and feature tests.

Cargo and the report tool are never executed: ``subprocess.Popen`` is
replaced by a fake build that replays canned JSON lines, and
``subprocess.run`` by a recorder that returns a configurable exit status.
"""

from __future__ import annotations

import dataclasses
import io
import os
import subprocess
import typing as typ

import pytest


@dataclasses.dataclass(slots=True)
class BuildRecorder:
    """Configures and records the fake build process."""

    lines: list[str] = dataclasses.field(default_factory=list)
    returncode: int = 0
    calls: list[tuple[str, ...]] = dataclasses.field(default_factory=list)
    envs: list[dict[str, str]] = dataclasses.field(default_factory=list)
    killed: bool = False


@dataclasses.dataclass(slots=True)
class ReportRecorder:
    """Configures and records report tool invocations."""

    returncode: int = 0
    calls: list[tuple[str, ...]] = dataclasses.field(default_factory=list)
    kwargs: list[dict[str, object]] = dataclasses.field(default_factory=list)


class FakeBuildProcess:
    """Stand-in for ``subprocess.Popen`` running ``cargo test --no-run``."""

    def __init__(
        self, recorder: BuildRecorder, args: list[str], **kwargs: object
    ) -> None:
        """Record the invocation and prepare the canned stdout."""
        self._recorder = recorder
        recorder.calls.append(tuple(args))
        env = typ.cast("dict[str, str] | None", kwargs.get("env"))
        recorder.envs.append(dict(env or {}))
        self.args = args
        self.stdout = io.StringIO("".join(f"{line}\n" for line in recorder.lines))
        self.returncode: int | None = None

    def kill(self) -> None:
        """Record that the build was killed."""
        self._recorder.killed = True

    def wait(self, timeout: float | None = None) -> int:
        """Return the configured exit status."""
        del timeout
        self.returncode = -9 if self._recorder.killed else self._recorder.returncode
        return self.returncode

    def __enter__(self) -> FakeBuildProcess:
        """Support ``with subprocess.Popen(...)``."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Close stdout and reap the process."""
        self.stdout.close()
        self.wait()


@pytest.fixture
def fake_build(monkeypatch: pytest.MonkeyPatch) -> BuildRecorder:
    """Replace ``subprocess.Popen`` with a fake cargo build.

    ``shutil.which`` is patched too so executable checks pass.
    """
    recorder = BuildRecorder()

    def _popen(args: list[str], **kwargs: object) -> FakeBuildProcess:
        return FakeBuildProcess(recorder, args, **kwargs)

    monkeypatch.setattr("subprocess.Popen", _popen)
    monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")
    return recorder


@pytest.fixture
def fake_report(monkeypatch: pytest.MonkeyPatch) -> ReportRecorder:
    """Replace ``subprocess.run`` with a recorder for the report tool."""
    recorder = ReportRecorder()

    def _run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        recorder.calls.append(tuple(args))
        recorder.kwargs.append(dict(kwargs))
        return subprocess.CompletedProcess(args=args, returncode=recorder.returncode)

    monkeypatch.setattr("subprocess.run", _run)
    return recorder


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every ``COVSUMMARY_*`` variable from the environment."""
    for name in list(os.environ):
        if name.startswith("COVSUMMARY_"):
            monkeypatch.delenv(name)
