"""Configuration for the coverage summary pipeline.

Usage
-----
Create a configuration with defaults:

>>> config = CoverageConfig()
>>> str(config.profile_path)
'json5format.profdata'

Or load from environment variables:

>>> import os
>>> os.environ["COVSUMMARY_PROFDATA"] = "target/coverage.profdata"
>>> config = CoverageConfig.from_env()
>>> str(config.profile_path)
'target/coverage.profdata'

"""

from __future__ import annotations

import dataclasses as dc
import os
import shlex
from pathlib import Path

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dc.dataclass(frozen=True, slots=True)
class CoverageConfig:
    """Settings for one coverage summary run.

    Attributes
    ----------
    profile_path
        Instrumentation profile recorded by a previous instrumented test run.
        Handed to the report tool as ``--instr-profile``.
    ignore_filename_regex
        Source files matching this pattern are left out of the summary.
        The default hides crates pulled from the cargo registry cache.
    instrument_flags
        ``RUSTFLAGS`` value that turns on coverage instrumentation for the
        test build.
    exclude_marker
        Artifact paths containing this substring are never passed to the
        report tool. macOS debug-symbol bundles are directories named
        ``*.dSYM`` and cannot be loaded as objects.
    cargo
        Cargo executable used for the test build.
    report_tool
        Command prefix that precedes the ``report`` sub-command.
    manifest_path
        Optional ``Cargo.toml`` to build instead of the one cargo discovers
        from the working directory.
    check_profile
        Verify that ``profile_path`` exists before building. When off, a
        missing profile is reported by the report tool itself.

    """

    profile_path: Path = dc.field(default_factory=lambda: Path("json5format.profdata"))
    ignore_filename_regex: str = "/.cargo/registry"
    instrument_flags: str = "-Zinstrument-coverage"
    exclude_marker: str = "dSYM"
    cargo: str = "cargo"
    report_tool: tuple[str, ...] = ("cargo", "cov", "--")
    manifest_path: Path | None = None
    check_profile: bool = False

    @staticmethod
    def _read(env_var: str) -> str | None:
        """Return a stripped env var, treating blank values as unset."""
        raw = os.environ.get(env_var, "").strip()
        return raw or None

    @classmethod
    def _parse_bool(cls, env_var: str, *, default: bool) -> bool:
        """Read a boolean env var, falling back to a default."""
        raw = cls._read(env_var)
        if raw is None:
            return default
        lowered = raw.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        msg = f"{env_var} must be a boolean, got: {raw!r}"
        raise ValueError(msg)

    @classmethod
    def from_env(cls) -> CoverageConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``COVSUMMARY_PROFDATA``: Path to the ``.profdata`` file.
        - ``COVSUMMARY_IGNORE_REGEX``: Filename pattern hidden from the report.
        - ``COVSUMMARY_RUSTFLAGS``: Instrumentation flags for the build.
        - ``COVSUMMARY_EXCLUDE_MARKER``: Substring that excludes an artifact.
        - ``COVSUMMARY_CARGO``: Cargo executable.
        - ``COVSUMMARY_REPORT_TOOL``: Report tool prefix, split shell-style.
        - ``COVSUMMARY_MANIFEST_PATH``: Optional ``Cargo.toml`` path.
        - ``COVSUMMARY_CHECK_PROFILE``: Pre-flight profile check (boolean).

        Returns
        -------
        CoverageConfig
            Configuration instance with values from environment or defaults.

        Raises
        ------
        ValueError
            If COVSUMMARY_CHECK_PROFILE is not a recognised boolean or
            COVSUMMARY_REPORT_TOOL cannot be split.

        """
        defaults = cls()

        profile = cls._read("COVSUMMARY_PROFDATA")
        manifest = cls._read("COVSUMMARY_MANIFEST_PATH")
        report_tool_raw = cls._read("COVSUMMARY_REPORT_TOOL")
        report_tool = (
            tuple(shlex.split(report_tool_raw))
            if report_tool_raw is not None
            else defaults.report_tool
        )

        return cls(
            profile_path=Path(profile) if profile else defaults.profile_path,
            ignore_filename_regex=cls._read("COVSUMMARY_IGNORE_REGEX")
            or defaults.ignore_filename_regex,
            instrument_flags=cls._read("COVSUMMARY_RUSTFLAGS")
            or defaults.instrument_flags,
            exclude_marker=cls._read("COVSUMMARY_EXCLUDE_MARKER")
            or defaults.exclude_marker,
            cargo=cls._read("COVSUMMARY_CARGO") or defaults.cargo,
            report_tool=report_tool,
            manifest_path=Path(manifest) if manifest else None,
            check_profile=cls._parse_bool(
                "COVSUMMARY_CHECK_PROFILE", default=defaults.check_profile
            ),
        )

    def with_overrides(
        self,
        *,
        profile_path: Path | None = None,
        manifest_path: Path | None = None,
        ignore_filename_regex: str | None = None,
        check_profile: bool | None = None,
    ) -> CoverageConfig:
        """Return a copy with any non-``None`` command-line overrides applied."""
        changes: dict[str, object] = {
            "profile_path": profile_path,
            "manifest_path": manifest_path,
            "ignore_filename_regex": ignore_filename_regex,
            "check_profile": check_profile,
        }
        return dc.replace(
            self, **{key: value for key, value in changes.items() if value is not None}
        )
