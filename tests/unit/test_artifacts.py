"""Unit tests for test artifact selection."""

from __future__ import annotations

import itertools

import pytest

from covsummary.artifacts import extract_artifacts, is_excluded
from covsummary.metadata import ArtifactProfile, BuildMessage


def _artifact(filenames: list[str], *, test: bool) -> BuildMessage:
    return BuildMessage(
        reason="compiler-artifact",
        profile=ArtifactProfile(test=test),
        filenames=filenames,
    )


class TestIsExcluded:
    """Tests for is_excluded."""

    @pytest.mark.parametrize(
        "path",
        [
            "/work/target/debug/deps/crate-1a2b.dSYM",
            "/cache/dSYM/c.bin",
            "target/debug/deps/crate.dSYM/Contents/Resources/DWARF/crate",
        ],
    )
    def test_debug_symbol_paths_are_excluded(self, path: str) -> None:
        """Paths containing the dSYM marker are excluded."""
        assert is_excluded(path)

    @pytest.mark.parametrize(
        "path",
        ["/work/target/debug/deps/crate-1a2b", "d.bin", "/work/dsym/lowercase"],
    )
    def test_other_paths_are_kept(self, path: str) -> None:
        """The marker match is literal and case-sensitive."""
        assert not is_excluded(path)

    def test_custom_marker(self) -> None:
        """A custom marker replaces the default one."""
        assert is_excluded("target/crate.dwp", ".dwp")
        assert not is_excluded("target/crate.dSYM", ".dwp")


class TestExtractArtifacts:
    """Tests for extract_artifacts."""

    def test_three_record_scenario(self) -> None:
        """Non-test records and dSYM paths are dropped, order is kept."""
        messages = [
            _artifact(["a.bin"], test=True),
            _artifact(["b.bin"], test=False),
            _artifact(["/cache/dSYM/c.bin", "d.bin"], test=True),
        ]

        assert extract_artifacts(messages) == ["a.bin", "d.bin"]

    def test_non_test_records_never_contribute(self) -> None:
        """Whatever the ordering, only test records contribute paths."""
        messages = [
            _artifact(["lib.rlib"], test=False),
            _artifact(["t1"], test=True),
            BuildMessage(reason="build-finished"),
            _artifact(["bin"], test=False),
            _artifact(["t2"], test=True),
        ]

        for ordering in itertools.permutations(messages):
            result = extract_artifacts(ordering)
            assert sorted(result) == ["t1", "t2"]

    def test_preserves_first_appearance_and_deduplicates(self) -> None:
        """Repeated paths appear once, at their first position."""
        messages = [
            _artifact(["t2", "t1"], test=True),
            _artifact(["t3", "t2"], test=True),
            _artifact(["t1"], test=True),
        ]

        assert extract_artifacts(messages) == ["t2", "t1", "t3"]

    def test_records_without_outputs_are_valid(self) -> None:
        """A test record with no filenames contributes nothing."""
        assert extract_artifacts([_artifact([], test=True)]) == []

    def test_no_test_records_yields_empty_list(self) -> None:
        """Zero test records is not an error."""
        messages = [_artifact(["lib.rlib"], test=False)]

        assert extract_artifacts(messages) == []

    def test_consumes_a_generator(self) -> None:
        """Messages may be streamed from a generator."""
        stream = (
            _artifact([name], test=True) for name in ("t1", "x.dSYM", "t2")
        )

        assert extract_artifacts(stream) == ["t1", "t2"]

    def test_custom_exclude_marker(self) -> None:
        """The exclusion marker can be configured."""
        messages = [_artifact(["t1", "t1.dwp", "t.dSYM"], test=True)]

        assert extract_artifacts(messages, exclude_marker=".dwp") == ["t1", "t.dSYM"]

    def test_is_idempotent(self) -> None:
        """The same messages always yield the same artifact list."""
        messages = [
            _artifact(["t1", "t1.dSYM"], test=True),
            _artifact(["t2"], test=True),
        ]

        assert extract_artifacts(messages) == extract_artifacts(messages)
