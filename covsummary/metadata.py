"""Typed cargo build messages.

``cargo build --message-format=json`` writes one JSON object per line. Each
object carries a ``reason`` discriminator; ``compiler-artifact`` records also
describe the target's build profile and the files produced for it. Only the
fields the pipeline reads are declared and everything else is ignored.
"""

from __future__ import annotations

import msgspec

from .validation import MetadataParseError


class ArtifactProfile(msgspec.Struct, kw_only=True):
    """Build profile of an artifact.

    Attributes
    ----------
    test : bool
        Whether the target was compiled as a test harness.

    """

    test: bool = False


class ArtifactTarget(msgspec.Struct, kw_only=True):
    """Cargo target that produced an artifact."""

    name: str = ""
    kind: list[str] = msgspec.field(default_factory=list)


class CompilerMessage(msgspec.Struct, kw_only=True):
    """Diagnostic emitted by rustc during the build."""

    rendered: str | None = None


class BuildMessage(msgspec.Struct, kw_only=True):
    """One line of cargo's JSON build output.

    Attributes
    ----------
    reason : str
        Message discriminator such as ``compiler-artifact`` or
        ``build-finished``.
    profile : ArtifactProfile | None
        Build profile; present on ``compiler-artifact`` records only.
    filenames : list[str]
        Files produced for the target, in the order cargo lists them.
    target : ArtifactTarget | None
        Target description for artifact and diagnostic records.
    message : CompilerMessage | None
        Diagnostic payload of ``compiler-message`` records.

    """

    reason: str
    profile: ArtifactProfile | None = None
    filenames: list[str] = msgspec.field(default_factory=list)
    target: ArtifactTarget | None = None
    message: CompilerMessage | None = None

    @property
    def is_test(self) -> bool:
        """Return whether this record describes a test binary."""
        return self.profile is not None and self.profile.test


_DECODER = msgspec.json.Decoder(BuildMessage)


def decode_build_message(line: str | bytes, *, line_number: int = 1) -> BuildMessage:
    """Decode a single line of build output.

    Parameters
    ----------
    line : str | bytes
        Raw JSON text for one record.
    line_number : int, optional
        Position of the line in the stream, used in error messages.

    Returns
    -------
    BuildMessage
        The decoded record.

    Raises
    ------
    MetadataParseError
        If the line is not valid JSON or does not match the record shape.

    """
    try:
        return _DECODER.decode(line)
    except msgspec.DecodeError as exc:
        text = line.decode("utf-8", "replace") if isinstance(line, bytes) else line
        raise MetadataParseError(line_number, text.rstrip("\n"), str(exc)) from exc
