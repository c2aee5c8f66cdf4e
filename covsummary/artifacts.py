"""Select the test binaries that feed the coverage report."""

from __future__ import annotations

import typing as typ

from .logging import get_logger, log_debug, log_info

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .metadata import BuildMessage

logger = get_logger(__name__)

DEBUG_SYMBOL_MARKER = "dSYM"


def is_excluded(path: str, marker: str = DEBUG_SYMBOL_MARKER) -> bool:
    """Return whether ``path`` lies inside a debug-symbol bundle."""
    return marker in path


def extract_artifacts(
    messages: cabc.Iterable[BuildMessage],
    *,
    exclude_marker: str = DEBUG_SYMBOL_MARKER,
) -> list[str]:
    """Return the loadable test binaries named by the build messages.

    Parameters
    ----------
    messages : Iterable[BuildMessage]
        Build messages in the order the build emitted them. The iterable is
        consumed completely before this function returns.
    exclude_marker : str, optional
        Substring identifying paths that must not be passed to the report
        tool.

    Returns
    -------
    list[str]
        Paths of test artifacts in order of first appearance, without
        duplicates or excluded paths. May be empty.

    """
    seen: set[str] = set()
    artifacts: list[str] = []
    for message in messages:
        if not message.is_test:
            continue
        for path in message.filenames:
            if path in seen:
                continue
            seen.add(path)
            if is_excluded(path, exclude_marker):
                log_debug(logger, "Skipping debug-symbol artifact %s", path)
                continue
            artifacts.append(path)

    log_info(logger, "Collected %d test artifacts", len(artifacts))
    return artifacts
