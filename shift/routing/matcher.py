"""
Dot-segmented route pattern matching.

A pattern matches an event name when both have the same number of
segments and every pattern segment is either ``*`` or equal to the
corresponding event segment. ``*`` is only special on the pattern side.
"""

from __future__ import annotations

from functools import lru_cache

WILDCARD = "*"
SEPARATOR = "."


@lru_cache(maxsize=1024)
def _segments(name: str) -> tuple[str, ...]:
    return tuple(name.split(SEPARATOR))


def matches(pattern: str, event: str) -> bool:
    """Return True if ``pattern`` matches the event name ``event``.

    Examples:
        matches("foo.*", "foo.bar")   # True
        matches("foo.bar", "foo.*")   # False
        matches("foo", "foo.bar")     # False
    """
    pattern_segments = _segments(pattern)
    event_segments = _segments(event)

    if len(pattern_segments) != len(event_segments):
        return False

    return all(
        p == WILDCARD or p == e
        for p, e in zip(pattern_segments, event_segments)
    )
