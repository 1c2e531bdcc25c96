"""Parsing of ISO 8601 video durations as returned by the YouTube Data API."""

import re

from .exceptions import InvalidDurationFormatError

# P[nD][T[nH][nM][nS]] with at least a day part or a T; the provider only
# emits days for videos over 24 hours
_DURATION_RE = re.compile(
    r"P(?=\d|T)(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?"
)


def parse_duration(text: str) -> int:
    """Convert an ISO 8601 duration such as ``PT1H2M3S`` to total seconds.

    Every component is optional, so ``PT`` and ``P0D`` are syntactically
    valid and yield 0; a bare ``P`` is not. A zero duration usually means the upstream data is
    wrong (live streams report ``P0D``); callers decide what to do with it.

    Args:
        text: The duration string.

    Returns:
        hours * 3600 + minutes * 60 + seconds (plus 86400 per day).

    Raises:
        InvalidDurationFormatError: If the text does not match the pattern.
    """
    match = _DURATION_RE.fullmatch(text.strip()) if isinstance(text, str) else None
    if match is None:
        raise InvalidDurationFormatError(
            f"Invalid ISO 8601 duration: {text!r}", duration=str(text)
        )

    parts = {name: int(value) for name, value in match.groupdict().items() if value}
    return (
        parts.get("days", 0) * 86400
        + parts.get("hours", 0) * 3600
        + parts.get("minutes", 0) * 60
        + parts.get("seconds", 0)
    )
