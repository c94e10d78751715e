"""Parsing of schedule interval strings such as "6h", "1h30m" or "PT6H"."""

import re

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}

_COMPACT = re.compile(r"(\d+)([smhdw])")
_ISO8601 = re.compile(
    r"^P(?:(?P<weeks>\d+)W)?(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed or is out of range."""

    pass


def parse_duration(value: str) -> int:
    """Convert a duration string to seconds.

    Accepts compact unit strings ("90s", "15m", "6h", "1d", "1h30m") and
    ISO-8601 durations ("PT6H", "P1D", "P1W").

    Raises:
        DurationParseError: If the string is empty, malformed, or zero

    Examples:
        >>> parse_duration("6h")
        21600
        >>> parse_duration("1h30m")
        5400
        >>> parse_duration("PT15M")
        900
    """
    if not isinstance(value, str) or not value.strip():
        raise DurationParseError("Duration string cannot be empty")

    cleaned = re.sub(r"\s+", "", value).lower()
    if cleaned.startswith("p"):
        seconds = _parse_iso8601(cleaned.upper(), value)
    else:
        seconds = _parse_compact(cleaned, value)

    if seconds == 0:
        raise DurationParseError(f"Duration cannot be zero: '{value}'")
    return seconds


def _parse_iso8601(cleaned: str, original: str) -> int:
    match = _ISO8601.match(cleaned)
    if not match or cleaned in ("P", "PT") or cleaned.endswith("T"):
        raise DurationParseError(
            f"Invalid ISO-8601 duration: '{original}'. Expected something like 'PT6H' or 'P1D'"
        )
    parts = {name: int(number) for name, number in match.groupdict().items() if number}
    return (
        parts.get("weeks", 0) * _UNIT_SECONDS["w"]
        + parts.get("days", 0) * _UNIT_SECONDS["d"]
        + parts.get("hours", 0) * _UNIT_SECONDS["h"]
        + parts.get("minutes", 0) * _UNIT_SECONDS["m"]
        + parts.get("seconds", 0)
    )


def _parse_compact(cleaned: str, original: str) -> int:
    pieces = _COMPACT.findall(cleaned)
    if not pieces or "".join(number + unit for number, unit in pieces) != cleaned:
        raise DurationParseError(
            f"Invalid duration: '{original}'. "
            "Use digits followed by s, m, h, d or w (for example '6h' or '1h30m')"
        )
    return sum(int(number) * _UNIT_SECONDS[unit] for number, unit in pieces)


def validate_duration_range(seconds: int, min_seconds: int = 60, max_seconds: int = 604800) -> None:
    """Reject intervals shorter than a minute or longer than a week by default.

    Raises:
        DurationParseError: If ``seconds`` is outside the range
    """
    if seconds < min_seconds:
        raise DurationParseError(
            f"Interval too short: {describe_seconds(seconds)}. Minimum is {describe_seconds(min_seconds)}."
        )
    if seconds > max_seconds:
        raise DurationParseError(
            f"Interval too long: {describe_seconds(seconds)}. Maximum is {describe_seconds(max_seconds)}."
        )


def describe_seconds(seconds: int) -> str:
    """Render seconds in the largest whole unit, e.g. 21600 -> "6 hours"."""
    for unit, name in (("w", "week"), ("d", "day"), ("h", "hour"), ("m", "minute")):
        size = _UNIT_SECONDS[unit]
        if seconds >= size and seconds % size == 0:
            count = seconds // size
            return f"{count} {name}{'s' if count != 1 else ''}"
    return f"{seconds} second{'s' if seconds != 1 else ''}"
