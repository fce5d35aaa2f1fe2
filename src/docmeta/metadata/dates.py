"""ISO-8601 date normalization.

Producers write dates in several ISO-8601 shapes. Parsing tries a fixed,
ordered list of accepted formats and returns the first match as an
aware UTC datetime; formatting always emits ``yyyy-MM-ddTHH:mm:ssZ``.

Every format is applied with ``datetime.strptime``, which builds no
shared parser state, so a DateNormalizer is safe to use from several
threads without locking.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

# Four-digit year; strftime("%Y") does not pad years below 1000 on glibc
OUTPUT_FORMAT = "{0.year:04d}-{0.month:02d}-{0.day:02d}T{0.hour:02d}:{0.minute:02d}:{0.second:02d}Z"

MIDDAY = time(12, 0, 0)
"""Time of day assigned to date-only values (UTC)."""

# Trailing "+HH:MM" / "-HH:MM" offset, rewritten to "+HHMM" before parsing
_COLON_OFFSET = re.compile(r"([+-]\d\d):(\d\d)$")


class ZoneRule(Enum):
    """How a matched format's result is placed on the timeline."""

    UTC = "utc"
    OFFSET = "offset"
    DEFAULT = "default"
    MIDDAY = "midday"


# In preference order.
INPUT_FORMATS: tuple[tuple[str, ZoneRule], ...] = (
    # yyyy-mm-ddThh...
    ("%Y-%m-%dT%H:%M:%SZ", ZoneRule.UTC),
    ("%Y-%m-%dT%H:%M:%S%z", ZoneRule.OFFSET),
    ("%Y-%m-%dT%H:%M:%S", ZoneRule.DEFAULT),
    # yyyy-mm-dd hh...
    ("%Y-%m-%d %H:%M:%SZ", ZoneRule.UTC),
    ("%Y-%m-%d %H:%M:%S%z", ZoneRule.OFFSET),
    ("%Y-%m-%d %H:%M:%S", ZoneRule.DEFAULT),
    # Date only
    ("%Y-%m-%d", ZoneRule.MIDDAY),
    ("%Y:%m:%d", ZoneRule.MIDDAY),  # EXIF / IPTC
)


def normalize_offset(text: str) -> str:
    """Strip the colon from a trailing ``±HH:MM`` offset."""
    return _COLON_OFFSET.sub(r"\1\2", text)


def load_timezone(name: str | None) -> tzinfo | None:
    """Resolve an IANA zone name; None or an unknown name gives None."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown time zone {name!r}, using the system local zone")
        return None


@dataclass(frozen=True)
class DateNormalizer:
    """Parse and format metadata dates.

    Attributes:
        default_timezone: Zone for timestamps without an offset; None
            means the system local zone.
    """

    default_timezone: tzinfo | None = None

    def parse(self, text: str | None) -> datetime | None:
        """Parse a date string to an aware UTC datetime.

        Args:
            text: Date text in one of the accepted ISO-8601 variants.

        Returns:
            The parsed instant, or None if no format matches.
        """
        if not text:
            return None

        candidate = normalize_offset(text)
        for pattern, rule in INPUT_FORMATS:
            try:
                parsed = datetime.strptime(candidate, pattern)
            except ValueError:
                continue
            return self._place(parsed, rule)

        logger.debug(f"Unparseable date value: {text!r}")
        return None

    def format(self, value: datetime | date) -> str:
        """Format an instant as ``yyyy-MM-ddTHH:mm:ssZ`` in UTC.

        Naive datetimes are read in the default zone; calendar dates are
        placed at midday UTC. Sub-second precision is dropped.
        """
        return OUTPUT_FORMAT.format(self.to_utc(value))

    def to_utc(self, value: datetime | date) -> datetime:
        """Convert a datetime or calendar date to an aware UTC datetime."""
        if not isinstance(value, datetime):
            return datetime.combine(value, MIDDAY, tzinfo=timezone.utc)
        if value.tzinfo is None:
            value = self._localize(value)
        return value.astimezone(timezone.utc).replace(microsecond=0)

    def _place(self, parsed: datetime, rule: ZoneRule) -> datetime:
        if rule is ZoneRule.UTC:
            return parsed.replace(tzinfo=timezone.utc)
        if rule is ZoneRule.MIDDAY:
            return datetime.combine(parsed.date(), MIDDAY, tzinfo=timezone.utc)
        if rule is ZoneRule.DEFAULT:
            parsed = self._localize(parsed)
        return parsed.astimezone(timezone.utc)

    def _localize(self, naive: datetime) -> datetime:
        if self.default_timezone is None:
            # astimezone() on a naive datetime assumes system local time
            return naive.astimezone()
        return naive.replace(tzinfo=self.default_timezone)


_default_normalizer = DateNormalizer()


def parse_date(text: str | None) -> datetime | None:
    """Parse a date string with the default normalizer."""
    return _default_normalizer.parse(text)


def format_date(value: datetime | date) -> str:
    """Format an instant with the default normalizer."""
    return _default_normalizer.format(value)
