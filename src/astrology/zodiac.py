"""
Astrology - Zodiac Signs

Defines the twelve zodiac signs with their inclusive (month, day) ranges and
resolves a calendar date to the sign that covers it.

Usage:
    from astrology.zodiac import ZodiacSign, resolve_sign

    resolve_sign(5, 4)                       # ZodiacSign.TAURUS
    resolve_sign(datetime.date(2024, 12, 31))  # ZodiacSign.CAPRICORN
    ZodiacSign.from_name("leo")              # ZodiacSign.LEO
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, Tuple

from .errors import InvalidDateError, NoMatchingSignError

logger = logging.getLogger(__name__)

MonthDay = Tuple[int, int]


class ZodiacSign(Enum):
    """
    The twelve signs in canonical order, each with an inclusive start and end.

    Consecutive signs are exactly adjacent: one sign's end is the day before
    the next sign's start. CAPRICORN is the only range crossing Dec 31.
    """

    ARIES = ((3, 21), (4, 20))
    TAURUS = ((4, 21), (5, 20))
    GEMINI = ((5, 21), (6, 21))
    CANCER = ((6, 22), (7, 22))
    LEO = ((7, 23), (8, 23))
    VIRGO = ((8, 24), (9, 23))
    LIBRA = ((9, 24), (10, 23))
    SCORPIO = ((10, 24), (11, 22))
    SAGITTARIUS = ((11, 23), (12, 21))
    CAPRICORN = ((12, 22), (1, 20))
    AQUARIUS = ((1, 21), (2, 19))
    PISCES = ((2, 20), (3, 20))

    def __init__(self, start: MonthDay, end: MonthDay) -> None:
        self.start = start
        self.end = end

    @property
    def api_name(self) -> str:
        """Lowercase identifier used by the prediction endpoint."""
        return self.name.lower()

    @property
    def wraps_year(self) -> bool:
        return self.start > self.end

    def contains(self, month: int, day: int) -> bool:
        md = (month, day)
        if self.wraps_year:
            return md >= self.start or md <= self.end
        return self.start <= md <= self.end

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["ZodiacSign"]:
        """Case-insensitive lookup by name; None for blank or unknown names."""
        if name is None or not name.strip():
            return None
        try:
            return cls[name.strip().upper()]
        except KeyError:
            return None

    @classmethod
    def resolve(cls, month: int, day: int) -> "ZodiacSign":
        return resolve_sign(month, day)


def _validate(month: Any, day: Any) -> MonthDay:
    if isinstance(month, bool) or isinstance(day, bool):
        raise InvalidDateError(f"Invalid date: {month}/{day}")
    if not isinstance(month, int) or not isinstance(day, int):
        raise InvalidDateError(f"Invalid date: {month}/{day}")
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise InvalidDateError(f"Invalid date: {month}/{day}")
    return month, day


def resolve_sign(value: Any, day: Optional[int] = None) -> ZodiacSign:
    """
    Resolve a date to its zodiac sign.

    Accepts either ``resolve_sign(month, day)`` or a single value: a
    ``datetime.date``/``datetime``, a ``(month, day)`` tuple, or anything
    exposing ``.month`` and ``.day``. Day-in-month is not checked, so
    (2, 31) resolves like any other pair inside [1, 12] x [1, 31].

    Raises:
        InvalidDateError: month outside [1, 12] or day outside [1, 31].
        NoMatchingSignError: no range matched (unreachable for a valid table).
    """
    if day is not None:
        month = value
    elif isinstance(value, tuple) and len(value) == 2:
        month, day = value
    elif hasattr(value, "month") and hasattr(value, "day"):
        month, day = value.month, value.day
    else:
        raise InvalidDateError(f"Cannot interpret {value!r} as a month/day")

    month, day = _validate(month, day)

    for sign in ZodiacSign:
        if sign.contains(month, day):
            return sign

    logger.error("No zodiac sign covers %02d-%02d", month, day)
    raise NoMatchingSignError(f"No zodiac sign covers {month:02d}-{day:02d}")
