"""
Date Normalization Utilities
Turns spreadsheet date cells of mixed formats into canonical YYYY-MM-DD strings
"""

import math
import numbers
import re
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Optional
import logging

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

# Serials above this are not plausible loan dates (60000 is the year 2064)
MAX_SERIAL = 60000
# Serial 60 is 1900-02-29, a day that only exists in spreadsheet software
PHANTOM_LEAP_DAY_SERIAL = 60
SERIAL_EPOCH = date(1899, 12, 30)
# Fills fields missing from free-form text; year 1 fails the > 1900 check
NO_YEAR = datetime(1, 1, 1)

DD_MON_YY = re.compile(r'^(\d{1,2})-(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)-(\d{2}|\d{4})$', re.IGNORECASE)
YYYY_MM_DD = re.compile(r'^(\d{4})[-/](\d{2})[-/](\d{2})$')
MM_DD_YYYY = re.compile(r'^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$')


class DateNormalizer:
    """Canonical date conversion for imported loan data.

    Every public method returns ``None`` instead of raising when the input
    cannot be read as a date.
    """

    @staticmethod
    def normalize(value: Any) -> Optional[str]:
        """Convert a serial number or date string to ``YYYY-MM-DD``.

        Formats are tried in order: spreadsheet serial, ``DD-Mon-YY[YY]``,
        ``YYYY-MM-DD`` (or slashes), ``MM/DD/YYYY`` (or dashes) and finally
        free-form parsing restricted to years after 1900.
        """
        if value is None or isinstance(value, bool):
            return None

        if isinstance(value, (numbers.Real, Decimal)):
            return DateNormalizer.from_serial(value)

        text = str(value).strip()
        if not text:
            return None

        for attempt in (
            DateNormalizer._parse_dd_mon_yy,
            DateNormalizer._parse_iso,
            DateNormalizer._parse_us,
            DateNormalizer._parse_free_form,
        ):
            result = attempt(text)
            if result:
                return result

        logger.debug(f"Unrecognised date value: {text!r}")
        return None

    @staticmethod
    def from_serial(serial: Any) -> Optional[str]:
        """Convert a spreadsheet serial day number.

        Serial 1 is 1900-01-01. Spreadsheet software treats 1900 as a leap
        year, so from serial 61 (1900-03-01) onward every serial is one day
        ahead of a plain day count.
        """
        try:
            serial = float(serial)
        except (TypeError, ValueError):
            return None
        if math.isnan(serial) or not 0 < serial < MAX_SERIAL:
            return None

        days = int(serial)
        if days == PHANTOM_LEAP_DAY_SERIAL or days < 1:
            return None
        if days < PHANTOM_LEAP_DAY_SERIAL:
            days += 1
        return (SERIAL_EPOCH + timedelta(days=days)).isoformat()

    @staticmethod
    def to_iso(year: int, month: int, day: int) -> Optional[str]:
        """Build a canonical date, rejecting impossible calendar days"""
        try:
            return date(year, month, day).isoformat()
        except ValueError:
            return None

    @staticmethod
    def _parse_dd_mon_yy(text: str) -> Optional[str]:
        match = DD_MON_YY.match(text)
        if not match:
            return None

        day = int(match.group(1))
        month = MONTH_ABBREVIATIONS[match.group(2).lower()]
        year = int(match.group(3))
        if len(match.group(3)) == 2:
            year = 2000 + year if year < 50 else 1900 + year
        return DateNormalizer.to_iso(year, month, day)

    @staticmethod
    def _parse_iso(text: str) -> Optional[str]:
        match = YYYY_MM_DD.match(text)
        if not match:
            return None
        year, month, day = (int(g) for g in match.groups())
        return DateNormalizer.to_iso(year, month, day)

    @staticmethod
    def _parse_us(text: str) -> Optional[str]:
        match = MM_DD_YYYY.match(text)
        if not match:
            return None
        month, day, year = (int(g) for g in match.groups())
        return DateNormalizer.to_iso(year, month, day)

    @staticmethod
    def _parse_free_form(text: str) -> Optional[str]:
        try:
            parsed = date_parser.parse(text, default=NO_YEAR)
        except (ValueError, OverflowError):
            return None
        if parsed.year <= 1900:
            return None
        return parsed.date().isoformat()
