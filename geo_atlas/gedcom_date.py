"""
gedcom_date.py - Date interpretation for free-text genealogy dates.

Dates are stored as the free text found in the upload. GedcomDate interprets
that text with ged4py when an ordering is needed (narrative generation), and
supports:
    - ISO dates ("1900-05-03")
    - GEDCOM dates ("15 JUL 1913", "ABT 1762", "BET 1900 AND 1910")
    - Free-text phrases containing a year ("Spring 1913")

Module: geo_atlas.gedcom_date
"""

import logging
import re
from datetime import date as _date
from typing import Optional, Union

from ged4py.calendar import GregorianDate
from ged4py.date import DateValue

logger = logging.getLogger(__name__)

_MONTH_ABBR_TO_NUM = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

DEFAULT_SORT_DATE = _date(1900, 1, 1)


class GedcomDate:
    """
    Wraps a free-text date and resolves it to a single calendar date.

    Attributes:
        original (Optional[str]): The date text as supplied.
        date (Union[DateValue, str, None]): ged4py parse result, or the original text if parsing failed.
    """
    __slots__ = ['original', 'date']

    YEAR_RE = re.compile(r'(?<!\d)(-?\d{3,4})(?!\d)')
    MONTH_RE = re.compile(r'\b(JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC)[A-Z]*\b', re.I)
    DAY_RE = re.compile(r'(?<!\d)(\d{1,2})(?:st|nd|rd|th)?(?=\s+[A-Za-z]{3,9})')

    def __init__(self, date: Optional[str]):
        """
        Initialize a GedcomDate.

        Args:
            date (Optional[str]): Free-text date, may be None or empty.
        """
        self.original: Optional[str] = date
        self.date: Union[DateValue, str, None] = self._parse(date)

    def _parse(self, date: Optional[str]) -> Union[DateValue, str, None]:
        if date is None:
            return None
        if not isinstance(date, str):
            raise TypeError(f"Unsupported date type: {type(date)}")
        text = date.strip()
        if not text:
            return None
        try:
            return DateValue.parse(text)
        except Exception as e:
            logger.warning(f"Failed to parse date string '{date}': {e}")
            return text

    @property
    def single(self) -> Optional[Union[GregorianDate, str]]:
        """
        Resolve to one date: the first date of a range or period, the parsed
        phrase for free text, otherwise the simple date.
        """
        if self.date is None:
            return None
        if isinstance(self.date, str):
            return self._parse_fallback_phrase(self.date)
        kind = getattr(self.date, 'kind', None)
        if kind is None:
            return None
        if kind.name in ("RANGE", "PERIOD"):
            return getattr(self.date, 'date1', None) or getattr(self.date, 'date2', None)
        if kind.name == "PHRASE":
            return self._parse_fallback_phrase(getattr(self.date, 'phrase', None))
        return getattr(self.date, 'date', None)

    @property
    def year_num(self) -> Optional[int]:
        """
        Return the year as an integer, or None if no year can be found.
        """
        single = self.single
        year = getattr(single, 'year', None)
        return int(year) if year is not None else None

    def _parse_fallback_phrase(self, phrase: Optional[str]) -> Optional[Union[GregorianDate, str]]:
        """
        Pull a year, month and day out of free text such as 'Spring 1913'.

        Returns:
            GregorianDate if a year was found, else the phrase unchanged.
        """
        if not phrase:
            return None
        year_match = self.YEAR_RE.search(phrase)
        if not year_match:
            return phrase
        month_match = self.MONTH_RE.search(phrase)
        day_match = self.DAY_RE.search(phrase)
        month = month_match.group(1).upper()[:3] if month_match else None
        day = int(day_match.group(1)) if day_match and month else None
        return GregorianDate(year=int(year_match.group(1)), month=month, day=day)

    def as_date(self, default: _date = DEFAULT_SORT_DATE) -> _date:
        """
        Return a datetime.date usable as a sort key.

        ISO dates are taken as-is; partial dates fill the missing month/day with 1.
        Anything without a usable year returns the default.

        Args:
            default (date): Date used when the text cannot be interpreted.
        """
        if self.original and isinstance(self.original, str):
            try:
                return _date.fromisoformat(self.original.strip())
            except ValueError:
                pass
        single = self.single
        year = getattr(single, 'year', None)
        if year is None:
            return default
        month = getattr(single, 'month', None)
        month_num = _MONTH_ABBR_TO_NUM.get(str(month).upper()[:3], 1) if month else 1
        day = getattr(single, 'day', None) or 1
        try:
            return _date(int(year), month_num, int(day))
        except (TypeError, ValueError):
            return default

    def __str__(self) -> str:
        return self.original or ''

    def __repr__(self) -> str:
        return f"GedcomDate({self.original!r})"


def sort_date(text: Optional[str], default: _date = DEFAULT_SORT_DATE) -> _date:
    """
    Sort key for a free-text event date; empty or unparseable text sorts as the default.
    """
    if not text:
        return default
    return GedcomDate(text).as_date(default)
