"""
Date utilities for presenting patient record dates.

The record service sends dates either as US-style strings ("08/23/1996")
or as ISO 8601 ("1996-08-23", "1996-08-23T00:00:00Z"). The dashboard shows
them in the long US form "August 23, 1996".

Usage:
    from core.datetime_utils import parse_date, format_long_date

    format_long_date("08/23/1996")  # "August 23, 1996"
"""
import logging
from datetime import date, datetime
from typing import Optional, Union

logger = logging.getLogger(__name__)

# Tried in order after ISO 8601
_DATE_FORMATS = ("%m/%d/%Y", "%Y/%m/%d", "%B %d, %Y", "%b %d, %Y")

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def parse_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """
    Parse a calendar date from a record service value.

    Returns:
        The date, or None if the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    iso_text = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso_text).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    logger.debug("Unparseable date", extra={"value": text})
    return None


def format_long_date(value: Union[str, date, datetime, None]) -> str:
    """
    Format a date as "Month D, YYYY".

    Unparseable input is returned unchanged (empty string for None) so the
    dashboard still shows what the record service sent.

    Example:
        >>> format_long_date("1996-08-23")
        'August 23, 1996'
    """
    parsed = parse_date(value)
    if parsed is None:
        return "" if value is None else str(value)
    return f"{_MONTH_NAMES[parsed.month - 1]} {parsed.day}, {parsed.year}"
