"""
Relative date resolution.

Turns phrases like 'yesterday', '3 days ago' or 'last monday' into
YYYY-MM-DD strings anchored to the local calendar day. Unrecognized input
is returned unchanged and left for Harvest to reject.
"""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU


CANONICAL_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
AGO = re.compile(r"^(\d+)\s+(day|week|month)s?\s+ago$", re.ASCII)
WEEKDAY_PHRASE = re.compile(
    r"^(last|this)\s+(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$"
)

WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}

FIXED_OFFSETS = {
    "today": 0,
    "now": 0,
    "yesterday": -1,
    "tomorrow": 1,
}


def today_iso(today: Optional[date] = None) -> str:
    """Local today as YYYY-MM-DD."""
    return (today or date.today()).isoformat()


def resolve_date(text: str, today: Optional[date] = None) -> str:
    """
    Resolve a date expression to YYYY-MM-DD.

    Supported forms (case-insensitive, surrounding whitespace ignored):
        - 'today', 'now', 'yesterday', 'tomorrow'
        - 'N days ago', 'N weeks ago', 'N months ago'
        - 'last <weekday>': most recent weekday strictly before today
        - 'this <weekday>': next weekday on or after today

    Month arithmetic clamps to the end of shorter months
    (2026-03-31 minus 1 month is 2026-02-28).

    Args:
        text: Date expression
        today: Anchor day (default: local today)

    Returns:
        Canonical date string, or text unchanged if it is already canonical
        or not recognized.
    """
    if CANONICAL_DATE.match(text):
        return text

    anchor = today or date.today()
    try:
        resolved = _shift(text.strip().lower(), anchor)
    except (OverflowError, ValueError):
        # Offset lands outside the representable date range
        return text

    return resolved.isoformat() if resolved is not None else text


def _shift(phrase: str, anchor: date) -> Optional[date]:
    """Apply a relative phrase to anchor, or None if the phrase is unknown."""
    if phrase in FIXED_OFFSETS:
        return anchor + timedelta(days=FIXED_OFFSETS[phrase])

    match = AGO.match(phrase)
    if match:
        amount = int(match.group(1))
        unit = match.group(2)
        if unit == "day":
            return anchor - timedelta(days=amount)
        if unit == "week":
            return anchor - timedelta(weeks=amount)
        return anchor - relativedelta(months=amount)

    match = WEEKDAY_PHRASE.match(phrase)
    if match:
        weekday = WEEKDAYS[match.group(2)]
        if match.group(1) == "last":
            # Step off today first so a matching weekday goes back a full week
            return anchor + relativedelta(days=-1, weekday=weekday(-1))
        return anchor + relativedelta(weekday=weekday(+1))

    return None
