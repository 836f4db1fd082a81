import dateparser
from datetime import date, datetime, timedelta
from typing import Optional
import pytz
import re

_WEEKDAYS = {
    'monday': 0, 'tuesday': 1, 'wednesday': 2, 'thursday': 3,
    'friday': 4, 'saturday': 5, 'sunday': 6
}

_ISO_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def get_current_datetime(tz: str = "UTC") -> datetime:
    return datetime.now(pytz.timezone(tz))


def today_iso(tz: str = "UTC") -> str:
    """Today's date in ``tz`` as YYYY-MM-DD; the default search date."""
    return get_current_datetime(tz).date().isoformat()


def _parse_weekday(text: str, base_date: datetime) -> Optional[datetime]:
    """'next Friday', 'this Monday' or a bare weekday, relative to base_date."""
    text_lower = text.lower().strip()
    for day_name, day_num in _WEEKDAYS.items():
        if day_name not in text_lower:
            continue
        days_until = (day_num - base_date.weekday()) % 7
        # "this <today>" means today; "next <today>" and a bare weekday mean next week
        if days_until == 0 and 'this' not in text_lower:
            days_until = 7
        return base_date + timedelta(days=days_until)
    return None


def to_iso_date(text: str, tz: str = "UTC") -> str:
    """Convert a user-supplied date to YYYY-MM-DD, or "" when it cannot be read."""
    if text is None:
        return ""
    if isinstance(text, (date, datetime)):
        return text.isoformat()[:10]

    text_stripped = text.strip()
    if _ISO_DATE.match(text_stripped):
        return text_stripped

    base_date = get_current_datetime(tz)
    text_lower = text_stripped.lower()

    if text_lower == 'today':
        return base_date.date().isoformat()
    if text_lower == 'tomorrow':
        return (base_date + timedelta(days=1)).date().isoformat()
    if text_lower == 'yesterday':
        return (base_date - timedelta(days=1)).date().isoformat()

    if re.search(r'\b(next|this)?\s*(monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b', text_lower):
        dt = _parse_weekday(text_lower, base_date)
        if dt:
            return dt.date().isoformat()

    dt = dateparser.parse(text_stripped, settings={"RELATIVE_BASE": base_date.replace(tzinfo=None)})
    if dt:
        return dt.date().isoformat()

    return ""
