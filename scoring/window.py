"""
Recency windows.
"Now" is fixed once per TimeWindow so a whole report uses the same reference day.
"""
import logging
from datetime import date, datetime, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'

# days used for project recency and rookie detection
RECENT_THRESHOLD_DAYS = 40


def parse_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse a calendar date, returning None for anything malformed."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        parsed = datetime.strptime(text[:10], DATE_FORMAT).date()
        if len(text) > 10:
            # the rest must complete an ISO timestamp, e.g. 2025-06-20T10:11:12Z
            if text[10] not in 'T ':
                raise ValueError(f"unexpected date suffix in {text!r}")
            datetime.fromisoformat(text[:-1] + '+00:00' if text.endswith('Z') else text)
        return parsed
    except ValueError:
        logger.debug("Unparseable date %r treated as outside every window", value)
        return None


class TimeWindow:
    """
    Recency predicate anchored at a fixed day.
    """

    def __init__(self, today: Optional[date] = None):
        self.today = parse_date(today) if today is not None else datetime.now(timezone.utc).date()
        if self.today is None:
            raise ValueError(f"Invalid reference date: {today!r}")

    @property
    def current_year(self) -> str:
        return str(self.today.year)

    def days_since(self, value) -> Optional[int]:
        parsed = parse_date(value)
        if parsed is None:
            return None
        return (self.today - parsed).days

    def is_recent(self, value, days_ago: int) -> bool:
        """True when value is at most days_ago days before today (inclusive).
        Malformed dates are never recent.
        """
        days = self.days_since(value)
        if days is None:
            return False
        return days <= days_ago


def date_text(value) -> str:
    """Return value as YYYY-MM-DD, or an empty string when malformed."""
    parsed = parse_date(value)
    return parsed.strftime(DATE_FORMAT) if parsed else ''
