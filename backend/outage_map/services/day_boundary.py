"""Daily baseline rollover decision.

"Today" is the calendar date in a fixed reference timezone. The baseline rolls
over on the first fetch cycle that sees a new date; there is no midnight timer.
"""

import logging
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)


class DayBoundaryPolicy:
    def __init__(self, timezone_name: str = "America/Los_Angeles", last_reset_date: date | None = None):
        self.tz = ZoneInfo(timezone_name)
        self.last_reset_date = last_reset_date

    def today(self, now: datetime | None = None) -> date:
        """Calendar date of `now` in the reference timezone.

        A naive `now` is taken to already be reference-zone local time.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=self.tz)
        return now.astimezone(self.tz).date()

    def rollover_due(self, today: date) -> bool:
        return self.last_reset_date != today

    def mark_reset(self, today: date) -> None:
        logger.debug("Day boundary crossed: %s -> %s", self.last_reset_date, today)
        self.last_reset_date = today

    def should_rollover(self, now: datetime | None = None) -> bool:
        """True on the first call of a new local day (or when never reset).

        Records the new date as the last reset date when it returns True.
        Persisting the rotated baseline is left to the caller.
        """
        today = self.today(now)
        if not self.rollover_due(today):
            return False
        self.mark_reset(today)
        return True
