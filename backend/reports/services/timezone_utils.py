"""
Timezone utilities for reports.

Reports group orders by the calendar day in the store's own timezone, so an order
placed at 00:30 in Helsinki counts for that Helsinki day even though it is still
the previous day in UTC.
"""
from datetime import date, datetime, time, timedelta
from typing import Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from django.db.models.functions import TruncDate
from django.utils import timezone

from core_backend.config import ordering_settings

logger = logging.getLogger(__name__)


class TimezoneUtils:
    """Utilities for handling timezone-aware date operations in reports."""

    @staticmethod
    def get_store_timezone(store) -> ZoneInfo:
        """The store's timezone, or ORDERING['DEFAULT_TIMEZONE'] if it is missing or invalid."""
        name = getattr(store, "timezone", None)
        if name:
            try:
                return ZoneInfo(name)
            except (ZoneInfoNotFoundError, ValueError):
                logger.warning(
                    f"Store {store.pk} has invalid timezone '{name}', "
                    f"falling back to {ordering_settings.default_timezone}"
                )
        return ZoneInfo(ordering_settings.default_timezone)

    @staticmethod
    def trunc_date_local(field_name, tz: ZoneInfo):
        """Truncate a datetime field to its calendar date in the given timezone."""
        return TruncDate(field_name, tzinfo=tz)

    @staticmethod
    def today(tz: ZoneInfo) -> date:
        return timezone.now().astimezone(tz).date()

    @staticmethod
    def day_bounds(start: date, end: date, tz: ZoneInfo) -> Tuple[datetime, datetime]:
        """
        Aware datetimes covering the local days start..end inclusive.

        Returns (first instant of start, first instant of the day after end).
        """
        lower = datetime.combine(start, time.min, tzinfo=tz)
        upper = datetime.combine(end + timedelta(days=1), time.min, tzinfo=tz)
        return lower, upper

    @staticmethod
    def date_span(start: date, end: date):
        """Every date from start to end inclusive."""
        for offset in range((end - start).days + 1):
            yield start + timedelta(days=offset)
