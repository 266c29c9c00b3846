"""
Order statistics for a store.

Revenue only counts COMPLETED orders. Cancelled orders are reported separately in
cancelled_count and never contribute to revenue or the average.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional
import logging

from django.db.models import Count, Q, Sum

from core_backend.exceptions import ValidationError
from orders.models import Order
from payments.money import divide_half_up
from stores.models import OrderType
from stores.services import StoreService
from .timezone_utils import TimezoneUtils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateRange:
    """Half-open range [start, end) over order creation time; either bound may be omitted."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class OrderStats:
    count: int
    total_revenue_cents: int
    average_order_value_cents: int
    cancelled_count: int = 0
    orders_by_status: Dict[str, int] = field(default_factory=dict)
    orders_by_type: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DailyOrderStats:
    date: date
    count: int
    total_revenue_cents: int
    average_order_value_cents: int
    cancelled_count: int = 0


def average_cents(total_cents: int, count: int) -> int:
    """Average order value rounded half-up; 0 when there are no orders."""
    if not count:
        return 0
    return divide_half_up(total_cents, count)


COMPLETED = Q(status=Order.OrderStatus.COMPLETED)
CANCELLED = Q(status=Order.OrderStatus.CANCELLED)


class OrderStatsService:
    """Aggregates a store's orders into totals and per-day figures."""

    @staticmethod
    def _filter_range(queryset, date_range: Optional[DateRange]):
        if date_range is None:
            return queryset
        if date_range.start and date_range.end and date_range.end < date_range.start:
            raise ValidationError("Date range end is before its start")
        if date_range.start:
            queryset = queryset.filter(created_at__gte=date_range.start)
        if date_range.end:
            queryset = queryset.filter(created_at__lt=date_range.end)
        return queryset

    @staticmethod
    def get_order_stats(store_id, merchant_id, date_range: Optional[DateRange] = None) -> OrderStats:
        """
        Totals for a store over a date range (all history when omitted).

        Raises:
            NotFoundError: Unknown store
            ForbiddenError: The merchant does not own the store
        """
        store = StoreService.get_owned_store(store_id, merchant_id)
        orders = OrderStatsService._filter_range(Order.objects.filter(store=store), date_range)

        totals = orders.aggregate(
            count=Count("id", filter=COMPLETED),
            revenue=Sum("total_cents", filter=COMPLETED),
            cancelled=Count("id", filter=CANCELLED),
        )
        count = totals["count"] or 0
        revenue = totals["revenue"] or 0

        by_status = {status: 0 for status in Order.OrderStatus.values}
        for row in orders.order_by().values("status").annotate(total=Count("id")):
            by_status[row["status"]] = row["total"]

        by_type = {order_type: 0 for order_type in OrderType.values}
        for row in orders.order_by().values("order_type").annotate(total=Count("id")):
            by_type[row["order_type"]] = row["total"]

        return OrderStats(
            count=count,
            total_revenue_cents=revenue,
            average_order_value_cents=average_cents(revenue, count),
            cancelled_count=totals["cancelled"] or 0,
            orders_by_status=by_status,
            orders_by_type=by_type,
        )

    @staticmethod
    def get_daily_order_stats(store_id, merchant_id, start: date, end: Optional[date] = None) -> List[DailyOrderStats]:
        """
        One row per calendar day in the store's timezone, start..end inclusive.

        end defaults to today in the store's timezone. Days without orders are
        included with zero values. Rows are sorted by date ascending.

        Raises:
            ValidationError: end before start
        """
        store = StoreService.get_owned_store(store_id, merchant_id)
        tz = TimezoneUtils.get_store_timezone(store)
        if end is None:
            end = TimezoneUtils.today(tz)
        validate_day_order(start, end)

        lower, upper = TimezoneUtils.day_bounds(start, end, tz)
        rows = (
            Order.objects.filter(store=store, created_at__gte=lower, created_at__lt=upper)
            .annotate(day=TimezoneUtils.trunc_date_local("created_at", tz))
            .order_by()
            .values("day")
            .annotate(
                count=Count("id", filter=COMPLETED),
                revenue=Sum("total_cents", filter=COMPLETED),
                cancelled=Count("id", filter=CANCELLED),
            )
        )
        by_day = {row["day"]: row for row in rows}

        daily = []
        for day in TimezoneUtils.date_span(start, end):
            row = by_day.get(day, {})
            count = row.get("count") or 0
            revenue = row.get("revenue") or 0
            daily.append(
                DailyOrderStats(
                    date=day,
                    count=count,
                    total_revenue_cents=revenue,
                    average_order_value_cents=average_cents(revenue, count),
                    cancelled_count=row.get("cancelled") or 0,
                )
            )
        return daily


def validate_day_order(start: date, end: date) -> None:
    if end < start:
        raise ValidationError(
            "End date is before start date",
            {"start": start.isoformat(), "end": end.isoformat()},
        )
