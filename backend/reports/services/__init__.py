"""
Reports services package.

- OrderStatsService: totals and per-day figures for a store
- get_orders_for_export / flatten_export_rows / ExportService: bookkeeping exports
"""

from .stats_service import (
    DailyOrderStats,
    DateRange,
    OrderStats,
    OrderStatsService,
)
from .export_service import (
    EXPORT_COLUMNS,
    ExportOrder,
    ExportOrderItem,
    ExportParams,
    ExportService,
    flatten_export_rows,
    get_orders_for_export,
)
from .timezone_utils import TimezoneUtils

get_order_stats = OrderStatsService.get_order_stats
get_daily_order_stats = OrderStatsService.get_daily_order_stats

__all__ = [
    "DailyOrderStats",
    "DateRange",
    "OrderStats",
    "OrderStatsService",
    "get_order_stats",
    "get_daily_order_stats",
    "EXPORT_COLUMNS",
    "ExportOrder",
    "ExportOrderItem",
    "ExportParams",
    "ExportService",
    "flatten_export_rows",
    "get_orders_for_export",
    "TimezoneUtils",
]
