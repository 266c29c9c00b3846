"""
Order export for bookkeeping.

get_orders_for_export returns one ExportOrder per order with its lines nested.
flatten_export_rows turns that into one row per order item (order columns repeated
on every line), which is what the CSV and XLSX writers emit.
"""
import csv
import io
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from core_backend.config import ordering_settings
from core_backend.exceptions import ValidationError
from orders.models import Order
from stores.services import StoreService
from .stats_service import validate_day_order
from .timezone_utils import TimezoneUtils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportParams:
    """start and end are calendar days in the store's timezone, both inclusive."""
    store_id: int
    merchant_id: Any
    start: date
    end: date
    status: Optional[str] = None


@dataclass(frozen=True)
class ExportOrderItem:
    item_name: str
    quantity: int
    unit_price_cents: int
    options_price_cents: int
    line_total_cents: int
    vat_rate_basis_points: int
    vat_cents: int
    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExportOrder:
    order_id: str
    pickup_number: int
    created_at: datetime
    status: str
    payment_status: str
    order_type: str
    customer_name: str
    customer_email: str
    currency: str
    subtotal_cents: int
    vat_cents: int
    total_cents: int
    cancel_reason: str
    items: Tuple[ExportOrderItem, ...]


EXPORT_COLUMNS = [
    "order_id",
    "pickup_number",
    "created_at",
    "status",
    "payment_status",
    "order_type",
    "customer_name",
    "customer_email",
    "currency",
    "order_subtotal_cents",
    "order_vat_cents",
    "order_total_cents",
    "cancel_reason",
    "item_name",
    "quantity",
    "unit_price_cents",
    "options_price_cents",
    "line_total_cents",
    "vat_rate_basis_points",
    "vat_cents",
    "options",
]


def _to_export_order(order: Order, tz) -> ExportOrder:
    return ExportOrder(
        order_id=str(order.pk),
        pickup_number=order.pickup_number,
        created_at=order.created_at.astimezone(tz),
        status=order.status,
        payment_status=order.payment_status,
        order_type=order.order_type,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        currency=order.currency,
        subtotal_cents=order.subtotal_cents,
        vat_cents=order.vat_cents,
        total_cents=order.total_cents,
        cancel_reason=order.cancel_reason,
        items=tuple(
            ExportOrderItem(
                item_name=item.item_name,
                quantity=item.quantity,
                unit_price_cents=item.unit_price_cents,
                options_price_cents=item.options_price_cents,
                line_total_cents=item.line_total_cents,
                vat_rate_basis_points=item.vat_rate_basis_points,
                vat_cents=item.vat_cents,
                options=tuple(
                    f"{option.option_group_name}: {option.choice_name}"
                    for option in item.options.all()
                ),
            )
            for item in order.items.all()
        ),
    )


def validate_export_span(start: date, end: date) -> None:
    validate_day_order(start, end)
    span = (end - start).days + 1
    if span > ordering_settings.export_max_days:
        raise ValidationError(
            f"Date range covers {span} days; at most {ordering_settings.export_max_days} are allowed",
            {"max_days": ordering_settings.export_max_days},
        )


def get_orders_for_export(params: ExportParams) -> List[ExportOrder]:
    """
    Orders of a store created between two local days, newest first.

    Raises:
        NotFoundError: Unknown store
        ForbiddenError: The merchant does not own the store
        ValidationError: Bad range or unknown status filter
    """
    store = StoreService.get_owned_store(params.store_id, params.merchant_id)
    validate_export_span(params.start, params.end)
    if params.status and params.status not in Order.OrderStatus.values:
        raise ValidationError(
            f"Unknown order status '{params.status}'",
            {"status": params.status},
        )

    tz = TimezoneUtils.get_store_timezone(store)
    lower, upper = TimezoneUtils.day_bounds(params.start, params.end, tz)

    orders = Order.objects.filter(store=store, created_at__gte=lower, created_at__lt=upper)
    if params.status:
        orders = orders.filter(status=params.status)
    orders = orders.prefetch_related("items__options").order_by("-created_at")

    return [_to_export_order(order, tz) for order in orders]


def flatten_export_rows(orders: Iterable[ExportOrder]) -> List[Dict[str, Any]]:
    """One dict per order item, keyed by EXPORT_COLUMNS."""
    rows = []
    for order in orders:
        order_columns = {
            "order_id": order.order_id,
            "pickup_number": order.pickup_number,
            "created_at": order.created_at.isoformat(),
            "status": order.status,
            "payment_status": order.payment_status,
            "order_type": order.order_type,
            "customer_name": order.customer_name,
            "customer_email": order.customer_email,
            "currency": order.currency,
            "order_subtotal_cents": order.subtotal_cents,
            "order_vat_cents": order.vat_cents,
            "order_total_cents": order.total_cents,
            "cancel_reason": order.cancel_reason,
        }
        for item in order.items:
            rows.append({
                **order_columns,
                "item_name": item.item_name,
                "quantity": item.quantity,
                "unit_price_cents": item.unit_price_cents,
                "options_price_cents": item.options_price_cents,
                "line_total_cents": item.line_total_cents,
                "vat_rate_basis_points": item.vat_rate_basis_points,
                "vat_cents": item.vat_cents,
                "options": "; ".join(item.options),
            })
    return rows


class ExportService:
    """Writers for flattened export rows."""

    @classmethod
    def to_csv(cls, rows: List[Dict[str, Any]]) -> bytes:
        """
        Export rows to CSV format.

        Returns:
            CSV file content as bytes
        """
        output = io.StringIO()
        try:
            writer = csv.DictWriter(output, fieldnames=EXPORT_COLUMNS)
            writer.writeheader()
            writer.writerows(rows)
            logger.info(f"CSV export generated with {len(rows)} rows")
            return output.getvalue().encode("utf-8")
        finally:
            output.close()

    @classmethod
    def to_xlsx(cls, rows: List[Dict[str, Any]]) -> bytes:
        """
        Export rows to Excel format.

        Returns:
            Excel file content as bytes
        """
        wb = Workbook()
        ws = wb.active
        ws.title = "Orders"

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(
            start_color="366092", end_color="366092", fill_type="solid"
        )
        header_alignment = Alignment(horizontal="center", vertical="center")

        ws.append(EXPORT_COLUMNS)
        for cell in ws[1]:
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment

        for row in rows:
            ws.append([row.get(column) for column in EXPORT_COLUMNS])

        # Auto-adjust column widths
        for column in ws.columns:
            column_letter = get_column_letter(column[0].column)
            max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
            ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

        output = io.BytesIO()
        wb.save(output)
        logger.info(f"Excel export generated with {len(rows)} rows")
        return output.getvalue()
