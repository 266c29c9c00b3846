from dataclasses import dataclass
from typing import Optional, Tuple
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from core_backend.config import ordering_settings
from core_backend.exceptions import (
    ConflictError,
    NotFoundError,
    OrderingError,
    PaymentProviderError,
    ValidationError,
)
from menu.services import CartLine, ItemService
from orders.calculators import price_order
from orders.models import Order, OrderItem, OrderItemOption
from orders.signals import order_created, order_status_changed
from orders.transitions import STATUS_TIMESTAMP_FIELDS, check_transition
from payments.gateways import GatewayError
from payments.money import format_money
from stores.models import OrderType
from stores.services import StoreService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateOrderInput:
    store_id: int
    lines: Tuple[CartLine, ...]
    order_type: str = OrderType.TAKEAWAY
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    customer_notes: str = ""
    idempotency_key: Optional[str] = None


class OrderService:
    """Core service for order lifecycle management - creating, transitioning, cancelling orders."""

    @staticmethod
    def get_by_id(order_id) -> Order:
        """
        Fetch an order with its items and options.

        Raises:
            NotFoundError: If no order has this id
        """
        try:
            return (
                Order.objects.select_related('store', 'merchant')
                .prefetch_related('items__options')
                .get(pk=order_id)
            )
        except (Order.DoesNotExist, DjangoValidationError, ValueError, TypeError):
            raise NotFoundError(f"Order {order_id} not found", {"order_id": str(order_id)})

    @staticmethod
    def get_for_merchant(order_id, merchant_id) -> Order:
        """
        Fetch an order and verify the merchant owns its store.

        Raises:
            NotFoundError: If no order has this id
            ForbiddenError: If the order belongs to another merchant's store
        """
        order = OrderService.get_by_id(order_id)
        StoreService.assert_owner(order.store, merchant_id)
        return order

    @staticmethod
    @transaction.atomic
    def create_order(data: CreateOrderInput) -> Order:
        """
        Price a cart and persist it as a new order in status CREATED.

        The order, its items and their options are written in one transaction.
        Resubmitting with the same idempotency key returns the original order.

        Raises:
            NotFoundError: Unknown store or item
            ValidationError: Empty cart, closed store, disabled order type, or invalid lines
        """
        if not data.lines:
            raise ValidationError("Order must contain at least one item")

        store = StoreService.get_store(data.store_id)
        if not store.is_active or not store.merchant.is_active:
            raise ValidationError(
                f"Store '{store.name}' is not accepting orders", {"store_id": store.pk}
            )
        if data.order_type not in OrderType.values or not store.accepts_order_type(data.order_type):
            raise ValidationError(
                f"Order type '{data.order_type}' is not available at this store",
                {"order_type": data.order_type},
            )

        if data.idempotency_key:
            existing = Order.objects.filter(store=store, idempotency_key=data.idempotency_key).first()
            if existing is not None:
                logger.info(
                    f"Returning existing order {existing.pk} for idempotency key {data.idempotency_key}"
                )
                return OrderService.get_by_id(existing.pk)

        lines = ItemService.resolve_snapshots(store, data.lines)
        priced = price_order(lines)

        try:
            with transaction.atomic():
                order = Order.objects.create(
                    store=store,
                    merchant_id=store.merchant_id,
                    order_type=data.order_type,
                    pickup_number=StoreService.next_pickup_number(store),
                    idempotency_key=data.idempotency_key or None,
                    customer_name=data.customer_name,
                    customer_email=data.customer_email,
                    customer_phone=data.customer_phone,
                    customer_notes=data.customer_notes,
                    currency=store.currency,
                    subtotal_cents=priced.totals.subtotal_cents,
                    vat_cents=priced.totals.vat_cents,
                    total_cents=priced.totals.total_cents,
                )
        except IntegrityError:
            # Lost a race with a concurrent request carrying the same idempotency key.
            existing = Order.objects.filter(store=store, idempotency_key=data.idempotency_key).first()
            if existing is None:
                raise
            return OrderService.get_by_id(existing.pk)

        options = []
        for position, line in enumerate(priced.items):
            order_item = OrderItem.objects.create(
                order=order,
                item_id=line.item_id,
                item_name=line.name,
                quantity=line.quantity,
                unit_price_cents=line.unit_price_cents,
                options_price_cents=line.options_price_cents,
                line_total_cents=line.line_total_cents,
                vat_rate_basis_points=line.vat_rate_basis_points,
                vat_cents=line.vat_cents,
                position=position,
            )
            options.extend(
                OrderItemOption(
                    order_item=order_item,
                    choice_id=option.choice_id,
                    option_group_id=option.option_group_id,
                    option_group_name=option.option_group_name,
                    choice_name=option.choice_name,
                    price_delta_cents=option.price_delta_cents,
                )
                for option in line.options
            )
        OrderItemOption.objects.bulk_create(options)

        logger.info(
            f"Order {order.pk} created at store {store.pk}: pickup #{order.pickup_number}, "
            f"{len(priced.items)} line(s), total {format_money(order.currency, order.total_cents)}"
        )

        order = OrderService.get_by_id(order.pk)
        transaction.on_commit(lambda: order_created.send(sender=Order, order=order))
        return order

    @staticmethod
    @transaction.atomic
    def update_order_status(order_id, merchant_id, new_status) -> Order:
        """
        Move an order to a new status.

        Raises:
            NotFoundError: Unknown order
            ForbiddenError: The merchant does not own the order's store
            ConflictError: The order is terminal, or another request changed it first
            ValidationError: The transition is not allowed
            PaymentProviderError: Capturing or refunding the payment failed
        """
        order = OrderService.get_for_merchant(order_id, merchant_id)
        return OrderService.transition(order, new_status)

    @staticmethod
    @transaction.atomic
    def cancel_order(order_id, merchant_id, reason=None) -> Order:
        """
        Cancel an order from any non-terminal status.

        Cancelling an already cancelled order returns it unchanged. A paid order is
        refunded through the payment gateway.

        Raises:
            ConflictError: The order is already COMPLETED
        """
        order = OrderService.get_for_merchant(order_id, merchant_id)
        if order.status == Order.OrderStatus.CANCELLED:
            return order
        if order.status == Order.OrderStatus.COMPLETED:
            logger.warning(f"Refused to cancel completed order {order.pk}")
            raise ConflictError(
                "Completed orders cannot be cancelled",
                {"current_status": order.status},
            )

        try:
            return OrderService.transition(order, Order.OrderStatus.CANCELLED, cancel_reason=reason)
        except ConflictError:
            current = OrderService.get_by_id(order.pk)
            if current.status == Order.OrderStatus.CANCELLED:
                return current
            raise

    @staticmethod
    @transaction.atomic
    def transition(order: Order, new_status, cancel_reason=None) -> Order:
        """
        Apply a status transition to an order as it was when it was read.

        The status write is conditional on the order's version. When another request
        changed the order first, the requested transition is checked again against
        the order's current status: if it is still legal it is applied on top of the
        newer version, otherwise ConflictError is raised. Payment side effects run
        after the write, inside the same transaction.
        """
        previous_status = order.status
        try:
            check_transition(previous_status, new_status)
        except OrderingError as exc:
            logger.warning(f"Rejected transition for order {order.pk}: {exc.message}")
            raise

        now = timezone.now()
        updates = {
            "status": new_status,
            "version": F("version") + 1,
            "updated_at": now,
            STATUS_TIMESTAMP_FIELDS[new_status]: now,
        }
        if new_status == Order.OrderStatus.CANCELLED:
            updates["cancel_reason"] = cancel_reason or ""

        updated = Order.objects.filter(pk=order.pk, version=order.version).update(**updates)
        if not updated:
            # Lost the race: re-check the request against what the winner wrote.
            current = Order.objects.select_for_update().get(pk=order.pk)
            logger.warning(
                f"Concurrent update on order {order.pk}: expected {previous_status} "
                f"(version {order.version}), found {current.status} (version {current.version})"
            )
            try:
                check_transition(current.status, new_status)
            except OrderingError as exc:
                raise ConflictError(
                    f"Order was changed by another request: {exc.message}",
                    {"current_status": current.status, "requested_status": new_status},
                ) from exc

            Order.objects.filter(pk=current.pk, version=current.version).update(**updates)
            order, previous_status = current, current.status

        OrderService._apply_payment_side_effects(order, previous_status, new_status, cancel_reason)

        logger.info(f"Order {order.pk} status changed: {previous_status} -> {new_status}")

        order = OrderService.get_by_id(order.pk)
        transaction.on_commit(
            lambda: order_status_changed.send(
                sender=Order,
                order=order,
                previous_status=previous_status,
                new_status=new_status,
            )
        )
        return order

    @staticmethod
    def _apply_payment_side_effects(order: Order, previous_status, new_status, reason=None) -> None:
        """
        Capture on confirmation, refund on cancellation of a paid order.

        A gateway failure raises PaymentProviderError, which rolls back the
        status write made in the same transaction.
        """
        capture = (
            previous_status == Order.OrderStatus.CREATED
            and new_status == Order.OrderStatus.CONFIRMED
            and order.payment_status == Order.PaymentStatus.PENDING
        )
        refund = (
            new_status == Order.OrderStatus.CANCELLED
            and order.payment_status == Order.PaymentStatus.PAID
        )
        if not capture and not refund:
            return

        gateway = ordering_settings.get_payment_gateway()
        try:
            if capture:
                reference = gateway.capture(order)
                Order.objects.filter(pk=order.pk).update(
                    payment_status=Order.PaymentStatus.PAID,
                    payment_reference=reference,
                )
            else:
                reference = gateway.refund(order, order.total_cents, reason=reason)
                Order.objects.filter(pk=order.pk).update(
                    payment_status=Order.PaymentStatus.REFUNDED,
                    refund_reference=reference,
                )
                logger.info(
                    f"Refunded {format_money(order.currency, order.total_cents)} for order {order.pk}"
                )
        except GatewayError as exc:
            logger.error(
                f"Payment provider failed for order {order.pk} "
                f"({previous_status} -> {new_status}): {exc}",
                exc_info=True,
            )
            raise PaymentProviderError(
                "Payment provider failed; the order status was not changed",
                {"current_status": previous_status, "requested_status": new_status},
            ) from exc
