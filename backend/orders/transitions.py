"""
Legal order status transitions.

CONFIRMED is optional: orders paid at the counter go straight from CREATED to the
kitchen. Statuses only ever move forward; CANCELLED is reachable from every
non-terminal status.
"""
from core_backend.exceptions import ConflictError, ValidationError
from .models import Order

Status = Order.OrderStatus

VALID_STATUS_TRANSITIONS = {
    Status.CREATED: frozenset({Status.CONFIRMED, Status.PREPARING, Status.CANCELLED}),
    Status.CONFIRMED: frozenset({Status.PREPARING, Status.CANCELLED}),
    Status.PREPARING: frozenset({Status.READY, Status.CANCELLED}),
    Status.READY: frozenset({Status.COMPLETED, Status.CANCELLED}),
    Status.COMPLETED: frozenset(),
    Status.CANCELLED: frozenset(),
}

# Timestamp field stamped when an order enters a status.
STATUS_TIMESTAMP_FIELDS = {
    Status.CONFIRMED: "confirmed_at",
    Status.PREPARING: "preparing_at",
    Status.READY: "ready_at",
    Status.COMPLETED: "completed_at",
    Status.CANCELLED: "cancelled_at",
}


def is_terminal(status) -> bool:
    return not VALID_STATUS_TRANSITIONS.get(status)


def can_transition(from_status, to_status) -> bool:
    return to_status in VALID_STATUS_TRANSITIONS.get(from_status, frozenset())


def check_transition(from_status, to_status) -> None:
    """
    Raises:
        ValidationError: unknown target status, or an edge the table does not allow
        ConflictError: the order is already in a terminal status
    """
    if to_status not in Status.values:
        raise ValidationError(
            f"Unknown order status '{to_status}'",
            {"status": to_status, "allowed": sorted(Status.values)},
        )
    if is_terminal(from_status):
        raise ConflictError(
            f"Order is already {from_status} and cannot change status",
            {"current_status": from_status, "requested_status": to_status},
        )
    if not can_transition(from_status, to_status):
        raise ValidationError(
            f"Cannot change order status from {from_status} to {to_status}",
            {
                "current_status": from_status,
                "requested_status": to_status,
                "allowed": sorted(VALID_STATUS_TRANSITIONS[from_status]),
            },
        )
