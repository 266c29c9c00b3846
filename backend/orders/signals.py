from django.dispatch import Signal

# Custom signals that other apps (kitchen displays, notifications) can listen to.
# Both are sent only after the surrounding transaction commits.

# Sent with: order, previous_status, new_status
order_status_changed = Signal()

# Sent with: order
order_created = Signal()
