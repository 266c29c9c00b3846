from rest_framework import permissions


def get_merchant_id(request):
    """The merchant the authenticated user administers, or None."""
    user = getattr(request, "user", None)
    if not user or not user.is_authenticated:
        return None
    merchant = getattr(user, "merchant", None)
    return merchant.pk if merchant is not None else None


class IsMerchantUser(permissions.BasePermission):
    """
    Allows authenticated users that administer a merchant.

    Store- and order-level ownership is checked by the service layer, which
    raises ForbiddenError for resources of another merchant.
    """

    message = "Only merchant accounts can access this endpoint."

    def has_permission(self, request, view):
        return get_merchant_id(request) is not None
