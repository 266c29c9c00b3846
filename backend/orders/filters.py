import django_filters
from .models import Order


class OrderFilter(django_filters.FilterSet):
    """
    Filters for a merchant's order list.

    created_at__gte / created_at__lte take ISO datetimes; store, status and
    order_type are exact matches.
    """

    created_at__gte = django_filters.IsoDateTimeFilter(field_name='created_at', lookup_expr='gte')
    created_at__lte = django_filters.IsoDateTimeFilter(field_name='created_at', lookup_expr='lte')
    status = django_filters.MultipleChoiceFilter(choices=Order.OrderStatus.choices)

    class Meta:
        model = Order
        fields = ['store', 'status', 'order_type', 'payment_status']
