from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
import logging

from core_backend.exceptions import ValidationError
from orders.filters import OrderFilter
from orders.models import Order
from orders.permissions import IsMerchantUser, get_merchant_id
from orders.serializers import OrderCreateSerializer, OrderSerializer
from orders.services import KitchenService, OrderService
from stores.services import StoreService

logger = logging.getLogger(__name__)


# Import action mixins
from .status_actions import StatusActionsMixin


class OrderViewSet(
    StatusActionsMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    Orders API.

    Creating an order is public (storefront checkout). Everything else is limited
    to the merchant that owns the order's store.
    """

    serializer_class = OrderSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter

    def get_permissions(self):
        if self.action == "create":
            return [AllowAny()]
        return [IsAuthenticated(), IsMerchantUser()]

    def get_queryset(self):
        return (
            Order.objects.filter(merchant_id=get_merchant_id(self.request))
            .select_related("store")
            .prefetch_related("items__options")
        )

    def create(self, request: Request) -> Response:
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.create_order(serializer.to_input())
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request: Request, pk=None) -> Response:
        order = OrderService.get_for_merchant(pk, get_merchant_id(request))
        return Response(OrderSerializer(order).data)

    @action(detail=False, methods=["get"], url_path="kitchen")
    def kitchen(self, request: Request) -> Response:
        """Kitchen queue for ?store=<id>, oldest first."""
        store_id = request.query_params.get("store")
        if not store_id:
            raise ValidationError("The 'store' query parameter is required", {"field": "store"})

        store = StoreService.get_store(store_id)
        queue = KitchenService.get_queue(store, get_merchant_id(request))
        return Response(OrderSerializer(queue, many=True).data)
