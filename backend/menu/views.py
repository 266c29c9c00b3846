from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.permissions import IsMerchantUser, get_merchant_id
from stores.services import StoreService
from .serializers import ItemSerializer, ItemValidationResultSerializer, SetItemActiveSerializer
from .services import ItemService


class ItemValidationView(APIView):
    """GET the publishability report of an item."""

    permission_classes = [IsAuthenticated, IsMerchantUser]

    def get(self, request: Request, pk) -> Response:
        result = ItemService.get_validation(pk, get_merchant_id(request))
        return Response(ItemValidationResultSerializer(result).data)


class ItemActiveView(APIView):
    """POST {"is_active": bool} to publish or withdraw an item."""

    permission_classes = [IsAuthenticated, IsMerchantUser]

    def post(self, request: Request, pk) -> Response:
        serializer = SetItemActiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = ItemService.get_item(pk)
        StoreService.assert_owner(item.store, get_merchant_id(request))
        item = ItemService.set_active(item, serializer.validated_data["is_active"])
        return Response(ItemSerializer(item).data)
