import logging

from django.http import HttpResponse
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders.permissions import IsMerchantUser, get_merchant_id
from stores.services import StoreService
from .serializers import (
    DailyOrderStatsSerializer,
    DailyReportParameterSerializer,
    ExportOrderSerializer,
    ExportRequestSerializer,
    OrderStatsSerializer,
    ReportParameterSerializer,
)
from .services import (
    DateRange,
    ExportParams,
    ExportService,
    OrderStatsService,
    TimezoneUtils,
    flatten_export_rows,
    get_orders_for_export,
)

logger = logging.getLogger(__name__)


class ReportViewSet(viewsets.ViewSet):
    """
    Store reports: totals, per-day figures and order exports.
    """

    permission_classes = [IsAuthenticated, IsMerchantUser]

    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        serializer = ReportParameterSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        date_range = None
        if params["start"] or params["end"]:
            store = StoreService.get_owned_store(params["store"], get_merchant_id(request))
            tz = TimezoneUtils.get_store_timezone(store)
            start, end = params["start"], params["end"]
            lower = TimezoneUtils.day_bounds(start, start, tz)[0] if start else None
            upper = TimezoneUtils.day_bounds(end, end, tz)[1] if end else None
            date_range = DateRange(start=lower, end=upper)

        stats = OrderStatsService.get_order_stats(params["store"], get_merchant_id(request), date_range)
        return Response(OrderStatsSerializer(stats).data)

    @action(detail=False, methods=["get"], url_path="daily")
    def daily(self, request):
        serializer = DailyReportParameterSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        daily = OrderStatsService.get_daily_order_stats(
            params["store"], get_merchant_id(request), params["start"], params["end"]
        )
        return Response(DailyOrderStatsSerializer(daily, many=True).data)

    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        serializer = ExportRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        orders = get_orders_for_export(
            ExportParams(
                store_id=params["store"],
                merchant_id=get_merchant_id(request),
                start=params["start"],
                end=params["end"],
                status=params["status"],
            )
        )

        export_format = params["format"]
        if export_format == "json":
            return Response(ExportOrderSerializer(orders, many=True).data)

        rows = flatten_export_rows(orders)
        filename = f"orders_{params['store']}_{params['start']}_{params['end']}"
        if export_format == "csv":
            response = HttpResponse(ExportService.to_csv(rows), content_type="text/csv")
            response["Content-Disposition"] = f'attachment; filename="{filename}.csv"'
        else:
            response = HttpResponse(
                ExportService.to_xlsx(rows),
                content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            )
            response["Content-Disposition"] = f'attachment; filename="{filename}.xlsx"'
        return response
