from django.urls import path
from . import views

app_name = "reports"

report_views = views.ReportViewSet

urlpatterns = [
    path("stats/", report_views.as_view({"get": "stats"}), name="stats"),
    path("daily/", report_views.as_view({"get": "daily"}), name="daily"),
    path("export/", report_views.as_view({"get": "export"}), name="export"),
]

# URL patterns reference:
#
# GET /api/reports/stats/?store=1&start=2026-01-01&end=2026-01-31
# GET /api/reports/daily/?store=1&start=2026-01-01&end=2026-01-31
# GET /api/reports/export/?store=1&start=2026-01-01&end=2026-01-31&status=COMPLETED&format=csv
