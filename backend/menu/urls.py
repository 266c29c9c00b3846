from django.urls import path
from .views import ItemActiveView, ItemValidationView

app_name = "menu"

urlpatterns = [
    path("items/<int:pk>/validation/", ItemValidationView.as_view(), name="item-validation"),
    path("items/<int:pk>/active/", ItemActiveView.as_view(), name="item-active"),
]
