from django.contrib import admin
from .models import Store, StoreCounter


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ['name', 'merchant', 'timezone', 'currency', 'is_active']
    list_filter = ['is_active', 'timezone']
    search_fields = ['name', 'slug', 'merchant__name']


@admin.register(StoreCounter)
class StoreCounterAdmin(admin.ModelAdmin):
    list_display = ['store', 'last_pickup_number']
    readonly_fields = ['last_pickup_number']
