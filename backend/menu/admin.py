from django.contrib import admin
from .models import VatGroup, Category, Item, OptionGroup, OptionChoice


@admin.register(VatGroup)
class VatGroupAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'rate_basis_points', 'merchant']
    list_filter = ['merchant']


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'store', 'is_active', 'display_order']
    list_filter = ['is_active', 'store']


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'store', 'category', 'price_cents', 'vat_group', 'is_active']
    list_filter = ['is_active', 'store', 'category']
    search_fields = ['name']
    filter_horizontal = ['option_groups']


class OptionChoiceInline(admin.TabularInline):
    model = OptionChoice
    extra = 1


@admin.register(OptionGroup)
class OptionGroupAdmin(admin.ModelAdmin):
    list_display = ['name', 'store', 'min_select', 'max_select']
    inlines = [OptionChoiceInline]
