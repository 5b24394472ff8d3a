"""
Inventory — Django Admin Configuration

@file inventory/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import InventoryEntry

STATUS_COLORS = {
    InventoryEntry.StockStatus.IN_STOCK: '#28a745',
    InventoryEntry.StockStatus.LOW_STOCK: '#fd7e14',
    InventoryEntry.StockStatus.OUT_OF_STOCK: '#dc3545',
}


@admin.register(InventoryEntry)
class InventoryEntryAdmin(admin.ModelAdmin):
    list_display = ('medicine', 'pharmacy', 'quantity', 'price', 'status_badge', 'updated_at')
    list_filter = ('status', 'pharmacy__verified')
    search_fields = ('medicine__name', 'pharmacy__name')
    readonly_fields = ('id', 'status', 'created_at', 'updated_at')
    list_select_related = ('medicine', 'pharmacy')
    list_per_page = 50

    @admin.display(description=_('Status'), ordering='status')
    def status_badge(self, obj):
        return format_html(
            '<span style="color:{}; font-weight:bold;">{}</span>',
            STATUS_COLORS.get(obj.status, '#6c757d'),
            obj.get_status_display(),
        )

    def save_model(self, request, obj, form, change):
        obj.status = InventoryEntry.status_for_quantity(obj.quantity)
        super().save_model(request, obj, form, change)
