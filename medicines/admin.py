"""
Medicines — Django Admin Configuration

Catalogue admin with a count of pharmacies stocking each entry.

@file medicines/admin.py
"""

from django.contrib import admin
from django.db.models import Count
from django.utils.translation import gettext_lazy as _

from .models import Medicine


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'stocked_at', 'created_at')
    list_filter = ('category',)
    search_fields = ('name', 'category', 'description')
    readonly_fields = ('id', 'created_at', 'updated_at')
    ordering = ('name',)
    list_per_page = 50

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_stocked_at=Count('inventory_entries'))

    @admin.display(description=_('Pharmacies'), ordering='_stocked_at')
    def stocked_at(self, obj):
        return obj._stocked_at
