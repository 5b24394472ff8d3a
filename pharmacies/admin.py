"""
Pharmacies — Django Admin Configuration

Pharmacy admin with verification / status badges and the pharmacist
accounts linked to each pharmacy. Deletes go through PharmacyService so
the pharmacists and everything they wrote go with the pharmacy.

@file pharmacies/admin.py
"""

from django.contrib import admin
from django.db import transaction
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from users.models import User

from .models import Pharmacy
from .services import PharmacyService


class MemberInline(admin.TabularInline):
    model = User
    fk_name = 'pharmacy'
    extra = 0
    can_delete = False
    fields = ('email', 'full_name', 'role', 'status')
    readonly_fields = fields
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Pharmacy)
class PharmacyAdmin(admin.ModelAdmin):
    list_display = ('name', 'address', 'verified_badge', 'status', 'visible', 'created_at')
    list_filter = ('verified', 'status')
    search_fields = ('name', 'address', 'contact_number')
    readonly_fields = ('id', 'status', 'created_at', 'updated_at')
    list_per_page = 30
    date_hierarchy = 'created_at'
    inlines = [MemberInline]

    fieldsets = (
        (None, {
            'fields': ('id', 'name', 'address', 'contact_number'),
        }),
        (_('Location'), {
            'fields': ('latitude', 'longitude'),
        }),
        (_('Verification & Status'), {
            'fields': ('verified', 'status'),
        }),
        (_('Dates'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Verified'))
    def verified_badge(self, obj):
        color, label = ('#22c55e', _('Verified')) if obj.verified else ('#eab308', _('Pending'))
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; border-radius:4px;">{}</span>',
            color, label,
        )

    @admin.display(description=_('Visible to patients'), boolean=True)
    def visible(self, obj):
        return obj.is_visible_to_patients

    def delete_model(self, request, obj):
        PharmacyService.delete_pharmacy(pharmacy_id=obj.pk, actor=request.user, request=request)

    @transaction.atomic
    def delete_queryset(self, request, queryset):
        for pharmacy_id in list(queryset.values_list('pk', flat=True)):
            PharmacyService.delete_pharmacy(pharmacy_id=pharmacy_id, actor=request.user, request=request)
