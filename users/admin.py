"""
Users — Django Admin Configuration

Account admin with role / status badges. Status changes made here skip
the propagation rule, so they are read-only; use the API instead.

@file users/admin.py
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import User

STATUS_COLORS = {
    'active': '#22c55e',
    'suspended': '#f97316',
    'banned': '#ef4444',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'full_name', 'role', 'verified', 'status_badge', 'pharmacy', 'date_joined')
    list_filter = ('role', 'status', 'verified', 'is_staff')
    search_fields = ('email', 'full_name', 'phone_number')
    readonly_fields = ('id', 'status', 'created_at', 'updated_at', 'date_joined', 'last_login')
    raw_id_fields = ('pharmacy',)
    list_select_related = ('pharmacy',)
    list_per_page = 30
    ordering = ('-created_at',)

    fieldsets = (
        (None, {
            'fields': ('id', 'email', 'password'),
        }),
        (_('Profile'), {
            'fields': ('full_name', 'phone_number', 'role', 'pharmacy'),
        }),
        (_('Verification & Status'), {
            'fields': ('verified', 'status'),
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Dates'), {
            'fields': ('date_joined', 'last_login', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'role', 'password1', 'password2'),
        }),
    )

    @admin.display(description=_('Status'))
    def status_badge(self, obj):
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; border-radius:4px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#6b7280'), obj.get_status_display(),
        )
