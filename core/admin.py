"""
Core — Django Admin Configuration

Read-only admin for AuditLog.

@file core/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from core.models import AuditLog

ACTION_COLORS = {
    AuditLog.ActionChoices.CREATE: '#22c55e',
    AuditLog.ActionChoices.UPDATE: '#3b82f6',
    AuditLog.ActionChoices.DELETE: '#ef4444',
    AuditLog.ActionChoices.STATUS_CHANGE: '#eab308',
    AuditLog.ActionChoices.VERIFY: '#8b5cf6',
    AuditLog.ActionChoices.LOGIN: '#06b6d4',
    AuditLog.ActionChoices.LOGIN_FAILED: '#dc2626',
}


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Read-only audit trail; rows are written by AuditService only."""

    list_display = ('timestamp', 'action_badge', 'model_name', 'object_id', 'actor', 'ip_address')
    list_filter = ('action', 'model_name')
    search_fields = ('object_id', 'model_name', 'actor__email', 'actor__full_name')
    readonly_fields = (
        'id', 'actor', 'action', 'model_name', 'object_id',
        'old_values', 'new_values', 'ip_address', 'user_agent', 'timestamp',
    )
    date_hierarchy = 'timestamp'
    list_select_related = ('actor',)
    list_per_page = 50

    fieldsets = (
        (_('Event'), {
            'fields': ('id', 'action', 'timestamp', 'actor', 'ip_address', 'user_agent'),
        }),
        (_('Target'), {
            'fields': ('model_name', 'object_id', 'old_values', 'new_values'),
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Action'))
    def action_badge(self, obj):
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; border-radius:4px;">{}</span>',
            ACTION_COLORS.get(obj.action, '#6b7280'), obj.get_action_display(),
        )
