"""
Feedback — Django Admin Configuration

Moderation list with bulk approve / remove actions.

@file feedback/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Feedback


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ('pharmacy', 'patient', 'rating', 'status', 'created_at')
    list_filter = ('status', 'rating')
    search_fields = ('pharmacy__name', 'patient__email', 'comment')
    readonly_fields = ('id', 'patient', 'pharmacy', 'rating', 'comment', 'created_at', 'updated_at')
    list_select_related = ('pharmacy', 'patient')
    list_per_page = 50
    actions = ['approve', 'remove']

    @admin.action(description=_('Approve selected feedback'))
    def approve(self, request, queryset):
        updated = queryset.update(status=Feedback.StatusChoices.APPROVED)
        self.message_user(request, _('%d feedback approved.') % updated)

    @admin.action(description=_('Remove selected feedback'))
    def remove(self, request, queryset):
        updated = queryset.update(status=Feedback.StatusChoices.REMOVED)
        self.message_user(request, _('%d feedback removed.') % updated)
