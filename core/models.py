"""
Core — Base Models & Audit Infrastructure

Provides the reusable abstract base (UUID PK + timestamps), the
lifecycle status enumeration shared by accounts and pharmacies, and the
AuditLog model for tracking every administrative write.

@file core/models.py
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


# ---------------------------------------------------------------------------
# Shared enumerations
# ---------------------------------------------------------------------------

class LifecycleStatus(models.TextChoices):
    """
    Account / pharmacy lifecycle. Independent of the ``verified`` flag.

    Reverse transitions (back to ACTIVE) are only performed by an Admin.
    """

    ACTIVE = 'active', _('Active')
    SUSPENDED = 'suspended', _('Suspended')
    BANNED = 'banned', _('Banned')


# ---------------------------------------------------------------------------
# Abstract base models (mixins)
# ---------------------------------------------------------------------------

class TimestampMixin(models.Model):
    """Adds created_at / updated_at to any model."""

    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    updated_at = models.DateTimeField(
        _('updated at'), auto_now=True,
    )

    class Meta:
        abstract = True


class BaseModel(TimestampMixin):
    """
    Standard base for all MedLocator models.
    UUID PK + timestamps.
    """

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )

    class Meta:
        abstract = True


# ---------------------------------------------------------------------------
# Audit Log — immutable record of administrative writes
# ---------------------------------------------------------------------------

class AuditLog(models.Model):
    """
    Immutable audit trail. One row per registration, login, verification,
    status change, moderation decision or cascading delete.

    Old and new values are stored as JSON so propagated side effects
    (e.g. number of pharmacists suspended) travel with the event.
    """

    class ActionChoices(models.TextChoices):
        CREATE = 'CREATE', _('Create')
        UPDATE = 'UPDATE', _('Update')
        DELETE = 'DELETE', _('Delete')
        STATUS_CHANGE = 'STATUS_CHANGE', _('Status Change')
        VERIFY = 'VERIFY', _('Verify')
        LOGIN = 'LOGIN', _('Login')
        LOGIN_FAILED = 'LOGIN_FAILED', _('Login Failed')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='audit_logs',
        verbose_name=_('actor'),
    )
    action = models.CharField(
        _('action'), max_length=20,
        choices=ActionChoices.choices, db_index=True,
    )
    model_name = models.CharField(_('model'), max_length=100, db_index=True)
    object_id = models.CharField(_('object ID'), max_length=40, db_index=True)

    old_values = models.JSONField(_('old values'), null=True, blank=True)
    new_values = models.JSONField(_('new values'), null=True, blank=True)

    ip_address = models.GenericIPAddressField(_('IP address'), null=True, blank=True)
    user_agent = models.TextField(_('user agent'), blank=True, default='')

    timestamp = models.DateTimeField(_('timestamp'), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('audit log')
        verbose_name_plural = _('audit logs')
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['model_name', 'object_id']),
            models.Index(fields=['actor', 'timestamp']),
        ]

    def __str__(self):
        return f'{self.action} {self.model_name}:{self.object_id} by {self.actor_id}'
