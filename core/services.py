"""
Core — Audit Service

Writes audit log entries from any app. Services pass the acting user
and, when a request is available, its client metadata.

@file core/services.py
"""

import logging
from decimal import Decimal
from typing import Any

from django.forms.models import model_to_dict

from core.models import AuditLog

logger = logging.getLogger('medlocator')


class AuditService:
    """Centralised audit logging for administrative writes and logins."""

    @staticmethod
    def log(
        *,
        actor,
        action: str,
        model_name: str,
        object_id,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str = '',
    ) -> AuditLog:
        # public endpoints pass AnonymousUser
        if actor is not None and not getattr(actor, 'is_authenticated', False):
            actor = None
        return AuditLog.objects.create(
            actor=actor,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            old_values=old_values,
            new_values=new_values,
            ip_address=ip_address,
            user_agent=user_agent,
        )

    @staticmethod
    def snapshot(instance, fields=None) -> dict[str, Any]:
        """
        Serialise a model instance to a plain dict suitable for JSON
        storage. Decimals and UUIDs are stringified, datetimes ISO-formatted.
        """
        data = model_to_dict(instance, fields=fields)
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                cleaned[key] = None
            elif isinstance(value, Decimal):
                cleaned[key] = str(value)
            elif hasattr(value, 'isoformat'):
                cleaned[key] = value.isoformat()
            elif hasattr(value, 'hex'):
                cleaned[key] = str(value)
            else:
                cleaned[key] = value
        return cleaned

    @staticmethod
    def get_client_ip(request) -> str | None:
        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
        if x_forwarded_for:
            return x_forwarded_for.split(',')[0].strip()
        return request.META.get('REMOTE_ADDR')

    @classmethod
    def request_meta(cls, request) -> dict[str, Any]:
        """ip_address / user_agent kwargs for ``log`` taken from a request."""
        if request is None:
            return {}
        return {
            'ip_address': cls.get_client_ip(request),
            'user_agent': request.META.get('HTTP_USER_AGENT', ''),
        }
