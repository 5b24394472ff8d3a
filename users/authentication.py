"""
Users — Authentication Backends

Bearer-token authentication. A banned account is refused even while its
access token is still within its lifetime.

The admin, reception, pharmacist and feedback endpoints have always
answered a garbled or expired token with 400 "Invalid Token"; inventory
and prescriptions answer 401. Clients depend on both, so each view picks
its class.

@file users/authentication.py
"""

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from core.exceptions import AccountBannedError, InvalidTokenError
from core.models import LifecycleStatus


class ActiveAccountJWTAuthentication(JWTAuthentication):
    """JWTAuthentication that rejects banned accounts with 403."""

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        if user.status == LifecycleStatus.BANNED:
            raise AccountBannedError()
        return user


class BadRequestJWTAuthentication(ActiveAccountJWTAuthentication):
    """Reports invalid tokens as 400 instead of 401."""

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except InvalidToken as exc:
            raise InvalidTokenError() from exc
