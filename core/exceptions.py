"""
Core — Exception Handling

Typed API exceptions raised by the service layer and the DRF exception
handler that renders every error in the standard envelope.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import IntegrityError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response

logger = logging.getLogger('medlocator')


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class BusinessRuleViolation(APIException):
    """Raised when a business rule is violated at the service layer."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Business rule violation.'
    default_code = 'BUSINESS_RULE_VIOLATION'


class InvalidStateTransition(BusinessRuleViolation):
    """Raised when a lifecycle status transition is not allowed."""
    default_detail = 'Invalid state transition.'
    default_code = 'INVALID_STATE_TRANSITION'


class DuplicateResourceError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'DUPLICATE_RESOURCE'


class ResourceNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'RESOURCE_NOT_FOUND'


class InvalidCredentialsError(APIException):
    """Unknown email or wrong password at login."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid credentials.'
    default_code = 'INVALID_CREDENTIALS'


class AccountBannedError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Your account has been banned. Please contact administrator.'
    default_code = 'ACCOUNT_BANNED'


class AccountRestrictedError(APIException):
    """Caller holds the right role but its status or verification blocks the action."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Your account cannot perform this action.'
    default_code = 'ACCOUNT_RESTRICTED'


class InvalidTokenError(APIException):
    """Garbled or expired bearer token on endpoints that answer 400."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid Token'
    default_code = 'INVALID_TOKEN'


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard envelope:
      { "success": false, "errors": {...}, "code": "ERROR_CODE" }
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = APIException(detail='Permission denied.', code='PERMISSION_DENIED')
        exc.status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, IntegrityError):
        logger.warning('Integrity error in view: %s', exc)
        exc = DuplicateResourceError()
    elif isinstance(exc, ValidationError):
        data = {
            'success': False,
            'errors': exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages},
            'code': 'VALIDATION_ERROR',
        }
        return Response(data, status=status.HTTP_400_BAD_REQUEST)

    # Imported here: rest_framework.views loads the authentication classes,
    # which import this module.
    from rest_framework.views import exception_handler

    response = exception_handler(exc, context)

    if response is not None:
        errors = {}
        code = getattr(exc, 'default_code', 'ERROR')

        if isinstance(response.data, dict):
            errors = response.data
            code = response.data.pop('code', code) if 'code' in response.data else code
        elif isinstance(response.data, list):
            errors = {'detail': response.data}
        else:
            errors = {'detail': [str(response.data)]}

        response.data = {
            'success': False,
            'errors': errors,
            'code': code,
        }

    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return Response(
            {'success': False, 'errors': {'detail': ['Internal server error.']}, 'code': 'INTERNAL_ERROR'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
