"""
Users — Serializers

Registration (camelCase wire format kept for the web client), login,
read serializers for accounts, and the admin status payload.

@file users/serializers.py
"""

import re
from decimal import Decimal

from rest_framework import serializers

from core.constants import PHONE_NUMBER_REGEX
from core.models import LifecycleStatus

from .models import User

PHONE_FORMAT_ERROR = 'Invalid phone number format. Use Ethiopian format: +251XXXXXXXXX or 0XXXXXXXXX'


def normalize_phone(value: str) -> str:
    """Strip whitespace and check the Ethiopian mobile format; blank stays blank."""
    value = re.sub(r'\s', '', value or '')
    if value and not re.match(PHONE_NUMBER_REGEX, value):
        raise serializers.ValidationError(PHONE_FORMAT_ERROR)
    return value


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

class PharmacyDetailsSerializer(serializers.Serializer):
    pharmacyName = serializers.CharField(
        source='name', max_length=255,
        error_messages={'required': 'Pharmacy name is required', 'blank': 'Pharmacy name is required'},
    )
    pharmacyAddress = serializers.CharField(
        source='address', max_length=500,
        error_messages={'required': 'Pharmacy address is required', 'blank': 'Pharmacy address is required'},
    )
    contactNumber = serializers.CharField(
        source='contact_number', max_length=20,
        required=False, allow_blank=True, allow_null=True, default='',
    )
    latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)

    def validate_contactNumber(self, value):
        try:
            return normalize_phone(value)
        except serializers.ValidationError:
            raise serializers.ValidationError('Invalid pharmacy contact number format')

    def validate(self, attrs):
        # model columns hold 6 decimal places
        for key in ('latitude', 'longitude'):
            if attrs.get(key) is not None:
                attrs[key] = Decimal(str(round(attrs[key], 6)))
        return attrs


class RegisterSerializer(serializers.Serializer):
    SELF_REGISTRABLE_ROLES = [
        User.RoleChoices.PATIENT,
        User.RoleChoices.DOCTOR,
        User.RoleChoices.PHARMACIST,
        User.RoleChoices.RECEPTIONIST,
    ]

    fullName = serializers.CharField(
        source='full_name', min_length=2, max_length=150,
        error_messages={
            'required': 'Full name is required',
            'blank': 'Full name is required',
            'min_length': 'Full name must be at least 2 characters',
        },
    )
    email = serializers.EmailField(
        max_length=254,
        error_messages={'required': 'Email is required', 'invalid': 'Invalid email format'},
    )
    password = serializers.CharField(
        write_only=True, trim_whitespace=False,
        error_messages={'required': 'Password is required', 'blank': 'Password is required'},
    )
    role = serializers.ChoiceField(
        choices=SELF_REGISTRABLE_ROLES,
        error_messages={'invalid_choice': 'Invalid role selected', 'required': 'Invalid role selected'},
    )
    phone = serializers.CharField(
        source='phone_number', max_length=20,
        required=False, allow_blank=True, allow_null=True, default='',
    )
    pharmacyDetails = PharmacyDetailsSerializer(source='pharmacy_details', required=False, allow_null=True)

    def validate_email(self, value):
        return value.strip().lower()

    def validate_phone(self, value):
        return normalize_phone(value)

    def validate(self, attrs):
        # pharmacy details only make sense for pharmacists
        if attrs.get('role') != User.RoleChoices.PHARMACIST:
            attrs.pop('pharmacy_details', None)
        return attrs


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField(
        error_messages={'required': 'Refresh token is required', 'blank': 'Refresh token is required'},
    )


class LoginUserSerializer(serializers.ModelSerializer):
    """User summary returned alongside the token."""

    name = serializers.CharField(source='full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'role', 'email', 'verified', 'status']
        read_only_fields = fields


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

class UserReadSerializer(serializers.ModelSerializer):
    pharmacy_name = serializers.CharField(source='pharmacy.name', read_only=True, default=None)

    class Meta:
        model = User
        fields = [
            'id', 'full_name', 'email', 'phone_number', 'role',
            'verified', 'status', 'pharmacy', 'pharmacy_name',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class UserSearchResultSerializer(UserReadSerializer):
    """Admin search row: the account plus its pharmacy's state."""

    pharmacy_verified = serializers.BooleanField(source='pharmacy.verified', read_only=True, default=None)
    pharmacy_status = serializers.CharField(source='pharmacy.status', read_only=True, default=None)

    class Meta(UserReadSerializer.Meta):
        fields = UserReadSerializer.Meta.fields + ['pharmacy_verified', 'pharmacy_status']
        read_only_fields = fields


class ChangeStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=LifecycleStatus.choices,
        error_messages={
            'invalid_choice': "Invalid status. Must be 'active', 'suspended', or 'banned'",
            'required': "Invalid status. Must be 'active', 'suspended', or 'banned'",
        },
    )
