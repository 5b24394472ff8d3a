"""
Pharmacies — Serializers

Explicit field lists; no __all__.

@file pharmacies/serializers.py
"""

from rest_framework import serializers

from .models import Pharmacy


class PharmacyReadSerializer(serializers.ModelSerializer):
    visible_to_patients = serializers.BooleanField(source='is_visible_to_patients', read_only=True)

    class Meta:
        model = Pharmacy
        fields = [
            'id', 'name', 'address', 'latitude', 'longitude',
            'contact_number', 'verified', 'status', 'visible_to_patients',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class PharmacySummarySerializer(serializers.ModelSerializer):
    """Header block of the pharmacist feedback page."""

    pharmacy_id = serializers.UUIDField(source='id', read_only=True)

    class Meta:
        model = Pharmacy
        fields = ['pharmacy_id', 'name', 'address', 'status', 'verified']
        read_only_fields = fields
