"""
Medicines — Serializers

@file medicines/serializers.py
"""

from rest_framework import serializers

from .models import Medicine


class MedicineOptionSerializer(serializers.ModelSerializer):
    """id + name, for dropdowns."""

    medicine_id = serializers.UUIDField(source='id', read_only=True)

    class Meta:
        model = Medicine
        fields = ['medicine_id', 'name']
        read_only_fields = fields


class MedicineSerializer(serializers.ModelSerializer):
    class Meta:
        model = Medicine
        fields = ['id', 'name', 'description', 'category', 'created_at']
        read_only_fields = ['id', 'created_at']
        # uniqueness is checked case-insensitively by the service
        validators = []
        extra_kwargs = {
            'name': {'error_messages': {'required': 'Medicine name is required', 'blank': 'Medicine name is required'}},
            'description': {'required': False, 'allow_blank': True},
            'category': {'required': False, 'allow_blank': True},
        }
