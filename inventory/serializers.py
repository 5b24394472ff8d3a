"""
Inventory — Serializers

@file inventory/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from core.constants import MAX_STOCK_QUANTITY, MAX_UNIT_PRICE

from .models import InventoryEntry


class AvailabilitySerializer(serializers.ModelSerializer):
    """One search hit: where a medicine can be bought, and at what price."""

    medicine = serializers.CharField(source='medicine.name', read_only=True)
    pharmacy = serializers.CharField(source='pharmacy.name', read_only=True)
    pharmacy_id = serializers.UUIDField(read_only=True)
    address = serializers.CharField(source='pharmacy.address', read_only=True)
    latitude = serializers.DecimalField(source='pharmacy.latitude', max_digits=9, decimal_places=6, read_only=True)
    longitude = serializers.DecimalField(source='pharmacy.longitude', max_digits=9, decimal_places=6, read_only=True)

    class Meta:
        model = InventoryEntry
        fields = [
            'medicine', 'pharmacy', 'address', 'latitude', 'longitude',
            'pharmacy_id', 'quantity', 'status', 'price',
        ]
        read_only_fields = fields


class PharmacyStockSerializer(serializers.ModelSerializer):
    medicine = serializers.CharField(source='medicine.name', read_only=True)
    medicine_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = InventoryEntry
        fields = ['medicine', 'medicine_id', 'quantity', 'status', 'price', 'updated_at']
        read_only_fields = fields


class InventoryUpdateSerializer(serializers.Serializer):
    medicine_id = serializers.UUIDField(
        error_messages={'required': 'Medicine selection is required', 'null': 'Medicine selection is required'},
    )
    quantity = serializers.IntegerField(
        min_value=0,
        max_value=MAX_STOCK_QUANTITY,
        error_messages={
            'required': 'Quantity is required',
            'null': 'Quantity is required',
            'invalid': 'Quantity must be a whole number',
            'min_value': 'Quantity cannot be negative',
            'max_value': 'Quantity cannot exceed 999,999 units',
        },
    )
    price = serializers.DecimalField(
        max_digits=8,
        decimal_places=2,
        error_messages={
            'required': 'Price is required',
            'null': 'Price is required',
            'invalid': 'Price must be a valid number',
            'max_decimal_places': 'Price can have at most 2 decimal places',
            'max_digits': 'Price cannot exceed 999,999.99 ETB',
            'max_whole_digits': 'Price cannot exceed 999,999.99 ETB',
        },
    )

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError('Price cannot be negative')
        if value == 0:
            raise serializers.ValidationError('Price must be greater than zero')
        if value > Decimal(MAX_UNIT_PRICE):
            raise serializers.ValidationError('Price cannot exceed 999,999.99 ETB')
        return value
