"""
Prescriptions — Serializers

@file prescriptions/serializers.py
"""

from rest_framework import serializers

from users.models import User

from .models import Prescription


class IssuePrescriptionSerializer(serializers.Serializer):
    patient_email = serializers.EmailField(
        error_messages={'required': 'Patient email is required', 'blank': 'Patient email is required'},
    )
    medicine_id = serializers.UUIDField(
        error_messages={'required': 'Medicine selection is required', 'null': 'Medicine selection is required'},
    )
    dosage = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    instructions = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_patient_email(self, value):
        return value.strip().lower()


class PrescriptionSerializer(serializers.ModelSerializer):
    prescription_id = serializers.UUIDField(source='id', read_only=True)
    medicine_name = serializers.CharField(source='medicine.name', read_only=True)

    class Meta:
        model = Prescription
        fields = [
            'prescription_id', 'patient_email', 'doctor', 'medicine', 'medicine_name',
            'dosage', 'instructions', 'status', 'issued_at',
        ]
        read_only_fields = fields


class PatientPrescriptionSerializer(serializers.ModelSerializer):
    """Row of the pharmacist's patient lookup."""

    prescription_id = serializers.UUIDField(source='id', read_only=True)
    medicine_name = serializers.CharField(source='medicine.name', read_only=True)
    doctor_name = serializers.CharField(source='doctor.full_name', read_only=True)

    class Meta:
        model = Prescription
        fields = ['prescription_id', 'dosage', 'instructions', 'issued_at', 'status', 'medicine_name', 'doctor_name']
        read_only_fields = fields


class OutstandingPrescriptionSerializer(serializers.ModelSerializer):
    prescription_id = serializers.UUIDField(source='id', read_only=True)
    medicine_name = serializers.CharField(source='medicine.name', read_only=True)

    class Meta:
        model = Prescription
        fields = ['prescription_id', 'dosage', 'instructions', 'issued_at', 'status', 'medicine_name']
        read_only_fields = fields


class RecentPrescriptionSerializer(serializers.ModelSerializer):
    """Reception dashboard row; names come from queryset annotations."""

    prescription_id = serializers.UUIDField(source='id', read_only=True)
    medicine_name = serializers.CharField(read_only=True)
    patient_name = serializers.CharField(read_only=True, allow_null=True)
    doctor_name = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = Prescription
        fields = [
            'prescription_id', 'patient_email', 'dosage', 'instructions', 'issued_at',
            'status', 'medicine_name', 'patient_name', 'doctor_name',
        ]
        read_only_fields = fields


class PatientContactSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='full_name', read_only=True)
    phone = serializers.CharField(source='phone_number', read_only=True)

    class Meta:
        model = User
        fields = ['name', 'email', 'phone']
        read_only_fields = fields
