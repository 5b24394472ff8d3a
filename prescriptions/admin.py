"""
Prescriptions — Django Admin Configuration

@file prescriptions/admin.py
"""

from django.contrib import admin

from .models import Prescription


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ('patient_email', 'medicine', 'doctor', 'status', 'issued_at')
    list_filter = ('status',)
    search_fields = ('patient_email', 'medicine__name', 'doctor__full_name')
    readonly_fields = ('id', 'issued_at', 'created_at', 'updated_at')
    list_select_related = ('medicine', 'doctor')
    date_hierarchy = 'issued_at'
    list_per_page = 50
