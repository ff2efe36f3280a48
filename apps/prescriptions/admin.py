"""
Admin configuration for prescriptions app.
"""
from django.contrib import admin
from .models import Prescription, PrescriptionItem


class PrescriptionItemInline(admin.TabularInline):
    """Inline admin for prescription items."""
    model = PrescriptionItem
    extra = 0
    readonly_fields = ['medicine', 'quantity_prescribed', 'quantity_filled', 'created_at']


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    """Admin interface for Prescription model."""
    list_display = ['id', 'patient', 'doctor', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['patient__first_name', 'patient__last_name', 'doctor__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [PrescriptionItemInline]
