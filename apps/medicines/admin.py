"""
Admin configuration for medicines app.
"""
from django.contrib import admin
from .models import Medicine


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    """Admin interface for Medicine model."""
    list_display = ['name', 'category', 'stock_quantity', 'price_per_unit', 'expiry_date', 'created_at']
    list_filter = ['category', 'expiry_date', 'created_at']
    search_fields = ['name', 'batch_number', 'supplier_info']
    readonly_fields = ['created_at', 'updated_at']
    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'category', 'stock_quantity')
        }),
        ('Pricing & Expiry', {
            'fields': ('price_per_unit', 'batch_number', 'expiry_date')
        }),
        ('Supply', {
            'fields': ('supplier_info', 'storage_conditions')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )
