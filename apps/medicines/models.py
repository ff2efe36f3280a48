"""
Medicine models for the clinic backend.

A medicine row carries its own stock level; prescriptions consume it.
"""
from decimal import Decimal

from django.db import models
from django.core.validators import MinValueValidator


class Medicine(models.Model):
    """
    Medicine model.

    Stores the catalogue entry (name, category, price) together with the
    quantity on hand and optional supplier/batch metadata.
    """
    class Category(models.TextChoices):
        PAIN_RELIEVERS = "pain_relievers", "Pain relievers"
        ANTIBIOTICS = "antibiotics", "Antibiotics"
        ANTIVIRAL = "antiviral", "Antiviral"
        ANTIFUNGAL = "antifungal", "Antifungal"
        CARDIOVASCULAR = "cardiovascular", "Cardiovascular"
        RESPIRATORY = "respiratory", "Respiratory"
        GASTROINTESTINAL = "gastrointestinal", "Gastrointestinal"
        DIABETES = "diabetes", "Diabetes"
        VITAMINS = "vitamins", "Vitamins"
        OTHER = "other", "Other"

    name = models.CharField(
        max_length=200,
        help_text="Medicine name (e.g., Paracetamol 500mg)"
    )
    category = models.CharField(
        max_length=30,
        choices=Category.choices,
        help_text="Medicine category"
    )
    stock_quantity = models.PositiveIntegerField(
        default=0,
        help_text="Units currently on hand"
    )
    price_per_unit = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Price per unit"
    )
    supplier_info = models.TextField(blank=True, null=True)
    batch_number = models.CharField(max_length=100, blank=True, null=True)
    expiry_date = models.DateField(
        null=True,
        blank=True,
        help_text="Expiry date of the medicine batch"
    )
    storage_conditions = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "medicines"
        verbose_name = "Medicine"
        verbose_name_plural = "Medicines"
        ordering = ['name']
        indexes = [
            models.Index(fields=['category'], name='medicines_category_idx'),
            models.Index(fields=['stock_quantity'], name='medicines_stock_idx'),
            models.Index(fields=['expiry_date'], name='medicines_expiry_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.stock_quantity} in stock)"

    def is_low_stock(self, threshold):
        """Stock at or below ``threshold`` counts as low."""
        return self.stock_quantity <= threshold

    def is_expired(self, on_date):
        if not self.expiry_date:
            return False
        return self.expiry_date < on_date
