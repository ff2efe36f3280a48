"""
Prescription models for the clinic backend.

A prescription is written by a doctor for a patient and holds one or more
items, each consuming stock of a single medicine.
"""
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.medicines.models import Medicine
from apps.patients.models import Patient


class Prescription(models.Model):
    """
    Prescription header.

    ``status`` mirrors the fill state of the items and is recomputed after
    every fill. The admin override is the only other writer.
    """
    STATUS_PENDING = "pending"
    STATUS_PARTIALLY_FILLED = "partially_filled"
    STATUS_FILLED = "filled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PARTIALLY_FILLED, "Partially filled"),
        (STATUS_FILLED, "Filled"),
    ]

    patient = models.ForeignKey(
        Patient,
        on_delete=models.PROTECT,
        related_name='prescriptions',
        help_text="Patient the prescription was written for"
    )
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='prescriptions',
        help_text="Prescribing doctor"
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "prescriptions"
        verbose_name = "Prescription"
        verbose_name_plural = "Prescriptions"
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status'], name='prescriptions_status_idx'),
            models.Index(fields=['created_at'], name='prescriptions_created_idx'),
        ]

    def __str__(self):
        return f"Prescription #{self.id} - {self.get_status_display()}"


class PrescriptionItem(models.Model):
    """
    One medicine line of a prescription.

    Stock for ``quantity_prescribed`` is deducted when the prescription is
    created; ``quantity_filled`` tracks how much has been handed over since.
    """
    prescription = models.ForeignKey(
        Prescription,
        on_delete=models.CASCADE,
        related_name='items'
    )
    medicine = models.ForeignKey(
        Medicine,
        on_delete=models.PROTECT,
        related_name='prescription_items'
    )
    quantity_prescribed = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Quantity ordered by the doctor"
    )
    quantity_filled = models.PositiveIntegerField(
        default=0,
        help_text="Quantity dispensed so far"
    )
    dosage_instructions = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "prescription_items"
        verbose_name = "Prescription Item"
        verbose_name_plural = "Prescription Items"
        ordering = ['id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity_prescribed__gt=0),
                name='prescription_item_quantity_prescribed_positive',
            ),
            models.CheckConstraint(
                condition=models.Q(quantity_filled__lte=models.F('quantity_prescribed')),
                name='prescription_item_not_overfilled',
            ),
        ]

    def __str__(self):
        return f"{self.medicine.name} {self.quantity_filled}/{self.quantity_prescribed}"

    @property
    def is_filled(self):
        return self.quantity_filled == self.quantity_prescribed
