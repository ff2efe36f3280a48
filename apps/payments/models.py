"""
Payment models for the clinic backend.
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.patients.models import Patient
from apps.prescriptions.models import Prescription


class Payment(models.Model):
    """
    Money taken from a patient, optionally against a prescription.
    """
    METHOD_CASH = "cash"
    METHOD_CARD = "card"
    METHOD_INSURANCE = "insurance"

    METHOD_CHOICES = [
        (METHOD_CASH, "Cash"),
        (METHOD_CARD, "Card"),
        (METHOD_INSURANCE, "Insurance"),
    ]

    patient = models.ForeignKey(
        Patient,
        on_delete=models.PROTECT,
        related_name='payments'
    )
    prescription = models.ForeignKey(
        Prescription,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments'
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Amount paid"
    )
    payment_method = models.CharField(max_length=20, choices=METHOD_CHOICES)
    payment_date = models.DateTimeField(
        default=timezone.now,
        help_text="When the payment was taken"
    )
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='payments_taken',
        help_text="User who recorded the payment"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "payments"
        verbose_name = "Payment"
        verbose_name_plural = "Payments"
        ordering = ['-payment_date', '-id']
        indexes = [
            models.Index(fields=['payment_date'], name='payments_date_idx'),
            models.Index(fields=['payment_method'], name='payments_method_idx'),
        ]

    def __str__(self):
        return f"Payment #{self.id} - {self.amount} ({self.get_payment_method_display()})"
