"""
User models for the clinic backend.

This module defines the custom User model with role-based access control.
Roles: Admin, Doctor, Cashier
"""
from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class ClinicUserManager(UserManager):
    """
    Manager that lets email act as the login identifier.

    ``username`` is kept for Django admin compatibility and defaults to the email.
    """

    def create_user(self, username=None, email=None, password=None, **extra_fields):
        username = username or email
        return super().create_user(username, email=email, password=password, **extra_fields)

    def create_superuser(self, username=None, email=None, password=None, **extra_fields):
        username = username or email
        extra_fields.setdefault("role", User.ROLE_ADMIN)
        return super().create_superuser(username, email=email, password=password, **extra_fields)


class User(AbstractUser):
    """
    Custom User model extending Django's AbstractUser.

    Roles:
    - ADMIN: Full system access, manages users, medicines and reports
    - DOCTOR: Writes prescriptions for patients
    - CASHIER: Takes payments and dispenses prescribed medicines
    """
    ROLE_ADMIN = "admin"
    ROLE_DOCTOR = "doctor"
    ROLE_CASHIER = "cashier"

    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_DOCTOR, "Doctor"),
        (ROLE_CASHIER, "Cashier"),
    ]

    email = models.EmailField(
        unique=True,
        help_text="Login email address"
    )
    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_CASHIER,
        help_text="User role determines access level"
    )
    phone = models.CharField(
        max_length=20,
        blank=True,
        null=True,
        help_text="Contact phone number"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ClinicUserManager()

    class Meta:
        db_table = "users"
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.email} ({self.get_role_display()})"

    def is_admin(self):
        """Check if user is an admin."""
        return self.is_superuser or self.role == self.ROLE_ADMIN

    def is_doctor(self):
        """Check if user is a doctor."""
        return self.role == self.ROLE_DOCTOR

    def is_cashier(self):
        """Check if user is a cashier."""
        return self.role == self.ROLE_CASHIER
