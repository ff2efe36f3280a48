from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Medicine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(help_text="Medicine name (e.g., Paracetamol 500mg)", max_length=200)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("pain_relievers", "Pain relievers"),
                            ("antibiotics", "Antibiotics"),
                            ("antiviral", "Antiviral"),
                            ("antifungal", "Antifungal"),
                            ("cardiovascular", "Cardiovascular"),
                            ("respiratory", "Respiratory"),
                            ("gastrointestinal", "Gastrointestinal"),
                            ("diabetes", "Diabetes"),
                            ("vitamins", "Vitamins"),
                            ("other", "Other"),
                        ],
                        help_text="Medicine category",
                        max_length=30,
                    ),
                ),
                ("stock_quantity", models.PositiveIntegerField(default=0, help_text="Units currently on hand")),
                (
                    "price_per_unit",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Price per unit",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("supplier_info", models.TextField(blank=True, null=True)),
                ("batch_number", models.CharField(blank=True, max_length=100, null=True)),
                (
                    "expiry_date",
                    models.DateField(blank=True, help_text="Expiry date of the medicine batch", null=True),
                ),
                ("storage_conditions", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Medicine",
                "verbose_name_plural": "Medicines",
                "db_table": "medicines",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["category"], name="medicines_category_idx"),
                    models.Index(fields=["stock_quantity"], name="medicines_stock_idx"),
                    models.Index(fields=["expiry_date"], name="medicines_expiry_idx"),
                ],
            },
        ),
    ]
