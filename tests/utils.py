import json
from datetime import date
from decimal import Decimal

from apps.accounts.models import User
from apps.medicines.models import Medicine
from apps.patients.models import Patient


def make_user(email, role, password="pass12345", **extra):
    return User.objects.create_user(
        email=email,
        password=password,
        role=role,
        first_name=extra.pop("first_name", "Test"),
        last_name=extra.pop("last_name", role.capitalize()),
        **extra,
    )


def make_patient(first_name="John", last_name="Doe", **extra):
    extra.setdefault("gender", Patient.GENDER_MALE)
    extra.setdefault("birthdate", date(1985, 4, 12))
    return Patient.objects.create(first_name=first_name, last_name=last_name, **extra)


def make_medicine(name="Paracetamol 500mg", stock=100, category=Medicine.Category.PAIN_RELIEVERS, price="2.50", **extra):
    return Medicine.objects.create(
        name=name,
        category=category,
        stock_quantity=stock,
        price_per_unit=Decimal(price),
        **extra,
    )


class RpcClientMixin:
    """Call procedures through the test client."""

    def rpc_query(self, name, data=None):
        params = {"input": json.dumps(data)} if data is not None else {}
        return self.client.get(f"/rpc/{name}", params)

    def rpc_mutate(self, name, data=None):
        return self.client.post(
            f"/rpc/{name}",
            data=json.dumps(data or {}),
            content_type="application/json",
        )
