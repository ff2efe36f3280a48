from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from apps.accounts.models import User
from apps.common.exceptions import InvalidRole, NotFound
from apps.medicines.models import Medicine
from apps.patients.models import Patient
from apps.payments.models import Payment
from apps.prescriptions.models import Prescription
from apps.prescriptions.services import PrescriptionService
from apps.dashboard.services import DashboardService
from tests.utils import RpcClientMixin, make_medicine, make_patient, make_user


def _at(day, hour=12, month=3):
    return datetime(2024, month, day, hour, 0, tzinfo=dt_timezone.utc)


class DashboardTestMixin(RpcClientMixin):
    def setUp(self):
        self.admin = make_user("admin@clinic.test", User.ROLE_ADMIN)
        self.cashier = make_user("cashier@clinic.test", User.ROLE_CASHIER)
        self.doctor = make_user("doctor@clinic.test", User.ROLE_DOCTOR)
        self.other_doctor = make_user("other@clinic.test", User.ROLE_DOCTOR)
        self.ibuprofen = make_medicine("Ibuprofen", stock=500)
        self.amoxicillin = make_medicine("Amoxicillin", stock=500, category=Medicine.Category.ANTIBIOTICS)

    def prescribe(self, patient, lines, doctor=None, when=None):
        prescription = PrescriptionService.create_prescription(
            patient_id=patient.id,
            doctor_id=(doctor or self.doctor).id,
            items=[{"medicine_id": medicine.id, "quantity_prescribed": quantity} for medicine, quantity in lines],
        )
        if when is not None:
            Prescription.objects.filter(id=prescription.id).update(created_at=when)
        return prescription

    def pay(self, patient, amount, method=Payment.METHOD_CASH, prescription=None, when=None):
        return Payment.objects.create(
            patient=patient,
            prescription=prescription,
            amount=Decimal(amount),
            payment_method=method,
            payment_date=when or timezone.now(),
            created_by=self.cashier,
        )


class AdminDashboardTests(DashboardTestMixin, TestCase):
    def test_admin_dashboard(self):
        old_patient = make_patient("Old", "Timer")
        Patient.objects.filter(id=old_patient.id).update(created_at=_at(1))
        alice = make_patient("Alice", "Smith")
        bob = make_patient("Bob", "Jones")
        make_medicine("Insulin", stock=3, category=Medicine.Category.DIABETES)
        first = self.prescribe(alice, [(self.ibuprofen, 4)])
        self.prescribe(bob, [(self.amoxicillin, 2)])
        PrescriptionService.fill_item(first.items.get().id, 1)
        self.pay(alice, "12.50", prescription=first)
        self.pay(bob, "7.50", method=Payment.METHOD_CARD)
        self.pay(old_patient, "100.00", when=_at(1))

        data = DashboardService.get_admin_dashboard()

        self.assertEqual(data["total_patients"], 3)
        self.assertEqual(data["total_doctors"], 2)
        self.assertEqual(data["total_medicines"], 3)
        self.assertEqual(data["total_prescriptions"], 2)
        self.assertEqual(data["today_sales"], 20.0)
        self.assertEqual(data["today_patients"], 2)
        self.assertEqual(data["low_stock_count"], 1)
        self.assertEqual(data["pending_prescriptions"], 1)

        activities = data["recent_activities"]
        self.assertEqual(len(activities), 10)
        self.assertEqual({activity["type"] for activity in activities},
                         {"patient", "prescription", "payment", "medicine"})
        timestamps = [activity["timestamp"] for activity in activities]
        self.assertEqual(timestamps, sorted(timestamps, reverse=True))

    def test_as_of_hides_later_records(self):
        make_patient()

        data = DashboardService.get_admin_dashboard(as_of=_at(1))

        self.assertEqual(data["total_patients"], 0)
        self.assertEqual(data["total_medicines"], 0)
        self.assertEqual(data["recent_activities"], [])

    def test_admin_dashboard_procedure(self):
        self.client.force_login(self.cashier)
        self.assertEqual(self.rpc_query("dashboard.admin").status_code, 403)

        self.client.force_login(self.admin)
        response = self.rpc_query("dashboard.admin", {"as_of": "2024-03-01T12:00:00Z"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["result"]["data"]["total_patients"], 0)


class DoctorDashboardTests(DashboardTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.as_of = _at(10, hour=15)
        self.alice = make_patient("Alice", "Smith")
        self.bob = make_patient("Bob", "Jones")
        self.carol = make_patient("Carol", "White")

        self.prescribe(self.alice, [(self.ibuprofen, 5), (self.amoxicillin, 2)], when=_at(10, hour=9))
        self.prescribe(self.alice, [(self.ibuprofen, 5)], when=_at(10, hour=11))
        started = self.prescribe(self.bob, [(self.amoxicillin, 3)], when=_at(9))
        self.prescribe(self.carol, [(self.amoxicillin, 4)], when=_at(20, month=2))
        self.prescribe(self.carol, [(self.amoxicillin, 50)], when=_at(11))
        self.prescribe(self.bob, [(self.amoxicillin, 50)], doctor=self.other_doctor, when=_at(10))
        PrescriptionService.fill_item(started.items.get().id, 1)

    def test_doctor_dashboard(self):
        data = DashboardService.get_doctor_dashboard(self.doctor.id, as_of=self.as_of)

        self.assertEqual(data["my_prescriptions_today"], 2)
        self.assertEqual(data["my_patients_today"], 1)
        self.assertEqual(data["my_total_prescriptions"], 4)
        self.assertEqual(data["pending_prescriptions"], 3)
        self.assertEqual([patient["name"] for patient in data["recent_patients"]],
                         ["Alice Smith", "Bob Jones", "Carol White"])
        self.assertEqual(data["recent_patients"][0]["last_visit"], _at(10, hour=11).isoformat())
        self.assertEqual(data["prescription_stats"], {
            "this_week": 3,
            "this_month": 3,
            "most_prescribed_medicine": "Ibuprofen",
        })

    def test_doctor_dashboard_with_no_history(self):
        fresh = make_user("fresh@clinic.test", User.ROLE_DOCTOR)

        data = DashboardService.get_doctor_dashboard(fresh.id, as_of=self.as_of)

        self.assertEqual(data["my_total_prescriptions"], 0)
        self.assertEqual(data["recent_patients"], [])
        self.assertEqual(data["prescription_stats"]["most_prescribed_medicine"], "")

    def test_unknown_or_non_doctor(self):
        with self.assertRaises(NotFound):
            DashboardService.get_doctor_dashboard(9999)
        with self.assertRaises(InvalidRole):
            DashboardService.get_doctor_dashboard(self.cashier.id)

    def test_doctor_dashboard_procedure_access(self):
        params = {"doctor_id": self.doctor.id, "as_of": self.as_of.isoformat()}

        self.client.force_login(self.doctor)
        response = self.rpc_query("dashboard.doctor", params)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["result"]["data"]["my_prescriptions_today"], 2)

        self.client.force_login(self.other_doctor)
        self.assertEqual(self.rpc_query("dashboard.doctor", params).status_code, 403)

        self.client.force_login(self.cashier)
        self.assertEqual(self.rpc_query("dashboard.doctor", params).status_code, 403)

        self.client.force_login(self.admin)
        self.assertEqual(self.rpc_query("dashboard.doctor", params).status_code, 200)


class CashierDashboardTests(DashboardTestMixin, TestCase):
    def test_cashier_dashboard(self):
        alice = make_patient("Alice", "Smith")
        bob = make_patient("Bob", "Jones")
        make_medicine("Insulin", stock=0, category=Medicine.Category.DIABETES)
        paid = self.prescribe(alice, [(self.ibuprofen, 1)])
        self.prescribe(bob, [(self.ibuprofen, 1)])
        self.prescribe(bob, [(self.amoxicillin, 1)])
        now = timezone.now()
        self.pay(alice, "10.00", prescription=paid, when=now - timedelta(seconds=30))
        self.pay(bob, "5.50", method=Payment.METHOD_CARD, when=now - timedelta(seconds=20))
        self.pay(bob, "4.00", when=now - timedelta(seconds=10))
        self.pay(alice, "80.00", method=Payment.METHOD_INSURANCE, when=now - timedelta(days=400))

        data = DashboardService.get_cashier_dashboard(as_of=now)

        self.assertEqual(data["today_sales"], 19.5)
        self.assertEqual(data["today_transactions"], 3)
        self.assertEqual(data["pending_payments"], 2)
        self.assertEqual(data["low_stock_alerts"], 1)
        self.assertEqual([payment["amount"] for payment in data["recent_payments"]], [4.0, 5.5, 10.0, 80.0])
        self.assertEqual(data["recent_payments"][0]["patient_name"], "Bob Jones")
        self.assertEqual(data["payment_stats"], {
            "cash_payments": 14.0,
            "card_payments": 5.5,
            "insurance_payments": 0.0,
        })

    def test_pending_payments_ignore_payments_after_as_of(self):
        alice = make_patient("Alice", "Smith")
        prescription = self.prescribe(alice, [(self.ibuprofen, 1)])
        now = timezone.now()
        self.pay(alice, "10.00", prescription=prescription, when=now + timedelta(hours=1))

        self.assertEqual(DashboardService.get_cashier_dashboard(as_of=now)["pending_payments"], 1)
        self.assertEqual(
            DashboardService.get_cashier_dashboard(as_of=now + timedelta(hours=2))["pending_payments"],
            0,
        )

    def test_cashier_dashboard_procedure(self):
        self.client.force_login(self.doctor)
        self.assertEqual(self.rpc_query("dashboard.cashier").status_code, 403)

        self.client.force_login(self.cashier)
        response = self.rpc_query("dashboard.cashier")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["result"]["data"]["today_transactions"], 0)
