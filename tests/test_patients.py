from django.test import TestCase

from apps.accounts.models import User
from apps.common.exceptions import NotFound
from apps.patients.models import Patient
from apps.patients.services import PatientService
from tests.utils import RpcClientMixin, make_patient, make_user


class PatientProcedureTests(RpcClientMixin, TestCase):
    def setUp(self):
        self.cashier = make_user("cashier@clinic.test", User.ROLE_CASHIER)
        self.client.force_login(self.cashier)

    def test_create_patient(self):
        response = self.rpc_mutate("patients.create", {
            "first_name": "Alice",
            "last_name": "Smith",
            "gender": "female",
            "birthdate": "1990-02-14",
            "allergies": "Penicillin",
        })

        self.assertEqual(response.status_code, 200)
        data = response.json()["result"]["data"]
        self.assertEqual(data["first_name"], "Alice")
        self.assertEqual(data["allergies"], "Penicillin")
        self.assertIsNone(data["email"])
        self.assertTrue(Patient.objects.filter(id=data["id"]).exists())

    def test_create_requires_demographics(self):
        response = self.rpc_mutate("patients.create", {"first_name": "Alice", "gender": "unknown"})

        self.assertEqual(response.status_code, 400)
        details = response.json()["error"]["details"]
        for field in ["last_name", "gender", "birthdate"]:
            self.assertIn(field, details)

    def test_get_all_is_ordered_by_name(self):
        make_patient("Zed", "Brown")
        make_patient("Amy", "Brown")
        make_patient("Carl", "Adams")

        data = self.rpc_query("patients.get_all").json()["result"]["data"]

        self.assertEqual(
            [(row["last_name"], row["first_name"]) for row in data],
            [("Adams", "Carl"), ("Brown", "Amy"), ("Brown", "Zed")],
        )

    def test_get_by_id(self):
        patient = make_patient()

        data = self.rpc_query("patients.get_by_id", {"id": patient.id}).json()["result"]["data"]
        self.assertEqual(data["id"], patient.id)

        response = self.rpc_query("patients.get_by_id", {"id": patient.id + 100})
        self.assertIsNone(response.json()["result"]["data"])

    def test_partial_update(self):
        patient = make_patient(phone="555-0100")

        response = self.rpc_mutate("patients.update", {"id": patient.id, "address": "12 Elm St"})

        self.assertEqual(response.status_code, 200)
        patient.refresh_from_db()
        self.assertEqual(patient.address, "12 Elm St")
        self.assertEqual(patient.phone, "555-0100")
        self.assertEqual(patient.first_name, "John")

    def test_update_unknown_patient(self):
        response = self.rpc_mutate("patients.update", {"id": 9999, "address": "Nowhere"})

        self.assertEqual(response.status_code, 404)
        error = response.json()["error"]
        self.assertEqual(error["code"], "not_found")
        self.assertEqual(error["details"], {"entity": "patient", "id": 9999})
        self.assertEqual(error["message"], "Patient with id 9999 does not exist")

    def test_search_matches_first_or_last_name(self):
        make_patient("Johnny", "Walker")
        make_patient("Mary", "Johnson")
        make_patient("Peter", "Pan")

        data = self.rpc_query("patients.search", {"query": "JOHN"}).json()["result"]["data"]

        self.assertEqual({row["last_name"] for row in data}, {"Walker", "Johnson"})


class PatientServiceTests(TestCase):
    def test_update_raises_for_missing_patient(self):
        with self.assertRaises(NotFound):
            PatientService.update_patient(42, first_name="Ghost")

    def test_get_patient_returns_none_when_absent(self):
        self.assertIsNone(PatientService.get_patient(42))
