from django.test import TestCase
from rest_framework.authtoken.models import Token

from apps.accounts.models import User
from tests.utils import RpcClientMixin, make_user


class AuthProcedureTests(RpcClientMixin, TestCase):
    def setUp(self):
        self.admin = make_user("admin@clinic.test", User.ROLE_ADMIN)
        self.doctor = make_user("doctor@clinic.test", User.ROLE_DOCTOR)

    def _register_payload(self, **overrides):
        payload = {
            "email": "New.Cashier@Clinic.test",
            "password": "secret1",
            "role": "cashier",
            "first_name": "Nora",
            "last_name": "Cash",
        }
        payload.update(overrides)
        return payload

    def test_admin_registers_user(self):
        self.client.force_login(self.admin)

        response = self.rpc_mutate("auth.register", self._register_payload())

        self.assertEqual(response.status_code, 200)
        data = response.json()["result"]["data"]
        self.assertEqual(data["email"], "new.cashier@clinic.test")
        self.assertEqual(data["role"], "cashier")
        self.assertNotIn("password", data)
        user = User.objects.get(email="new.cashier@clinic.test")
        self.assertTrue(user.check_password("secret1"))

    def test_non_admin_cannot_register(self):
        self.client.force_login(self.doctor)

        response = self.rpc_mutate("auth.register", self._register_payload())

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "permission_denied")

    def test_register_rejects_duplicate_email_short_password_and_bad_role(self):
        self.client.force_login(self.admin)

        response = self.rpc_mutate("auth.register", self._register_payload(email="DOCTOR@clinic.test"))
        self.assertEqual(response.status_code, 400)
        self.assertIn("email", response.json()["error"]["details"])

        response = self.rpc_mutate("auth.register", self._register_payload(password="123"))
        self.assertIn("password", response.json()["error"]["details"])

        response = self.rpc_mutate("auth.register", self._register_payload(role="nurse"))
        self.assertIn("role", response.json()["error"]["details"])

    def test_login_returns_user_and_reusable_token(self):
        payload = {"email": "doctor@clinic.test", "password": "pass12345"}

        first = self.rpc_mutate("auth.login", payload).json()["result"]["data"]
        second = self.rpc_mutate("auth.login", payload).json()["result"]["data"]

        self.assertEqual(first["user"]["id"], self.doctor.id)
        self.assertEqual(first["token"], second["token"])
        self.assertEqual(Token.objects.get(user=self.doctor).key, first["token"])

    def test_login_failures(self):
        response = self.rpc_mutate("auth.login", {"email": "doctor@clinic.test", "password": "wrong-pass"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"]["code"], "authentication_failed")
        self.assertEqual(response.json()["error"]["message"], "Invalid email or password.")

        self.doctor.is_active = False
        self.doctor.save()
        response = self.rpc_mutate("auth.login", {"email": "doctor@clinic.test", "password": "pass12345"})
        self.assertEqual(response.json()["error"]["message"], "User account is disabled.")

    def test_get_current_user(self):
        token = Token.objects.create(user=self.doctor)

        response = self.rpc_query("auth.get_current_user", {"token": token.key})
        self.assertEqual(response.json()["result"]["data"]["email"], "doctor@clinic.test")

        response = self.rpc_query("auth.get_current_user", {"token": "missing"})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["result"]["data"])


class UserModelTests(TestCase):
    def test_superuser_defaults_to_admin_role(self):
        user = User.objects.create_superuser(email="root@clinic.test", password="pass12345")

        self.assertEqual(user.username, "root@clinic.test")
        self.assertEqual(user.role, User.ROLE_ADMIN)
        self.assertTrue(user.is_admin())

    def test_role_helpers(self):
        doctor = make_user("doc@clinic.test", User.ROLE_DOCTOR)

        self.assertTrue(doctor.is_doctor())
        self.assertFalse(doctor.is_cashier())
        self.assertFalse(doctor.is_admin())
