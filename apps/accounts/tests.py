from datetime import timedelta
from io import StringIO
import os
import subprocess
import sys

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase
from drf_spectacular.generators import SchemaGenerator
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from .gate import authorize, grant_for

User = get_user_model()


class AuthorizationGateTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(email="admin@example.com", password="S3cure-pass!")
        self.viewer = User.objects.create_user(email="viewer@example.com", password="S3cure-pass!")

    def test_admin_token_is_granted(self):
        result = authorize(str(AccessToken.for_user(self.admin)))
        self.assertTrue(result.granted)
        self.assertEqual(result.identity, self.admin)

    def test_missing_token_is_denied(self):
        self.assertFalse(authorize(None).granted)
        self.assertFalse(authorize("").granted)

    def test_garbage_token_is_denied(self):
        self.assertFalse(authorize("not-a-jwt").granted)

    def test_expired_token_is_denied(self):
        token = AccessToken.for_user(self.admin)
        token.set_exp(lifetime=-timedelta(minutes=1))
        self.assertFalse(authorize(str(token)).granted)

    def test_viewer_role_is_denied(self):
        result = authorize(str(AccessToken.for_user(self.viewer)))
        self.assertFalse(result.granted)
        self.assertEqual(result.identity, self.viewer)

    def test_deactivated_admin_is_denied(self):
        token = str(AccessToken.for_user(self.admin))
        self.admin.is_active = False
        self.admin.save()
        self.assertFalse(authorize(token).granted)

    def test_anonymous_identity_is_denied(self):
        self.assertFalse(grant_for(None).granted)


class LoginTests(APITestCase):
    url = "/api/v1/auth/login"

    def setUp(self):
        self.admin = User.objects.create_superuser(email="admin@example.com", password="S3cure-pass!")

    def test_login_returns_tokens_and_sets_cookie(self):
        res = self.client.post(self.url, {"email": "ADMIN@example.com", "password": "S3cure-pass!"}, format="json")
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertTrue(body["success"])
        self.assertIn("access", body["data"])
        self.assertIn("refresh", body["data"])
        self.assertEqual(body["data"]["user"]["role"], "ADMIN")
        self.assertIn(settings.SESSION_COOKIE_NAME_JWT, res.cookies)
        self.assertTrue(res.cookies[settings.SESSION_COOKIE_NAME_JWT]["httponly"])

    def test_wrong_password_is_401(self):
        res = self.client.post(self.url, {"email": "admin@example.com", "password": "nope"}, format="json")
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json(), {"success": False, "error": "Invalid credentials", "code": "invalid_credentials"})

    def test_unknown_email_is_401(self):
        res = self.client.post(self.url, {"email": "ghost@example.com", "password": "S3cure-pass!"}, format="json")
        self.assertEqual(res.status_code, 401)

    def test_missing_fields_is_400(self):
        res = self.client.post(self.url, {"email": "admin@example.com"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "password")

    def test_refresh_issues_new_access(self):
        login = self.client.post(self.url, {"email": "admin@example.com", "password": "S3cure-pass!"}, format="json")
        res = self.client.post("/api/v1/auth/refresh", {"refresh": login.json()["data"]["refresh"]}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertIn("access", res.json()["data"])

    def test_refresh_with_bad_token_is_401(self):
        res = self.client.post("/api/v1/auth/refresh", {"refresh": "garbage"}, format="json")
        self.assertEqual(res.status_code, 401)

    def test_cookie_session_reaches_gated_endpoint(self):
        self.client.post(self.url, {"email": "admin@example.com", "password": "S3cure-pass!"}, format="json")
        res = self.client.get("/api/v1/stats")
        self.assertEqual(res.status_code, 200)

    def test_logout_clears_cookie(self):
        self.client.post(self.url, {"email": "admin@example.com", "password": "S3cure-pass!"}, format="json")
        res = self.client.post("/api/v1/auth/logout")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.cookies[settings.SESSION_COOKIE_NAME_JWT].value, "")


class ProfileTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(email="admin@example.com", password="S3cure-pass!", name="Admin")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.admin)}")

    def test_get_profile(self):
        res = self.client.get("/api/v1/profile")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["email"], "admin@example.com")

    def test_profile_requires_identity(self):
        self.client.credentials()
        res = self.client.get("/api/v1/profile")
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["code"], "unauthorized")

    def test_update_profile(self):
        res = self.client.put("/api/v1/profile", {"name": "New Name", "image": ""}, format="json")
        self.assertEqual(res.status_code, 200)
        self.admin.refresh_from_db()
        self.assertEqual(self.admin.name, "New Name")
        self.assertIsNone(self.admin.image)

    def test_update_profile_duplicate_email_is_409(self):
        User.objects.create_user(email="taken@example.com", password="S3cure-pass!")
        res = self.client.put("/api/v1/profile", {"email": "Taken@example.com"}, format="json")
        self.assertEqual(res.status_code, 409)

    def test_change_password(self):
        res = self.client.post(
            "/api/v1/profile/change-password",
            {"currentPassword": "S3cure-pass!", "newPassword": "An0ther-strong-one", "confirmPassword": "An0ther-strong-one"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.check_password("An0ther-strong-one"))

    def test_change_password_wrong_current(self):
        res = self.client.post(
            "/api/v1/profile/change-password",
            {"currentPassword": "wrong", "newPassword": "An0ther-strong-one", "confirmPassword": "An0ther-strong-one"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "currentPassword")

    def test_change_password_mismatch(self):
        res = self.client.post(
            "/api/v1/profile/change-password",
            {"currentPassword": "S3cure-pass!", "newPassword": "An0ther-strong-one", "confirmPassword": "different-one-1"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "confirmPassword")
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.check_password("S3cure-pass!"))


class SessionTokenAuthenticationTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(email="admin@example.com", password="S3cure-pass!")

    def test_malformed_header_leaves_public_read_open(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer a b")
        self.assertEqual(self.client.get("/api/v1/projects").status_code, 200)

    def test_malformed_header_gated_read_is_401(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer a b")
        res = self.client.get("/api/v1/stats")
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["code"], "unauthorized")

    def test_inactive_user_token_is_anonymous(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.admin)}")
        self.admin.is_active = False
        self.admin.save()
        self.assertEqual(self.client.get("/api/v1/projects").status_code, 200)
        res = self.client.post("/api/v1/projects", {"title": "X"}, format="json")
        self.assertEqual(res.status_code, 401)
        self.assertIn("Bearer", res.headers["WWW-Authenticate"])

    def test_header_takes_precedence_over_cookie(self):
        viewer = User.objects.create_user(email="viewer@example.com", password="S3cure-pass!")
        self.client.cookies[settings.SESSION_COOKIE_NAME_JWT] = str(AccessToken.for_user(self.admin))
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(viewer)}")
        self.assertEqual(self.client.get("/api/v1/stats").status_code, 401)


class SchemaTests(TestCase):
    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.schema = SchemaGenerator().get_schema(request=None, public=True)

    def test_bearer_scheme_documented(self):
        schemes = self.schema["components"]["securitySchemes"]
        self.assertEqual(schemes["jwtAuth"]["scheme"], "bearer")
        create = self.schema["paths"]["/api/v1/projects"]["post"]
        self.assertIn({"jwtAuth": []}, create["security"])

    def test_refresh_and_logout_responses_documented(self):
        refresh = self.schema["paths"]["/api/v1/auth/refresh"]["post"]["responses"]["200"]
        self.assertIn("application/json", refresh["content"])
        logout = self.schema["paths"]["/api/v1/auth/logout"]["post"]["responses"]["200"]
        self.assertEqual(logout["description"], "Session cookie cleared; data is null")


class ProjectCheckTests(SimpleTestCase):
    def test_system_checks_pass(self):
        call_command("check", stdout=StringIO())

    def test_fresh_process_boots(self):
        env = dict(os.environ, DJANGO_SETTINGS_MODULE="config.settings", DJANGO_ENV="local")
        result = subprocess.run(
            [sys.executable, "manage.py", "check"],
            cwd=settings.BASE_DIR, env=env, capture_output=True, text=True, timeout=120,
        )
        self.assertEqual(result.returncode, 0, result.stderr)
