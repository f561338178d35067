from unittest import mock

from cloudinary.exceptions import Error as CloudinaryError
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from common.exceptions import UpstreamFailure

from .policies import policy_for_folder
from .storage import CloudinaryStorageBackend, StoredObject

User = get_user_model()

MB = 1024 * 1024


class UploadPolicyTests(TestCase):
    def test_cvs_folder_takes_documents(self):
        policy = policy_for_folder("cvs")
        self.assertTrue(policy.allows_type("application/pdf"))
        self.assertFalse(policy.allows_type("image/png"))
        self.assertTrue(policy.allows_size(10 * MB))
        self.assertFalse(policy.allows_size(10 * MB + 1))

    def test_other_folders_take_images(self):
        policy = policy_for_folder("portfolio")
        self.assertTrue(policy.allows_type("image/webp"))
        self.assertFalse(policy.allows_type("application/pdf"))
        self.assertFalse(policy.allows_size(6 * MB))


@mock.patch("apps.media.views.get_storage_backend")
class UploadAPITests(APITestCase):
    url = "/api/v1/upload"

    def setUp(self):
        admin = User.objects.create_superuser(email="admin@example.com", password="S3cure-pass!")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(admin)}")

    def test_image_upload(self, get_backend):
        get_backend.return_value.upload.return_value = StoredObject(url="https://cdn.example.com/a.png", public_id="portfolio/a")
        image = SimpleUploadedFile("a.png", b"\x89PNG fake", content_type="image/png")
        res = self.client.post(self.url, {"file": image}, format="multipart")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.json(), {"success": True, "data": {"url": "https://cdn.example.com/a.png", "publicId": "portfolio/a"}})
        args = get_backend.return_value.upload.call_args[0]
        self.assertEqual(args[1], "portfolio")

    def test_oversized_image_never_reaches_storage(self, get_backend):
        image = SimpleUploadedFile("big.png", b"0" * (6 * MB), content_type="image/png")
        res = self.client.post(self.url, {"file": image, "folder": "portfolio"}, format="multipart")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "file")
        self.assertIn("5MB", res.json()["details"][0]["message"])
        get_backend.return_value.upload.assert_not_called()

    def test_disallowed_type_never_reaches_storage(self, get_backend):
        text = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        res = self.client.post(self.url, {"file": text}, format="multipart")
        self.assertEqual(res.status_code, 400)
        self.assertIn("image/png", res.json()["details"][0]["message"])
        get_backend.return_value.upload.assert_not_called()

    def test_pdf_into_cvs_folder(self, get_backend):
        get_backend.return_value.upload.return_value = StoredObject(url="https://cdn.example.com/cv.pdf", public_id="cvs/cv")
        pdf = SimpleUploadedFile("cv.pdf", b"%PDF-1.4", content_type="application/pdf")
        res = self.client.post(self.url, {"file": pdf, "folder": "cvs"}, format="multipart")
        self.assertEqual(res.status_code, 201)

    def test_missing_file(self, get_backend):
        res = self.client.post(self.url, {"folder": "portfolio"}, format="multipart")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "file")

    def test_bad_folder_name(self, get_backend):
        image = SimpleUploadedFile("a.png", b"x", content_type="image/png")
        res = self.client.post(self.url, {"file": image, "folder": "../etc"}, format="multipart")
        self.assertEqual(res.status_code, 400)
        get_backend.return_value.upload.assert_not_called()

    def test_storage_failure_is_500(self, get_backend):
        get_backend.return_value.upload.side_effect = UpstreamFailure("boom")
        image = SimpleUploadedFile("a.png", b"x", content_type="image/png")
        res = self.client.post(self.url, {"file": image}, format="multipart")
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json()["code"], "upstream_failure")

    def test_anonymous_upload_is_401(self, get_backend):
        self.client.credentials()
        image = SimpleUploadedFile("a.png", b"x", content_type="image/png")
        res = self.client.post(self.url, {"file": image}, format="multipart")
        self.assertEqual(res.status_code, 401)
        get_backend.return_value.upload.assert_not_called()


@override_settings(CLOUDINARY_CLOUD_NAME="demo", CLOUDINARY_API_KEY="key", CLOUDINARY_API_SECRET="secret")
class CloudinaryStorageBackendTests(TestCase):
    def image(self):
        return SimpleUploadedFile("a.png", b"x", content_type="image/png")

    @mock.patch("apps.media.storage.cloudinary.uploader.upload")
    def test_upload_into_folder(self, upload):
        upload.return_value = {"secure_url": "https://res.cloudinary.com/demo/a.png", "public_id": "portfolio/a"}
        stored = CloudinaryStorageBackend(timeout=7).upload(self.image(), "portfolio")
        self.assertEqual(stored, StoredObject(url="https://res.cloudinary.com/demo/a.png", public_id="portfolio/a"))
        options = upload.call_args.kwargs
        self.assertEqual(options["folder"], "portfolio")
        self.assertEqual(options["resource_type"], "auto")
        self.assertEqual(options["timeout"], 7)
        self.assertEqual(options["cloud_name"], "demo")

    @mock.patch("apps.media.storage.cloudinary.uploader.upload", side_effect=CloudinaryError("Invalid Signature"))
    def test_rejected_upload_is_upstream_failure(self, upload):
        with self.assertRaises(UpstreamFailure):
            CloudinaryStorageBackend().upload(self.image(), "portfolio")

    @mock.patch("apps.media.storage.cloudinary.uploader.upload", side_effect=ConnectionError("unreachable"))
    def test_network_error_is_upstream_failure(self, upload):
        with self.assertRaises(UpstreamFailure):
            CloudinaryStorageBackend().upload(self.image(), "portfolio")

    @override_settings(CLOUDINARY_API_SECRET="")
    @mock.patch("apps.media.storage.cloudinary.uploader.upload")
    def test_missing_credentials_never_call_out(self, upload):
        with self.assertRaises(UpstreamFailure):
            CloudinaryStorageBackend().upload(self.image(), "portfolio")
        upload.assert_not_called()
