"""
Admin write-path tests.

The admin saves through a ModelForm rather than the record store, so
these check that the model's validators and constraints hold the same
rules.  Static files are served from plain storage because the manifest
only exists after ``collectstatic``.
"""

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse

from patients.models import Patient

PLAIN_STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}


@override_settings(STORAGES=PLAIN_STORAGES)
class PatientAdminTests(TestCase):
    def setUp(self) -> None:
        self.admin_user = get_user_model().objects.create_superuser(
            username="beheer", email="beheer@example.com", password="P@ssw0rd1",
        )
        self.client.force_login(self.admin_user)
        self.add_url = reverse("admin:patients_patient_add")

    def test_out_of_range_birth_year_is_refused(self):
        for year in (1200, 1899, 2026):
            response = self.client.post(
                self.add_url, {"name": "Oud", "address": "Kerkstraat 2", "birth_year": year, "_save": "Save"},
            )
            self.assertEqual(response.status_code, 200)
            self.assertIn("birth_year", response.context["adminform"].form.errors)
        self.assertFalse(Patient.objects.filter(name="Oud").exists())

    def test_empty_text_is_refused(self):
        response = self.client.post(
            self.add_url, {"name": "", "address": "", "birth_year": 1980, "_save": "Save"},
        )
        self.assertEqual(response.status_code, 200)
        errors = response.context["adminform"].form.errors
        self.assertIn("name", errors)
        self.assertIn("address", errors)
        self.assertEqual(Patient.objects.count(), 2)

    def test_duplicate_name_and_year_is_refused(self):
        response = self.client.post(
            self.add_url, {"name": "Bart Luijten", "address": "Elders 1", "birth_year": 1962, "_save": "Save"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Patient.objects.filter(name="Bart Luijten").count(), 1)

    def test_valid_patient_is_saved(self):
        response = self.client.post(
            self.add_url, {"name": "Piet", "address": "Kerkstraat 2", "birth_year": 1980, "_save": "Save"},
        )
        self.assertEqual(response.status_code, 302)
        self.assertTrue(Patient.objects.filter(name="Piet", birth_year=1980).exists())
