"""
Integration tests for the patient API.

These tests exercise the HTTP mapping of the record store: status codes,
the response bodies and the error envelope produced by the exception
handler.  They use Django REST Framework's APIClient within the
APITestCase base class.

To run the tests:

```
pytest -q patients/tests
```
"""

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from patients.models import Patient


class PatientAPITests(APITestCase):
    def detail_url(self, pk: int) -> str:
        return reverse('patient-detail', kwargs={'pk': pk})

    def test_list_returns_seed_patients(self):
        response = self.client.get('/api/patients')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            [
                {'id': 1, 'name': 'Bart Luijten', 'address': 'Achterdijk 46 C, Odijk', 'birth_year': 1962},
                {'id': 2, 'name': 'Els Gijsbers', 'address': 'Achterdijk 46 C, Odijk', 'birth_year': 1962},
            ],
        )

    def test_create_returns_201_with_assigned_id(self):
        response = self.client.post(
            '/api/patients',
            {'name': 'Jan de Vries', 'address': 'Dorpsstraat 1', 'birth_year': 1990},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['id'], 3)
        self.assertTrue(Patient.objects.filter(pk=3, name='Jan de Vries').exists())

    def test_create_duplicate_name_and_year_is_rejected(self):
        response = self.client.post(
            '/api/patients',
            {'name': 'Els Gijsbers', 'address': 'Other address', 'birth_year': 1962},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['ok'], False)
        self.assertEqual(response.data['error']['code'], 'conflict')

    def test_create_with_invalid_fields_lists_them(self):
        response = self.client.post(
            '/api/patients',
            {'name': '', 'birth_year': 1850},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'validation_error')
        self.assertEqual(set(response.data['error']['message']), {'name', 'address', 'birth_year'})
        self.assertEqual(Patient.objects.count(), 2)

    def test_create_with_non_numeric_year_is_rejected(self):
        response = self.client.post(
            '/api/patients',
            {'name': 'Piet', 'address': 'Kerkstraat 2', 'birth_year': 'nineteen'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'api_error')

    def test_markup_is_stripped_from_text(self):
        response = self.client.post(
            '/api/patients',
            {'name': '<b>Piet</b>', 'address': '<script>x</script>Kerkstraat 2', 'birth_year': 1980},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Piet')
        self.assertNotIn('<', response.data['address'])

    def test_ampersands_and_markup_round_trip_as_plain_text(self):
        response = self.client.post(
            '/api/patients',
            {'name': 'Jan & <b>Piet</b>', 'address': 'Kerk & Zn 1', 'birth_year': 1990},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Jan & Piet')
        self.assertEqual(response.data['address'], 'Kerk & Zn 1')
        fetched = self.client.get(self.detail_url(response.data['id']))
        self.assertEqual(fetched.data['name'], 'Jan & Piet')
        self.assertTrue(Patient.objects.filter(name='Jan & Piet', address='Kerk & Zn 1').exists())

    def test_longest_name_with_ampersand_is_accepted(self):
        name = 'A & B' + 'x' * 445
        response = self.client.post(
            '/api/patients',
            {'name': name, 'address': 'Kerkstraat 2', 'birth_year': 1990},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], name)

    def test_get_existing_and_missing(self):
        response = self.client.get(self.detail_url(1))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Bart Luijten')

        missing = self.client.get(self.detail_url(999))
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing.data['error']['code'], 'not_found')

    def test_update_own_name_and_year(self):
        response = self.client.put(
            self.detail_url(1),
            {'name': 'Bart Luijten', 'address': 'New address', 'birth_year': 1962},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['address'], 'New address')
        self.assertEqual(Patient.objects.get(pk=1).address, 'New address')

    def test_update_conflict_and_missing(self):
        conflict = self.client.put(
            self.detail_url(2),
            {'name': 'Bart Luijten', 'address': 'Somewhere', 'birth_year': 1962},
            format='json',
        )
        self.assertEqual(conflict.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(conflict.data['error']['code'], 'conflict')

        missing = self.client.put(
            self.detail_url(999),
            {'name': 'Nobody', 'address': 'Nowhere', 'birth_year': 1950},
            format='json',
        )
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_then_get(self):
        response = self.client.delete(self.detail_url(2))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.get(self.detail_url(2)).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.delete(self.detail_url(2)).status_code, status.HTTP_404_NOT_FOUND)

    def test_healthz_reports_current_schema(self):
        response = self.client.get(reverse('healthz'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {'ok': True, 'db': True, 'schema': True})

    def test_metrics_endpoint_is_exposed(self):
        response = self.client.get('/metrics')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_openapi_document_lists_patient_paths(self):
        response = self.client.get(reverse('schema-json', kwargs={'format': '.json'}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        # drf-yasg moves the shared "/api" prefix into basePath
        paths = [response.json().get('basePath', '').rstrip('/') + p for p in response.json()['paths']]
        self.assertIn('/api/patients', paths)
        self.assertIn('/api/patients/{id}', paths)
