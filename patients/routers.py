"""
URL mappings for the patient API.

Trailing slashes are omitted to match the client's endpoint table.
"""
from django.urls import include, path

from .views import health
from .views.patients import patient_collection, patient_detail


urlpatterns = [
    # Prometheus scrape endpoint at /metrics
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Patients
    path('api/patients', patient_collection, name='patient-collection'),
    path('api/patients/<int:pk>', patient_detail, name='patient-detail'),
]
