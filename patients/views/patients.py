"""
Patient CRUD views.

Thin wrappers that translate HTTP requests into record store calls.
Errors raised by the store (``NotFoundError``, ``ValidationError``,
``ConflictError``) are rendered by :func:`patients.exceptions.api_exception_handler`.
"""
from __future__ import annotations

from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from patients.serializers.patient import PatientSerializer, PatientWriteSerializer
from patients.services import patients as store


def _store_kwargs(request) -> dict:
    body = PatientWriteSerializer(data=request.data)
    body.is_valid(raise_exception=True)
    return body.to_store_kwargs()


@swagger_auto_schema(method='get', responses={200: PatientSerializer(many=True)})
@swagger_auto_schema(method='post', request_body=PatientWriteSerializer, responses={201: PatientSerializer})
@api_view(['GET', 'POST'])
def patient_collection(request):
    if request.method == 'POST':
        patient = store.create_patient(**_store_kwargs(request))
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)
    return Response(PatientSerializer(store.list_patients(), many=True).data)


@swagger_auto_schema(method='get', responses={200: PatientSerializer})
@swagger_auto_schema(method='put', request_body=PatientWriteSerializer, responses={200: PatientSerializer})
@swagger_auto_schema(method='delete', responses={204: 'Deleted'})
@api_view(['GET', 'PUT', 'DELETE'])
def patient_detail(request, pk: int):
    if request.method == 'PUT':
        patient = store.update_patient(pk, **_store_kwargs(request))
        return Response(PatientSerializer(patient).data)
    if request.method == 'DELETE':
        store.delete_patient(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    return Response(PatientSerializer(store.get_patient(pk)).data)
