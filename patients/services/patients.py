"""
Record store for patients.

All constraint checks happen here, before anything is written.  Each
create/update runs in its own transaction; the composite unique index is
the final word when two requests race, and an ``IntegrityError`` from it
is reported as a :class:`ConflictError` like any other duplicate.
"""
from __future__ import annotations

import logging
from typing import Any

from django.db import IntegrityError, transaction

from patients.exceptions import ConflictError, NotFoundError, ValidationError
from patients.models import Patient
from patients.schema import BIRTH_YEAR_MAX, BIRTH_YEAR_MIN, NAME_MAX_LENGTH

logger = logging.getLogger(__name__)


def _clean_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def validate_patient_fields(*, name: Any, address: Any, birth_year: Any) -> dict[str, Any]:
    """Check every field constraint and return the cleaned values.

    Raises :class:`ValidationError` listing all offending fields at once.
    """
    errors: dict[str, list[str]] = {}

    clean_name = _clean_text(name)
    if clean_name is None:
        errors['name'] = ['Name is required and may not be empty.']
    elif len(clean_name) > NAME_MAX_LENGTH:
        errors['name'] = [f'Name may not exceed {NAME_MAX_LENGTH} characters.']

    clean_address = _clean_text(address)
    if clean_address is None:
        errors['address'] = ['Address is required and may not be empty.']

    # bool is an int subclass but never a year
    if not isinstance(birth_year, int) or isinstance(birth_year, bool):
        errors['birth_year'] = ['Birth year must be an integer.']
    elif not BIRTH_YEAR_MIN <= birth_year <= BIRTH_YEAR_MAX:
        errors['birth_year'] = [f'Birth year must be between {BIRTH_YEAR_MIN} and {BIRTH_YEAR_MAX}.']

    if errors:
        raise ValidationError(errors)
    return {'name': clean_name, 'address': clean_address, 'birth_year': birth_year}


def _ensure_unique(name: str, birth_year: int, exclude_id: int | None = None) -> None:
    qs = Patient.objects.filter(name=name, birth_year=birth_year)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        logger.info("Rejected duplicate patient name=%r birth_year=%s", name, birth_year)
        raise ConflictError(f'A patient named {name!r} born in {birth_year} already exists.')


def create_patient(*, name: Any, address: Any, birth_year: Any) -> Patient:
    fields = validate_patient_fields(name=name, address=address, birth_year=birth_year)
    try:
        with transaction.atomic():
            _ensure_unique(fields['name'], fields['birth_year'])
            patient = Patient.objects.create(**fields)
    except IntegrityError as exc:
        logger.warning("Unique index rejected patient name=%r birth_year=%s", fields['name'], fields['birth_year'])
        raise ConflictError(
            f"A patient named {fields['name']!r} born in {fields['birth_year']} already exists."
        ) from exc
    logger.info("Created patient id=%s", patient.pk)
    return patient


def get_patient(patient_id: int) -> Patient:
    patient = Patient.objects.filter(pk=patient_id).first()
    if patient is None:
        raise NotFoundError(f'Patient {patient_id} not found.')
    return patient


def list_patients() -> list[Patient]:
    return list(Patient.objects.order_by('id'))


def update_patient(patient_id: int, *, name: Any, address: Any, birth_year: Any) -> Patient:
    """Replace all fields of an existing patient.

    The uniqueness check ignores the patient's own row, so saving a record
    with its current name and birth year is always allowed.
    """
    try:
        with transaction.atomic():
            patient = Patient.objects.select_for_update().filter(pk=patient_id).first()
            if patient is None:
                raise NotFoundError(f'Patient {patient_id} not found.')
            fields = validate_patient_fields(name=name, address=address, birth_year=birth_year)
            _ensure_unique(fields['name'], fields['birth_year'], exclude_id=patient.pk)
            for attr, value in fields.items():
                setattr(patient, attr, value)
            patient.save(update_fields=list(fields))
    except IntegrityError as exc:
        logger.warning("Unique index rejected update of patient id=%s", patient_id)
        raise ConflictError('Another patient with the same name and birth year already exists.') from exc
    logger.info("Updated patient id=%s", patient.pk)
    return patient


def delete_patient(patient_id: int) -> None:
    with transaction.atomic():
        deleted, _ = Patient.objects.filter(pk=patient_id).delete()
    if not deleted:
        raise NotFoundError(f'Patient {patient_id} not found.')
    logger.info("Deleted patient id=%s", patient_id)
