"""
Database models for the patient registry.

A single ``Patient`` table backs the whole API.  Field constraints
(non-empty text, birth year range) are checked by
:mod:`patients.services.patients` before anything reaches the database.
The same rules are declared here as validators and check constraints so
that writes through the Django admin, or straight through the ORM, are
held to them too; the composite unique index on ``(name, birth_year)``
makes the database reject duplicates that slip past the store's check.
"""
from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .schema import (
    BIRTH_YEAR_MAX,
    BIRTH_YEAR_MIN,
    NAME_MAX_LENGTH,
    UNIQUE_FIELDS,
    UNIQUE_INDEX_NAME,
)


class Patient(models.Model):
    """A registered patient."""
    name = models.CharField(max_length=NAME_MAX_LENGTH)
    address = models.TextField()
    birth_year = models.IntegerField(
        validators=[MinValueValidator(BIRTH_YEAR_MIN), MaxValueValidator(BIRTH_YEAR_MAX)],
    )

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=list(UNIQUE_FIELDS), name=UNIQUE_INDEX_NAME),
            models.CheckConstraint(
                condition=models.Q(birth_year__gte=BIRTH_YEAR_MIN, birth_year__lte=BIRTH_YEAR_MAX),
                name="patient_birth_year_range",
            ),
            models.CheckConstraint(condition=~models.Q(name=""), name="patient_name_not_empty"),
            models.CheckConstraint(condition=~models.Q(address=""), name="patient_address_not_empty"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.birth_year})"
