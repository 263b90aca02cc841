"""
Schema definition for the patient table.

The Django model declares the columns, but the rules that the record store
enforces and the migrator verifies are collected here so that both sides
read them from one place.
"""
from __future__ import annotations

APP_LABEL = "patients"

# Column names as they appear in the database table
COLUMNS = ("id", "name", "address", "birth_year")

NAME_MAX_LENGTH = 450

BIRTH_YEAR_MIN = 1900
BIRTH_YEAR_MAX = 2025

# Composite unique index on (name, birth_year)
UNIQUE_FIELDS = ("name", "birth_year")
UNIQUE_INDEX_NAME = "uniq_patient_name_birth_year"

# Rows inserted when the table is first created
SEED_PATIENTS = (
    {"name": "Bart Luijten", "address": "Achterdijk 46 C, Odijk", "birth_year": 1962},
    {"name": "Els Gijsbers", "address": "Achterdijk 46 C, Odijk", "birth_year": 1962},
)
