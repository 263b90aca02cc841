import django.core.validators
from django.db import migrations, models


SEED_PATIENTS = [
    {"name": "Bart Luijten", "address": "Achterdijk 46 C, Odijk", "birth_year": 1962},
    {"name": "Els Gijsbers", "address": "Achterdijk 46 C, Odijk", "birth_year": 1962},
]


def seed_patients(apps, schema_editor):
    Patient = apps.get_model("patients", "Patient")
    db_alias = schema_editor.connection.alias
    # Inserted one at a time so the ids come out as 1 and 2 on a fresh table
    for row in SEED_PATIENTS:
        Patient.objects.using(db_alias).create(**row)


def unseed_patients(apps, schema_editor):
    Patient = apps.get_model("patients", "Patient")
    db_alias = schema_editor.connection.alias
    for row in SEED_PATIENTS:
        Patient.objects.using(db_alias).filter(name=row["name"], birth_year=row["birth_year"]).delete()


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Patient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=450)),
                ("address", models.TextField()),
                (
                    "birth_year",
                    models.IntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1900),
                            django.core.validators.MaxValueValidator(2025),
                        ]
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.RunPython(seed_patients, unseed_patients),
        migrations.AddConstraint(
            model_name="patient",
            constraint=models.UniqueConstraint(fields=("name", "birth_year"), name="uniq_patient_name_birth_year"),
        ),
        migrations.AddConstraint(
            model_name="patient",
            constraint=models.CheckConstraint(
                condition=models.Q(("birth_year__gte", 1900), ("birth_year__lte", 2025)),
                name="patient_birth_year_range",
            ),
        ),
        migrations.AddConstraint(
            model_name="patient",
            constraint=models.CheckConstraint(condition=models.Q(("name", ""), _negated=True), name="patient_name_not_empty"),
        ),
        migrations.AddConstraint(
            model_name="patient",
            constraint=models.CheckConstraint(
                condition=models.Q(("address", ""), _negated=True), name="patient_address_not_empty"
            ),
        ),
    ]
