"""
Django admin registration for the Patient model.

Useful during development to inspect the seed rows and fix data by
hand.  Edits made here go through the model, not the record store, so
only the database's unique index guards them.
"""

from django.contrib import admin

from .models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'address', 'birth_year')
    list_filter = ('birth_year',)
    search_fields = ('name', 'address')
