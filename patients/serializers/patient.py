import html

import bleach
from rest_framework import serializers

from patients.models import Patient


def clean_text(v):
    """Strip every HTML tag and return plain text (entities decoded)."""
    return html.unescape(bleach.clean((v or '').strip(), tags=set(), strip=True))


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = ['id', 'name', 'address', 'birth_year']
        read_only_fields = fields


class PatientWriteSerializer(serializers.Serializer):
    """Shapes the request body for create/update.

    Only types are checked here; required fields, lengths and the birth
    year range are enforced by the record store so that the API and any
    other caller get the same answers.
    """
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    birth_year = serializers.IntegerField(required=False, allow_null=True)

    def validate_name(self, v):
        return clean_text(v)

    def validate_address(self, v):
        return clean_text(v)

    def to_store_kwargs(self) -> dict:
        data = self.validated_data
        return {
            'name': data.get('name'),
            'address': data.get('address'),
            'birth_year': data.get('birth_year'),
        }
