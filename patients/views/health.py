from django.db import DatabaseError, connections
from django.http import JsonResponse

from patients.services.migrator import SchemaMigrator


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        schema_current = SchemaMigrator().is_current()
    except DatabaseError as e:
        return JsonResponse({'ok': False, 'error': str(e)}, status=500)
    ok = bool(row and row[0] == 1) and schema_current
    return JsonResponse({'ok': ok, 'db': bool(row and row[0] == 1), 'schema': schema_current}, status=200 if ok else 503)
