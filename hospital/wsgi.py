"""
WSGI config for the hospital project.

It exposes the WSGI callable as a module-level variable named
``application``.  Before the callable is handed to the server the schema
migrator runs once; if it fails the process exits instead of serving
requests against a half-built schema.
"""
import os

from django.conf import settings
from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hospital.settings')

# Obtain the WSGI application (this also runs django.setup())
application = get_wsgi_application()

if settings.MIGRATE_ON_STARTUP:
    from patients.services.migrator import migrate_on_startup

    migrate_on_startup()
