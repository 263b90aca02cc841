"""
ASGI config for the hospital project.

Order matters: configure Django before importing any Django-dependent
modules, and migrate before the application is returned to the server.
"""
import os

# 1) Configure settings before any Django import
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "hospital.settings")

# 2) Build the HTTP app (runs django.setup())
from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()

# 3) Bring the schema up to date; exits the process on failure
from django.conf import settings  # noqa: E402

if settings.MIGRATE_ON_STARTUP:
    from patients.services.migrator import migrate_on_startup  # noqa: E402

    migrate_on_startup()
