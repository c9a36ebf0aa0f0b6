"""
WSGI entry point.

The database connection is established in the background so the
process starts serving (in a degraded state) even if storage is down.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "bizledger_backend.settings")

application = get_wsgi_application()

from ops.database import start_background_connect  # noqa: E402

start_background_connect()
