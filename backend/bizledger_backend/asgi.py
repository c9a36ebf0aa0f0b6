"""ASGI entry point (see wsgi.py for the startup connect loop)."""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "bizledger_backend.settings")

application = get_asgi_application()

from ops.database import start_background_connect  # noqa: E402

start_background_connect()
