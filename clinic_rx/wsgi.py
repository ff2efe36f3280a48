"""
WSGI config for clinic_rx project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "clinic_rx.settings")

application = get_wsgi_application()
