"""
WSGI config for campus_market_backend project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'campus_market_backend.settings.production')

application = get_wsgi_application()
