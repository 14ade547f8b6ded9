"""
ASGI config for campus_market_backend project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'campus_market_backend.settings.production')

application = get_asgi_application()
