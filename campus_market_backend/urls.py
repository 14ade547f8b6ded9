"""
URL configuration for campus_market_backend project.

Routes:
    /api/auth/...          identity, session and profile (accounts app)
    /api/products/...      catalog and listing management
    /api/negotiations/...  offers and the seller/buyer inbox
    /api/requests/...      wanted-item board
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

from .views_health import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health_check, name='health-check'),
    path('api/auth/', include('accounts.urls')),
    path('api/', include('marketplace.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
