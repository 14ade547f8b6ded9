"""
Marketplace URL Configuration
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ProductViewSet, NegotiationViewSet, WantedRequestViewSet

router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='product')
router.register(r'negotiations', NegotiationViewSet, basename='negotiation')
router.register(r'requests', WantedRequestViewSet, basename='wantedrequest')

app_name = 'marketplace'

urlpatterns = [
    path('', include(router.urls)),
]
