"""
Accounts URL Configuration
"""
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import signup, SigninView, signout, session, profile

app_name = 'accounts'

urlpatterns = [
    path('signup/', signup, name='signup'),
    path('signin/', SigninView.as_view(), name='signin'),
    path('refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('signout/', signout, name='signout'),
    path('session/', session, name='session'),
    path('profile/', profile, name='profile'),
]
