"""
Accounts API Views: sign-up, sign-in, sign-out, session context and profile
"""
import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from .models import Profile
from .serializers import SignupSerializer, SigninSerializer, ProfileSerializer, UserSerializer

logger = logging.getLogger(__name__)

MARKETPLACE_TABS = ['buy', 'sell', 'requests', 'inbox']


@api_view(['POST'])
@permission_classes([AllowAny])
def signup(request):
    """
    Create an account from email + password. The profile is completed in a separate step.
    """
    serializer = SignupSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()

    logger.info(f"New user signed up: id={user.id}")
    return Response({'id': user.id, 'email': user.email}, status=status.HTTP_201_CREATED)


class SigninView(TokenObtainPairView):
    permission_classes = [AllowAny]
    serializer_class = SigninSerializer


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def signout(request):
    """Blacklist the refresh token so the session cannot be renewed."""
    refresh = request.data.get('refresh')
    if not refresh:
        return Response(
            {'error': 'Refresh token is required.'},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        RefreshToken(refresh).blacklist()
    except TokenError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    logger.info(f"User signed out: id={request.user.id}")
    return Response(status=status.HTTP_205_RESET_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def session(request):
    """
    Current session context: who is signed in, their profile, and whether the
    marketplace tabs are unlocked yet.
    """
    user = request.user
    profile = Profile.objects.filter(user=user).first()

    return Response({
        'user': UserSerializer(user).data,
        'profile': ProfileSerializer(profile).data if profile else None,
        'profile_complete': profile is not None,
        'tabs': MARKETPLACE_TABS if profile else [],
    })


@api_view(['GET', 'POST', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile(request):
    """
    GET   - own profile
    POST  - complete profile (once)
    PATCH - edit own profile
    """
    existing = Profile.objects.filter(user=request.user).first()

    if request.method == 'POST':
        if existing:
            return Response(
                {'error': 'Profile is already complete.'},
                status=status.HTTP_400_BAD_REQUEST
            )

        serializer = ProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        created = serializer.save(user=request.user)
        logger.info(f"Profile completed for user {request.user.id} ({created.hostel})")
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    if not existing:
        return Response(
            {'error': 'Profile not found.', 'code': 'profile_incomplete'},
            status=status.HTTP_404_NOT_FOUND
        )

    if request.method == 'PATCH':
        serializer = ProfileSerializer(existing, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    return Response(ProfileSerializer(existing).data)
