"""
Accounts Serializers
"""
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers, exceptions
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import Profile

User = get_user_model()
logger = logging.getLogger(__name__)


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email']
        read_only_fields = fields


class SignupSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    class Meta:
        model = User
        fields = ['id', 'email', 'password']
        read_only_fields = ['id']
        extra_kwargs = {'email': {'validators': []}}

    def validate_email(self, value):
        email = User.objects.normalize_email(value)
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError('User already registered')
        return email

    def validate(self, attrs):
        candidate = User(email=attrs['email'])
        try:
            validate_password(attrs['password'], user=candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({'password': list(e.messages)})
        return attrs

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
        )


class SigninSerializer(TokenObtainPairSerializer):
    """
    Email/password sign-in returning a JWT pair plus the signed-in user.
    """

    default_error_messages = {
        'no_active_account': 'Invalid login credentials',
    }

    def validate(self, attrs):
        if attrs.get(self.username_field):
            attrs[self.username_field] = attrs[self.username_field].strip().lower()

        try:
            data = super().validate(attrs)
        except exceptions.AuthenticationFailed:
            logger.info(f"Sign-in failed for {attrs.get(self.username_field)}")
            raise

        data['user'] = UserSerializer(self.user).data
        data['profile_complete'] = self.user.has_profile
        return data


class ProfileSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = Profile
        fields = ['id', 'email', 'name', 'hostel', 'room', 'gender', 'branch', 'created_at']
        read_only_fields = ['id', 'email', 'created_at']
