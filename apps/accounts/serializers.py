from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from apps.ledger.serializers import TransactionSerializer


class UserSerializer(serializers.Serializer):
    """Full user profile for its owner. The password hash is never rendered."""

    id = serializers.UUIDField(read_only=True)
    email = serializers.EmailField(read_only=True)
    name = serializers.CharField(read_only=True)
    balance = serializers.IntegerField(read_only=True)
    inventory = serializers.ListField(child=serializers.CharField(), read_only=True)
    history = TransactionSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)


class UserPublicSerializer(serializers.Serializer):
    """Public user info for the community listing."""

    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    inventory = serializers.ListField(child=serializers.CharField(), read_only=True)


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True, max_length=255)
    name = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
