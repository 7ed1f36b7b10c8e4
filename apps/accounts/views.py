from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from apps.ledger.stores import get_ledger_store
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    UserPublicSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    find_user_by_email,
    find_user_by_id,
    list_users,
    UserAlreadyExistsError,
    InvalidCredentialsError,
    UserNotFoundError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


def _tokens_for(account):
    refresh = RefreshToken.for_user(account)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: MessageResponseSerializer,
    },
    description="Register a new user with 10,000 V-Bucks and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        account = register_user(store=get_ledger_store(), **serializer.validated_data)
    except UserAlreadyExistsError as e:
        return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Registration successful.',
        'user': UserSerializer(account).data,
        'tokens': _tokens_for(account),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: MessageResponseSerializer,
        401: MessageResponseSerializer,
        404: MessageResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        account = authenticate_user(
            store=get_ledger_store(),
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
    except UserNotFoundError as e:
        return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidCredentialsError as e:
        return Response({'message': str(e)}, status=status.HTTP_401_UNAUTHORIZED)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(account).data,
        'tokens': _tokens_for(account),
    })


@extend_schema(
    responses={
        200: UserSerializer,
        404: MessageResponseSerializer,
    },
    description="Get a user's profile, balance, inventory and history by email.",
    tags=['users'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def user_by_email(request, email):
    """Get user by email (used by clients to refresh their state)."""
    try:
        account = find_user_by_email(store=get_ledger_store(), email=email)
    except UserNotFoundError as e:
        return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(UserSerializer(account).data)


@extend_schema(
    responses={200: UserPublicSerializer(many=True)},
    description="List every user's name and inventory for the community page.",
    tags=['users'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def user_list(request):
    """List all users (public fields only)."""
    accounts = list_users(store=get_ledger_store())
    return Response(UserPublicSerializer(accounts, many=True).data)


@extend_schema(
    responses={
        200: UserSerializer,
        404: MessageResponseSerializer,
    },
    description="Get the current authenticated user's profile.",
    tags=['users'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    try:
        account = find_user_by_id(store=get_ledger_store(), user_id=request.user.id)
    except UserNotFoundError as e:
        return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(UserSerializer(account).data)
