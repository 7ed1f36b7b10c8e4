from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.serializers import UserSerializer
from .exceptions import (
    AlreadyOwnedError,
    InsufficientBalanceError,
    InvalidPriceError,
    NotOwnedError,
    UserNotFoundError,
)
from .serializers import BuyInputSerializer, RefundInputSerializer
from .services import buy as buy_item, refund as refund_item
from .stores import get_ledger_store


# Response serializers for API documentation
class MessageResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()


@extend_schema(
    request=BuyInputSerializer,
    responses={
        200: UserSerializer,
        400: MessageResponseSerializer,
        404: MessageResponseSerializer,
    },
    description=(
        "Buy a cosmetic. Bundles grant every item in bundleIds that the user "
        "does not already own. Returns the updated user."
    ),
    tags=['ledger'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def buy(request):
    """Buy a cosmetic for a user - thin HTTP handler."""
    serializer = BuyInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        account = buy_item(
            store=get_ledger_store(),
            user_id=serializer.validated_data['userId'],
            item=serializer.to_purchase(),
        )
    except UserNotFoundError as e:
        return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (AlreadyOwnedError, InsufficientBalanceError, InvalidPriceError) as e:
        return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(account).data)


@extend_schema(
    request=RefundInputSerializer,
    responses={
        200: UserSerializer,
        400: MessageResponseSerializer,
        404: MessageResponseSerializer,
    },
    description=(
        "Refund an owned cosmetic using its latest purchase. Refunding any item "
        "of a bundle returns the whole bundle. `amount` is credited only when "
        "no purchase is found in the history."
    ),
    tags=['ledger'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def refund(request):
    """Refund a cosmetic - thin HTTP handler."""
    serializer = RefundInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        account = refund_item(
            store=get_ledger_store(),
            user_id=serializer.validated_data['userId'],
            cosmetic_id=serializer.validated_data['itemId'],
            fallback_price=serializer.validated_data.get('amount') or 0,
        )
    except UserNotFoundError as e:
        return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotOwnedError as e:
        return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(account).data)
