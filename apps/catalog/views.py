from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.services import find_user_by_id, UserNotFoundError
from apps.ledger.stores import get_ledger_store
from .client import get_catalog_client
from .serializers import (
    CatalogFacetsSerializer,
    CatalogFilterSerializer,
    CosmeticSerializer,
)
from .services import (
    filter_cosmetics,
    find_cosmetic,
    get_facets,
    get_owned_cosmetics,
    merge_catalog,
    CosmeticNotFoundError,
)


class CatalogPagination(PageNumberPagination):
    """Custom pagination for catalog listings."""
    page_size = 24
    page_size_query_param = 'page_size'
    max_page_size = 100


CATALOG_FILTER_PARAMETERS = [
    OpenApiParameter('search', str, description='Substring of the item name'),
    OpenApiParameter('type', str, description='Type value, e.g. outfit'),
    OpenApiParameter('rarity', str, description='Rarity value, e.g. legendary'),
    OpenApiParameter('date_from', str, description='Added on or after (YYYY-MM-DD)'),
    OpenApiParameter('date_to', str, description='Added on or before (YYYY-MM-DD)'),
    OpenApiParameter('is_new', bool),
    OpenApiParameter('on_sale', bool),
    OpenApiParameter('promotional', bool),
]


class CatalogViewSet(viewsets.GenericViewSet):
    """
    Read-only cosmetics catalog backed by fortnite-api.com.

    list: Shop and new cosmetics merged (with filters)
    retrieve: A single cosmetic by id
    """

    serializer_class = CosmeticSerializer
    permission_classes = [AllowAny]
    pagination_class = CatalogPagination
    lookup_value_regex = '[^/]+'

    def get_client(self):
        return get_catalog_client()

    def _filtered_page(self, request, items):
        # Plain dict so missing booleans stay None instead of False
        filters = CatalogFilterSerializer(data=request.query_params.dict())
        filters.is_valid(raise_exception=True)

        items = filter_cosmetics(items, **filters.validated_data)
        page = self.paginate_queryset(items)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def _merged(self, client):
        return merge_catalog(shop=client.get_shop(), new=client.get_new_cosmetics())

    @extend_schema(parameters=CATALOG_FILTER_PARAMETERS, tags=['catalog'])
    def list(self, request):
        """Shop items first, then new cosmetics."""
        return self._filtered_page(request, self._merged(self.get_client()))

    @extend_schema(
        responses={200: CosmeticSerializer, 404: None},
        tags=['catalog'],
    )
    def retrieve(self, request, pk=None):
        client = self.get_client()
        # Later lists are only fetched when the earlier ones miss
        sources = (
            loader() for loader in (
                lambda: self._merged(client),
                client.get_all_cosmetics,
            )
        )

        try:
            cosmetic = find_cosmetic(cosmetic_id=pk, sources=sources)
        except CosmeticNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(self.get_serializer(cosmetic).data)

    @extend_schema(parameters=CATALOG_FILTER_PARAMETERS, tags=['catalog'])
    @action(detail=False, methods=['get'])
    def shop(self, request):
        """Current item shop."""
        return self._filtered_page(request, self.get_client().get_shop())

    @extend_schema(parameters=CATALOG_FILTER_PARAMETERS, tags=['catalog'])
    @action(detail=False, methods=['get'])
    def new(self, request):
        """Recently added cosmetics."""
        return self._filtered_page(request, self.get_client().get_new_cosmetics())

    @extend_schema(parameters=CATALOG_FILTER_PARAMETERS, tags=['catalog'])
    @action(detail=False, methods=['get'], url_path='all')
    def all_cosmetics(self, request):
        """Every Battle Royale cosmetic."""
        return self._filtered_page(request, self.get_client().get_all_cosmetics())

    @extend_schema(responses=CatalogFacetsSerializer, tags=['catalog'])
    @action(detail=False, methods=['get'], pagination_class=None)
    def facets(self, request):
        """Types and rarities present in the merged listing."""
        facets = get_facets(self._merged(self.get_client()))
        return Response(CatalogFacetsSerializer(facets).data)

    @extend_schema(
        parameters=CATALOG_FILTER_PARAMETERS,
        responses={200: CosmeticSerializer(many=True), 404: None},
        tags=['catalog'],
    )
    @action(detail=False, methods=['get'], url_path=r'owned/(?P<user_id>[0-9a-fA-F-]+)')
    def owned(self, request, user_id=None):
        """Catalog entries for a user's inventory."""
        try:
            account = find_user_by_id(store=get_ledger_store(), user_id=user_id)
        except UserNotFoundError as e:
            return Response({'message': str(e)}, status=status.HTTP_404_NOT_FOUND)

        client = self.get_client()
        catalog = self._merged(client) + client.get_all_cosmetics()
        items = get_owned_cosmetics(inventory=account.inventory, catalog=catalog)
        return self._filtered_page(request, items)
