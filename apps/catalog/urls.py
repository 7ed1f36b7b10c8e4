from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'', views.CatalogViewSet, basename='cosmetic')

urlpatterns = [
    # GET /api/catalog/                    - Shop + new cosmetics (filters, paginated)
    # GET /api/catalog/shop/               - Item shop
    # GET /api/catalog/new/                - New cosmetics
    # GET /api/catalog/all/                - All cosmetics
    # GET /api/catalog/facets/             - Types and rarities
    # GET /api/catalog/owned/{user_id}/    - A user's inventory as catalog items
    # GET /api/catalog/{id}/               - Single cosmetic
    path('', include(router.urls)),
]
