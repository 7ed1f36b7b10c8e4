"""
URL configuration for the cosmetic shop.

Account and ledger routes have no trailing slash: /api/register, /api/buy,
/api/user/<email>. Catalog routes come from a DRF router and do.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import root, health_check

urlpatterns = [
    path('', root, name='root'),

    # Health check
    path('api/health', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication and users
    path('api/token/refresh', TokenRefreshView.as_view(), name='token_refresh'),
    path('api/', include('apps.accounts.urls')),

    # Ledger
    path('api/', include('apps.ledger.urls')),

    # Catalog
    path('api/catalog/', include('apps.catalog.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
