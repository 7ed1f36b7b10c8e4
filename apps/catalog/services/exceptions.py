"""Domain exceptions for catalog services."""


class CatalogServiceError(Exception):
    """Base exception for catalog services."""
    pass


class CosmeticNotFoundError(CatalogServiceError):
    """No catalog list contains the requested cosmetic."""
    pass
