# Catalog services

from .validation import CatalogValidationService

__all__ = ["CatalogValidationService"]
