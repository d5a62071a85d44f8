# Catalog validation protocol

from .client import CatalogClient
from .models import (
    BulkValidationRequest,
    BulkValidationResult,
    PriceRequest,
    PriceResult,
    ValidationRequest,
    ValidationResult,
)

__all__ = [
    "CatalogClient",
    "BulkValidationRequest",
    "BulkValidationResult",
    "PriceRequest",
    "PriceResult",
    "ValidationRequest",
    "ValidationResult",
]
