"""Error taxonomy shared by the cart and catalog services"""


class CommerceError(Exception):
    """Base exception for cart and catalog errors"""
    kind = "error"
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__)
        self.message = str(self.args[0])

    def to_dict(self) -> dict[str, str]:
        return {"error": self.kind, "message": self.message}


class ItemNotFoundError(CommerceError):
    """Item not found in cart"""
    kind = "item_not_found"
    status_code = 404


class ProductNotFoundError(CommerceError):
    """Product not found in catalog"""
    kind = "product_not_found"
    status_code = 404


class InsufficientStockError(CommerceError):
    """Not enough stock for the requested quantity"""
    kind = "insufficient_stock"
    status_code = 400


class PayloadValidationError(CommerceError):
    """Malformed request payload"""
    kind = "validation_error"
    status_code = 400


class StoreUnavailableError(CommerceError):
    """Cart store unavailable"""
    kind = "store_unavailable"
    status_code = 500


class CorruptRecordError(CommerceError):
    """Stored cart record could not be decoded"""
    kind = "corrupt_record"
    status_code = 500


class OperationTimeoutError(CommerceError):
    """Operation deadline exceeded"""
    kind = "timeout"
    status_code = 504


class InvalidArgumentError(CommerceError):
    """Invalid argument in validation request"""
    kind = "invalid_argument"
    status_code = 400


class InternalError(CommerceError):
    """Catalog backend failure"""
    kind = "internal"
    status_code = 500


class CatalogUnavailableError(CommerceError):
    """Catalog service unreachable"""
    kind = "unavailable"
    status_code = 503


ERRORS_BY_KIND: dict[str, type[CommerceError]] = {
    cls.kind: cls
    for cls in (
        ItemNotFoundError,
        ProductNotFoundError,
        InsufficientStockError,
        PayloadValidationError,
        StoreUnavailableError,
        CorruptRecordError,
        OperationTimeoutError,
        InvalidArgumentError,
        InternalError,
        CatalogUnavailableError,
    )
}
