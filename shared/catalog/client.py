"""
Catalog Validation Client

Async HTTP client for the catalog validation protocol.
Used by checkout orchestration to confirm prices and stock for cart lines.
"""

import logging
from typing import Any, Iterable, Optional, Union

import httpx

from ..errors import (
    ERRORS_BY_KIND,
    CatalogUnavailableError,
    CommerceError,
    InternalError,
    InvalidArgumentError,
    OperationTimeoutError,
)
from .models import (
    BulkValidationRequest,
    BulkValidationResult,
    PriceRequest,
    PriceResult,
    ValidationRequest,
    ValidationResult,
)

RPC_PREFIX = "/rpc/catalog.CatalogService"

ItemLike = Union[ValidationRequest, tuple[Union[str, int], int], dict[str, Any]]


class CatalogClient:
    """
    Client for the catalog validation service.

    Every call is a single request/response exchange. Nothing is retried:
    retry policy belongs to the caller.

    Usage:
        client = CatalogClient("http://catalog:8002")
        result = await client.validate_product("42", 2)
        bulk = await client.validate_cart_items([("42", 2), ("7", 1)])
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        logger: Optional[logging.Logger] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize catalog client.

        Args:
            base_url: Base URL of the catalog service
            timeout: Default deadline in seconds for each call
            logger: Logger for request failures
            http_client: Pre-built client (tests pass one bound to an ASGI app)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close HTTP client"""
        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _call(
        self,
        method: str,
        body: dict[str, Any],
        timeout: Optional[float] = None,
    ) -> dict[str, Any]:
        """POST one RPC and translate failures into the error taxonomy"""
        url = f"{self.base_url}{RPC_PREFIX}/{method}"
        deadline = self.timeout if timeout is None else timeout

        try:
            response = await self._http_client.post(url, json=body, timeout=deadline)
        except httpx.TimeoutException as e:
            self.logger.error(f"Catalog call {method} timed out after {deadline}s")
            raise OperationTimeoutError(f"{method} timed out") from e
        except httpx.TransportError as e:
            self.logger.error(f"Catalog call {method} failed: {e}")
            raise CatalogUnavailableError(f"Catalog service unreachable: {e}") from e

        if response.status_code >= 400:
            raise self._error_from_response(method, response)

        return response.json()

    def _error_from_response(self, method: str, response: httpx.Response) -> CommerceError:
        self.logger.error(
            f"Catalog call {method} failed: {response.status_code} - {response.text}"
        )
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        message = payload.get("message") or response.text
        error_cls = ERRORS_BY_KIND.get(payload.get("error", ""))
        if error_cls is None:
            error_cls = InvalidArgumentError if response.status_code < 500 else InternalError
        return error_cls(message)

    # ==================== Validation APIs ====================

    async def validate_product(
        self,
        product_id: Union[str, int],
        quantity: int,
        timeout: Optional[float] = None,
    ) -> ValidationResult:
        """Validate that a product exists and has enough stock"""
        request = ValidationRequest(product_id=str(product_id), quantity=quantity)
        data = await self._call("ValidateProduct", request.model_dump(), timeout)
        return ValidationResult.model_validate(data)

    async def get_product_price(
        self,
        product_id: Union[str, int],
        timeout: Optional[float] = None,
    ) -> PriceResult:
        """Get the authoritative price of a product"""
        request = PriceRequest(product_id=str(product_id))
        data = await self._call("GetProductPrice", request.model_dump(), timeout)
        return PriceResult.model_validate(data)

    async def validate_cart_items(
        self,
        items: Iterable[ItemLike],
        timeout: Optional[float] = None,
    ) -> BulkValidationResult:
        """
        Validate a list of cart lines in one call.

        Args:
            items: ValidationRequest objects, (product_id, quantity) pairs,
                or dicts with product_id/quantity keys
            timeout: Deadline in seconds for the whole batch

        Returns:
            Ordered per-item results with all_valid and total_price
        """
        request = BulkValidationRequest(items=[_to_request(item) for item in items])
        data = await self._call("ValidateCartItems", request.model_dump(), timeout)
        return BulkValidationResult.model_validate(data)


def _to_request(item: ItemLike) -> ValidationRequest:
    if isinstance(item, ValidationRequest):
        return item
    if isinstance(item, dict):
        return ValidationRequest(
            product_id=str(item.get("product_id", "")),
            quantity=item.get("quantity", 0),
        )
    product_id, quantity = item
    return ValidationRequest(product_id=str(product_id), quantity=quantity)
