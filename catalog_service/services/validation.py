"""
Catalog Validation Service

Authoritative answers about product existence, price and stock.
A missing product is a normal negative result; only bad arguments and
backend faults are errors.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Optional

from shared.catalog.models import (
    DEFAULT_CURRENCY,
    BulkValidationRequest,
    BulkValidationResult,
    PriceRequest,
    PriceResult,
    ValidationRequest,
    ValidationResult,
)
from shared.errors import InternalError, InvalidArgumentError, OperationTimeoutError

from ..database.products import ProductLookupError, ProductRepository
from ..models.product import Product

PRODUCT_NOT_FOUND = "Product not found"


class CatalogValidationService:
    """Stateless request/response validation over a product repository"""

    def __init__(
        self,
        products: ProductRepository,
        logger: Optional[logging.Logger] = None,
        lookup_timeout: Optional[float] = None,
    ):
        """
        Args:
            products: Repository used for product lookups
            logger: Logger for validation events
            lookup_timeout: Deadline in seconds for each product lookup
        """
        self.products = products
        self.logger = logger or logging.getLogger(__name__)
        self.lookup_timeout = lookup_timeout

    async def _lookup(self, product_id: str, action: str) -> Optional[Product]:
        try:
            return await asyncio.wait_for(
                self.products.get_product(product_id), self.lookup_timeout
            )
        except asyncio.TimeoutError as e:
            self.logger.error(f"{action}: lookup of product {product_id} timed out")
            raise OperationTimeoutError(f"Product lookup timed out: {product_id}") from e
        except ProductLookupError as e:
            self.logger.error(f"{action}: failed to query product {product_id}: {e}")
            raise InternalError("Failed to retrieve product") from e

    async def validate_product(self, request: ValidationRequest) -> ValidationResult:
        """
        Validate one product and requested quantity.

        Raises:
            InvalidArgumentError: empty product id or non-positive quantity
            InternalError: product backend failure
        """
        self.logger.info(
            f"Product validation request: product_id={request.product_id}, "
            f"quantity={request.quantity}"
        )

        if not request.product_id:
            raise InvalidArgumentError("product ID is required")
        if request.quantity <= 0:
            raise InvalidArgumentError("quantity must be positive")

        product = await self._lookup(request.product_id, "validate_product")
        if product is None:
            self.logger.warning(f"Product not found: {request.product_id}")
            return ValidationResult(
                valid=False,
                in_stock=False,
                error_message=PRODUCT_NOT_FOUND,
            )

        in_stock = product.stock_quantity >= request.quantity
        result = ValidationResult(
            valid=True,
            in_stock=in_stock,
            available_quantity=product.stock_quantity,
            product_name=product.name,
            unit_price=product.price,
        )
        if not in_stock:
            result.error_message = (
                f"Insufficient stock. Available: {product.stock_quantity}, "
                f"Requested: {request.quantity}"
            )

        self.logger.info(
            f"Product validation completed: product_id={request.product_id}, "
            f"in_stock={in_stock}, available={product.stock_quantity}"
        )
        return result

    async def get_product_price(self, request: PriceRequest) -> PriceResult:
        """Look up the current price of a product"""
        if not request.product_id:
            raise InvalidArgumentError("product ID is required")

        product = await self._lookup(request.product_id, "get_product_price")
        if product is None:
            return PriceResult(found=False, error_message=PRODUCT_NOT_FOUND)

        return PriceResult(found=True, price=product.price, currency=product.currency)

    async def validate_cart_items(self, request: BulkValidationRequest) -> BulkValidationResult:
        """
        Validate every item in request order.

        The first error aborts the whole batch with no partial result.
        Items that are missing or short on stock clear all_valid and add
        nothing to total_price; they do not stop the remaining items.
        """
        self.logger.info(f"Cart validation request: {len(request.items)} items")

        results: list[ValidationResult] = []
        total_price = Decimal("0")
        all_valid = True

        for item in request.items:
            result = await self.validate_product(item)
            results.append(result)

            if result.valid and result.in_stock:
                total_price += result.unit_price * item.quantity
            else:
                all_valid = False

        self.logger.info(
            f"Cart validation completed: {len(results)} items, "
            f"all_valid={all_valid}, total_price={total_price}"
        )

        return BulkValidationResult(
            results=results,
            all_valid=all_valid,
            total_price=total_price,
            currency=DEFAULT_CURRENCY,
        )
