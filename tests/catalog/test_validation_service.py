"""Tests for the catalog validation service."""

import asyncio
from decimal import Decimal

import pytest

from catalog_service.database.products import ProductLookupError
from catalog_service.services.validation import CatalogValidationService
from shared.catalog.models import (
    BulkValidationRequest,
    PriceRequest,
    ValidationRequest,
)
from shared.errors import InternalError, InvalidArgumentError, OperationTimeoutError


class BrokenProducts:
    async def get_product(self, product_id):
        raise ProductLookupError("connection reset")


class FlakyProducts:
    """Fails only for one product id"""

    def __init__(self, products, failing_id):
        self.products = products
        self.failing_id = failing_id
        self.calls = []

    async def get_product(self, product_id):
        self.calls.append(product_id)
        if product_id == self.failing_id:
            raise ProductLookupError("connection reset")
        return await self.products.get_product(product_id)


class SlowProducts:
    async def get_product(self, product_id):
        await asyncio.sleep(1)


@pytest.fixture()
def service(products):
    return CatalogValidationService(products)


def _bulk(*items):
    return BulkValidationRequest(
        items=[ValidationRequest(product_id=pid, quantity=qty) for pid, qty in items]
    )


class TestValidateProduct:
    @pytest.mark.asyncio
    async def test_in_stock(self, service):
        result = await service.validate_product(ValidationRequest(product_id="2", quantity=4))
        assert result.valid
        assert result.in_stock
        assert result.available_quantity == 100
        assert result.product_name == "Gadget"
        assert result.unit_price == Decimal("2.50")
        assert result.error_message is None

    @pytest.mark.asyncio
    async def test_exact_stock_is_in_stock(self, service):
        result = await service.validate_product(ValidationRequest(product_id="1", quantity=3))
        assert result.in_stock

    @pytest.mark.asyncio
    async def test_insufficient_stock(self, service):
        result = await service.validate_product(ValidationRequest(product_id="1", quantity=5))
        assert result.valid
        assert not result.in_stock
        assert result.available_quantity == 3
        assert result.error_message == "Insufficient stock. Available: 3, Requested: 5"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("product_id", ["999", "abc", "\u00b2", "\u0661"])
    async def test_unknown_product_is_a_result(self, service, product_id):
        result = await service.validate_product(
            ValidationRequest(product_id=product_id, quantity=1)
        )
        assert not result.valid
        assert not result.in_stock
        assert result.error_message == "Product not found"

    @pytest.mark.asyncio
    async def test_empty_product_id(self, service):
        with pytest.raises(InvalidArgumentError):
            await service.validate_product(ValidationRequest(product_id="", quantity=1))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("quantity", [0, -2])
    async def test_non_positive_quantity(self, quantity):
        products = FlakyProducts(None, failing_id=None)
        service = CatalogValidationService(products)
        with pytest.raises(InvalidArgumentError):
            await service.validate_product(ValidationRequest(product_id="1", quantity=quantity))
        assert products.calls == []

    @pytest.mark.asyncio
    async def test_backend_failure_is_internal(self):
        service = CatalogValidationService(BrokenProducts())
        with pytest.raises(InternalError):
            await service.validate_product(ValidationRequest(product_id="1", quantity=1))

    @pytest.mark.asyncio
    async def test_lookup_deadline(self):
        service = CatalogValidationService(SlowProducts(), lookup_timeout=0.01)
        with pytest.raises(OperationTimeoutError):
            await service.validate_product(ValidationRequest(product_id="1", quantity=1))


class TestGetProductPrice:
    @pytest.mark.asyncio
    async def test_found(self, service):
        result = await service.get_product_price(PriceRequest(product_id="1"))
        assert result.found
        assert result.price == Decimal("10.00")
        assert result.currency == "USD"

    @pytest.mark.asyncio
    async def test_not_found(self, service):
        result = await service.get_product_price(PriceRequest(product_id="404"))
        assert not result.found

    @pytest.mark.asyncio
    async def test_empty_product_id(self, service):
        with pytest.raises(InvalidArgumentError):
            await service.get_product_price(PriceRequest(product_id=""))

    @pytest.mark.asyncio
    async def test_backend_failure_is_internal(self):
        service = CatalogValidationService(BrokenProducts())
        with pytest.raises(InternalError):
            await service.get_product_price(PriceRequest(product_id="1"))


class TestValidateCartItems:
    @pytest.mark.asyncio
    async def test_insufficient_stock_scenario(self, service):
        result = await service.validate_cart_items(_bulk(("1", 5)))
        assert result.results[0].valid
        assert not result.results[0].in_stock
        assert result.results[0].available_quantity == 3
        assert "Available: 3, Requested: 5" in result.results[0].error_message
        assert not result.all_valid
        assert result.total_price == 0

    @pytest.mark.asyncio
    async def test_all_valid(self, service):
        result = await service.validate_cart_items(_bulk(("1", 2), ("2", 4)))
        assert result.all_valid
        assert result.total_price == Decimal("30.00")
        assert result.currency == "USD"

    @pytest.mark.asyncio
    async def test_invalid_items_contribute_nothing(self, service):
        result = await service.validate_cart_items(
            _bulk(("2", 2), ("999", 1), ("3", 1), ("1", 1))
        )
        assert [r.valid for r in result.results] == [True, False, True, True]
        assert [r.in_stock for r in result.results] == [True, False, False, True]
        assert not result.all_valid
        assert result.total_price == Decimal("15.00")

    @pytest.mark.asyncio
    async def test_total_matches_single_validations(self, service):
        items = [("1", 2), ("2", 7), ("3", 1), ("999", 1), ("1", 4)]
        bulk = await service.validate_cart_items(_bulk(*items))

        expected = Decimal("0")
        for pid, qty in items:
            single = await service.validate_product(ValidationRequest(product_id=pid, quantity=qty))
            if single.valid and single.in_stock:
                expected += single.unit_price * qty

        assert bulk.total_price == expected
        assert len(bulk.results) == len(items)

    @pytest.mark.asyncio
    async def test_empty_batch(self, service):
        result = await service.validate_cart_items(BulkValidationRequest(items=[]))
        assert result.results == []
        assert result.all_valid
        assert result.total_price == 0

    @pytest.mark.asyncio
    async def test_invalid_argument_aborts_batch(self, service):
        with pytest.raises(InvalidArgumentError):
            await service.validate_cart_items(_bulk(("1", 1), ("", 1), ("2", 1)))

    @pytest.mark.asyncio
    async def test_backend_failure_aborts_remaining_items(self, products):
        flaky = FlakyProducts(products, failing_id="2")
        service = CatalogValidationService(flaky)
        with pytest.raises(InternalError):
            await service.validate_cart_items(_bulk(("1", 1), ("2", 1), ("3", 1)))
        assert flaky.calls == ["1", "2"]
