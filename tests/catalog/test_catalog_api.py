"""Integration tests for the catalog RPC routes via TestClient."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from catalog_service.main import create_app

RPC = "/rpc/catalog.CatalogService"


@pytest.fixture()
def client(products):
    return TestClient(create_app(products=products))


class TestValidateProductEndpoint:
    def test_valid_product(self, client):
        response = client.post(f"{RPC}/ValidateProduct", json={"product_id": "2", "quantity": 3})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["in_stock"] is True
        assert data["product_name"] == "Gadget"
        assert Decimal(data["unit_price"]) == Decimal("2.50")

    @pytest.mark.parametrize("product_id", ["999", "²"])
    def test_not_found_is_not_an_error(self, client, product_id):
        response = client.post(
            f"{RPC}/ValidateProduct", json={"product_id": product_id, "quantity": 1}
        )
        assert response.status_code == 200
        assert response.json()["valid"] is False

    def test_empty_product_id(self, client):
        response = client.post(f"{RPC}/ValidateProduct", json={"product_id": "", "quantity": 1})
        assert response.status_code == 400
        assert response.json() == {
            "error": "invalid_argument",
            "message": "product ID is required",
        }

    def test_non_positive_quantity(self, client):
        response = client.post(f"{RPC}/ValidateProduct", json={"product_id": "1", "quantity": 0})
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_argument"


class TestGetProductPriceEndpoint:
    def test_price(self, client):
        response = client.post(f"{RPC}/GetProductPrice", json={"product_id": "1"})
        data = response.json()
        assert data["found"] is True
        assert Decimal(data["price"]) == Decimal("10.00")
        assert data["currency"] == "USD"


class TestValidateCartItemsEndpoint:
    def test_bulk(self, client):
        response = client.post(
            f"{RPC}/ValidateCartItems",
            json={"items": [
                {"product_id": "1", "quantity": 5},
                {"product_id": "2", "quantity": 2},
            ]},
        )
        assert response.status_code == 200
        data = response.json()
        assert [r["in_stock"] for r in data["results"]] == [False, True]
        assert data["all_valid"] is False
        assert Decimal(data["total_price"]) == Decimal("5.00")

    def test_bulk_fails_as_a_whole(self, client):
        response = client.post(
            f"{RPC}/ValidateCartItems",
            json={"items": [
                {"product_id": "1", "quantity": 1},
                {"product_id": "2", "quantity": 0},
            ]},
        )
        assert response.status_code == 400
        assert "results" not in response.json()


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
