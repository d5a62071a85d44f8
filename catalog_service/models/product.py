"""Product models for the catalog service"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.catalog.models import DEFAULT_CURRENCY


class Product(BaseModel):
    """Product in the catalog"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str = ""
    price: Decimal = Field(gt=0)
    currency: str = DEFAULT_CURRENCY
    stock_quantity: int = Field(ge=0, default=0)
    image_url: Optional[str] = None
