from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field, StrictInt

from stockroom.schemas.base import NonEmptyStr, PayloadModel, RecordModel

Quantity = Annotated[StrictInt, Field(ge=0)]
Price = Annotated[float, Field(ge=0, strict=True, allow_inf_nan=False)]


class Product(RecordModel):
    id: str
    owner_id: str
    name: NonEmptyStr
    sku: NonEmptyStr
    quantity: Quantity
    price: Price
    reorder_level: Quantity
    created_at: datetime
    updated_at: Optional[datetime] = None


class ProductCreate(PayloadModel):
    name: NonEmptyStr
    sku: NonEmptyStr
    quantity: Quantity
    price: Price
    reorder_level: Quantity


class ProductUpdate(PayloadModel):
    """Partial update; only the keys present in the request are merged."""

    name: Optional[NonEmptyStr] = None
    sku: Optional[NonEmptyStr] = None
    quantity: Optional[Quantity] = None
    price: Optional[Price] = None
    reorder_level: Optional[Quantity] = None


class StockAdjustment(PayloadModel):
    quantity_change: StrictInt


__all__ = ["Product", "ProductCreate", "ProductUpdate", "StockAdjustment"]
