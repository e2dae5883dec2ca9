from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.config import INT32_MAX, PRICE_MAX


class ProductCreate(BaseModel):
    name: str
    sku: str
    price: Decimal = Field(gt=0, le=PRICE_MAX)
    warehouse_id: int = Field(gt=0, le=INT32_MAX)
    initial_quantity: int = Field(default=0, ge=0, le=INT32_MAX)
    supplier_id: Optional[int] = Field(default=None, gt=0, le=INT32_MAX)

    @field_validator("name", "sku")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def _price_exact(cls, v):
        if isinstance(v, bool):
            raise ValueError("price must be a number")
        # float -> str -> Decimal keeps 9.99 as Decimal("9.99") instead of its binary expansion
        if isinstance(v, float):
            return Decimal(str(v))
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("field is required")
        return v

    @field_validator("price")
    @classmethod
    def _price_cents(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("price must be a finite number")
        if v.normalize().as_tuple().exponent < -2:
            raise ValueError("price must have at most 2 decimal places")
        return v

    @field_validator("warehouse_id", "supplier_id", mode="before")
    @classmethod
    def _id_not_bool(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be an integer id")
        return v

    @field_validator("initial_quantity", mode="before")
    @classmethod
    def _quantity_default(cls, v):
        if v is None:
            return 0
        if isinstance(v, bool):
            raise ValueError("initial_quantity must be an integer")
        return v


class ProductCreated(BaseModel):
    message: str
    product_id: int


class InventoryRead(BaseModel):
    warehouse_id: int
    quantity: int


class ProductRead(BaseModel):
    id: int
    name: str
    sku: str
    price: Decimal
    supplier_id: Optional[int] = None
    inventory: List[InventoryRead] = []
