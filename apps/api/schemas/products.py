from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from apps.api.schemas.common import RecordIn, RecordOut, blank_to_none, check_object_id

PRODUCT_CATEGORIES = (
    "Manasuli Premium Rice",
    "Surayadaya Premium Rice",
    "Local Chamal",
    "Bhus",
    "Kanika",
)


class ProductIn(RecordIn):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    price: str = Field(..., min_length=1, max_length=64, description="Display price, e.g. 'Rs. 1,800 / 25kg'")
    category: str = Field(..., min_length=1, max_length=128)
    subcategory: Optional[str] = Field(None, max_length=128)
    image: Optional[str] = Field(None, max_length=1024)
    in_stock: bool = False
    whatsapp_phone: Optional[str] = Field(None, max_length=32)

    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        if v not in PRODUCT_CATEGORIES:
            raise ValueError("Invalid category")
        return v

    @field_validator("subcategory", "image", "whatsapp_phone", mode="before")
    @classmethod
    def _blank_optional(cls, v: object) -> object:
        return blank_to_none(v)


class ProductUpdate(ProductIn):
    id: str

    @field_validator("id")
    @classmethod
    def _object_id(cls, v: str) -> str:
        return check_object_id(v, "product")


class ProductOut(RecordOut):
    id: str
    name: str
    description: str
    price: str
    category: str
    subcategory: Optional[str] = None
    image: Optional[str] = None
    in_stock: bool
    whatsapp_phone: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProductListResponse(RecordOut):
    success: bool = True
    products: list[ProductOut]


class ProductResponse(RecordOut):
    success: bool = True
    product: ProductOut
