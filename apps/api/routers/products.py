from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from apps.api.db.models import Product
from apps.api.deps.deps import get_db
from apps.api.schemas.common import SuccessResponse
from apps.api.schemas.products import ProductIn, ProductListResponse, ProductOut, ProductResponse, ProductUpdate
from apps.api.services.content import create_record, delete_record, list_records, require_object_id, update_record


router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
def list_products(db: Session = Depends(get_db)) -> ProductListResponse:
    products = list_records(db, Product)
    return ProductListResponse(products=[ProductOut.model_validate(p) for p in products])


@router.post("", response_model=ProductResponse)
def create_product(body: ProductIn, db: Session = Depends(get_db)) -> ProductResponse:
    product = create_record(db, Product, body.model_dump(), "product")
    return ProductResponse(product=ProductOut.model_validate(product))


@router.put("", response_model=ProductResponse)
def update_product(body: ProductUpdate, db: Session = Depends(get_db)) -> ProductResponse:
    product = update_record(db, Product, body.id, body.model_dump(exclude={"id"}), "product")
    return ProductResponse(product=ProductOut.model_validate(product))


@router.delete("", response_model=SuccessResponse)
def delete_product(
    record_id: Optional[str] = Query(None, alias="id"), db: Session = Depends(get_db)
) -> SuccessResponse:
    delete_record(db, Product, require_object_id(record_id, "product"), "product")
    return SuccessResponse()
