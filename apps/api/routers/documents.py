from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from apps.api.db.models import Document
from apps.api.deps.deps import get_db
from apps.api.schemas.common import SuccessResponse
from apps.api.schemas.documents import (
    DocumentIn,
    DocumentListResponse,
    DocumentOut,
    DocumentResponse,
    DocumentUpdate,
)
from apps.api.services.content import create_record, delete_record, list_records, require_object_id, update_record


router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=DocumentListResponse)
def list_documents(db: Session = Depends(get_db)) -> DocumentListResponse:
    documents = list_records(db, Document)
    return DocumentListResponse(documents=[DocumentOut.model_validate(d) for d in documents])


@router.post("", response_model=DocumentResponse)
def create_document(body: DocumentIn, db: Session = Depends(get_db)) -> DocumentResponse:
    # upload_date is stamped by the model default
    document = create_record(db, Document, body.model_dump(), "document")
    return DocumentResponse(document=DocumentOut.model_validate(document))


@router.put("", response_model=DocumentResponse)
def update_document(body: DocumentUpdate, db: Session = Depends(get_db)) -> DocumentResponse:
    document = update_record(db, Document, body.id, body.model_dump(exclude={"id"}), "document")
    return DocumentResponse(document=DocumentOut.model_validate(document))


@router.delete("", response_model=SuccessResponse)
def delete_document(
    record_id: Optional[str] = Query(None, alias="id"), db: Session = Depends(get_db)
) -> SuccessResponse:
    delete_record(db, Document, require_object_id(record_id, "document"), "document")
    return SuccessResponse()
