from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from apps.api.schemas.common import FileSize, RecordIn, RecordOut, blank_to_none, check_object_id


class DocumentIn(RecordIn):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    file_type: str = Field(..., min_length=1, max_length=64, description="Short type label shown on the site, e.g. 'pdf'")
    category: str = Field(..., min_length=1, max_length=128)
    file_url: str = Field("", max_length=1024)
    file_size: Optional[FileSize] = None
    original_name: Optional[str] = Field(None, max_length=512)

    @field_validator("file_url", mode="before")
    @classmethod
    def _default_url(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("original_name", mode="before")
    @classmethod
    def _blank_name(cls, v: object) -> object:
        return blank_to_none(v)


class DocumentUpdate(DocumentIn):
    id: str

    @field_validator("id")
    @classmethod
    def _object_id(cls, v: str) -> str:
        return check_object_id(v, "document")


class DocumentOut(RecordOut):
    id: str
    name: str
    description: str
    file_type: str
    category: str
    upload_date: datetime
    file_url: str
    file_size: Optional[int] = None
    original_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(RecordOut):
    success: bool = True
    documents: list[DocumentOut]


class DocumentResponse(RecordOut):
    success: bool = True
    document: DocumentOut
