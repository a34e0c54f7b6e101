from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from apps.api.schemas.common import FileSize, RecordIn, RecordOut, blank_to_none, check_object_id

NOTICE_FILE_TYPES = ("image", "pdf")
NOTICE_PRIORITIES = ("low", "medium", "high")


class NoticeIn(RecordIn):
    title: str = Field(..., min_length=1, max_length=512)
    content: str = Field(..., min_length=1)
    description: str = ""
    category: str = Field("general", max_length=128)
    file_url: str = Field("", max_length=1024)
    file_type: Optional[str] = Field(None, max_length=16)
    file_size: Optional[FileSize] = None
    original_name: Optional[str] = Field(None, max_length=512)
    show_as_popup: bool = False
    is_active: bool = True
    priority: str = Field("medium", max_length=16)

    @field_validator("description", "file_url", mode="before")
    @classmethod
    def _empty_default(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, v: object) -> object:
        return "general" if blank_to_none(v) is None else v

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, v: object) -> object:
        return "medium" if blank_to_none(v) is None else v

    @field_validator("show_as_popup", mode="before")
    @classmethod
    def _default_popup(cls, v: object) -> object:
        return False if v is None else v

    @field_validator("is_active", mode="before")
    @classmethod
    def _default_active(cls, v: object) -> object:
        return True if v is None else v

    @field_validator("file_type", "original_name", mode="before")
    @classmethod
    def _blank_optional(cls, v: object) -> object:
        return blank_to_none(v)

    @field_validator("file_type")
    @classmethod
    def _known_file_type(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in NOTICE_FILE_TYPES:
            raise ValueError("Invalid file type. Must be 'image' or 'pdf'")
        return v

    @field_validator("priority")
    @classmethod
    def _known_priority(cls, v: str) -> str:
        if v not in NOTICE_PRIORITIES:
            raise ValueError("Invalid priority. Must be 'low', 'medium' or 'high'")
        return v


class NoticeUpdate(NoticeIn):
    id: str

    @field_validator("id")
    @classmethod
    def _object_id(cls, v: str) -> str:
        return check_object_id(v, "notice")


class NoticeOut(RecordOut):
    id: str
    title: str
    content: str
    description: str
    category: str
    file_url: str
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    original_name: Optional[str] = None
    show_as_popup: bool
    is_active: bool
    priority: str
    created_at: datetime
    updated_at: datetime


class NoticeListResponse(RecordOut):
    success: bool = True
    notices: list[NoticeOut]


class NoticeResponse(RecordOut):
    success: bool = True
    notice: NoticeOut


class PopupNoticeResponse(RecordOut):
    success: bool = True
    notice: Optional[NoticeOut] = None
    seen_key: Optional[str] = None
