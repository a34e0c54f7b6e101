from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from packages.common.ids import is_object_id

# input limits mirror the column sizes in apps/api/db/models.py
MAX_INT32 = 2**31 - 1
FileSize = Annotated[int, Field(ge=0, le=MAX_INT32)]


class CamelModel(BaseModel):
    """Wire models speak camelCase; Python code uses the snake_case names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordIn(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


class RecordOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def check_object_id(value: str, entity: str) -> str:
    if not is_object_id(value):
        raise ValueError(f"Invalid {entity} ID format")
    return value


class ErrorResponse(CamelModel):
    success: bool = False
    error: str


class SuccessResponse(CamelModel):
    success: bool = True
