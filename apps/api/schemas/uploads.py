from __future__ import annotations

from apps.api.schemas.common import CamelModel
from packages.uploads.gatekeeper import ResourceKind, UploadResult


class UploadResponse(CamelModel):
    success: bool = True
    url: str
    public_id: str
    format: str
    size: int
    original_filename: str
    type: str
    resource_type: ResourceKind

    @classmethod
    def from_result(cls, result: UploadResult) -> "UploadResponse":
        return cls(
            url=result.url,
            public_id=result.public_id,
            format=result.format,
            size=result.size_bytes,
            original_filename=result.original_filename,
            type=result.mime_type,
            resource_type=result.resource_kind,
        )
