from __future__ import annotations

import os
from typing import BinaryIO, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from apps.api.deps.deps import get_gatekeeper
from apps.api.schemas.common import ErrorResponse
from apps.api.schemas.uploads import UploadResponse
from packages.common.config import AppSettings, get_settings
from packages.uploads.gatekeeper import FilePayload, MissingFileError, UploadGatekeeper, UploadOptions


router = APIRouter(prefix="/upload", tags=["upload"])


def _stream_size(stream: BinaryIO) -> int:
    position = stream.tell()
    size = stream.seek(0, os.SEEK_END)
    stream.seek(position)
    return size


@router.post(
    "",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def upload(
    file: Optional[UploadFile] = File(None),
    folder: Optional[str] = Form(None),
    upload_type: Optional[str] = Form(None, alias="uploadType"),
    gatekeeper: UploadGatekeeper = Depends(get_gatekeeper),
    settings: AppSettings = Depends(get_settings),
) -> UploadResponse:
    if file is None:
        raise MissingFileError("No file provided")
    options = UploadOptions.resolve(folder, upload_type, default_folder=settings.upload_default_folder)
    # the spooled part is only read by the gatekeeper once validation passes
    payload = FilePayload(
        mime_type=file.content_type or "",
        size_bytes=file.size if file.size is not None else _stream_size(file.file),
        filename=file.filename or "",
        source=file.file,
    )
    result = gatekeeper.handle(payload, options)
    return UploadResponse.from_result(result)
