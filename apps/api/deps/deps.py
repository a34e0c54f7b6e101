from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from apps.api.db.session import get_db_session
from apps.api.services.uploads import S3MediaStorage
from packages.common.config import get_settings
from packages.uploads.gatekeeper import MediaStore, UploadGatekeeper


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


@lru_cache
def get_media_storage() -> MediaStore:
    return S3MediaStorage(get_settings().s3)


def get_gatekeeper(store: MediaStore = Depends(get_media_storage)) -> UploadGatekeeper:
    return UploadGatekeeper(store)
