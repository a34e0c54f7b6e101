import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("S3_ENDPOINT_URL", "http://localhost:9000")
os.environ.setdefault("S3_ACCESS_KEY", "minioadmin")
os.environ.setdefault("S3_SECRET_KEY", "minioadmin")
os.environ.setdefault("S3_BUCKET", "test")

from typing import Iterator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from apps.api.db import models  # noqa: F401
from apps.api.db.base import Base
from packages.uploads.gatekeeper import ResourceKind, StorageFailure, StoredAsset


class FakeMediaStore:
    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.failure: Optional[str] = None

    def store(self, payload: bytes, folder: str, resource_kind: ResourceKind, *, filename: str, mime_type: str):
        self.calls.append(
            {"size": len(payload), "folder": folder, "resource_kind": resource_kind, "filename": filename, "mime_type": mime_type}
        )
        if self.failure is not None:
            return StorageFailure(message=self.failure)
        key = f"{folder}/{filename}"
        return StoredAsset(
            url=f"https://media.test/{key}",
            public_id=key,
            format=os.path.splitext(filename)[1].lstrip("."),
            size_bytes=len(payload),
        )


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_sessionmaker(db_engine: Engine) -> sessionmaker:
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def media_store() -> FakeMediaStore:
    return FakeMediaStore()


@pytest.fixture
def client(db_sessionmaker: sessionmaker, media_store: FakeMediaStore) -> Iterator[TestClient]:
    from apps.api.deps.deps import get_db, get_media_storage
    from apps.api.main import app

    def _get_db():
        db = db_sessionmaker()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_media_storage] = lambda: media_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
