from __future__ import annotations

import hashlib
import logging
import mimetypes
import os
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import quote

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from packages.common.config import S3Settings
from packages.uploads.gatekeeper import ResourceKind, StorageFailure, StoredAsset, StoreOutcome

logger = logging.getLogger(__name__)


def _build_storage_key(folder: str, filename: str) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    digest = hashlib.sha256(f"{ts}:{folder}:{filename}".encode()).hexdigest()[:16]
    basename = os.path.basename(filename.replace("\\", "/")) or "upload"
    return f"{folder.strip('/')}/{ts}-{digest}/{basename}"


def _format_for(filename: str, mime_type: str) -> str:
    ext = os.path.splitext(filename)[1]
    if not ext:
        ext = mimetypes.guess_extension(mime_type) or ""
    return ext.lstrip(".").lower()


def build_s3_client(settings: S3Settings) -> Any:
    session = boto3.session.Session()
    return session.client(
        "s3",
        endpoint_url=settings.endpoint_url,
        aws_access_key_id=settings.access_key,
        aws_secret_access_key=settings.secret_key,
        region_name=settings.region,
        use_ssl=settings.secure,
        config=Config(signature_version="s3v4"),
    )


class S3MediaStorage:
    """Media store on an S3-compatible bucket (AWS S3, MinIO)."""

    def __init__(self, settings: S3Settings, client: Optional[Any] = None) -> None:
        self._settings = settings
        self._client = client if client is not None else build_s3_client(settings)
        self._bucket_ready = False

    def _ensure_bucket(self) -> None:
        if self._bucket_ready:
            return
        bucket = self._settings.bucket
        try:
            self._client.head_bucket(Bucket=bucket)
        except ClientError:
            try:
                if self._settings.region == "us-east-1":
                    self._client.create_bucket(Bucket=bucket)
                else:
                    self._client.create_bucket(
                        Bucket=bucket, CreateBucketConfiguration={"LocationConstraint": self._settings.region}
                    )
            except ClientError as exc:
                # the put that follows reports the real failure
                logger.warning("bucket_create_failed", extra={"bucket": bucket, "error": str(exc)})
                return
        self._bucket_ready = True

    def public_url(self, key: str) -> str:
        base = self._settings.public_url or f"{self._settings.endpoint_url.rstrip('/')}/{self._settings.bucket}"
        return f"{base.rstrip('/')}/{quote(key)}"

    def store(
        self,
        payload: bytes,
        folder: str,
        resource_kind: ResourceKind,
        *,
        filename: str,
        mime_type: str,
    ) -> StoreOutcome:
        key = _build_storage_key(folder, filename)
        try:
            self._ensure_bucket()
            self._client.put_object(
                Bucket=self._settings.bucket,
                Key=key,
                Body=payload,
                ContentType=mime_type or "application/octet-stream",
                Metadata={"resource-kind": resource_kind.value},
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("media_store_failed", extra={"key": key, "error": str(exc)})
            return StorageFailure(message=str(exc))
        return StoredAsset(
            url=self.public_url(key),
            public_id=key,
            format=_format_for(filename, mime_type),
            size_bytes=len(payload),
        )
