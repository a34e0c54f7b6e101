"""Upload policy: which files may reach the media store, and how they are stored.

Validation and classification are pure. The only I/O is the single call to the
media store in :meth:`UploadGatekeeper.upload`, which runs after validation has
passed.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import BinaryIO, Mapping, Optional, Protocol, Union

from packages.common.errors import AppError, BadRequestError

logger = logging.getLogger(__name__)

DEFAULT_FOLDER = "vargo-agro"
MB = 1024 * 1024


class UploadCategory(str, Enum):
    DOCUMENT = "document"
    NOTICE = "notice"
    GENERAL = "general"

    @classmethod
    def resolve(cls, value: Optional[str]) -> "UploadCategory":
        """Map a caller-supplied ``uploadType``. Unknown or blank values mean general."""
        try:
            return cls(value)
        except ValueError:
            return cls.GENERAL


class ResourceKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    RAW = "raw"


@dataclass(frozen=True)
class UploadPolicy:
    allowed_mime_types: frozenset[str]
    max_size_mb: int

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * MB

    def allows(self, mime_type: str) -> bool:
        return mime_type in self.allowed_mime_types


UPLOAD_POLICIES: Mapping[UploadCategory, UploadPolicy] = MappingProxyType(
    {
        UploadCategory.DOCUMENT: UploadPolicy(
            allowed_mime_types=frozenset(
                {
                    "image/png",
                    "image/jpeg",
                    "image/webp",
                    "image/gif",
                    "video/mp4",
                    "video/webm",
                    "application/pdf",
                    "application/msword",
                    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                    "application/vnd.ms-excel",
                    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                    "text/plain",
                }
            ),
            max_size_mb=10,
        ),
        UploadCategory.NOTICE: UploadPolicy(
            allowed_mime_types=frozenset(
                {"image/jpeg", "image/png", "image/gif", "image/webp", "application/pdf"}
            ),
            max_size_mb=5,
        ),
        UploadCategory.GENERAL: UploadPolicy(
            allowed_mime_types=frozenset(
                {"image/png", "image/jpeg", "image/webp", "video/mp4", "application/pdf"}
            ),
            max_size_mb=10,
        ),
    }
)


class UploadValidationError(BadRequestError):
    """The caller can fix the request; never retried."""


class MissingFileError(UploadValidationError):
    pass


class InvalidFileTypeError(UploadValidationError):
    pass


class FileTooLargeError(UploadValidationError):
    pass


class UploadTransportError(AppError):
    """The media store rejected or failed the upload. Carries its message."""

    status_code = 500


@dataclass(frozen=True)
class FilePayload:
    """An inbound file described by its declared type and size.

    The bytes stay in ``source`` until :meth:`read` is called, which only
    happens once the file has passed validation.
    """

    mime_type: str
    size_bytes: int
    filename: str
    source: BinaryIO

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str, filename: str) -> "FilePayload":
        return cls(mime_type=mime_type, size_bytes=len(data), filename=filename, source=io.BytesIO(data))

    def read(self) -> bytes:
        return self.source.read()


@dataclass(frozen=True)
class UploadOptions:
    folder: str
    category: UploadCategory

    @classmethod
    def resolve(
        cls,
        folder: Optional[str],
        upload_type: Optional[str],
        default_folder: str = DEFAULT_FOLDER,
    ) -> "UploadOptions":
        folder = (folder or "").strip() or default_folder
        return cls(folder=folder, category=UploadCategory.resolve((upload_type or "").strip() or None))


@dataclass(frozen=True)
class ValidatedUpload:
    category: UploadCategory
    policy: UploadPolicy
    resource_kind: ResourceKind


@dataclass(frozen=True)
class StoredAsset:
    url: str
    public_id: str
    format: str
    size_bytes: int


@dataclass(frozen=True)
class StorageFailure:
    message: str


StoreOutcome = Union[StoredAsset, StorageFailure]


class MediaStore(Protocol):
    def store(
        self,
        payload: bytes,
        folder: str,
        resource_kind: ResourceKind,
        *,
        filename: str,
        mime_type: str,
    ) -> StoreOutcome:
        ...


@dataclass(frozen=True)
class UploadResult:
    url: str
    public_id: str
    format: str
    size_bytes: int
    original_filename: str
    mime_type: str
    resource_kind: ResourceKind


def resolve_policy(category: Union[UploadCategory, str, None]) -> UploadPolicy:
    if not isinstance(category, UploadCategory):
        category = UploadCategory.resolve(category)
    return UPLOAD_POLICIES[category]


def classify(mime_type: str) -> ResourceKind:
    if mime_type.startswith("image/"):
        return ResourceKind.IMAGE
    if mime_type.startswith("video/"):
        return ResourceKind.VIDEO
    # PDFs and everything else are stored as opaque blobs
    return ResourceKind.RAW


def validate_and_classify(file: FilePayload, category: Union[UploadCategory, str, None]) -> ValidatedUpload:
    if not isinstance(category, UploadCategory):
        category = UploadCategory.resolve(category)
    policy = resolve_policy(category)
    if not policy.allows(file.mime_type):
        raise InvalidFileTypeError(f"Invalid file type for {category.value}.")
    if file.size_bytes > policy.max_size_bytes:
        raise FileTooLargeError(f"File too large. Max size for {category.value} is {policy.max_size_mb}MB.")
    return ValidatedUpload(category=category, policy=policy, resource_kind=classify(file.mime_type))


class UploadGatekeeper:
    def __init__(self, store: MediaStore) -> None:
        self._store = store

    def upload(self, file: FilePayload, folder: str, resource_kind: ResourceKind) -> UploadResult:
        outcome = self._store.store(
            file.read(),
            folder,
            resource_kind,
            filename=file.filename,
            mime_type=file.mime_type,
        )
        if isinstance(outcome, StorageFailure):
            raise UploadTransportError(f"Failed to upload to media storage: {outcome.message}")
        return UploadResult(
            url=outcome.url,
            public_id=outcome.public_id,
            format=outcome.format,
            size_bytes=file.size_bytes,
            original_filename=file.filename,
            mime_type=file.mime_type,
            resource_kind=resource_kind,
        )

    def handle(self, file: FilePayload, options: UploadOptions) -> UploadResult:
        try:
            validated = validate_and_classify(file, options.category)
        except UploadValidationError as exc:
            logger.info(
                "upload_rejected",
                extra={"category": options.category.value, "mime_type": file.mime_type, "size": file.size_bytes, "reason": exc.message},
            )
            raise
        result = self.upload(file, options.folder, validated.resource_kind)
        logger.info(
            "upload_stored",
            extra={"category": validated.category.value, "public_id": result.public_id, "resource_kind": result.resource_kind.value},
        )
        return result
