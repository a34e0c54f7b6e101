import io

import pytest

from packages.uploads.gatekeeper import (
    MB,
    UPLOAD_POLICIES,
    FilePayload,
    FileTooLargeError,
    InvalidFileTypeError,
    ResourceKind,
    StorageFailure,
    StoredAsset,
    UploadCategory,
    UploadGatekeeper,
    UploadOptions,
    UploadTransportError,
    classify,
    resolve_policy,
    validate_and_classify,
)

ALL_MIME_TYPES = sorted(set().union(*(p.allowed_mime_types for p in UPLOAD_POLICIES.values())) | {"text/csv", "video/quicktime", ""})


def _file(mime_type: str, size_bytes: int = 1024, filename: str = "file.bin") -> FilePayload:
    return FilePayload(mime_type=mime_type, size_bytes=size_bytes, filename=filename, source=io.BytesIO(b"x"))


class RecordingStore:
    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    def store(self, payload, folder, resource_kind, *, filename, mime_type):
        self.calls.append((payload, folder, resource_kind, filename, mime_type))
        return self.outcome


@pytest.mark.parametrize(
    "mime_type, expected",
    [
        ("image/png", ResourceKind.IMAGE),
        ("image/svg+xml", ResourceKind.IMAGE),
        ("video/mp4", ResourceKind.VIDEO),
        ("application/pdf", ResourceKind.RAW),
        ("text/plain", ResourceKind.RAW),
        ("application/msword", ResourceKind.RAW),
        ("", ResourceKind.RAW),
    ],
)
def test_classify(mime_type: str, expected: ResourceKind) -> None:
    assert classify(mime_type) is expected
    assert classify(mime_type) is classify(mime_type)


@pytest.mark.parametrize("value", [None, "", "bogus", "Document", "NOTICE"])
def test_unknown_category_resolves_to_general(value) -> None:
    assert UploadCategory.resolve(value) is UploadCategory.GENERAL
    assert resolve_policy(value) is UPLOAD_POLICIES[UploadCategory.GENERAL]


def test_policy_limits() -> None:
    assert resolve_policy("document").max_size_bytes == 10 * MB
    assert resolve_policy("notice").max_size_bytes == 5 * MB
    assert resolve_policy("general").max_size_bytes == 10 * MB


@pytest.mark.parametrize("category", list(UploadCategory))
@pytest.mark.parametrize("mime_type", ALL_MIME_TYPES)
def test_type_rejected_iff_not_allowed(category: UploadCategory, mime_type: str) -> None:
    allowed = mime_type in UPLOAD_POLICIES[category].allowed_mime_types
    if allowed:
        assert validate_and_classify(_file(mime_type), category).resource_kind is classify(mime_type)
    else:
        with pytest.raises(InvalidFileTypeError) as exc_info:
            validate_and_classify(_file(mime_type), category)
        assert category.value in str(exc_info.value)


@pytest.mark.parametrize("category", list(UploadCategory))
def test_size_limit_is_inclusive(category: UploadCategory) -> None:
    limit = UPLOAD_POLICIES[category].max_size_bytes
    validate_and_classify(_file("application/pdf", limit), category)
    with pytest.raises(FileTooLargeError) as exc_info:
        validate_and_classify(_file("application/pdf", limit + 1), category)
    assert str(exc_info.value) == (
        f"File too large. Max size for {category.value} is {UPLOAD_POLICIES[category].max_size_mb}MB."
    )


def test_notice_jpeg_passes_as_image() -> None:
    validated = validate_and_classify(_file("image/jpeg", 3 * MB), "notice")
    assert validated.category is UploadCategory.NOTICE
    assert validated.resource_kind is ResourceKind.IMAGE


def test_notice_rejects_video() -> None:
    with pytest.raises(InvalidFileTypeError, match="Invalid file type for notice."):
        validate_and_classify(_file("video/mp4", 1 * MB), "notice")


def test_document_pdf_over_limit() -> None:
    with pytest.raises(FileTooLargeError, match="document is 10MB"):
        validate_and_classify(_file("application/pdf", 11 * MB), "document")


def test_type_is_checked_before_size() -> None:
    with pytest.raises(InvalidFileTypeError):
        validate_and_classify(_file("video/mp4", 50 * MB), "notice")


def test_upload_options_defaults() -> None:
    options = UploadOptions.resolve(None, None)
    assert options == UploadOptions(folder="vargo-agro", category=UploadCategory.GENERAL)
    assert UploadOptions.resolve("  ", " notice ", default_folder="site").folder == "site"
    assert UploadOptions.resolve("  ", " notice ").category is UploadCategory.NOTICE


def test_handle_uploads_after_validation() -> None:
    store = RecordingStore(StoredAsset(url="https://cdn/x.pdf", public_id="docs/x", format="pdf", size_bytes=1))
    gatekeeper = UploadGatekeeper(store)

    result = gatekeeper.handle(
        FilePayload.from_bytes(b"%PDF", mime_type="application/pdf", filename="x.pdf"),
        UploadOptions(folder="docs", category=UploadCategory.DOCUMENT),
    )

    assert store.calls == [(b"%PDF", "docs", ResourceKind.RAW, "x.pdf", "application/pdf")]
    assert result.url == "https://cdn/x.pdf"
    assert result.public_id == "docs/x"
    assert result.size_bytes == 4
    assert result.original_filename == "x.pdf"
    assert result.resource_kind is ResourceKind.RAW


def test_handle_never_stores_rejected_files() -> None:
    store = RecordingStore(StoredAsset(url="u", public_id="p", format="mp4", size_bytes=1))
    with pytest.raises(InvalidFileTypeError):
        UploadGatekeeper(store).handle(_file("video/mp4"), UploadOptions("vargo-agro", UploadCategory.NOTICE))
    assert store.calls == []


def test_storage_failure_becomes_transport_error() -> None:
    store = RecordingStore(StorageFailure(message="SignatureDoesNotMatch"))
    with pytest.raises(UploadTransportError, match="SignatureDoesNotMatch") as exc_info:
        UploadGatekeeper(store).upload(_file("image/png"), "vargo-agro", ResourceKind.IMAGE)
    assert exc_info.value.status_code == 500


class CountingStream(io.BytesIO):
    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.reads = 0

    def read(self, *args):
        self.reads += 1
        return super().read(*args)


@pytest.mark.parametrize(
    "mime_type, size_bytes",
    [("video/mp4", 1024), ("image/png", 6 * MB)],
)
def test_rejected_file_is_never_read(mime_type: str, size_bytes: int) -> None:
    stream = CountingStream(b"payload")
    store = RecordingStore(StoredAsset(url="u", public_id="p", format="png", size_bytes=1))
    payload = FilePayload(mime_type=mime_type, size_bytes=size_bytes, filename="f", source=stream)

    with pytest.raises((InvalidFileTypeError, FileTooLargeError)):
        UploadGatekeeper(store).handle(payload, UploadOptions("vargo-agro", UploadCategory.NOTICE))

    assert stream.reads == 0
    assert store.calls == []


def test_accepted_file_is_read_once() -> None:
    stream = CountingStream(b"\x89PNG")
    store = RecordingStore(StoredAsset(url="u", public_id="p", format="png", size_bytes=4))
    payload = FilePayload(mime_type="image/png", size_bytes=4, filename="a.png", source=stream)

    UploadGatekeeper(store).handle(payload, UploadOptions("vargo-agro", UploadCategory.NOTICE))

    assert stream.reads == 1
    assert store.calls[0][0] == b"\x89PNG"
