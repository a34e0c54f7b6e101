from fastapi.testclient import TestClient

DOCUMENT = {
    "name": "Company registration",
    "description": "Certificate of incorporation",
    "fileType": "pdf",
    "category": "certificates",
    "fileUrl": "https://media.test/vargo-agro/docs/registration.pdf",
    "fileSize": 48213,
    "originalName": "registration.pdf",
}


def test_document_lifecycle(client: TestClient) -> None:
    created = client.post("/documents", json=DOCUMENT)
    assert created.status_code == 200
    document = created.json()["document"]
    assert document["fileType"] == "pdf"
    assert document["fileSize"] == 48213
    assert document["uploadDate"]

    updated = client.put("/documents", json={**DOCUMENT, "id": document["id"], "name": "Registration"})
    assert updated.status_code == 200
    assert updated.json()["document"]["name"] == "Registration"
    assert updated.json()["document"]["uploadDate"] == document["uploadDate"]

    listed = client.get("/documents").json()["documents"]
    assert [d["name"] for d in listed] == ["Registration"]

    assert client.delete("/documents", params={"id": document["id"]}).json() == {"success": True}
    assert client.get("/documents").json() == {"success": True, "documents": []}


def test_document_file_url_defaults_to_empty(client: TestClient) -> None:
    body = {k: v for k, v in DOCUMENT.items() if k not in ("fileUrl", "fileSize", "originalName")}
    document = client.post("/documents", json=body).json()["document"]
    assert document["fileUrl"] == ""
    assert document["fileSize"] is None


def test_document_requires_file_type(client: TestClient) -> None:
    resp = client.post("/documents", json={**DOCUMENT, "fileType": ""})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required field: fileType"


def test_document_ids_are_validated(client: TestClient) -> None:
    put = client.put("/documents", json={**DOCUMENT, "id": "123"})
    assert put.status_code == 400
    assert put.json()["error"] == "Invalid document ID format"

    delete = client.delete("/documents")
    assert delete.status_code == 400
    assert delete.json()["error"] == "Document ID is required"

    missing = client.delete("/documents", params={"id": "0" * 24})
    assert missing.status_code == 404
    assert missing.json()["error"] == "Document not found"


def test_document_rejects_values_beyond_column_limits(client: TestClient) -> None:
    long_type = client.post("/documents", json={**DOCUMENT, "fileType": "x" * 65})
    huge_size = client.post("/documents", json={**DOCUMENT, "fileSize": 2**31})

    assert long_type.status_code == 400
    assert long_type.json()["error"].startswith("Invalid value for fileType:")
    assert huge_size.status_code == 400
    assert huge_size.json()["error"].startswith("Invalid value for fileSize:")
    assert client.post("/documents", json={**DOCUMENT, "fileSize": 2**31 - 1}).status_code == 200
