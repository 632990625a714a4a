"""
Test suite for document API endpoints.

Tests POST/GET/DELETE /api/documents through the full service stack with
the in-memory vector store.

System role: Verification of document HTTP API
"""

from unittest.mock import MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio_rag.api.deps import get_document_service
from portfolio_rag.core.exceptions import VectorStoreError


def _upload(client: TestClient, name: str = "resume.md", body: bytes = b"Python developer", source: str = "resume"):
    return client.post(
        "/api/documents",
        files={"file": (name, body, "text/markdown")},
        data={"source": source},
    )


class TestUploadEndpoint:
    """Test suite for POST /api/documents."""

    def test_upload_should_return_camel_case_result(self, client: TestClient) -> None:
        response = _upload(client)

        assert response.status_code == 200
        assert response.json() == {
            "chunksProcessed": 1,
            "fileName": "resume.md",
            "source": "resume",
            "success": True,
            "message": "Successfully processed resume.md",
        }

    def test_upload_without_file_should_return_400(self, client: TestClient) -> None:
        response = client.post("/api/documents", data={"source": "resume"})

        assert response.status_code == 400
        assert response.json() == {"error": "No file provided"}

    def test_upload_pdf_should_return_400_with_hint(self, client: TestClient) -> None:
        response = client.post(
            "/api/documents",
            files={"file": ("cv.pdf", b"%PDF-1.7", "application/pdf")},
            data={"source": "resume"},
        )

        assert response.status_code == 400
        assert "Convert the PDF" in response.json()["error"]

    def test_upload_empty_file_should_return_400(self, client: TestClient) -> None:
        response = _upload(client, body=b"   ")

        assert response.status_code == 400
        assert response.json() == {"error": "No text content found in file"}

    def test_upload_store_failure_should_return_500(self, app: FastAPI, client: TestClient) -> None:
        failing = MagicMock()
        failing.upload.side_effect = VectorStoreError(
            "Failed to upsert vectors to S3 Vectors: throttled", operation="upsert"
        )
        app.dependency_overrides[get_document_service] = lambda: failing

        response = _upload(client)

        assert response.status_code == 500
        assert "throttled" in response.json()["error"]


class TestListEndpoint:
    """Test suite for GET /api/documents."""

    def test_list_should_return_uploaded_documents(self, client: TestClient) -> None:
        _upload(client, "resume.md", source="resume")
        _upload(client, "projects.md", source="projects")

        response = client.get("/api/documents")

        assert response.status_code == 200
        documents = response.json()["documents"]
        assert [(d["source"], d["fileName"]) for d in documents] == [
            ("projects", "projects.md"),
            ("resume", "resume.md"),
        ]
        assert documents[0]["chunkCount"] == 1


class TestDeleteEndpoint:
    """Test suite for DELETE /api/documents."""

    def test_delete_should_remove_document(self, client: TestClient) -> None:
        _upload(client)

        response = client.delete("/api/documents", params={"source": "resume", "fileName": "resume.md"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Deleted 1 chunks from resume.md",
            "deletedChunks": 1,
        }
        assert client.get("/api/documents").json() == {"documents": []}

    def test_delete_unknown_document_should_return_404(self, client: TestClient) -> None:
        _upload(client)

        response = client.delete("/api/documents", params={"source": "resume", "fileName": "nope.md"})

        assert response.status_code == 404
        assert response.json() == {"error": "Document not found"}
        assert len(client.get("/api/documents").json()["documents"]) == 1

    def test_delete_without_parameters_should_return_400(self, client: TestClient) -> None:
        response = client.delete("/api/documents", params={"source": "resume"})

        assert response.status_code == 400
        assert response.json() == {"error": "Source and fileName parameters required"}

    def test_delete_all_should_wipe_index(self, client: TestClient) -> None:
        _upload(client, "resume.md")
        _upload(client, "projects.md")

        response = client.delete("/api/documents", params={"deleteAll": "true"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "action": "deleteAll"}
        assert client.get("/api/documents").json() == {"documents": []}
