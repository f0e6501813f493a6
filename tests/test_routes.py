"""Tests for the HTTP API routes.

Configuration:
- conftest.py sets APP_ENV=testing before any app imports
- Uploads are built in-memory (plain text, PDF via the make_pdf fixture)
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from resumatch.core.config import settings
from resumatch.core.errors import DocumentReadError
from resumatch.core.file_validation import read_upload_file_limited
from resumatch.main import app


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client."""
    return TestClient(app)


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestParseCV:
    """Test the CV upload endpoint."""

    def test_parse_plain_text(self, client: TestClient, sample_resume_text: str) -> None:
        resp = client.post(
            "/v1/cv/parse",
            files={"cv_file": ("resume.txt", sample_resume_text.encode("utf-8"), "text/plain")},
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["file_type"] == "text"
        assert data["profile"]["full_name"] == "Jane Doe"
        assert data["profile"]["email"] == "jane.doe@example.com"
        assert data["profile"]["format_descriptor"]["file_name"] == "resume.txt"
        assert data["char_count"] == len(data["text"])
        assert data["preview"] == data["text"][: settings.app.text_preview_chars]
        assert data["warnings"] == []

    def test_parse_pdf(self, client: TestClient, make_pdf) -> None:
        pdf_data = make_pdf([[(72, 740, "Jane Doe"), (72, 720, "jane.doe@example.com")]])

        resp = client.post(
            "/v1/cv/parse",
            files={"cv_file": ("resume.pdf", pdf_data, "application/pdf")},
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["file_type"] == "pdf"
        assert data["meta"]["pages"] == 1
        assert data["profile"]["full_name"] == "Jane Doe"

    def test_parse_legacy_doc_returns_placeholders(self, client: TestClient) -> None:
        data = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 32

        resp = client.post(
            "/v1/cv/parse",
            files={"cv_file": ("resume.doc", data, "application/msword")},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["file_type"] == "doc"
        assert body["profile"]["full_name"] == "Name not found"
        assert body["warnings"]

    def test_non_utf8_text_is_parsed(self, client: TestClient) -> None:
        data = "Jos\u00e9 Garc\u00eda\njose@example.com\n".encode("cp1252")

        resp = client.post(
            "/v1/cv/parse",
            files={"cv_file": ("resume.txt", data, "text/plain")},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["file_type"] == "text"
        assert body["profile"]["email"] == "jose@example.com"

    def test_parse_image_returns_placeholders(self, client: TestClient) -> None:
        data = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

        resp = client.post(
            "/v1/cv/parse",
            files={"cv_file": ("resume.png", data, "image/png")},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["file_type"] == "unsupported"
        assert body["profile"]["full_name"] == "Name not found"
        assert body["warnings"]

    def test_empty_upload_returns_422(self, client: TestClient) -> None:
        resp = client.post(
            "/v1/cv/parse",
            files={"cv_file": ("resume.txt", b"", "text/plain")},
        )

        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "document_empty"

    def test_upload_too_large_returns_413(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings.app, "max_upload_size_mb", 1)
        oversized = b"a" * (1024 * 1024 + 1)

        resp = client.post(
            "/v1/cv/parse",
            files={"cv_file": ("resume.txt", oversized, "text/plain")},
        )

        assert resp.status_code == 413

    def test_missing_file_returns_422(self, client: TestClient) -> None:
        assert client.post("/v1/cv/parse").status_code == 422


class _BrokenUpload:
    """Upload whose stream fails mid-read."""

    size = None

    async def read(self, size: int = -1) -> bytes:
        raise OSError("connection reset")


class TestReadUpload:
    def test_stream_failure_raises_document_read_error(self) -> None:
        with pytest.raises(DocumentReadError) as exc_info:
            asyncio.run(read_upload_file_limited(_BrokenUpload()))

        assert exc_info.value.code == "document_unreadable"


class TestManualProfile:
    def test_blank_fields_get_placeholders(self, client: TestClient) -> None:
        resp = client.post("/v1/cv/manual", json={"full_name": "Jane Doe", "skills": "Python, SQL"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["full_name"] == "Jane Doe"
        assert data["email"] == "Email not found"
        assert data["format_descriptor"] is None


class TestJobAnalyze:
    def test_analyze(self, client: TestClient) -> None:
        resp = client.post(
            "/v1/job/analyze",
            json={
                "job_description": "- Build REST services in Python\n- Operate Kubernetes clusters",
                "candidate_skills": "Python",
            },
        )

        assert resp.status_code == 200
        data = resp.json()
        assert "Kubernetes" in data["keywords"]
        assert "Kubernetes" in data["skills_gap"]
        assert data["requirements"] == ["Build REST services in Python", "Operate Kubernetes clusters"]

    def test_empty_description(self, client: TestClient) -> None:
        resp = client.post("/v1/job/analyze", json={"job_description": ""})

        assert resp.status_code == 200
        assert resp.json() == {"keywords": [], "requirements": [], "skills_gap": []}

    def test_long_description_truncated(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings.app, "max_job_desc_chars", 30)

        resp = client.post(
            "/v1/job/analyze",
            json={"job_description": "- Maintain Python services\n- Operate Kubernetes clusters"},
        )

        assert resp.status_code == 200
        assert "Kubernetes" not in resp.json()["keywords"]


class TestATSScore:
    def test_score(self, client: TestClient) -> None:
        resp = client.post(
            "/v1/ats/score",
            json={
                "profile": {"skills": "JavaScript, React"},
                "analysis": {"keywords": ["React", "Docker"]},
            },
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["categories"]["keywords"]["score"] == 50
        assert data["categories"]["keywords"]["status"] == "poor"
        assert 0 <= data["overall"] <= 100
        assert data["status"] in {"good", "warning", "poor"}

    def test_invalid_analysis_rejected(self, client: TestClient) -> None:
        resp = client.post(
            "/v1/ats/score",
            json={"profile": {}, "analysis": {"keywords": ["React"], "skills_gap": ["Docker"]}},
        )

        assert resp.status_code == 422


class TestHandoff:
    def test_handoff(self, client: TestClient) -> None:
        resp = client.post(
            "/v1/handoff",
            json={
                "profile": {"full_name": "Jane Doe", "skills": "Python"},
                "job_description": "- Operate Kubernetes clusters in production",
            },
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["automation_trigger"] == "resume_generation"
        assert data["candidate"]["full_name"] == "Jane Doe"
        assert "Kubernetes" in data["job_description"]["analysis"]["keywords"]
