"""
Test resume upload/listing and the dashboard endpoint
"""
import json
from unittest.mock import patch

from app.api.deps import get_generator_factory
from main import app
from tests.conftest import FakeGenerator

PDF_BYTES = b"%PDF-1.4 fake"

STRUCTURED_RESPONSE = json.dumps({
    "personal_info": {"name": "Jane Doe"},
    "experience": [{"company": "Acme"}],
    "skills": "Python",
})


def _upload(client, headers, **form):
    return client.post(
        "/api/v1/resumes/upload",
        files={"file": ("cv.pdf", PDF_BYTES, "application/pdf")},
        data=form,
        headers=headers,
    )


@patch("app.services.resume_service.extract_text_from_pdf", return_value=("Jane Doe\nEngineer", 2))
def test_upload_stores_text(mock_extract, client, auth_headers, generators):
    response = _upload(client, auth_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["filename"] == "cv.pdf"
    assert data["fileSize"] == len(PDF_BYTES)
    assert data["pagesCount"] == 2
    assert data["processingStatus"] == "completed"
    assert data["structuredData"] is None
    assert generators == []
    mock_extract.assert_called_once_with(PDF_BYTES)


@patch("app.services.resume_service.extract_text_from_pdf", side_effect=ValueError("bad pdf"))
def test_unreadable_pdf_is_marked_failed(mock_extract, client, auth_headers):
    response = _upload(client, auth_headers)

    assert response.status_code == 201
    assert response.json()["data"]["processingStatus"] == "failed"


@patch("app.services.resume_service.extract_text_from_pdf", return_value=("Jane Doe\nEngineer", 1))
def test_upload_with_structured_extraction(mock_extract, client, auth_headers):
    generator = FakeGenerator(response=STRUCTURED_RESPONSE)
    app.dependency_overrides[get_generator_factory] = lambda: (lambda config: generator)

    response = _upload(client, auth_headers, extract="true")

    structured = response.json()["data"]["structuredData"]
    assert structured["personal_info"] == {"name": "Jane Doe"}
    assert structured["skills"] == ["Python"]
    assert structured["education"] == []
    assert "Jane Doe\nEngineer" in generator.prompts[0]


def test_non_pdf_rejected(client, auth_headers):
    response = client.post(
        "/api/v1/resumes/upload",
        files={"file": ("cv.docx", b"PK..", "application/octet-stream")},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_upload_requires_authentication(client):
    response = client.post("/api/v1/resumes/upload", files={"file": ("cv.pdf", PDF_BYTES, "application/pdf")})
    assert response.status_code == 401


@patch("app.services.resume_service.extract_text_from_pdf", return_value=("text", 1))
def test_list_and_read_resumes(mock_extract, client, auth_headers):
    resume_id = _upload(client, auth_headers).json()["data"]["id"]

    listing = client.get("/api/v1/resumes/", headers=auth_headers).json()
    assert [r["id"] for r in listing["data"]] == [resume_id]
    assert client.get(f"/api/v1/resumes/{resume_id}", headers=auth_headers).status_code == 200
    assert client.get("/api/v1/resumes/missing", headers=auth_headers).status_code == 404


@patch("app.services.resume_service.extract_text_from_pdf", return_value=("text", 1))
def test_dashboard(mock_extract, client, auth_headers, structured_data):
    _upload(client, auth_headers)
    user_id = client.get("/api/v1/auth/me", headers=auth_headers).json()["id"]
    client.post("/api/generate-portfolio-code", json={"structuredData": structured_data, "userId": user_id})

    response = client.get("/api/v1/dashboard/", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["profile"]["fullName"] == "Jane Doe"
    assert data["profile"]["creditsPercent"] == 100.0
    assert len(data["resumes"]) == 1
    assert len(data["portfolios"]) == 1
    assert data["portfolios"][0]["title"] == "Jane Doe"


def test_dashboard_requires_authentication(client):
    assert client.get("/api/v1/dashboard/").status_code == 401
