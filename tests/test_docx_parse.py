from io import BytesIO

from docx import Document
from fastapi.testclient import TestClient

from profile_parser.config import Settings, get_settings
from profile_parser.main import app

app.dependency_overrides[get_settings] = lambda: Settings(openai_api_key="")

client = TestClient(app)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def build_resume_docx() -> bytes:
    doc = Document()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("jane.doe@example.com")
    doc.add_paragraph("(555) 123-4567")
    doc.add_paragraph("EXPERIENCE")
    doc.add_paragraph("Senior Engineer at Acme Corp")
    doc.add_paragraph("Jan 2021 to Present")
    doc.add_paragraph("• Reduced latency by 40%")
    doc.add_paragraph("Skills: Python, FastAPI")

    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_parse_docx_extracts_profile():
    files = {"file": ("resume.docx", build_resume_docx(), DOCX_MIME)}
    r = client.post("/parse", files=files)
    assert r.status_code == 200, r.text
    data = r.json()

    info = data["profile"]["personalInfo"]
    assert info["firstName"] == "Jane"
    assert info["lastName"] == "Doe"
    assert info["email"] == "jane.doe@example.com"
    assert info["phone"] == "(555) 123-4567"

    jobs = data["profile"]["employment"]
    assert len(jobs) == 1, f"Expected one job, got {jobs}"
    assert jobs[0]["company"] == "Acme Corp"
    assert jobs[0]["achievements"] == ["Reduced latency by 40%"]

    skill_names = [s["name"] for s in data["profile"]["skills"]]
    assert skill_names == ["Python", "FastAPI"]


def test_parse_plain_text_upload():
    text = "Jane Doe\njane.doe@example.com\nEXPERIENCE\nSenior Engineer at Acme Corp\n2019 - 2021\n"
    files = {"file": ("resume.txt", text.encode("utf-8"), "text/plain")}
    r = client.post("/parse", files=files)
    assert r.status_code == 200
    assert r.json()["profile"]["employment"][0]["position"] == "Senior Engineer"


def test_empty_upload_is_rejected():
    files = {"file": ("resume.docx", b"", DOCX_MIME)}
    r = client.post("/parse", files=files)
    assert r.status_code == 400


def test_unsupported_type_is_rejected():
    files = {"file": ("photo.png", b"\x89PNG\r\n\x1a\n", "image/png")}
    r = client.post("/parse", files=files)
    assert r.status_code == 415


def test_corrupt_docx_is_unprocessable():
    files = {"file": ("resume.docx", b"not a zip archive", DOCX_MIME)}
    r = client.post("/parse", files=files)
    assert r.status_code == 422


def test_corrupt_pdf_is_unprocessable():
    files = {"file": ("resume.pdf", b"not a pdf", "application/pdf")}
    r = client.post("/parse", files=files)
    assert r.status_code == 422
