from pathlib import Path

import pytest

from backend.jobboard import config


def _register(client, *, email: str) -> tuple[dict, int]:
    r = client.post(
        "/api/auth/register",
        json={"name": "Resume Owner", "email": email, "password": "password123"},
    )
    assert r.status_code == 201, r.text
    data = r.json()
    return {"Authorization": f"Bearer {data['token']}"}, data["user"]["id"]


def _upload(client, headers, user_id: int, *, name: str = "resume.pdf", content: bytes = b"%PDF-1.4\n%Fake\n", **data):
    return client.post(
        f"/api/v1/resumes/upload/{user_id}",
        headers=headers,
        files={"file": (name, content, "application/pdf")},
        data=data,
    )


def test_upload_pdf_and_list(client, storage_dir: Path):
    headers, user_id = _register(client, email="cand_upload@example.com")

    pdf_bytes = b"%PDF-1.4\n%Fake\n"
    r = _upload(client, headers, user_id, content=pdf_bytes, description="Main CV")
    assert r.status_code == 201, r.text
    resume = r.json()
    assert resume["originalFileName"] == "resume.pdf"
    assert resume["fileName"].endswith(".pdf")
    assert resume["fileName"] != "resume.pdf"
    assert resume["fileType"] == "application/pdf"
    assert resume["fileSize"] == len(pdf_bytes)
    assert resume["isPrimary"] is False
    assert resume["description"] == "Main CV"
    assert resume["userId"] == user_id
    assert "filePath" not in resume
    assert (storage_dir / resume["fileName"]).read_bytes() == pdf_bytes

    r2 = client.get(f"/api/v1/resumes/user/{user_id}", headers=headers)
    assert r2.status_code == 200, r2.text
    assert [row["id"] for row in r2.json()] == [resume["id"]]


def test_upload_docx_gets_docx_content_type(client):
    headers, user_id = _register(client, email="docx@example.com")
    r = _upload(client, headers, user_id, name="cv.DOCX", content=b"PK\x03\x04fake")
    assert r.status_code == 201, r.text
    assert r.json()["fileType"] == "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def test_upload_requires_token(client):
    _, user_id = _register(client, email="noauth@example.com")
    r = _upload(client, {}, user_id)
    assert r.status_code == 401


def test_upload_rejects_invalid_extension(client, storage_dir: Path):
    headers, user_id = _register(client, email="cand_upload2@example.com")
    r = _upload(client, headers, user_id, name="resume.txt", content=b"hello")
    assert r.status_code == 400, r.text
    assert r.json()["message"].startswith("File type not allowed")
    assert not storage_dir.exists() or not any(storage_dir.iterdir())


def test_upload_rejects_empty_file(client, storage_dir: Path):
    headers, user_id = _register(client, email="empty@example.com")
    r = _upload(client, headers, user_id, content=b"")
    assert r.status_code == 400, r.text
    assert r.json()["message"] == "File is empty"
    assert not any(storage_dir.iterdir())


def test_upload_rejects_too_large(client, storage_dir: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(config, "RESUME_MAX_FILE_SIZE", 16)
    headers, user_id = _register(client, email="big@example.com")
    r = _upload(client, headers, user_id, content=b"x" * 17)
    assert r.status_code == 413, r.text
    assert r.json()["message"] == "File size exceeds maximum allowed size"
    assert not any(storage_dir.iterdir())


def test_upload_for_unknown_user_is_404(client):
    headers, _ = _register(client, email="someone@example.com")
    r = _upload(client, headers, 9999)
    assert r.status_code == 404
    assert r.json()["message"] == "User not found with id: 9999"


def test_upload_sanitizes_original_filename(client):
    headers, user_id = _register(client, email="traversal@example.com")
    r = _upload(client, headers, user_id, name="..\\..\\evil.pdf")
    assert r.status_code == 201, r.text
    original = r.json()["originalFileName"]
    assert "/" not in original and "\\" not in original and ".." not in original


def test_primary_resume_is_exclusive(client):
    headers, user_id = _register(client, email="primary@example.com")
    first = _upload(client, headers, user_id).json()
    second = _upload(client, headers, user_id).json()

    r = client.get(f"/api/v1/resumes/user/{user_id}/primary", headers=headers)
    assert r.status_code == 404

    r = client.put(f"/api/v1/resumes/user/{user_id}/primary/{first['id']}", headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["isPrimary"] is True

    r = client.put(f"/api/v1/resumes/user/{user_id}/primary/{second['id']}", headers=headers)
    assert r.status_code == 200, r.text

    rows = client.get(f"/api/v1/resumes/user/{user_id}", headers=headers).json()
    primaries = [row["id"] for row in rows if row["isPrimary"]]
    assert primaries == [second["id"]]

    r = client.get(f"/api/v1/resumes/user/{user_id}/primary", headers=headers)
    assert r.status_code == 200
    assert r.json()["id"] == second["id"]


def test_primary_resume_must_belong_to_user(client):
    headers, owner_id = _register(client, email="owner@example.com")
    _, other_id = _register(client, email="other@example.com")
    resume = _upload(client, headers, owner_id).json()

    r = client.put(f"/api/v1/resumes/user/{other_id}/primary/{resume['id']}", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Resume not found for user"


def test_download_returns_original_bytes_and_name(client):
    headers, user_id = _register(client, email="download@example.com")
    content = b"%PDF-1.4\n%Download me\n"
    resume = _upload(client, headers, user_id, name="my cv.pdf", content=content).json()

    r = client.get(f"/api/v1/resumes/user/{user_id}/download/{resume['id']}", headers=headers)
    assert r.status_code == 200, r.text
    assert r.content == content
    assert r.headers["content-type"].startswith("application/pdf")
    assert "my cv.pdf" in r.headers["content-disposition"] or "my%20cv.pdf" in r.headers["content-disposition"]


def test_download_with_missing_file_does_not_leak_paths(client, storage_dir: Path):
    headers, user_id = _register(client, email="missing@example.com")
    resume = _upload(client, headers, user_id).json()
    (storage_dir / resume["fileName"]).unlink()

    r = client.get(f"/api/v1/resumes/user/{user_id}/download/{resume['id']}", headers=headers)
    assert r.status_code == 500
    body = r.json()
    assert body["message"] == "File not found on disk"
    assert str(storage_dir) not in r.text


def test_delete_resume_removes_file_and_row(client, storage_dir: Path):
    headers, user_id = _register(client, email="delete@example.com")
    resume = _upload(client, headers, user_id).json()
    stored = storage_dir / resume["fileName"]
    assert stored.exists()

    r = client.delete(f"/api/v1/resumes/user/{user_id}/{resume['id']}", headers=headers)
    assert r.status_code == 204
    assert not stored.exists()
    assert client.get(f"/api/v1/resumes/user/{user_id}", headers=headers).json() == []

    r = client.delete(f"/api/v1/resumes/user/{user_id}/{resume['id']}", headers=headers)
    assert r.status_code == 404


def test_delete_resume_succeeds_when_file_cannot_be_removed(client, storage_dir: Path, monkeypatch: pytest.MonkeyPatch):
    from backend.jobboard.services import file_storage
    from backend.jobboard.utils.error_handlers import FileStorageError

    headers, user_id = _register(client, email="orphan@example.com")
    resume = _upload(client, headers, user_id).json()

    def fail(path):
        raise FileStorageError()

    monkeypatch.setattr(file_storage, "delete_file", fail)
    r = client.delete(f"/api/v1/resumes/user/{user_id}/{resume['id']}", headers=headers)
    assert r.status_code == 204
    assert client.get(f"/api/v1/resumes/user/{user_id}", headers=headers).json() == []
    assert (storage_dir / resume["fileName"]).exists()
