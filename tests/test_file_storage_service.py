# tests/test_file_storage_service.py
import os

import pytest

from app.config import settings
from app.core.result import ErrorKind

@pytest.mark.parametrize("filename,content_type", [
    ("a.jpg", "image/jpeg"),
    ("a.JPEG", "image/jpeg"),
    ("a.png", "image/png"),
    ("a.gif", "image/gif"),
    ("a.webp", "image/webp"),
])
def test_valid_formats_pass(file_store, make_upload, filename, content_type):
    assert file_store.validate(make_upload(filename, content_type=content_type)) is None

@pytest.mark.parametrize("filename,content_type,content", [
    ("doc.pdf", "application/pdf", b"pdf"),
    ("noext", "image/jpeg", b"data"),
    ("photo.jpg", "text/plain", b"data"),
    ("empty.jpg", "image/jpeg", b""),
])
def test_invalid_files_rejected(file_store, make_upload, filename, content_type, content):
    error = file_store.validate(make_upload(filename, content=content, content_type=content_type))
    assert error is not None
    assert error.kind == ErrorKind.VALIDATION

def test_missing_file_rejected(file_store):
    assert file_store.validate(None).kind == ErrorKind.VALIDATION

def test_too_large_rejected(file_store, make_upload, monkeypatch):
    monkeypatch.setattr(settings, "max_file_size", 10)
    error = file_store.validate(make_upload(content=b"x" * 11))
    assert error.kind == ErrorKind.VALIDATION
    assert "크기" in error.message

def test_exact_max_size_accepted(file_store, make_upload, monkeypatch):
    monkeypatch.setattr(settings, "max_file_size", 10)
    assert file_store.validate(make_upload(content=b"x" * 10)) is None

def test_save_creates_user_directory(file_store, make_upload):
    path = file_store.save(make_upload("Vacation.PNG", content=b"png bytes", content_type="image/png"), "u1", "p9")

    assert path.startswith("gallery/user-u1/photo-p9-")
    assert path.endswith(".png")
    full_path = file_store.absolute_path(path)
    with open(full_path, "rb") as saved:
        assert saved.read() == b"png bytes"

def test_save_keeps_photos_apart(file_store, make_upload):
    first = file_store.save(make_upload(content=b"one"), "u1", "p1")
    second = file_store.save(make_upload(content=b"two"), "u1", "p2")
    assert first != second
    with open(file_store.absolute_path(first), "rb") as saved:
        assert saved.read() == b"one"

def test_delete_removes_file(file_store, make_upload):
    path = file_store.save(make_upload(), "u1", "p1")
    file_store.delete(path)
    assert not os.path.exists(file_store.absolute_path(path))

def test_delete_missing_file_is_ignored(file_store):
    file_store.delete("gallery/user-u1/photo-missing.jpg")
    file_store.delete("")

def test_paths_outside_upload_dir_are_refused(file_store):
    with pytest.raises(ValueError):
        file_store.absolute_path("../../etc/passwd")
