"""Data-URL attachment encoding."""

import base64
from datetime import datetime, timezone

import pytest

from dentalcare.services.attachments import encode_attachment, remove_attachment

UPLOADED = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


def test_encode_attachment_builds_data_url() -> None:
    attachment = encode_attachment("xray.png", b"\x89PNG", "image/png", now=UPLOADED)

    assert attachment.url == "data:image/png;base64,iVBORw=="
    assert attachment.size == 4
    assert attachment.type == "image/png"
    assert attachment.uploaded_at == UPLOADED
    assert base64.b64decode(attachment.url.partition(",")[2]) == b"\x89PNG"


def test_encode_attachment_guesses_missing_mime_type() -> None:
    assert encode_attachment("report.pdf", b"%PDF").type == "application/pdf"
    assert encode_attachment("blob", b"").type == "application/octet-stream"


def test_remove_attachment_returns_new_list() -> None:
    files = [encode_attachment(f"f{n}.txt", b"x", "text/plain", now=UPLOADED) for n in range(3)]

    remaining = remove_attachment(files, 1)

    assert [f.name for f in remaining] == ["f0.txt", "f2.txt"]
    assert len(files) == 3
    with pytest.raises(IndexError):
        remove_attachment(files, 3)
    with pytest.raises(IndexError):
        remove_attachment(files, -1)
