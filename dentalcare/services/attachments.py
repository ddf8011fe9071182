"""Encoding uploaded files as data-URL attachments."""

from __future__ import annotations

import base64
import mimetypes
from datetime import datetime
from typing import List, Optional

from dentalcare.schemas.incident import FileAttachment
from dentalcare.utils.timeutil import utcnow

DEFAULT_MIME_TYPE = "application/octet-stream"


def encode_data_url(content: bytes, mime_type: str) -> str:
    """Return ``data:<mime>;base64,<payload>`` for ``content``."""

    payload = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def encode_attachment(
    name: str,
    content: bytes,
    mime_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> FileAttachment:
    """Build an attachment record from raw uploaded bytes."""

    resolved_type = mime_type or mimetypes.guess_type(name)[0] or DEFAULT_MIME_TYPE
    return FileAttachment(
        name=name,
        url=encode_data_url(content, resolved_type),
        type=resolved_type,
        size=len(content),
        uploaded_at=now or utcnow(),
    )


def remove_attachment(files: List[FileAttachment], index: int) -> List[FileAttachment]:
    """Return a copy of ``files`` without the entry at ``index``."""

    if not 0 <= index < len(files):
        raise IndexError(f"No attachment at position {index}")
    return files[:index] + files[index + 1:]
