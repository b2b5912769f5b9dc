from __future__ import annotations
import base64
import mimetypes
from typing import Any, Optional
from pathlib import Path

from .schemas import FileData, InputPayload

# mimetypes does not know markdown on every platform
KNOWN_TYPES = {
    ".pdf": "application/pdf",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",
}
UPLOAD_EXTENSIONS = ["pdf", "txt", "md", "csv"]
DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(name: str) -> str:
    suffix = Path(name or "").suffix.lower()
    if suffix in KNOWN_TYPES:
        return KNOWN_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(name or "")
    return guessed or DEFAULT_MIME_TYPE


def encode_file(name: str, data: bytes, mime_type: str | None = None) -> FileData:
    """Encode the full file content for inline transport. Content is not inspected."""
    return FileData(
        name=name,
        mime_type=mime_type or guess_mime_type(name),
        base64=base64.b64encode(data).decode("ascii"),
    )


def decode_file(file: FileData) -> bytes:
    return base64.b64decode(file.base64)


def file_from_upload(uploaded: Any) -> Optional[FileData]:
    """Adapt a Streamlit UploadedFile (name, type, getvalue())."""
    if uploaded is None:
        return None
    return encode_file(uploaded.name, uploaded.getvalue(), getattr(uploaded, "type", None))


def build_payload(file: Optional[FileData], text: str | None) -> Optional[InputPayload]:
    # Text is passed through verbatim; only emptiness is checked
    if file is None and not text:
        return None
    return InputPayload(text=text or None, file=file)
