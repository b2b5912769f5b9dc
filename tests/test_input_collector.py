from __future__ import annotations

import base64
from dataclasses import dataclass

import pytest

from audit_crystal.utils import build_payload, decode_file, encode_file, file_from_upload, guess_mime_type


@dataclass
class FakeUploadedFile:
    name: str
    type: str
    data: bytes

    def getvalue(self) -> bytes:
        return self.data


@pytest.mark.parametrize(
    "name, data, mime_type",
    [
        ("report.pdf", b"%PDF-1.7\n\x00\xff\xfe binary", "application/pdf"),
        ("notes.txt", "Scope 1 emissions: 12 kt\n".encode("utf-8"), "text/plain"),
        ("README.md", b"# ESRS 2\n- GOV-1", "text/markdown"),
        ("empty.pdf", b"", "application/pdf"),
    ],
)
def test_encode_file_is_reversible_and_keeps_metadata(name, data, mime_type):
    fd = encode_file(name, data, mime_type)

    assert decode_file(fd) == data
    assert base64.b64decode(fd.base64) == data
    assert fd.name == name
    assert fd.mime_type == mime_type


def test_declared_mime_type_is_kept_verbatim_even_if_it_disagrees_with_extension():
    fd = encode_file("looks-like.pdf", b"plain text really", "text/plain")
    assert fd.mime_type == "text/plain"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("a.pdf", "application/pdf"),
        ("A.PDF", "application/pdf"),
        ("a.txt", "text/plain"),
        ("a.md", "text/markdown"),
        ("a.csv", "text/csv"),
        ("no_extension", "application/octet-stream"),
    ],
)
def test_guess_mime_type(name, expected):
    assert guess_mime_type(name) == expected


def test_encode_file_guesses_type_when_not_declared():
    assert encode_file("report.md", b"x").mime_type == "text/markdown"


def test_file_from_upload_adapts_streamlit_upload():
    uploaded = FakeUploadedFile(name="csrd.pdf", type="application/pdf", data=b"%PDF")
    fd = file_from_upload(uploaded)

    assert fd is not None
    assert fd.name == "csrd.pdf"
    assert fd.mime_type == "application/pdf"
    assert decode_file(fd) == b"%PDF"


def test_file_from_upload_none():
    assert file_from_upload(None) is None


@pytest.mark.parametrize("text", [None, ""])
def test_build_payload_returns_none_when_nothing_given(text):
    assert build_payload(None, text) is None


def test_build_payload_keeps_text_untransformed():
    raw = "  Our double materiality assessment...\n\n\tESRS 2  "
    payload = build_payload(None, raw)
    assert payload is not None
    assert payload.text == raw
    assert payload.file is None


def test_build_payload_with_file_and_text():
    fd = encode_file("r.pdf", b"%PDF")
    payload = build_payload(fd, "extra context")
    assert payload.file == fd
    assert payload.text == "extra context"
    assert not payload.is_empty()


def test_build_payload_with_file_only_drops_empty_text():
    fd = encode_file("r.pdf", b"%PDF")
    payload = build_payload(fd, "")
    assert payload.text is None
    assert payload.file == fd
