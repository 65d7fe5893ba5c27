"""Best-effort content type detection for fetched bodies."""

from __future__ import annotations

from typing import Final

SNIFF_LENGTH: Final[int] = 512
TEXT_PLAIN: Final[str] = "text/plain; charset=utf-8"
OCTET_STREAM: Final[str] = "application/octet-stream"

_HTML_TAGS: Final[tuple[bytes, ...]] = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

_PREFIXES: Final[tuple[tuple[bytes, str], ...]] = (
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", TEXT_PLAIN),
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"Rar!\x1a\x07", "application/x-rar-compressed"),
    (b"\x00asm", "application/wasm"),
)

# Control bytes other than TAB, LF, FF, CR and ESC mark binary content.
_BINARY_BYTES: Final[frozenset[int]] = frozenset(
    {*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)}
)
_WHITESPACE: Final[bytes] = b"\t\n\x0c\r "


def sniff_content_type(body: bytes) -> str:
    """Guess the MIME type of ``body`` from its leading bytes.

    Only the first ``SNIFF_LENGTH`` bytes are inspected. Unknown binary data is
    reported as ``application/octet-stream``; anything else falls back to UTF-8
    plain text.
    """

    head = body[:SNIFF_LENGTH]
    stripped = head.lstrip(_WHITESPACE)

    upper = stripped.upper()
    for tag in _HTML_TAGS:
        if upper.startswith(tag) and _tag_terminated(upper, len(tag)):
            return "text/html; charset=utf-8"
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"

    for prefix, mime_type in _PREFIXES:
        if head.startswith(prefix):
            return mime_type

    if any(byte in _BINARY_BYTES for byte in head):
        return OCTET_STREAM
    return TEXT_PLAIN


def _tag_terminated(data: bytes, offset: int) -> bool:
    if len(data) <= offset:
        return False
    return data[offset] in (ord(" "), ord(">"))
