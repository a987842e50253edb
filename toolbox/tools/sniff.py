"""Content-type sniffing from the leading bytes of a payload.

Signatures follow the WHATWG MIME sniffing table, so the returned strings are
the canonical forms (``image/png``, ``text/plain; charset=utf-8``, ...).
"""

from dataclasses import dataclass

SNIFF_LEN = 512
DEFAULT_CONTENT_TYPE = "application/octet-stream"

_WHITESPACE = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"
_BINARY_BYTES = frozenset([*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)])


@dataclass(frozen=True, slots=True)
class ExactSignature:
    prefix: bytes
    content_type: str

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        return self.content_type if data.startswith(self.prefix) else None


@dataclass(frozen=True, slots=True)
class MaskedSignature:
    pattern: bytes
    mask: bytes
    content_type: str
    skip_whitespace: bool = False

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if self.skip_whitespace:
            data = data[first_non_ws:]
        if len(data) < len(self.pattern):
            return None
        for pattern_byte, mask_byte, data_byte in zip(self.pattern, self.mask, data, strict=False):
            if data_byte & mask_byte != pattern_byte:
                return None
        return self.content_type


@dataclass(frozen=True, slots=True)
class HTMLSignature:
    tag: bytes

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        data = data[first_non_ws:]
        if len(data) < len(self.tag) + 1:
            return None
        if data[: len(self.tag)].upper() != self.tag:
            return None
        if data[len(self.tag)] not in _TAG_TERMINATORS:
            return None
        return "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class MP4Signature:
    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if len(data) < 12:
            return None
        box_size = int.from_bytes(data[:4], "big")
        if len(data) < box_size or box_size % 4 != 0 or data[4:8] != b"ftyp":
            return None
        for start in range(8, box_size, 4):
            if start == 12:
                continue
            if data[start : start + 3] == b"mp4":
                return "video/mp4"
        return None


@dataclass(frozen=True, slots=True)
class TextSignature:
    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if any(byte in _BINARY_BYTES for byte in data[first_non_ws:]):
            return None
        return "text/plain; charset=utf-8"


_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1", b"<DIV", b"<FONT",
    b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B", b"<BODY", b"<BR", b"<P", b"<!--",
)

SIGNATURES = (
    *(HTMLSignature(tag) for tag in _HTML_TAGS),
    MaskedSignature(b"<?xml", b"\xff\xff\xff\xff\xff", "text/xml; charset=utf-8", skip_whitespace=True),
    ExactSignature(b"%PDF-", "application/pdf"),
    ExactSignature(b"%!PS-Adobe-", "application/postscript"),
    MaskedSignature(b"\xfe\xff\x00\x00", b"\xff\xff\x00\x00", "text/plain; charset=utf-16be"),
    MaskedSignature(b"\xff\xfe\x00\x00", b"\xff\xff\x00\x00", "text/plain; charset=utf-16le"),
    MaskedSignature(b"\xef\xbb\xbf\x00", b"\xff\xff\xff\x00", "text/plain; charset=utf-8"),
    ExactSignature(b"\x00\x00\x01\x00", "image/x-icon"),
    ExactSignature(b"\x00\x00\x02\x00", "image/x-icon"),
    ExactSignature(b"BM", "image/bmp"),
    ExactSignature(b"GIF87a", "image/gif"),
    ExactSignature(b"GIF89a", "image/gif"),
    MaskedSignature(b"RIFF\x00\x00\x00\x00WEBPVP", b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff\xff\xff", "image/webp"),
    ExactSignature(b"\x89PNG\r\n\x1a\n", "image/png"),
    ExactSignature(b"\xff\xd8\xff", "image/jpeg"),
    MaskedSignature(b".snd", b"\xff\xff\xff\xff", "audio/basic"),
    MaskedSignature(b"FORM\x00\x00\x00\x00AIFF", b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", "audio/aiff"),
    MaskedSignature(b"ID3", b"\xff\xff\xff", "audio/mpeg"),
    MaskedSignature(b"OggS\x00", b"\xff\xff\xff\xff\xff", "application/ogg"),
    MaskedSignature(b"MThd\x00\x00\x00\x06", b"\xff\xff\xff\xff\xff\xff\xff\xff", "audio/midi"),
    MaskedSignature(b"RIFF\x00\x00\x00\x00AVI ", b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", "video/avi"),
    MaskedSignature(b"RIFF\x00\x00\x00\x00WAVE", b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff", "audio/wave"),
    MP4Signature(),
    ExactSignature(b"\x1a\x45\xdf\xa3", "video/webm"),
    MaskedSignature(b"\x00" * 34 + b"LP", b"\x00" * 34 + b"\xff\xff", "application/vnd.ms-fontobject"),
    ExactSignature(b"\x00\x01\x00\x00", "font/ttf"),
    ExactSignature(b"OTTO", "font/otf"),
    ExactSignature(b"ttcf", "font/collection"),
    ExactSignature(b"wOFF", "font/woff"),
    ExactSignature(b"wOF2", "font/woff2"),
    ExactSignature(b"\x1f\x8b\x08", "application/x-gzip"),
    ExactSignature(b"PK\x03\x04", "application/zip"),
    ExactSignature(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    ExactSignature(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    ExactSignature(b"\x00asm", "application/wasm"),
    TextSignature(),
)


def detect_content_type(data: bytes) -> str:
    """Return the MIME type of ``data`` judged from at most its first 512 bytes.

    Falls back to ``application/octet-stream`` when no signature matches.
    """
    data = data[:SNIFF_LEN]
    first_non_ws = len(data) - len(data.lstrip(_WHITESPACE))

    for signature in SIGNATURES:
        if content_type := signature.match(data, first_non_ws):
            return content_type
    return DEFAULT_CONTENT_TYPE
