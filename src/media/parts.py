# src/media/parts.py — v1
"""Image byte sources: data URIs, bare base64 and files on disk."""

from __future__ import annotations

import base64
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path

_JPEG_MAGIC = b"\xff\xd8"
_DEFAULT_MIME = "image/png"
_MIME_RE = re.compile(r":(.*?);")


@dataclass(frozen=True)
class InlineImage:
    """Raw image bytes with their MIME type."""

    data: bytes
    mime_type: str

    @property
    def data_uri(self) -> str:
        return to_data_uri(self.data, self.mime_type)


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_image_source(source: str) -> InlineImage:
    """Decode ``data:<mime>;base64,<payload>`` or a bare base64 string.

    Bare payloads are sniffed: JPEG magic bytes give image/jpeg, anything
    else is assumed to be PNG.

    Raises:
        ValueError: The payload is not valid base64.
    """
    header, sep, payload = source.partition(",")
    if not sep:
        data = base64.b64decode(header, validate=True)
        mime_type = "image/jpeg" if data.startswith(_JPEG_MAGIC) else _DEFAULT_MIME
        return InlineImage(data=data, mime_type=mime_type)

    match = _MIME_RE.search(header)
    mime_type = match.group(1) if match else _DEFAULT_MIME
    return InlineImage(data=base64.b64decode(payload, validate=True), mime_type=mime_type)


def load_image_file(path: str | Path) -> InlineImage:
    """Read an image file; MIME type comes from the file extension.

    Raises:
        ValueError: The file is empty.
    """
    path = Path(path)
    data = path.read_bytes()
    if not data:
        raise ValueError(f"Failed to read file data: {path}")
    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type is None:
        mime_type = "image/jpeg" if data.startswith(_JPEG_MAGIC) else _DEFAULT_MIME
    return InlineImage(data=data, mime_type=mime_type)
