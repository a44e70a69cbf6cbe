"""Turn a local sketch file into the base64 payload sent to the model."""

from __future__ import annotations

import base64
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path

from .errors import TooLarge, UnsupportedFormat

__all__ = [
    "ACCEPTED_MIME_TYPES",
    "MAX_SKETCH_BYTES",
    "EncodedImage",
    "SketchInput",
    "encode",
    "encode_sketch",
    "load_sketch",
    "normalize_mime_type",
    "strip_data_uri",
]

MAX_SKETCH_BYTES = 5 * 1024 * 1024
ACCEPTED_MIME_TYPES: tuple[str, ...] = ("image/png", "image/jpeg", "image/webp")
_MIME_ALIASES = {"image/jpg": "image/jpeg"}
_DATA_URI_PREFIX = re.compile(r"^(?:data:image/(?:png|jpeg|jpg|webp);base64,)+")

# older interpreters ship without a webp mapping
mimetypes.add_type("image/webp", ".webp")


@dataclass(frozen=True)
class SketchInput:
    raw_bytes: bytes
    mime_type: str
    size_bytes: int


@dataclass(frozen=True)
class EncodedImage:
    base64_payload: str
    mime_type: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_payload}"


def strip_data_uri(payload: str) -> str:
    """Drop a leading ``data:image/...;base64,`` scheme, leaving raw base64."""

    return _DATA_URI_PREFIX.sub("", payload)


def normalize_mime_type(mime_type: str) -> str:
    lowered = (mime_type or "").strip().lower()
    return _MIME_ALIASES.get(lowered, lowered)


def encode(file_bytes: bytes, declared_mime_type: str, size_bytes: int) -> EncodedImage:
    """Encode sketch bytes for upload.

    The size ceiling is checked before anything else so oversized files are
    rejected without touching their content. Only the declared type is
    checked; the bytes themselves are not inspected.
    """

    if size_bytes > MAX_SKETCH_BYTES:
        raise TooLarge(size_bytes, MAX_SKETCH_BYTES)
    mime_type = normalize_mime_type(declared_mime_type)
    if mime_type not in ACCEPTED_MIME_TYPES:
        raise UnsupportedFormat(declared_mime_type, ACCEPTED_MIME_TYPES)
    payload = base64.b64encode(bytes(file_bytes)).decode("ascii")
    return EncodedImage(base64_payload=payload, mime_type=mime_type)


def encode_sketch(sketch: SketchInput) -> EncodedImage:
    return encode(sketch.raw_bytes, sketch.mime_type, sketch.size_bytes)


def load_sketch(path: Path | str) -> SketchInput:
    """Read a sketch from disk, declaring its type from the file name."""

    path = Path(path)
    size_bytes = path.stat().st_size
    if size_bytes > MAX_SKETCH_BYTES:
        raise TooLarge(size_bytes, MAX_SKETCH_BYTES)
    guessed, _ = mimetypes.guess_type(path.name)
    mime_type = normalize_mime_type(guessed or "")
    if mime_type not in ACCEPTED_MIME_TYPES:
        raise UnsupportedFormat(guessed or path.suffix or "unknown", ACCEPTED_MIME_TYPES)
    return SketchInput(raw_bytes=path.read_bytes(), mime_type=mime_type, size_bytes=size_bytes)
