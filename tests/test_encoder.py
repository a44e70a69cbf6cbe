from __future__ import annotations

import base64
from pathlib import Path

import pytest

from sketch_render.encoder import (
    MAX_SKETCH_BYTES,
    EncodedImage,
    encode,
    encode_sketch,
    load_sketch,
    strip_data_uri,
)
from sketch_render.errors import TooLarge, UnsupportedFormat


class _ExplodingBytes(bytes):
    def __bytes__(self) -> bytes:  # pragma: no cover - must never be reached
        raise AssertionError("encoding work started for an oversized sketch")


def test_encode_returns_plain_base64() -> None:
    result = encode(b"\x89PNG sketch", "image/png", 11)

    assert result == EncodedImage(
        base64_payload=base64.b64encode(b"\x89PNG sketch").decode("ascii"),
        mime_type="image/png",
    )
    assert not result.base64_payload.startswith("data:")


def test_encode_is_deterministic() -> None:
    assert encode(b"same bytes", "image/webp", 10) == encode(b"same bytes", "image/webp", 10)


def test_encode_rejects_oversized_before_encoding() -> None:
    with pytest.raises(TooLarge) as excinfo:
        encode(_ExplodingBytes(b"x"), "image/png", MAX_SKETCH_BYTES + 1)

    assert excinfo.value.size_bytes == MAX_SKETCH_BYTES + 1
    assert "5MB" in str(excinfo.value)


def test_encode_accepts_exact_ceiling() -> None:
    result = encode(b"ok", "image/jpeg", MAX_SKETCH_BYTES)

    assert result.mime_type == "image/jpeg"


def test_encode_treats_jpg_as_jpeg() -> None:
    assert encode(b"ok", "image/JPG", 2).mime_type == "image/jpeg"


def test_encode_rejects_unsupported_declared_type() -> None:
    with pytest.raises(UnsupportedFormat) as excinfo:
        encode(b"GIF89a", "image/gif", 6)

    assert excinfo.value.mime_type == "image/gif"


@pytest.mark.parametrize(
    "payload",
    [
        "iVBORw0KGgo=",
        "data:image/png;base64,iVBORw0KGgo=",
        "data:image/jpg;base64,iVBORw0KGgo=",
        "data:image/webp;base64,iVBORw0KGgo=",
        "data:image/png;base64,data:image/png;base64,iVBORw0KGgo=",
        "data:image/jpeg;base64,data:image/webp;base64,iVBORw0KGgo=",
    ],
)
def test_strip_data_uri_is_idempotent(payload: str) -> None:
    once = strip_data_uri(payload)

    assert once == "iVBORw0KGgo="
    assert strip_data_uri(once) == once


def test_strip_data_uri_leaves_other_schemes_alone() -> None:
    assert strip_data_uri("data:text/plain;base64,aGk=") == "data:text/plain;base64,aGk="


def test_encode_then_strip_preserves_payload() -> None:
    raw = bytes(range(256))

    encoded = encode(raw, "image/png", len(raw))
    restored = strip_data_uri(encoded.data_uri)

    assert restored == encoded.base64_payload
    assert base64.b64decode(restored, validate=True) == raw


def test_load_sketch_declares_type_from_name(sketch_file: Path) -> None:
    sketch = load_sketch(sketch_file)

    assert sketch.mime_type == "image/png"
    assert sketch.size_bytes == sketch_file.stat().st_size
    assert encode_sketch(sketch).base64_payload == base64.b64encode(sketch_file.read_bytes()).decode("ascii")


def test_load_sketch_accepts_webp_and_jpg(tmp_path: Path) -> None:
    webp = tmp_path / "a.webp"
    jpg = tmp_path / "b.jpg"
    webp.write_bytes(b"RIFF")
    jpg.write_bytes(b"\xff\xd8")

    assert load_sketch(webp).mime_type == "image/webp"
    assert load_sketch(jpg).mime_type == "image/jpeg"


def test_load_sketch_rejects_large_file(tmp_path: Path) -> None:
    big = tmp_path / "big.png"
    with big.open("wb") as handle:
        handle.truncate(MAX_SKETCH_BYTES + 1)

    with pytest.raises(TooLarge):
        load_sketch(big)


def test_load_sketch_rejects_unknown_extension(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("not an image", encoding="utf-8")

    with pytest.raises(UnsupportedFormat):
        load_sketch(path)


def test_encode_output_is_exactly_base64_of_input() -> None:
    raw = b"data:image/png;base64,not really a prefix"

    encoded = encode(raw, "image/png", len(raw))

    assert base64.b64decode(encoded.base64_payload) == raw
