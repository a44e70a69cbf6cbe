from __future__ import annotations

import io
from pathlib import Path
import sys
from types import SimpleNamespace
from typing import Any

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sketch_render.config import RenderConfig
from sketch_render.render import GeminiRenderClient


class FakeModels:
    """Stands in for ``client.aio.models``; records every call."""

    def __init__(self, response: Any = None, error: BaseException | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def generate_content(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeClient:
    def __init__(self, response: Any = None, error: BaseException | None = None) -> None:
        self.models = FakeModels(response=response, error=error)
        self.aio = SimpleNamespace(models=self.models)


def image_response(data: Any = "ABC123") -> dict[str, Any]:
    return {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"text": "Here is your render."},
                        {"inlineData": {"mimeType": "image/png", "data": data}},
                    ]
                }
            }
        ]
    }


def png_bytes(size: tuple[int, int] = (8, 6), color: str = "white") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def config(tmp_path: Path) -> RenderConfig:
    return RenderConfig(api_key="test-key", output_dir=tmp_path / "renders")


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient(response=image_response())


@pytest.fixture()
def render_client(config: RenderConfig, fake_client: FakeClient) -> GeminiRenderClient:
    return GeminiRenderClient(config=config, client=fake_client)


@pytest.fixture()
def sketch_file(tmp_path: Path) -> Path:
    path = tmp_path / "sketch.png"
    path.write_bytes(png_bytes())
    return path
