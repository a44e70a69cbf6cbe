"""Session state behind the command line: sketch, style, details and the last result."""

from __future__ import annotations

import base64
import io
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from PIL import Image

from .encoder import EncodedImage, encode_sketch, load_sketch
from .errors import SketchRenderError
from .render.adapter import FALLBACK_MESSAGE, RESULT_PREFIX
from .render.interfaces import GenerationResult, RenderEngineProtocol
from .styles import DEFAULT_STYLE, DesignStyle

__all__ = ["GenerationState", "SketchSession", "describe_image"]


@dataclass
class GenerationState:
    is_loading: bool = False
    error: Optional[str] = None
    result_image: Optional[str] = None


def describe_image(blob: bytes) -> str:
    try:
        with Image.open(io.BytesIO(blob)) as img:
            return f"{img.format or 'image'} {img.width}x{img.height}"
    except OSError:
        return f"{len(blob)} bytes"


@dataclass
class SketchSession:
    engine: RenderEngineProtocol
    output_dir: Path = Path("renders")
    style: DesignStyle = DEFAULT_STYLE
    details: str = ""
    sketch: Optional[EncodedImage] = None
    sketch_path: Optional[Path] = None
    state: GenerationState = field(default_factory=GenerationState)

    def select_file(self, path: Path | str) -> bool:
        """Load and encode a sketch; on failure keep the previous one and record the error."""

        try:
            encoded = encode_sketch(load_sketch(path))
        except SketchRenderError as exc:
            self.state.error = str(exc)
            return False
        except OSError as exc:
            self.state.error = f"Could not read {path}: {exc.strerror or exc}"
            return False
        self.sketch = encoded
        self.sketch_path = Path(path)
        self.state = GenerationState()
        return True

    def select_style(self, style: DesignStyle) -> None:
        self.style = style

    def set_details(self, text: str) -> None:
        self.details = text

    async def generate(self) -> GenerationResult:
        if self.sketch is None:
            self.state.error = "Please upload a sketch first."
            return GenerationResult.failure(self.state.error)

        self.state = GenerationState(is_loading=True)
        try:
            image = await self.engine.generate(self.sketch, self.details, self.style)
        except Exception as exc:
            self.state = GenerationState(error=str(exc) or FALLBACK_MESSAGE)
            return GenerationResult.failure(self.state.error)
        self.state = GenerationState(result_image=image)
        return GenerationResult.success(image)

    def download(self, target: Path | str | None = None) -> Path:
        """Write the current render as PNG and return its path."""

        if not self.state.result_image:
            raise RuntimeError("no render to download")
        payload = self.state.result_image
        if payload.startswith(RESULT_PREFIX):
            payload = payload[len(RESULT_PREFIX):]
        if target is None:
            path = self.output_dir / f"render-{int(time.time() * 1000)}.png"
        else:
            path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(base64.b64decode(payload))
        return path
