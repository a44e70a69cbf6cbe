from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from ..encoder import EncodedImage
from ..styles import DesignStyle


@dataclass(frozen=True)
class GenerationRequest:
    image: EncodedImage
    style_fragment: str
    user_details: str


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one render: an image data URI or an error message, never both."""

    image: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.image is None) == (self.error is None):
            raise ValueError("GenerationResult needs exactly one of image or error")

    @classmethod
    def success(cls, image: str) -> "GenerationResult":
        return cls(image=image)

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.image is not None


class RenderEngineProtocol(Protocol):
    async def generate(self, image: EncodedImage, user_details: str, style: DesignStyle) -> str:
        """Render the sketch and return a ``data:image/png;base64,...`` URI."""
