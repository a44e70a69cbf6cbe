"""Sketch-to-render helpers built around a Gemini image model."""

from .config import RenderConfig, load_config
from .encoder import EncodedImage, SketchInput, encode, encode_sketch, load_sketch, strip_data_uri
from .errors import (
    EncodingError,
    GenerationError,
    NoImageReturned,
    SketchRenderError,
    TooLarge,
    UnsupportedFormat,
)
from .render import GeminiRenderClient, GenerationResult
from .styles import DEFAULT_STYLE, DesignStyle

__all__ = [
    "DEFAULT_STYLE",
    "DesignStyle",
    "EncodedImage",
    "EncodingError",
    "GeminiRenderClient",
    "GenerationError",
    "GenerationResult",
    "NoImageReturned",
    "RenderConfig",
    "SketchInput",
    "SketchRenderError",
    "TooLarge",
    "UnsupportedFormat",
    "encode",
    "encode_sketch",
    "load_config",
    "load_sketch",
    "strip_data_uri",
]
