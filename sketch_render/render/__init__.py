"""Gemini-backed sketch rendering."""

from .adapter import FALLBACK_MESSAGE, GeminiRenderClient, extract_image_data_uri
from .interfaces import GenerationRequest, GenerationResult, RenderEngineProtocol

__all__ = [
    "FALLBACK_MESSAGE",
    "GeminiRenderClient",
    "GenerationRequest",
    "GenerationResult",
    "RenderEngineProtocol",
    "extract_image_data_uri",
]
