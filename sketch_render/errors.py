from __future__ import annotations

__all__ = [
    "SketchRenderError",
    "EncodingError",
    "TooLarge",
    "UnsupportedFormat",
    "GenerationError",
    "NoImageReturned",
]


class SketchRenderError(RuntimeError):
    """Base class for every failure surfaced to the shell."""


class EncodingError(SketchRenderError):
    """Raised when a sketch cannot be turned into an upload payload."""


class TooLarge(EncodingError):
    """Raised when the sketch exceeds the upload ceiling."""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        super().__init__("File size too large. Please use an image under 5MB.")
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class UnsupportedFormat(EncodingError):
    """Raised when the declared media type is not an accepted sketch format."""

    def __init__(self, mime_type: str, accepted: tuple[str, ...]) -> None:
        super().__init__(
            f"Unsupported image type '{mime_type}'. Use one of: {', '.join(accepted)}"
        )
        self.mime_type = mime_type


class GenerationError(SketchRenderError):
    """Raised when the remote model call fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoImageReturned(GenerationError):
    """Raised when the response carries no inline image data."""

    def __init__(self, message: str = "No image data found in the response.") -> None:
        super().__init__(message)
