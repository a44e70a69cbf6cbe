from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from google import genai
from google.genai import types

from ..config import RenderConfig
from ..encoder import EncodedImage, strip_data_uri
from ..errors import GenerationError, NoImageReturned
from ..prompting import compose_prompt
from ..styles import DesignStyle
from .interfaces import GenerationRequest, RenderEngineProtocol

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Failed to generate render."
RESULT_PREFIX = "data:image/png;base64,"


def _field(obj: Any, *names: str) -> Any:
    """Read the first present attribute or key; SDK objects and REST dicts differ in casing."""

    if obj is None:
        return None
    for name in names:
        if isinstance(obj, Mapping):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
        if value is not None:
            return value
    return None


def _as_base64(data: Any) -> str:
    if isinstance(data, (bytes, bytearray)):
        return base64.b64encode(bytes(data)).decode("ascii")
    return str(data)


def extract_image_data_uri(response: Any) -> str:
    """Return the first inline image of the first candidate as a PNG data URI."""

    candidates = _field(response, "candidates") or []
    if not candidates:
        raise NoImageReturned()
    content = _field(candidates[0], "content")
    for part in _field(content, "parts") or []:
        inline = _field(part, "inline_data", "inlineData")
        data = _field(inline, "data")
        if data:
            return RESULT_PREFIX + _as_base64(data)
    raise NoImageReturned()


def _error_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message.strip():
        return message
    text = str(exc).strip()
    return text or FALLBACK_MESSAGE


@dataclass
class GeminiRenderClient(RenderEngineProtocol):
    """Sketch-to-render call against a Gemini image model.

    The SDK client is created on first use, so a missing credential shows up
    as a failed render rather than at startup.
    """

    config: RenderConfig = field(default_factory=RenderConfig)
    client: Optional[Any] = None

    def _sdk_client(self) -> Any:
        if self.client is None:
            kwargs: dict[str, Any] = {"api_key": self.config.api_key}
            http: dict[str, Any] = {}
            if self.config.base_url:
                http["base_url"] = self.config.base_url
            if self.config.timeout_ms is not None:
                http["timeout"] = self.config.timeout_ms
            if http:
                kwargs["http_options"] = types.HttpOptions(**http)
            self.client = genai.Client(**kwargs)
        return self.client

    def build_request(self, image: EncodedImage, user_details: str, style: DesignStyle) -> GenerationRequest:
        normalized = EncodedImage(
            base64_payload=strip_data_uri(image.base64_payload),
            mime_type=image.mime_type,
        )
        return GenerationRequest(
            image=normalized,
            style_fragment=style.fragment,
            user_details=user_details,
        )

    def build_contents(self, request: GenerationRequest) -> types.Content:
        # image part must precede the instructions
        image_bytes = base64.b64decode(request.image.base64_payload, validate=True)
        return types.Content(
            role="user",
            parts=[
                types.Part.from_bytes(data=image_bytes, mime_type=self.config.upload_mime_type),
                types.Part.from_text(text=compose_prompt(request.style_fragment, request.user_details)),
            ],
        )

    async def generate(self, image: EncodedImage, user_details: str, style: DesignStyle) -> str:
        try:
            request = self.build_request(image, user_details, style)
            contents = self.build_contents(request)
            response = await self._sdk_client().aio.models.generate_content(
                model=self.config.model,
                contents=contents,
            )
            return extract_image_data_uri(response)
        except GenerationError as exc:
            logger.debug("render failed: %s", exc.message)
            raise
        except Exception as exc:
            logger.debug("render failed: %s", exc, exc_info=True)
            raise GenerationError(_error_message(exc)) from exc


__all__ = ["GeminiRenderClient", "extract_image_data_uri", "FALLBACK_MESSAGE"]
