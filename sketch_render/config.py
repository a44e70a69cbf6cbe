from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

__all__ = ["RenderConfig", "load_config", "DEFAULT_MODEL", "API_KEY_ENV_VARS"]

DEFAULT_MODEL = "gemini-2.5-flash-image"
DEFAULT_UPLOAD_MIME_TYPE = "image/jpeg"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")
ENDPOINT_ENV_VAR = "GEMINI_ENDPOINT"


def _env_api_key() -> Optional[str]:
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return None


def _optional_str(value: Any) -> Optional[str]:
    if value in (None, ""):
        return None
    return str(value)


def _optional_path(value: Any) -> Optional[Path]:
    if value in (None, ""):
        return None
    return Path(str(value))


@dataclass(frozen=True)
class RenderConfig:
    """Process-wide settings, resolved once at startup.

    The API key may be ``None``; it is not validated here and only fails when
    a render is attempted.
    """

    model: str = DEFAULT_MODEL
    upload_mime_type: str = DEFAULT_UPLOAD_MIME_TYPE
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout_ms: Optional[int] = None
    output_dir: Path = Path("renders")
    log_level: str = "INFO"
    logfile: Optional[Path] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "RenderConfig":
        data: Mapping[str, Any] = raw or {}
        nested = data.get("render")
        if isinstance(nested, Mapping):
            data = nested
        timeout = data.get("timeout_ms")
        return cls(
            model=str(data.get("model", DEFAULT_MODEL)),
            upload_mime_type=str(data.get("upload_mime_type", DEFAULT_UPLOAD_MIME_TYPE)),
            api_key=_optional_str(data.get("api_key")) or _env_api_key(),
            base_url=_optional_str(data.get("base_url")) or _optional_str(os.getenv(ENDPOINT_ENV_VAR)),
            timeout_ms=int(timeout) if timeout not in (None, "") else None,
            output_dir=Path(str(data.get("output_dir", "renders"))),
            log_level=str(data.get("log_level", "INFO")).upper(),
            logfile=_optional_path(data.get("logfile")),
        )


def load_config(path: Path | str | None = None) -> RenderConfig:
    load_dotenv()
    if path is None:
        return RenderConfig.from_dict({})
    text = Path(path).read_text(encoding="utf-8")
    payload = yaml.safe_load(text) or {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"config file {path} must contain a mapping")
    return RenderConfig.from_dict(payload)
