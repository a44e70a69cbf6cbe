from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TextIO, Union

from rich.console import Console
from rich.theme import Theme

_LOG_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
_LEVEL_STYLES = {
    "DEBUG": "dim",
    "INFO": "white",
    "WARN": "yellow",
    "ERROR": "red",
}

Message = Union[str, Callable[[Any], str]]


def _normalize_level(level: str) -> str:
    level = level.upper().strip()
    return "WARN" if level == "WARNING" else level


def _should_emit(configured: str, requested: str) -> bool:
    return _LOG_LEVELS.get(requested, 100) >= _LOG_LEVELS.get(configured, 20)


def _render(message: Message, result: Any) -> str:
    if not callable(message):
        return message
    try:
        return message(result)
    except Exception:
        return "<failed to render message>"


@dataclass(slots=True)
class RunLogger:
    """Step-tagged console log for a render session.

    Lines look like ``[12:00:01.250] [INFO ] [RENDER ] message (ms=812)`` and
    are mirrored to ``logfile`` without colour when one is given.
    """

    console: Optional[Console]
    level: str = "INFO"
    logfile: Optional[Path] = None
    _plain_file: Optional[TextIO] = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        self.level = _normalize_level(self.level)
        if self.logfile:
            self.logfile.parent.mkdir(parents=True, exist_ok=True)
            self._plain_file = self.logfile.open("a", encoding="utf-8")

    def close(self) -> None:
        if self._plain_file:
            self._plain_file.close()
            self._plain_file = None

    def log(
        self,
        step: str,
        message: str,
        level: str = "INFO",
        elapsed_ms: Optional[float] = None,
    ) -> None:
        level = _normalize_level(level)
        if not _should_emit(self.level, level):
            return
        now = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        suffix = f" (ms={elapsed_ms:.0f})" if elapsed_ms is not None else ""
        line = f"[{now}] [{level.ljust(5)}] [{step.upper().ljust(7)}] {message}{suffix}"
        if self.console is not None:
            self.console.print(
                line,
                style=_LEVEL_STYLES.get(level, "white"),
                highlight=False,
                soft_wrap=True,
                markup=False,
            )
        if self._plain_file:
            self._plain_file.write(line + "\n")
            self._plain_file.flush()

    async def atimed(
        self,
        step: str,
        message: Message,
        awaitable: Awaitable[Any],
        *,
        level: str = "INFO",
    ) -> Any:
        start = time.perf_counter()
        try:
            result = await awaitable
        except Exception as exc:
            self.log(step, f"error: {exc}", level="ERROR", elapsed_ms=_since(start))
            raise
        self.log(step, _render(message, result), level=level, elapsed_ms=_since(start))
        return result


def _since(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def create_logger(level: str, logfile: Optional[Path], *, console: Optional[Console] = None) -> RunLogger:
    if console is None:
        console = Console(theme=Theme({"repr.number": "cyan"}), stderr=True)
    return RunLogger(console=console, level=level, logfile=logfile)


__all__ = ["RunLogger", "create_logger"]
