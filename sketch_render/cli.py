"""Command line front end: render one sketch and save the result."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from .config import load_config
from .logging_utils import RunLogger, create_logger
from .render import GeminiRenderClient, RenderEngineProtocol
from .shell import SketchSession, describe_image
from .styles import DEFAULT_STYLE, DesignStyle


def _style_arg(value: str) -> DesignStyle:
    try:
        return DesignStyle.from_name(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sketch-render",
        description="Turn a rough product sketch into a photorealistic render",
    )
    parser.add_argument("sketch", nargs="?", type=Path, help="PNG, JPEG or WebP sketch, up to 5MB")
    parser.add_argument(
        "--style",
        "-s",
        type=_style_arg,
        default=DEFAULT_STYLE,
        help=f"render style (default: {DEFAULT_STYLE.slug})",
    )
    parser.add_argument("--details", "-d", default="", help="materials, colours and other details")
    parser.add_argument("--output", "-o", type=Path, help="where to save the PNG (default: renders/render-<ms>.png)")
    parser.add_argument("--config", "-c", type=Path, help="YAML config file")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARN or ERROR")
    parser.add_argument("--logfile", type=Path, help="mirror the log to this file")
    parser.add_argument("--list-styles", action="store_true", help="print the available styles and exit")
    return parser


def list_styles(log: RunLogger) -> None:
    for style in DesignStyle:
        marker = "*" if style is DEFAULT_STYLE else " "
        log.log("styles", f"{marker} {style.slug:<18} {style.label}: {style.fragment}")


async def run(session: SketchSession, log: RunLogger, output: Optional[Path]) -> int:
    log.log("render", f"style={session.style.label} details={session.details!r}")
    result = await log.atimed(
        "render",
        lambda outcome: "render received" if outcome.ok else "render failed",
        session.generate(),
    )
    if not result.ok:
        log.log("render", f"Error: {result.error}", level="ERROR")
        return 1
    try:
        path = session.download(output)
    except OSError as exc:
        log.log("save", f"Error: could not write render: {exc}", level="ERROR")
        return 1
    log.log("save", f"{describe_image(path.read_bytes())} -> {path}")
    return 0


def main(argv: Sequence[str] | None = None, engine: Optional[RenderEngineProtocol] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        log = create_logger((args.log_level or "INFO").upper(), args.logfile)
        log.log("config", f"Error: could not load config: {exc}", level="ERROR")
        log.close()
        return 1
    level = (args.log_level or config.log_level).upper()
    logging.basicConfig(
        level=logging.DEBUG if level == "DEBUG" else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    log = create_logger(level, args.logfile or config.logfile)
    try:
        if args.list_styles:
            list_styles(log)
            return 0
        if args.sketch is None:
            parser.error("a sketch file is required")

        session = SketchSession(
            engine=engine or GeminiRenderClient(config=config),
            output_dir=config.output_dir,
        )
        if not session.select_file(args.sketch):
            log.log("sketch", f"Error: {session.state.error}", level="ERROR")
            return 1
        log.log("sketch", f"{describe_image(args.sketch.read_bytes())} from {args.sketch}")
        session.select_style(args.style)
        session.set_details(args.details)
        return asyncio.run(run(session, log, args.output))
    finally:
        log.close()


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
