from __future__ import annotations

import re
from enum import Enum

__all__ = ["DesignStyle", "DEFAULT_STYLE"]


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


class DesignStyle(Enum):
    """Render styles offered to the user, in display order.

    Each member carries the label shown in the shell and the fragment pasted
    verbatim into the prompt.
    """

    REALISTIC = ("Photorealistic", "Photorealistic, Studio Lighting, 4K, High Detail")
    MINIMALIST = (
        "Minimalist (Braun)",
        "Dieter Rams Style, Matte White, Clean Lines, Soft Shadows",
    )
    CYBERPUNK = (
        "Cyberpunk",
        "Neon Lights, Dark Background, Glossy Tech Materials, Futuristic",
    )
    SKETCHY = (
        "Marker Sketch",
        "Marker Render Style, Alcohol Markers, Design Sketch, Dynamic Lines",
    )
    WOODEN = (
        "Wood & Natural",
        "Bent Plywood, Scandinavian Design, Warm Lighting, Natural Textures",
    )
    TRANSPARENT = (
        "Tech Transparent",
        "Translucent Polycarbonate, Internal Components Visible, Tech Aesthetic",
    )

    def __init__(self, label: str, fragment: str) -> None:
        self.label = label
        self.fragment = fragment

    @property
    def slug(self) -> str:
        return _slug(self.label)

    @classmethod
    def from_name(cls, value: str) -> "DesignStyle":
        """Resolve a style by member name, label, or a slug of either."""

        wanted = _slug(value or "")
        for style in cls:
            if wanted in {_slug(style.name), style.slug} or value == style.label:
                return style
        choices = ", ".join(style.slug for style in cls)
        raise ValueError(f"unknown style '{value}'; choose one of: {choices}")


DEFAULT_STYLE = DesignStyle.REALISTIC
