from __future__ import annotations

from typing import Sequence

from .styles import DesignStyle

__all__ = ["RENDER_RULES", "SYSTEM_INSTRUCTIONS", "compose_prompt"]

SYSTEM_INSTRUCTIONS = (
    "You are an expert Industrial Design visualizer.\n"
    "Your task is to take the provided rough sketch and transform it into a "
    "high-fidelity, photorealistic product rendering.\n"
    "\n"
    "Input Image: A product sketch.\n"
    "Goal: A professional portfolio-quality render."
)

RENDER_RULES: Sequence[str] = (
    "Respect the form factor and perspective of the original sketch.",
    "Apply realistic materials (plastic, metal, glass, fabric) as implied by the prompt or typical for this object.",
    "Use professional studio lighting (soft box, rim lighting) to define the curves.",
    "The background should be neutral or complementary to the product, keeping the focus on the design.",
)


def compose_prompt(style: DesignStyle | str, user_details: str) -> str:
    """Build the text part of the request.

    ``style`` may be a catalog member or a raw fragment; either way the
    fragment and the user details are inserted verbatim.
    """

    fragment = style.fragment if isinstance(style, DesignStyle) else str(style)
    rules = "\n".join(f"{idx}. {rule}" for idx, rule in enumerate(RENDER_RULES, start=1))
    return (
        f"{SYSTEM_INSTRUCTIONS}\n"
        "\n"
        "Follow these strict rules:\n"
        f"{rules}\n"
        "\n"
        f"Style details: {fragment}\n"
        f"Specific user requirements: {user_details}"
    )
