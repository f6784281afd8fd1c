# core/fonts.py
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class FontChoice:
    key: str
    name: str


_FONTS: Dict[str, FontChoice] = {
    "times": FontChoice("times", "Times New Roman"),
    "arial": FontChoice("arial", "Arial"),
    "calibri": FontChoice("calibri", "Calibri"),
    "helvetica": FontChoice("helvetica", "Helvetica"),
}

DEFAULT_FONT = "times"
IMAGE_TARGET_LABEL = "Custom Image"


def list_fonts() -> List[FontChoice]:
    # stable order for menus
    order = ["times", "arial", "calibri", "helvetica"]
    return [_FONTS[k] for k in order]


def is_known_font(key: str) -> bool:
    return (key or "").strip().lower() in _FONTS


def get_font(key: str) -> FontChoice:
    k = (key or "").strip().lower()
    if k not in _FONTS:
        raise ValueError(
            f"Unknown font '{key}'. Choose one of: {', '.join(sorted(_FONTS))}"
        )
    return _FONTS[k]


def comparison_target(comparison_type: str, font_key: str = DEFAULT_FONT) -> str:
    """Label stored with an analysis: the font's display name or 'Custom Image'."""
    if comparison_type == "image":
        return IMAGE_TARGET_LABEL
    return get_font(font_key).name
