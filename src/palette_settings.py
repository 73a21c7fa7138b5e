"""
Palette generation defaults and JSON config loading.
"""

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from monet_palette import STYLES

DEFAULT_SEED = "#1b6ef3"
DEFAULT_STYLE = "TONAL_SPOT"


@dataclass(frozen=True)
class PaletteSettings:
    # None defers to the platform palette, then to fallback_seed
    seed: Optional[str] = None
    style: str = DEFAULT_STYLE
    fallback_seed: str = DEFAULT_SEED

    def __post_init__(self):
        if self.style not in STYLES:
            raise ValueError(f"Unknown style {self.style!r}; expected one of {', '.join(STYLES)}")

    def override(self, seed: Optional[str] = None, style: Optional[str] = None) -> "PaletteSettings":
        """
        Copy with CLI-level values applied on top; None keeps the current value.
        """
        changes = {}
        if seed is not None:
            changes["seed"] = seed
        if style is not None:
            changes["style"] = style
        return replace(self, **changes)


def load_settings(path: Optional[Path]) -> PaletteSettings:
    """
    Read settings from a JSON file such as

        {"seed": "#6750a4", "style": "VIBRANT", "fallback_seed": "#1b6ef3"}

    Missing keys keep their defaults; other keys are ignored.
    """
    if path is None:
        return PaletteSettings()

    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")

    known = {k: str(data[k]) for k in ("seed", "style", "fallback_seed") if k in data}
    return PaletteSettings(**known)
