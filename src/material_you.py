"""
Entry points for obtaining a Material You palette.

A host platform may expose its own system palette through a zero-argument
callable; when it is missing or declines, the palette is generated from a
fallback seed color instead.
"""

import logging
from typing import Callable, Mapping, Optional, Sequence

from monet_palette import MaterialYouPalette, generate
from palette_settings import DEFAULT_SEED, DEFAULT_STYLE

logger = logging.getLogger(__name__)

NativePalette = Callable[[], Optional[Mapping[str, Sequence[str]]]]


class NativePaletteUnavailable(RuntimeError):
    """Raised by a native palette provider that cannot serve a palette."""


def is_supported(native: Optional[NativePalette]) -> bool:
    return native is not None


def generate_palette_from_color(seed: str, style: str = DEFAULT_STYLE) -> MaterialYouPalette:
    """
    Generate a complete palette from a single "#RRGGBB" seed color.
    """
    return generate(seed, style)


def get_material_you_palette(
    fallback_seed: str = DEFAULT_SEED,
    style: str = DEFAULT_STYLE,
    native: Optional[NativePalette] = None,
) -> MaterialYouPalette:
    """
    System palette from `native` if it can provide one, else a palette
    generated from `fallback_seed` in `style`.

    A native palette that comes back malformed raises PaletteFormatError.
    """
    if is_supported(native):
        try:
            data = native()
        except NativePaletteUnavailable as exc:
            logger.info("Native palette unavailable (%s)", exc)
        else:
            if data is not None:
                return MaterialYouPalette.from_mapping(data)
            logger.info("Native palette provider returned nothing")

    logger.info(
        "Material You is not supported here; generating a fallback palette from %s (%s)",
        fallback_seed,
        style,
    )
    return generate_palette_from_color(fallback_seed, style)
