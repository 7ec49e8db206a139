from __future__ import annotations

from functools import lru_cache
from typing import Optional

from PIL import ImageFont


@lru_cache(maxsize=8)
def load_font(font_path: Optional[str], size_px: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    """Load the handwriting font, falling back to Pillow's bundled default at the same size."""
    if font_path:
        return ImageFont.truetype(font_path, size_px)
    return ImageFont.load_default(size=size_px)


class TextMeasurer:
    """
    Measures rendered text width in canvas pixels.

    - **font_size_vh**: font size as percent of canvas height (CSS `vh`)
    - **letter_spacing_px**: extra advance added after every character
    """

    def __init__(
        self,
        *,
        canvas_width: int,
        canvas_height: int,
        font_path: Optional[str] = None,
        font_size_vh: float = 4.0,
        letter_spacing_px: float = 0.5,
    ) -> None:
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.letter_spacing_px = letter_spacing_px
        self.font_size_px = max(1, round(canvas_height * font_size_vh / 100))
        self.font = load_font(font_path, self.font_size_px)

    def width_px(self, text: str) -> float:
        if not text:
            return 0.0
        return float(self.font.getlength(text)) + self.letter_spacing_px * len(text)

    def px_to_pct(self, px: float) -> float:
        return px / self.canvas_width * 100
