from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from subscriber_notebook.errors import LayoutResolutionError

# Writable area of the notebook, in percent of the canvas. These numbers are
# shared with the viewer page CSS; keep both in sync.
WRITABLE_TOP = 20.0
WRITABLE_HEIGHT = 60.0
LINE_HEIGHT = 8.0
LINES_PER_PAGE = 7
PAGE_COUNT = 2
TOTAL_LINES = LINES_PER_PAGE * PAGE_COUNT

LEFT_PAGE_X = 10.0
RIGHT_PAGE_X = 60.0
PAGE_WIDTH = 30.0


@dataclass(frozen=True)
class LineRegion:
    page: Literal["left", "right"]
    row: int
    x: float
    y: float
    width: float
    height: float

    @property
    def mid_y(self) -> float:
        """Pen height: vertical centre of the line."""
        return self.y + self.height / 2

    @property
    def right(self) -> float:
        return self.x + self.width


def page_for(line_number: int) -> Literal["left", "right"]:
    return "left" if line_number < LINES_PER_PAGE else "right"


def resolve(line_number: int) -> LineRegion:
    """Map a global line number (0..13) to its writable region."""
    if not 0 <= line_number < TOTAL_LINES:
        raise LayoutResolutionError(f"line {line_number} is outside 0..{TOTAL_LINES - 1}")
    page = page_for(line_number)
    row = line_number % LINES_PER_PAGE
    return LineRegion(
        page=page,
        row=row,
        x=LEFT_PAGE_X if page == "left" else RIGHT_PAGE_X,
        y=WRITABLE_TOP + row * LINE_HEIGHT,
        width=PAGE_WIDTH,
        height=LINE_HEIGHT,
    )
