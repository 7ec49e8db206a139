from __future__ import annotations

import io
from typing import Optional

from PIL import Image, ImageDraw

from .board import Board, Session
from .layout import (
    LEFT_PAGE_X,
    PAGE_WIDTH,
    RIGHT_PAGE_X,
    TOTAL_LINES,
    WRITABLE_HEIGHT,
    WRITABLE_TOP,
    resolve,
)
from .measure import TextMeasurer
from .surface import HandState

PAPER = (246, 236, 214)
RULE = (196, 182, 160)
INK = (34, 30, 60)
STRIKE = (255, 0, 0)
HAND_RESTING = (120, 120, 120)
HAND_WRITING = (40, 90, 200)


def render_notebook_png(
    *,
    board: Board,
    hand: HandState,
    measurer: TextMeasurer,
    session: Optional[Session] = None,
) -> bytes:
    """
    Render the current notebook state as a PNG.

    - **board**: committed lines (text + strike marks)
    - **hand**: cursor position/pose, drawn as a small disc at the pen tip
    - **session**: in-flight write, its revealed text is drawn too
    """
    w, h = measurer.canvas_width, measurer.canvas_height
    img = Image.new("RGB", (w, h), (20, 16, 12))
    draw = ImageDraw.Draw(img)

    def to_px(x: float, y: float) -> tuple[float, float]:
        return (x / 100 * w, y / 100 * h)

    margin = 5.0
    for page_x in (LEFT_PAGE_X, RIGHT_PAGE_X):
        x0, y0 = to_px(page_x - margin, WRITABLE_TOP - margin * 2)
        x1, y1 = to_px(page_x + PAGE_WIDTH + margin, WRITABLE_TOP + WRITABLE_HEIGHT + margin)
        draw.rectangle([x0, y0, x1, y1], fill=PAPER)

    for line in range(TOTAL_LINES):
        region = resolve(line)
        _, base = to_px(0, region.y + region.height)
        x0, _ = to_px(region.x, 0)
        x1, _ = to_px(region.right, 0)
        draw.line([(x0, base), (x1, base)], fill=RULE, width=1)

    writing = {}
    if session is not None and session.slot is not None and session.revealed:
        writing[session.slot.line_number] = session.text_so_far

    for slot in board.slots:
        text = slot.text or writing.get(slot.line_number, "")
        if not text:
            continue
        region = resolve(slot.line_number)
        x, mid = to_px(region.x, region.mid_y)
        draw.text((x, mid), text, fill=INK, font=measurer.font, anchor="lm")
        if slot.struck:
            draw.line([(x, mid), (x + measurer.width_px(text), mid)], fill=STRIKE, width=2)

    hx, hy = to_px(hand.x, hand.y)
    r = max(3, h // 120)
    color = HAND_WRITING if hand.pose == "writing" else HAND_RESTING
    draw.ellipse([hx - r, hy - r, hx + r, hy + r], fill=color)

    bio = io.BytesIO()
    img.save(bio, format="PNG", optimize=True)
    return bio.getvalue()
