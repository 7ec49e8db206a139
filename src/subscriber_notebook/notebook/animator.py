from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable

from .board import Session
from .measure import TextMeasurer
from .surface import REST_X, REST_Y, NotebookSurface

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]

MOVE_TO_LINE_S = 0.8
POSE_FADE_S = 0.3
AFTER_WRITE_PAUSE_S = 0.5
# Pen tip sits slightly right of the last glyph.
PEN_OFFSET_PX = 8.0
JITTER_DEG = 1.0

CUT_APPROACH_S = 0.6
CUT_APPROACH_ROTATION = 10.0
CUT_S = 1.5
CUT_ROTATION = -5.0
REST_POSE_FADE_S = 0.2
RETURN_TO_REST_S = 1.0


class WritingAnimator:
    """Types a name into its slot one character at a time, hand following the text."""

    def __init__(
        self,
        surface: NotebookSurface,
        measurer: TextMeasurer,
        *,
        char_duration_s: float = 0.2,
        sleep: SleepFn = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.surface = surface
        self.measurer = measurer
        self.char_duration_s = char_duration_s
        self._sleep = sleep
        self._rng = rng or random.Random()

    async def write(self, session: Session) -> bool:
        """
        Animate `session.name` into `session.slot`.

        Returns False without touching the surface when the slot already
        holds text.
        """
        slot = session.slot
        if slot is None:
            raise ValueError("session has no target slot")
        if slot.occupied:
            logger.info("Line %d already holds %r, skipping", slot.line_number, slot.text)
            return False

        region = self.surface.locate(slot.line_number)
        session.phase = "typing"
        session.cursor = (region.x, region.mid_y)

        await self.surface.move_hand(region.x, region.mid_y, rotation=0.0, duration=MOVE_TO_LINE_S)
        await self._sleep(MOVE_TO_LINE_S)
        await self.surface.set_pose("writing", duration=POSE_FADE_S)

        for i in range(len(session.name)):
            session.revealed = i + 1
            text = session.text_so_far
            await self.surface.show_text(slot, text)

            session.width_px = self.measurer.width_px(text)
            hand_x = region.x + self.measurer.px_to_pct(session.width_px + PEN_OFFSET_PX)
            session.cursor = (hand_x, region.mid_y)
            await self.surface.move_hand(
                hand_x,
                rotation=self._rng.uniform(-JITTER_DEG, JITTER_DEG),
                duration=self.char_duration_s,
                ease="power2.out",
            )
            await self._sleep(self.char_duration_s)

        await self._sleep(AFTER_WRITE_PAUSE_S)
        return True


class StrikeAnimator:
    """Per-write flourish: cut through the fresh line, then put the hand back to rest."""

    def __init__(
        self,
        surface: NotebookSurface,
        measurer: TextMeasurer,
        *,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.surface = surface
        self.measurer = measurer
        self._sleep = sleep

    async def strike(self, session: Session) -> None:
        slot = session.slot
        if slot is None:
            raise ValueError("session has no target slot")
        region = self.surface.locate(slot.line_number)
        end_x = region.x + self.measurer.px_to_pct(session.width_px)

        session.phase = "cutting"
        session.cursor = (end_x, region.mid_y)
        await self.surface.move_hand(
            end_x, region.mid_y, rotation=CUT_APPROACH_ROTATION, duration=CUT_APPROACH_S
        )
        await self._sleep(CUT_APPROACH_S)

        # strike grows right -> left alongside the hand
        slot.struck = True
        await self.surface.strike(slot, duration=CUT_S)
        await self.surface.move_hand(
            region.x, rotation=CUT_ROTATION, duration=CUT_S, ease="power1.inOut"
        )
        session.cursor = (region.x, region.mid_y)
        await self._sleep(CUT_S)

        session.phase = "resetting"
        await self.rest()

    async def rest(self) -> None:
        await self.surface.set_pose("resting", duration=REST_POSE_FADE_S)
        await self.surface.move_hand(REST_X, REST_Y, rotation=0.0, duration=RETURN_TO_REST_S)
        await self._sleep(RETURN_TO_REST_S)
