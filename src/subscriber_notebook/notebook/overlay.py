from __future__ import annotations

import asyncio
import logging
import random

from subscriber_notebook.server.config import Settings

from .animator import SleepFn, StrikeAnimator, WritingAnimator
from .measure import TextMeasurer
from .rendering import render_notebook_png
from .scheduler import LineScheduler, SchedulerState
from .surface import NotebookSurface

logger = logging.getLogger(__name__)


class NotebookOverlay:
    """Wires board, animators and scheduler to one drawing surface."""

    def __init__(
        self,
        surface: NotebookSurface,
        measurer: TextMeasurer,
        *,
        char_duration_s: float = 0.2,
        session_timeout_s: float = 0.0,
        sleep: SleepFn = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.surface = surface
        self.measurer = measurer
        self.state = SchedulerState()
        self.scheduler = LineScheduler(
            self.state,
            WritingAnimator(surface, measurer, char_duration_s=char_duration_s, sleep=sleep, rng=rng),
            StrikeAnimator(surface, measurer, sleep=sleep),
            sleep=sleep,
            session_timeout_s=session_timeout_s,
        )

    @classmethod
    def from_settings(cls, settings: Settings, surface: NotebookSurface, **kwargs) -> NotebookOverlay:
        measurer = TextMeasurer(
            canvas_width=settings.canvas_width,
            canvas_height=settings.canvas_height,
            font_path=settings.font_path,
            font_size_vh=settings.font_size_vh,
            letter_spacing_px=settings.letter_spacing_px,
        )
        return cls(
            surface,
            measurer,
            char_duration_s=settings.char_duration_s,
            session_timeout_s=settings.session_timeout_s,
            **kwargs,
        )

    async def submit(self, payload: str) -> None:
        self.scheduler.enqueue(payload)

    def snapshot_png(self) -> bytes:
        return render_notebook_png(
            board=self.state.board,
            hand=self.surface.hand,
            measurer=self.measurer,
            session=self.state.session,
        )

    async def wait_idle(self) -> None:
        await self.scheduler.wait_idle()

    async def close(self) -> None:
        logger.info("Stopping notebook overlay (%d name(s) still queued)", len(self.state.queue))
        await self.scheduler.close()
