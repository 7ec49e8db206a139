from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from subscriber_notebook.protocol.messages import (
    Clear,
    DrawMsg,
    Hand,
    HandPose,
    LineText,
    Pose,
    Strike,
)

from .board import Slot
from .layout import LineRegion, resolve

# Pen tip at rest, in percent (viewer CSS: right 75%, bottom 70%).
REST_X = 25.0
REST_Y = 30.0


@dataclass
class HandState:
    x: float = REST_X
    y: float = REST_Y
    rotation: float = 0.0
    pose: Pose = "resting"


class NotebookSurface:
    """
    Drawing target for the animators.

    Subclasses implement `_emit`; hand state is tracked here so snapshots
    can show where the cursor is.
    """

    def __init__(self) -> None:
        self.hand = HandState()

    def locate(self, line_number: int) -> LineRegion:
        """Region for a line. Raises LayoutResolutionError when it can't be found."""
        return resolve(line_number)

    async def move_hand(
        self,
        x: float,
        y: float | None = None,
        *,
        rotation: float = 0.0,
        duration: float = 0.0,
        ease: str = "power2.inOut",
    ) -> None:
        self.hand.x = x
        if y is not None:
            self.hand.y = y
        self.hand.rotation = rotation
        await self._emit(
            Hand(x=x, y=self.hand.y, rotation=rotation, duration=duration, ease=ease)
        )

    async def set_pose(self, pose: Pose, *, duration: float = 0.0) -> None:
        self.hand.pose = pose
        await self._emit(HandPose(pose=pose, duration=duration))

    async def show_text(self, slot: Slot, text: str) -> None:
        await self._emit(LineText(line=slot.line_number, page=slot.page, row=slot.index, text=text))

    async def strike(self, slot: Slot, *, duration: float) -> None:
        await self._emit(Strike(line=slot.line_number, duration=duration))

    async def clear(self) -> None:
        await self._emit(Clear())

    async def _emit(self, msg: DrawMsg) -> None:
        raise NotImplementedError


class RecordingSurface(NotebookSurface):
    """Keeps every draw command in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.commands: list[DrawMsg] = []

    async def _emit(self, msg: DrawMsg) -> None:
        self.commands.append(msg)

    def of_type(self, t: str) -> list[DrawMsg]:
        return [m for m in self.commands if m.t == t]


class BroadcastSurface(NotebookSurface):
    """Fans draw commands out to connected viewers (fire-and-forget)."""

    def __init__(self, send: Callable[[dict[str, Any]], Awaitable[None]]) -> None:
        super().__init__()
        self._send = send

    async def _emit(self, msg: DrawMsg) -> None:
        await self._send(msg.model_dump())
