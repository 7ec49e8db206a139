from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from subscriber_notebook.errors import LayoutResolutionError

from .animator import SleepFn, StrikeAnimator, WritingAnimator
from .board import Board, Session
from .layout import TOTAL_LINES

logger = logging.getLogger(__name__)

# Gap between dequeuing a name and starting its animation.
START_DELAY_S = 0.1


def split_names(payload: str) -> list[str]:
    """One name per non-empty, trimmed line."""
    return [seg.strip() for seg in payload.splitlines() if seg.strip()]


@dataclass
class SchedulerState:
    board: Board = field(default_factory=Board)
    queue: deque[str] = field(default_factory=deque)
    busy: bool = False
    session: Optional[Session] = None

    def acquire(self, session: Session) -> None:
        if self.busy:
            raise RuntimeError("an animation session is already active")
        self.busy = True
        self.session = session

    def release(self) -> None:
        self.busy = False
        self.session = None


class LineScheduler:
    """
    Single-flight line writer.

    Names are queued FIFO; whenever the scheduler is idle it pops the head,
    picks the lowest vacant line (erasing the notebook first when all 14 are
    taken), types the name, then runs the strike flourish. Arrivals during an
    animation only grow the queue.

    Must be driven from a running event loop.
    """

    def __init__(
        self,
        state: SchedulerState,
        writer: WritingAnimator,
        striker: StrikeAnimator,
        *,
        sleep: SleepFn = asyncio.sleep,
        start_delay_s: float = START_DELAY_S,
        session_timeout_s: float = 0.0,
    ) -> None:
        self.state = state
        self.writer = writer
        self.striker = striker
        self._sleep = sleep
        self.start_delay_s = start_delay_s
        self.session_timeout_s = session_timeout_s
        self._task: Optional[asyncio.Task[None]] = None
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def surface(self):
        return self.writer.surface

    def enqueue(self, payload: str) -> int:
        names = split_names(payload)
        if not names:
            logger.debug("Ignoring payload with no usable names: %r", payload)
            return 0
        self.state.queue.extend(names)
        logger.info("Queued %d name(s); queue depth %d", len(names), len(self.state.queue))
        self._schedule()
        return len(names)

    def _schedule(self) -> None:
        st = self.state
        if st.busy:
            return
        if not st.queue:
            self._idle.set()
            return
        session = Session(name=st.queue.popleft())
        st.acquire(session)
        self._idle.clear()
        self._task = asyncio.get_running_loop().create_task(self._run(session))

    def timeout_for(self, session: Session) -> float:
        """Safety budget for one session: the base timeout plus its typing time."""
        if self.session_timeout_s <= 0:
            return 0.0
        return self.session_timeout_s + len(session.name) * self.writer.char_duration_s

    async def _run(self, session: Session) -> None:
        budget = self.timeout_for(session)
        try:
            if budget > 0:
                await asyncio.wait_for(self._animate(session), budget)
            else:
                await self._animate(session)
        except LayoutResolutionError as e:
            logger.error("Dropping %r: %s", session.name, e)
        except asyncio.TimeoutError:
            logger.error("Session for %r timed out after %.1fs; returning to idle", session.name, budget)
            await self._abandon(session)
        except Exception:
            logger.exception("Animation session for %r failed", session.name)
        finally:
            self.state.release()
            self._task = None
        self._schedule()

    async def _animate(self, session: Session) -> None:
        board = self.state.board
        slot = board.first_vacant()
        if slot is None:
            logger.info("All %d lines filled; erasing notebook and starting over", TOTAL_LINES)
            board.clear()
            await self.surface.clear()
            slot = board.slots[0]
        session.slot = slot
        logger.info("Writing %r on line %d", session.name, slot.line_number)

        await self._sleep(self.start_delay_s)
        if not await self.writer.write(session):
            return
        if slot.occupied:
            logger.warning(
                "Line %d was filled while %r was being written; leaving it alone",
                slot.line_number,
                session.name,
            )
            return
        slot.text = session.name
        await self.striker.strike(session)

    async def _abandon(self, session: Session) -> None:
        # partial text was only ever on screen; the slot itself stays vacant
        slot = session.slot
        if slot is None or slot.occupied:
            return
        try:
            await self.surface.show_text(slot, "")
        except Exception:
            logger.exception("Could not blank line %d after timeout", slot.line_number)

    async def wait_idle(self) -> None:
        """Resolve once the queue is drained and no session runs."""
        await self._idle.wait()

    async def close(self) -> None:
        task = self._task
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self.state.queue.clear()
        self._idle.set()
