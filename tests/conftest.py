from __future__ import annotations

import asyncio

import pytest

from subscriber_notebook.notebook.measure import TextMeasurer
from subscriber_notebook.server.config import Settings


async def no_sleep(_seconds: float) -> None:
    await asyncio.sleep(0)


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture
def measurer() -> TextMeasurer:
    return TextMeasurer(canvas_width=1920, canvas_height=1080)


@pytest.fixture
def quiet_settings() -> Settings:
    return Settings(_env_file=None, overlay_enabled=False)


@pytest.fixture
def overlay_settings() -> Settings:
    return Settings(_env_file=None, overlay_enabled=True, session_timeout_s=10.0)
