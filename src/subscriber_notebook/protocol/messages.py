from __future__ import annotations

from typing import Literal, Optional, TypeAlias, Union

from pydantic import BaseModel, ConfigDict

from .constants import T_CLEAR, T_HAND, T_HELLO, T_LINE_TEXT, T_NEW_SUBSCRIBER, T_POSE, T_STRIKE

# Coordinates:
# - x,y are percentages of the notebook canvas (0..100), pen tip position
# - rotation in degrees
# - duration in seconds (viewers tween over it)
Page: TypeAlias = Literal["left", "right"]
Pose: TypeAlias = Literal["resting", "writing"]


class SubscriberIn(BaseModel):
    """Inbound webhook body. `username` is validated by the relay, not here."""

    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None


class Hello(BaseModel):
    t: Literal["hello"] = T_HELLO


class NewSubscriber(BaseModel):
    t: Literal["new_subscriber"] = T_NEW_SUBSCRIBER
    username: str


class Hand(BaseModel):
    t: Literal["hand"] = T_HAND
    x: float
    y: float
    rotation: float = 0.0
    duration: float = 0.0
    ease: str = "power2.inOut"


class HandPose(BaseModel):
    t: Literal["pose"] = T_POSE
    pose: Pose
    duration: float = 0.0


class LineText(BaseModel):
    t: Literal["line_text"] = T_LINE_TEXT
    line: int
    page: Page
    row: int
    text: str


class Strike(BaseModel):
    t: Literal["strike"] = T_STRIKE
    line: int
    duration: float


class Clear(BaseModel):
    t: Literal["clear"] = T_CLEAR


DrawMsg: TypeAlias = Union[Hand, HandPose, LineText, Strike, Clear]
