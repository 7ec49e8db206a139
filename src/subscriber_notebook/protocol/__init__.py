from .constants import (
    T_CLEAR,
    T_HAND,
    T_HELLO,
    T_LINE_TEXT,
    T_NEW_SUBSCRIBER,
    T_POSE,
    T_STRIKE,
)

__all__ = [
    "T_HELLO",
    "T_NEW_SUBSCRIBER",
    "T_HAND",
    "T_POSE",
    "T_LINE_TEXT",
    "T_STRIKE",
    "T_CLEAR",
]
