from .board import Board, Session, Slot
from .layout import LineRegion, resolve
from .overlay import NotebookOverlay
from .scheduler import LineScheduler, SchedulerState, split_names
from .surface import BroadcastSurface, NotebookSurface, RecordingSurface

__all__ = [
    "Board",
    "Session",
    "Slot",
    "LineRegion",
    "resolve",
    "NotebookOverlay",
    "LineScheduler",
    "SchedulerState",
    "split_names",
    "BroadcastSurface",
    "NotebookSurface",
    "RecordingSurface",
]
