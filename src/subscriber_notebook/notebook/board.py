from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from .layout import LINES_PER_PAGE, TOTAL_LINES, page_for


@dataclass
class Slot:
    page: Literal["left", "right"]
    index: int
    text: str = ""
    struck: bool = False

    @property
    def line_number(self) -> int:
        return self.index if self.page == "left" else self.index + LINES_PER_PAGE

    @property
    def occupied(self) -> bool:
        return bool(self.text.strip())


def _blank_slots() -> list[Slot]:
    return [Slot(page=page_for(n), index=n % LINES_PER_PAGE) for n in range(TOTAL_LINES)]


@dataclass
class Board:
    """The 14 notebook lines, indexed by global line number."""

    slots: list[Slot] = field(default_factory=_blank_slots)

    def slot(self, line_number: int) -> Slot:
        return self.slots[line_number]

    def at(self, page: str, index: int) -> Slot:
        line = index if page == "left" else index + LINES_PER_PAGE
        return self.slots[line]

    def first_vacant(self) -> Optional[Slot]:
        for s in self.slots:
            if not s.occupied:
                return s
        return None

    @property
    def is_full(self) -> bool:
        return self.first_vacant() is None

    def clear(self) -> None:
        for s in self.slots:
            s.text = ""
            s.struck = False

    def texts(self) -> list[str]:
        return [s.text for s in self.slots]


@dataclass
class Session:
    """One in-flight write: bound slot, name, cursor and reveal progress."""

    name: str
    slot: Optional[Slot] = None
    phase: Literal["pending", "typing", "cutting", "resetting"] = "pending"
    cursor: tuple[float, float] = (0.0, 0.0)
    revealed: int = 0
    width_px: float = 0.0

    @property
    def text_so_far(self) -> str:
        return self.name[: self.revealed]
