"""
Drag-and-drop reordering for the notes list.

A drag is either ``Idle`` or ``Dragging(origin, start)``. Row geometry is
passed in on every call as screen regions in display order, so nothing here
depends on widgets and nothing is cached between pointer events.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from loguru import logger
from textual.geometry import Offset, Region


class DropEdge(str, Enum):
    """Which edge of the hovered row the insertion marker sits on."""
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    origin: int
    start: Offset


DragState = Union[Idle, Dragging]


def row_center_y(region: Region) -> float:
    return region.y + region.height / 2


def is_above_center(pointer: Offset, region: Region) -> bool:
    return pointer.y < row_center_y(region)


def resolve_drop_index(pointer: Offset, rows: Sequence[Region]) -> int:
    """
    Insertion position (0..len(rows)) for a drop at ``pointer``.

    Over a row: before it when above its center, after it otherwise. Outside
    every row: before the first row whose center lies below the pointer, which
    clamps to 0 above the list and to len(rows) below it. A pointer beside the
    list keeps its vertical position instead of falling through to the end.
    """
    for index, region in enumerate(rows):
        if region.contains_point(pointer):
            return index if is_above_center(pointer, region) else index + 1
    for index, region in enumerate(rows):
        if pointer.y < row_center_y(region):
            return index
    return len(rows)


class ReorderEngine:
    """State machine for a single pointer-driven reorder gesture."""

    def __init__(self) -> None:
        self.state: DragState = Idle()

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    @property
    def origin(self) -> Optional[int]:
        return self.state.origin if isinstance(self.state, Dragging) else None

    def begin(self, origin: int, pointer: Offset, enabled: bool = True) -> bool:
        """Start dragging row ``origin``. Only allowed from Idle and when enabled."""
        if not enabled or self.is_dragging:
            return False
        self.state = Dragging(origin=origin, start=pointer)
        logger.debug(f"Drag started on row {origin} at {tuple(pointer)}")
        return True

    def ghost_offset(self, pointer: Offset) -> Offset:
        """Pointer delta since the drag started; zero when idle."""
        if isinstance(self.state, Dragging):
            return pointer - self.state.start
        return Offset(0, 0)

    def indicator(self, pointer: Offset, rows: Sequence[Region]) -> Optional[Tuple[int, DropEdge]]:
        """The row (other than the dragged one) under the pointer and the edge to mark."""
        if not isinstance(self.state, Dragging):
            return None
        for index, region in enumerate(rows):
            if index == self.state.origin:
                continue
            if region.contains_point(pointer):
                edge = DropEdge.TOP if is_above_center(pointer, region) else DropEdge.BOTTOM
                return index, edge
        return None

    def release(self, pointer: Offset, rows: Sequence[Region]) -> Optional[Tuple[int, int]]:
        """
        Finish the drag and return ``(origin, target)`` for ``NoteStore.move``.

        Returns None if no drag was active. The engine is Idle afterwards.
        """
        if not isinstance(self.state, Dragging):
            return None
        origin = self.state.origin
        target = resolve_drop_index(pointer, rows)
        self.state = Idle()
        logger.debug(f"Drag released: row {origin} -> position {target}")
        return origin, target

    def cancel(self) -> bool:
        """Abort the drag without moving anything."""
        if not self.is_dragging:
            return False
        self.state = Idle()
        logger.debug("Drag cancelled")
        return True
