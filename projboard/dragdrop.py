"""
Drag-and-drop protocol between project items and lanes.

Session lifecycle:
  Idle → Dragging → Dropped | Cancelled

The source writes the project id into the payload when the drag starts;
from then on the payload is frozen. A drop only lands on a target that
accepted the session during drag-over, i.e. whose content-type check
passed. Any other ending cancels the session and leaves the store alone.
"""
import logging
from enum import Enum
from typing import Dict, List, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# Content type shared by every draggable and every drop target.
DRAG_FORMAT = "text/plain"


class DragProtocolError(Exception):
    """Raised when a drag session is driven out of order."""
    pass


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


class DataTransfer:
    """Payload carried by one drag session."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._frozen = False
        self.effect_allowed = "uninitialized"

    @property
    def types(self) -> List[str]:
        return list(self._data)

    def set_data(self, fmt: str, value: str) -> None:
        if self._frozen:
            raise DragProtocolError("Drag payload is read-only after drag start")
        self._data[fmt] = value

    def get_data(self, fmt: str) -> str:
        return self._data.get(fmt, "")

    def freeze(self) -> None:
        self._frozen = True


@runtime_checkable
class Draggable(Protocol):
    def on_drag_start(self, session: "DragSession") -> None: ...

    def on_drag_end(self, session: "DragSession") -> None: ...


@runtime_checkable
class DropTarget(Protocol):
    def on_drag_over(self, session: "DragSession") -> None: ...

    def on_drop(self, session: "DragSession") -> None: ...

    def on_drag_leave(self, session: "DragSession") -> None: ...


class DragSession:
    """One drag gesture from start to drop or cancel."""

    def __init__(self):
        self.state = DragState.IDLE
        self.data_transfer = DataTransfer()
        self.source: Optional[Draggable] = None
        self._accepted_by: Optional[DropTarget] = None
        self._accept_requested = False

    @classmethod
    def from_payload(cls, fmt: str, value: str) -> "DragSession":
        """Rebuild a session that a remote client already started."""
        session = cls()
        session.data_transfer.set_data(fmt, value)
        session.data_transfer.effect_allowed = "move"
        session.data_transfer.freeze()
        session.state = DragState.DRAGGING
        return session

    def has_format(self, fmt: str = DRAG_FORMAT) -> bool:
        types = self.data_transfer.types
        return bool(types) and types[0] == fmt

    def accept(self) -> None:
        """Called by a target from on_drag_over to allow a drop on it."""
        self._accept_requested = True

    # ── Transitions ──────────────────────────────────────────────

    def start(self, source: Draggable) -> None:
        self._expect(DragState.IDLE, "start")
        self.source = source
        source.on_drag_start(self)
        self.data_transfer.freeze()
        self.state = DragState.DRAGGING

    def over(self, target: DropTarget) -> bool:
        """Offer the session to a target. Returns True if it accepted."""
        self._expect(DragState.DRAGGING, "over")
        self._accept_requested = False
        target.on_drag_over(self)
        self._accepted_by = target if self._accept_requested else None
        return self._accepted_by is not None

    def leave(self, target: DropTarget) -> None:
        self._expect(DragState.DRAGGING, "leave")
        target.on_drag_leave(self)
        if self._accepted_by is target:
            self._accepted_by = None

    def drop(self, target: DropTarget) -> DragState:
        self._expect(DragState.DRAGGING, "drop")
        if self._accepted_by is not target:
            logger.debug(f"Drop rejected: types={self.data_transfer.types}")
            self._finish(DragState.CANCELLED)
            return self.state
        target.on_drop(self)
        self._finish(DragState.DROPPED)
        return self.state

    def cancel(self) -> DragState:
        self._expect(DragState.DRAGGING, "cancel")
        self._finish(DragState.CANCELLED)
        return self.state

    def _finish(self, state: DragState) -> None:
        self.state = state
        self._accepted_by = None
        if self.source is not None:
            self.source.on_drag_end(self)

    def _expect(self, state: DragState, action: str) -> None:
        if self.state != state:
            raise DragProtocolError(
                f"Cannot {action} a drag session in state {self.state.value}"
            )


def drag_and_drop(source: Draggable, target: DropTarget) -> DragState:
    """Run a complete gesture: start on source, hover over target, release."""
    session = DragSession()
    session.start(source)
    session.over(target)
    return session.drop(target)
