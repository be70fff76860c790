"""
Tests for the drag session protocol and the lane/card capabilities.
"""
import pytest

from projboard.components import ProjectItem, ProjectList
from projboard.dragdrop import (
    DRAG_FORMAT,
    DataTransfer,
    DragProtocolError,
    DragSession,
    DragState,
    Draggable,
    DropTarget,
    drag_and_drop,
)
from projboard.schema import LaneStatus


class SpyTarget:
    """Drop target that records calls and never accepts."""

    def __init__(self):
        self.calls = []

    def on_drag_over(self, session):
        self.calls.append("over")

    def on_drop(self, session):
        self.calls.append("drop")

    def on_drag_leave(self, session):
        self.calls.append("leave")


class ForeignItem:
    """Drag source that carries some other content type."""

    def on_drag_start(self, session):
        session.data_transfer.set_data("application/json", '{"id": "x"}')

    def on_drag_end(self, session):
        pass


@pytest.fixture
def lanes(store):
    project = store.add_project("A", "desc", 2)
    active = ProjectList(store, LaneStatus.ACTIVE)
    finished = ProjectList(store, LaneStatus.FINISHED)
    active.configure()
    finished.configure()
    return store, project, active, finished


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Capabilities
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_components_satisfy_capabilities(lanes):
    """Cards are Draggable and lanes are DropTargets"""
    store, project, active, _ = lanes
    item = ProjectItem(project)
    assert isinstance(item, Draggable)
    assert isinstance(active, DropTarget)
    assert not isinstance(item, DropTarget)


def test_drag_start_writes_payload(lanes):
    """Drag start puts the project id under text/plain"""
    _, project, _, _ = lanes
    item = ProjectItem(project)
    session = DragSession()

    session.start(item)

    assert session.state == DragState.DRAGGING
    assert session.data_transfer.types == [DRAG_FORMAT]
    assert session.data_transfer.get_data(DRAG_FORMAT) == project.id
    assert session.data_transfer.effect_allowed == "move"
    assert item.dragging


def test_payload_frozen_after_start(lanes):
    """Payload cannot change once the drag has started"""
    _, project, _, _ = lanes
    session = DragSession()
    session.start(ProjectItem(project))

    with pytest.raises(DragProtocolError):
        session.data_transfer.set_data(DRAG_FORMAT, "other")
    assert session.data_transfer.get_data(DRAG_FORMAT) == project.id


def test_data_transfer_missing_format():
    """Reading an absent format returns empty string"""
    transfer = DataTransfer()
    assert transfer.get_data(DRAG_FORMAT) == ""
    assert transfer.types == []


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Session state machine
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_drop_on_other_lane_moves_project(lanes, recorder):
    """Dropping on the other lane moves the project once"""
    store, project, active, finished = lanes
    item = active.item_for(project.id)

    state = drag_and_drop(item, finished)

    assert state == DragState.DROPPED
    assert store.get(project.id).status == LaneStatus.FINISHED
    assert len(recorder) == 1
    assert not item.dragging
    assert not finished.droppable


def test_drop_on_own_lane_is_noop(lanes, recorder):
    """Dropping back on the same lane changes nothing"""
    store, project, active, _ = lanes

    state = drag_and_drop(active.item_for(project.id), active)

    assert state == DragState.DROPPED
    assert store.get(project.id).status == LaneStatus.ACTIVE
    assert recorder == []


def test_drag_over_sets_droppable_and_leave_clears(lanes):
    """Drag-over marks the lane droppable, leave clears it"""
    _, project, _, finished = lanes
    session = DragSession()
    session.start(ProjectItem(project))

    assert session.over(finished)
    assert finished.droppable

    session.leave(finished)
    assert not finished.droppable


def test_drop_after_leave_cancels(lanes, recorder):
    """Leaving a lane withdraws its acceptance"""
    store, project, _, finished = lanes
    session = DragSession()
    session.start(ProjectItem(project))
    session.over(finished)
    session.leave(finished)

    assert session.drop(finished) == DragState.CANCELLED
    assert store.get(project.id).status == LaneStatus.ACTIVE
    assert recorder == []


def test_drop_without_drag_over_cancels(lanes):
    """A drop with no prior drag-over is cancelled"""
    store, project, _, finished = lanes
    session = DragSession()
    session.start(ProjectItem(project))

    assert session.drop(finished) == DragState.CANCELLED
    assert store.get(project.id).status == LaneStatus.ACTIVE


def test_drop_on_target_other_than_accepting_one_cancels(lanes):
    """Only the lane that accepted can receive the drop"""
    store, project, active, finished = lanes
    session = DragSession()
    session.start(ProjectItem(project))
    session.over(active)

    assert session.drop(finished) == DragState.CANCELLED
    assert store.get(project.id).status == LaneStatus.ACTIVE


def test_mismatched_content_type_never_moves(lanes, recorder):
    """Drag-over rejects foreign payloads, so the drop never reaches the store"""
    store, project, _, finished = lanes
    session = DragSession()
    session.start(ForeignItem())

    assert not session.over(finished)
    assert not finished.droppable
    assert session.drop(finished) == DragState.CANCELLED
    assert recorder == []


def test_rejected_drop_never_calls_on_drop():
    """A target that never accepted never sees on_drop"""
    target = SpyTarget()
    session = DragSession.from_payload(DRAG_FORMAT, "PRJ-001")

    session.over(target)
    state = session.drop(target)

    assert state == DragState.CANCELLED
    assert target.calls == ["over"]


def test_cancel_has_no_store_effect(lanes, recorder):
    """Cancelling a drag leaves the store untouched"""
    store, project, _, _ = lanes
    item = ProjectItem(project)
    session = DragSession()
    session.start(item)

    assert session.cancel() == DragState.CANCELLED
    assert not item.dragging
    assert recorder == []


def test_transitions_out_of_order_raise(lanes):
    """Out-of-order session calls raise DragProtocolError"""
    _, project, active, _ = lanes
    session = DragSession()

    with pytest.raises(DragProtocolError):
        session.drop(active)
    with pytest.raises(DragProtocolError):
        session.over(active)

    session.start(ProjectItem(project))
    session.cancel()

    with pytest.raises(DragProtocolError):
        session.start(ProjectItem(project))
    with pytest.raises(DragProtocolError):
        session.cancel()


def test_from_payload_session(lanes):
    """A session rebuilt from the wire payload can be dropped"""
    store, project, _, finished = lanes
    session = DragSession.from_payload(DRAG_FORMAT, project.id)

    assert session.state == DragState.DRAGGING
    session.over(finished)
    assert session.drop(finished) == DragState.DROPPED
    assert store.get(project.id).status == LaneStatus.FINISHED


def test_drop_unknown_id_is_noop(lanes, recorder):
    """Dropping an unknown id does not notify"""
    store, _, _, finished = lanes
    session = DragSession.from_payload(DRAG_FORMAT, "nonexistent")
    session.over(finished)

    assert session.drop(finished) == DragState.DROPPED
    assert recorder == []
