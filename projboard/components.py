"""
Headless view components for the board.

ProjectItem implements Draggable, ProjectList implements DropTarget and
subscribes to the store, ProjectInput feeds validated form values into the
store. Every component receives the store it works on explicitly; Board
builds one store and wires everything to it.

Rendering is plain text lines; markup and styling belong to the client.
"""
import logging
from typing import Callable, Dict, List, Optional

from .config import Config, ConfigError
from .dragdrop import DRAG_FORMAT, DragSession, DragState, drag_and_drop
from .schema import LaneStatus, Project
from .store import ProjectStore
from .validation import ProjectInputRules, ValidationError

logger = logging.getLogger(__name__)


class ProjectItem:
    """A single project card; the drag source."""

    def __init__(self, project: Project):
        self.project = project
        self.dragging = False

    def on_drag_start(self, session: DragSession) -> None:
        session.data_transfer.set_data(DRAG_FORMAT, self.project.id)
        session.data_transfer.effect_allowed = "move"
        self.dragging = True

    def on_drag_end(self, session: DragSession) -> None:
        self.dragging = False
        logger.debug(f"Drag of {self.project.id} ended: {session.state.value}")

    def render(self) -> List[str]:
        return [
            f"Project title: {self.project.title}",
            self.project.persons,
            self.project.description,
        ]


class ProjectList:
    """One lane of the board; the drop target."""

    def __init__(self, store: ProjectStore, status: LaneStatus):
        self.store = store
        self.status = status
        self.assigned_projects: List[Project] = []
        self.items: List[ProjectItem] = []
        self.droppable = False
        self.subscription: Optional[int] = None

    @property
    def heading(self) -> str:
        return f"{self.status.value.upper()} Projects"

    def configure(self) -> None:
        """Subscribe to the store and render the current state."""
        lane = self

        def on_projects(projects: List[Project]) -> None:
            lane.assigned_projects = [p for p in projects if p.status == lane.status]
            lane.render_projects()

        self.subscription = self.store.subscribe(on_projects)
        on_projects(self.store.projects)

    def teardown(self) -> None:
        if self.subscription is not None:
            self.store.unsubscribe(self.subscription)
            self.subscription = None

    # ── DropTarget ───────────────────────────────────────────────

    def on_drag_over(self, session: DragSession) -> None:
        if session.has_format(DRAG_FORMAT):
            session.accept()
            self.droppable = True

    def on_drop(self, session: DragSession) -> None:
        self.droppable = False
        project_id = session.data_transfer.get_data(DRAG_FORMAT)
        self.store.move_project(project_id, self.status)

    def on_drag_leave(self, session: DragSession) -> None:
        self.droppable = False

    # ── Rendering ────────────────────────────────────────────────

    def render_projects(self) -> None:
        self.items = [ProjectItem(p) for p in self.assigned_projects]

    def item_for(self, project_id: str) -> Optional[ProjectItem]:
        for item in self.items:
            if item.project.id == project_id:
                return item
        return None

    def render(self) -> List[str]:
        lines = [self.heading]
        for item in self.items:
            lines.extend(f"  {line}" for line in item.render())
        return lines


class ProjectInput:
    """The new-project form."""

    def __init__(
        self,
        store: ProjectStore,
        rules: Optional[ProjectInputRules] = None,
        on_invalid: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.rules = rules or ProjectInputRules()
        self.on_invalid = on_invalid
        self.title = ""
        self.description = ""
        self.people = ""

    def gather_user_input(self):
        """Validated (title, description, people); raises ValidationError."""
        return self.rules.check(self.title, self.description, self.people)

    def submit(self, title: str, description: str, people) -> Optional[Project]:
        """Fill the form and submit it. Returns the new project, or None if rejected."""
        self.title, self.description, self.people = title, description, people
        try:
            title, description, people = self.gather_user_input()
        except ValidationError as e:
            logger.warning(f"Rejected project input: {e}")
            if self.on_invalid:
                self.on_invalid(str(e))
            return None
        project = self.store.add_project(title, description, people)
        self.clear_inputs()
        return project

    def clear_inputs(self) -> None:
        self.title = ""
        self.description = ""
        self.people = ""


class Board:
    """The whole application: one store, the input form and both lanes."""

    def __init__(self, config: Optional[Config] = None, store: Optional[ProjectStore] = None):
        self.config = config or Config()
        self.store = store or ProjectStore(id_prefix=self.config.id_prefix)
        self.input = ProjectInput(self.store, self.config.input_rules())
        self.lanes: Dict[LaneStatus, ProjectList] = {}
        for status in LaneStatus:
            lane = ProjectList(self.store, status)
            lane.configure()
            self.lanes[status] = lane
        self._seed(self.config.seed_projects)

    def _seed(self, seeds) -> None:
        """Add the configured seed projects; statuses are checked before anything is added."""
        statuses = []
        for seed in seeds:
            status = seed.get("status")
            try:
                statuses.append(LaneStatus.from_str(status) if status else None)
            except ValueError:
                raise ConfigError(f"Invalid seed status {status!r} for {seed.get('title')!r}") from None

        for seed, status in zip(seeds, statuses):
            project = self.input.submit(
                seed.get("title", ""),
                seed.get("description", ""),
                seed.get("people", ""),
            )
            if project is None:
                logger.warning(f"Skipped invalid seed project: {seed}")
                continue
            if status is not None:
                self.store.move_project(project.id, status)

    def lane(self, status: LaneStatus) -> ProjectList:
        return self.lanes[status]

    def drag(self, project_id: str, to_status: LaneStatus) -> DragState:
        """Drag a project's card from its current lane onto another lane."""
        item = None
        for lane in self.lanes.values():
            item = lane.item_for(project_id)
            if item is not None:
                break
        if item is None:
            logger.debug(f"No card for {project_id} on the board")
            return DragState.CANCELLED
        return drag_and_drop(item, self.lane(to_status))

    def render(self) -> str:
        lines: List[str] = []
        for lane in self.lanes.values():
            lines.extend(lane.render())
        return "\n".join(lines)
