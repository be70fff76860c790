"""
In-memory project store with change notification.

The store is the only writer of project data. Every committed mutation is
followed by a synchronous notification pass: each listener, in
registration order, receives its own copy of the full project list.

Listeners must not call add_project()/move_project() from inside a
notification; such calls raise ReentrantMutationError.
"""
import itertools
import logging
from typing import Callable, Dict, List, Optional, Any

from .schema import Project, LaneStatus

logger = logging.getLogger(__name__)

Listener = Callable[[List[Project]], None]


class ReentrantMutationError(RuntimeError):
    """Raised when a listener mutates the store during a notification."""
    pass


class ProjectStore:
    """Authoritative list of projects plus its subscribers."""

    def __init__(self, id_prefix: str = "PRJ", id_factory: Optional[Callable[[], str]] = None):
        self._projects: List[Project] = []
        self._listeners: Dict[int, Listener] = {}
        self._handles = itertools.count(1)
        self._notifying = False
        if id_factory is None:
            counter = itertools.count(1)
            id_factory = lambda: f"{id_prefix}-{next(counter):03d}"
        self._next_id = id_factory

    # ── Mutations ────────────────────────────────────────────────

    def add_project(self, title: str, description: str, people: int) -> Project:
        """Create a project in the Active lane and notify subscribers.

        Inputs are trusted; validation happens before this call.
        """
        self._guard_reentry("add_project")
        project_id = self._next_id()
        if self.get(project_id) is not None:
            raise RuntimeError(f"Id generator produced duplicate id {project_id}")
        project = Project(
            id=project_id,
            title=title,
            description=description,
            people=people,
            status=LaneStatus.ACTIVE,
        )
        self._projects.append(project)
        logger.info(f"Added project {project.id} ({project.title!r})")
        self._notify()
        return project

    def move_project(self, project_id: str, new_status: LaneStatus) -> bool:
        """Put a project into another lane.

        Returns False, without notifying, when the id is unknown or the
        project is already in that lane.
        """
        self._guard_reentry("move_project")
        for index, project in enumerate(self._projects):
            if project.id != project_id:
                continue
            if project.status == new_status:
                logger.debug(f"Project {project_id} already {new_status.value}")
                return False
            self._projects[index] = project.with_status(new_status)
            logger.info(f"Moved project {project_id}: {project.status.value} → {new_status.value}")
            self._notify()
            return True
        logger.debug(f"Project {project_id} not found")
        return False

    # ── Subscriptions ────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> int:
        """Register a listener. Returns a handle for unsubscribe()."""
        handle = next(self._handles)
        self._listeners[handle] = listener
        return handle

    def unsubscribe(self, handle: int) -> bool:
        """Remove a registration. Returns False for an unknown handle."""
        return self._listeners.pop(handle, None) is not None

    def _notify(self) -> None:
        self._notifying = True
        try:
            for handle, listener in list(self._listeners.items()):
                try:
                    listener(list(self._projects))
                except Exception:
                    logger.exception(f"Listener {handle} failed")
        finally:
            self._notifying = False

    def _guard_reentry(self, operation: str) -> None:
        if self._notifying:
            raise ReentrantMutationError(
                f"{operation}() called from inside a store notification"
            )

    # ── Queries ──────────────────────────────────────────────────

    @property
    def projects(self) -> List[Project]:
        """Snapshot of all projects in creation order."""
        return list(self._projects)

    def get(self, project_id: str) -> Optional[Project]:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def list_by_status(self, status: LaneStatus) -> List[Project]:
        return [p for p in self._projects if p.status == status]

    def get_stats(self) -> Dict[str, Any]:
        """Project counts per lane."""
        stats = {"by_status": {s.value: 0 for s in LaneStatus}, "total": len(self._projects)}
        for project in self._projects:
            stats["by_status"][project.status.value] += 1
        return stats

    def __len__(self) -> int:
        return len(self._projects)
