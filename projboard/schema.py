"""
Project record and lane enumeration.

Lanes:
  Active ⇄ Finished

A project's identity and content are fixed at creation; only its lane
changes, and only through ProjectStore.move_project().
"""
from enum import Enum
from dataclasses import dataclass, replace
from typing import Dict, Any


class LaneStatus(Enum):
    """The two lanes a project can occupy. Closed set."""
    ACTIVE = "active"
    FINISHED = "finished"

    @classmethod
    def from_str(cls, value: str) -> "LaneStatus":
        try:
            return cls[value.strip().upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Invalid lane: {value!r}") from None


@dataclass(frozen=True)
class Project:
    """One unit of work on the board."""

    id: str
    title: str
    description: str
    people: int
    status: LaneStatus = LaneStatus.ACTIVE

    @property
    def persons(self) -> str:
        return "1 person" if self.people == 1 else f"{self.people} persons"

    def with_status(self, status: LaneStatus) -> "Project":
        """Copy of this record in another lane."""
        return replace(self, status=status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "people": self.people,
            "persons": self.persons,
            "status": self.status.value,
        }
