"""
Planner schema: users, boards, columns, tasks and milestones.

Ownership:
  Board → Column → Task → Milestone

Every container keeps insertion order, which is also display order.
Task status moves freely between TO_DO, IN_PROGRESS and DONE (no guard,
DONE may revert).
"""
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Dict, Any


class Role(Enum):
    """Access classification of a user (not enforced anywhere)."""
    MANAGER = "manager"
    EMPLOYEE = "employee"

    @classmethod
    def from_str(cls, value: str) -> "Role":
        return _parse_enum(cls, value)


class Status(Enum):
    """Task workflow status."""
    TO_DO = "to_do"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def from_str(cls, value: str) -> "Status":
        return _parse_enum(cls, value)


def _parse_enum(enum_cls, value):
    """Match by member name or value, case-insensitive. Raises ValueError."""
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().replace("-", "_").replace(" ", "_")
    try:
        return enum_cls[key.upper()]
    except KeyError:
        pass
    try:
        return enum_cls(key.lower())
    except ValueError:
        names = ", ".join(m.name for m in enum_cls)
        raise ValueError(f"Invalid {enum_cls.__name__.lower()}: {value!r} (expected one of {names})")


@dataclass(frozen=True)
class User:
    """A registered user. Password is stored as given (plaintext)."""
    username: str
    password: str = field(repr=False)
    role: Role = Role.EMPLOYEE

    def to_dict(self) -> Dict[str, Any]:
        return {"username": self.username, "role": self.role.name}


@dataclass
class Milestone:
    """A named checkpoint inside a task."""
    name: str
    completed: bool = False

    def toggle(self) -> bool:
        self.completed = not self.completed
        return self.completed

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "completed": self.completed}


@dataclass(eq=False)
class Task:
    """A unit of work. Any string is a valid title, including ''."""
    title: str
    status: Status = Status.TO_DO
    milestones: List[Milestone] = field(default_factory=list)

    def progress(self) -> float:
        """
        Completion percentage in [0, 100].

        Without milestones the status decides (DONE → 100, otherwise 0);
        with milestones it is the completed share.
        """
        if not self.milestones:
            return 100.0 if self.status == Status.DONE else 0.0
        done = sum(1 for m in self.milestones if m.completed)
        return done / len(self.milestones) * 100

    def progress_percent(self) -> int:
        """Integer progress for display: floor(completed * 100 / total)."""
        if not self.milestones:
            return 100 if self.status == Status.DONE else 0
        done = sum(1 for m in self.milestones if m.completed)
        # integer arithmetic keeps 1/3 → 33 and 2/3 → 66 exact
        return done * 100 // len(self.milestones)

    def set_status(self, status: Status) -> None:
        self.status = status

    def add_milestone(self, name: str) -> Milestone:
        milestone = Milestone(name=name)
        self.milestones.append(milestone)
        return milestone

    def toggle_milestone(self, index: int) -> bool:
        """Flip milestone at index. Raises IndexError for a bad index."""
        if index < 0 or index >= len(self.milestones):
            raise IndexError(f"No milestone #{index} in task {self.title!r}")
        return self.milestones[index].toggle()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "status": self.status.name,
            "progress": self.progress_percent(),
            "milestones": [m.to_dict() for m in self.milestones],
        }


@dataclass(eq=False)
class Column:
    """A workflow stage holding tasks in insertion order."""
    name: str
    tasks: List[Task] = field(default_factory=list)

    def add_task(self, title: str) -> Task:
        task = Task(title=title)
        self.tasks.append(task)
        return task


@dataclass(eq=False)
class Board:
    """Top-level named container of columns."""
    name: str
    columns: List[Column] = field(default_factory=list)

    def add_column(self, name: str) -> Column:
        column = Column(name=name)
        self.columns.append(column)
        return column
