"""
Handle-based planner API.

Wraps AuthService and PlannerController behind opaque string handles so a
presentation layer (HTTP, CLI, GUI) never holds model objects directly:

    S-001  session     B-001  board
    C-001  column      T-001  task

Handles are issued sequentially per kind and never reused. A user has at
most one open session. Unknown handles raise InvalidReference; an unknown
session raises AuthenticationFailure.
"""
import itertools
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from .auth import AuthService
from .controller import PlannerController
from .errors import (
    AuthenticationFailure,
    DuplicateUsername,
    InvalidReference,
    InvalidSelection,
)
from .schema import Board, Column, Role, Status, Task, User

logger = logging.getLogger(__name__)

SessionHandle = str
BoardId = str
ColumnId = str
TaskId = str


class _HandleRegistry:
    """Two-way map between model objects and their handles for one kind."""

    def __init__(self, prefix: str, kind: str):
        self.prefix = prefix
        self.kind = kind
        self._counter = itertools.count(1)
        self._by_handle: Dict[str, Any] = {}
        self._by_object: Dict[int, str] = {}

    def issue(self, obj: Any) -> str:
        handle = f"{self.prefix}-{next(self._counter):03d}"
        self._by_handle[handle] = obj
        self._by_object[id(obj)] = handle
        return handle

    def handle_of(self, obj: Any) -> str:
        return self._by_object[id(obj)]

    def lookup(self, obj: Any) -> Optional[str]:
        return self._by_object.get(id(obj))

    def resolve(self, handle: str) -> Any:
        if not handle:
            raise InvalidSelection(f"No {self.kind} selected")
        try:
            return self._by_handle[handle]
        except KeyError:
            raise InvalidReference(f"Unknown {self.kind}: {handle}")

    def drop(self, handle: str) -> None:
        obj = self._by_handle.pop(handle, None)
        if obj is not None:
            self._by_object.pop(id(obj), None)

    def __len__(self) -> int:
        return len(self._by_handle)


class PlannerAPI:
    """One instance per process: the user registry, boards and handles."""

    def __init__(self, auth: Optional[AuthService] = None):
        self.auth = auth if auth is not None else AuthService()
        self.controller = PlannerController(self.auth)
        self._sessions = _HandleRegistry("S", "session")
        self._boards = _HandleRegistry("B", "board")
        self._columns = _HandleRegistry("C", "column")
        self._tasks = _HandleRegistry("T", "task")

    # ── Session ──────────────────────────────────────

    def register(self, username: str, password: str, role: Union[Role, str] = Role.EMPLOYEE) -> bool:
        """Same contract as AuthService.register: False on duplicate."""
        return self.auth.register(username, password, Role.from_str(role))

    def register_or_raise(self, username: str, password: str, role: Union[Role, str] = Role.EMPLOYEE) -> None:
        """Like register(), but raises DuplicateUsername instead of False."""
        if not self.register(username, password, role):
            raise DuplicateUsername(username)

    def login(self, username: str, password: str) -> SessionHandle:
        """
        Start a session, or return the user's open one.

        A user holds at most one session; it lasts until logout().
        """
        user = self.controller.login(username, password)
        if user is None:
            raise AuthenticationFailure("Invalid credentials")
        session = self._sessions.lookup(user)
        if session is None:
            session = self._sessions.issue(user)
            logger.info(f"Session {session} opened for {user.username}")
        return session

    def logout(self, session: SessionHandle) -> None:
        self.activate(session)
        self._sessions.drop(session)
        self.controller.logout()

    def session_user(self, session: SessionHandle) -> User:
        """The user behind a session. Does not touch the controller."""
        try:
            return self._sessions.resolve(session)
        except (InvalidReference, InvalidSelection):
            raise AuthenticationFailure("Unknown or expired session")

    def activate(self, session: SessionHandle) -> User:
        """Resolve a session and make its user the controller's current user."""
        user = self.session_user(session)
        # one controller serves every session; point it at the caller
        self.controller.current_user = user
        return user

    # ── Boards ───────────────────────────────────────

    def create_board(self, session: SessionHandle, name: str) -> BoardId:
        self.activate(session)
        board = self.controller.add_board(name)
        return self._boards.issue(board)

    def list_boards(self, session: SessionHandle) -> List[Tuple[BoardId, str]]:
        self.activate(session)
        return [(self._boards.handle_of(b), b.name) for b in self.controller.boards()]

    # ── Columns ──────────────────────────────────────

    def create_column(self, board_id: BoardId, name: str) -> ColumnId:
        board: Board = self._boards.resolve(board_id)
        column = self.controller.add_column(board, name)
        return self._columns.issue(column)

    def list_columns(self, board_id: BoardId) -> List[Tuple[ColumnId, str]]:
        board: Board = self._boards.resolve(board_id)
        return [(self._columns.handle_of(c), c.name) for c in self.controller.columns(board)]

    # ── Tasks ────────────────────────────────────────

    def create_task(self, column_id: ColumnId, title: str) -> TaskId:
        column: Column = self._columns.resolve(column_id)
        task = self.controller.add_task(column, title)
        return self._tasks.issue(task)

    def list_tasks(self, column_id: ColumnId) -> List[Tuple[TaskId, str, Status, int]]:
        column: Column = self._columns.resolve(column_id)
        return [
            (self._tasks.handle_of(t), t.title, t.status, t.progress_percent())
            for t in self.controller.tasks(column)
        ]

    def get_task(self, task_id: TaskId) -> Dict[str, Any]:
        task: Task = self._tasks.resolve(task_id)
        data = task.to_dict()
        data["id"] = task_id
        return data

    def set_task_status(self, task_id: TaskId, status: Union[Status, str]) -> None:
        """Overwrite status. Raises ValueError for an unparseable status."""
        task: Task = self._tasks.resolve(task_id)
        self.controller.set_task_status(task, Status.from_str(status))

    # ── Milestones ───────────────────────────────────

    def add_milestone(self, task_id: TaskId, name: str) -> int:
        """Append a milestone, return its index within the task."""
        task: Task = self._tasks.resolve(task_id)
        self.controller.add_milestone(task, name)
        return len(task.milestones) - 1

    def toggle_milestone(self, task_id: TaskId, index: int) -> bool:
        task: Task = self._tasks.resolve(task_id)
        return self.controller.toggle_milestone(task, index)

    def list_milestones(self, task_id: TaskId) -> List[Tuple[int, str, bool]]:
        task: Task = self._tasks.resolve(task_id)
        return [(i, m.name, m.completed) for i, m in enumerate(task.milestones)]

    # ── Stats ────────────────────────────────────────

    def stats(self) -> Dict[str, int]:
        return {
            "users": len(self.auth),
            "sessions": len(self._sessions),
            "boards": len(self._boards),
            "columns": len(self._columns),
            "tasks": len(self._tasks),
        }
