"""
Application controller: the logged-in session and its boards.

Presentation layers call these operations and then re-read the model
through the snapshot accessors (boards/columns/tasks) to refresh.
"""
import logging
from typing import List, Optional, Tuple

from .auth import AuthService
from .errors import InvalidReference, InvalidSelection, NotLoggedIn
from .schema import Board, Column, Milestone, Status, Task, User

logger = logging.getLogger(__name__)


class PlannerController:
    """Holds current user and the board collection for one process."""

    def __init__(self, auth: Optional[AuthService] = None):
        self.auth = auth if auth is not None else AuthService()
        self.current_user: Optional[User] = None
        self._boards: List[Board] = []

    # ── Session ──────────────────────────────────────

    def login(self, username: str, password: str) -> Optional[User]:
        """Authenticate and make the user current. None on failure."""
        user = self.auth.login(username, password)
        if user is not None:
            self.current_user = user
            logger.info(f"Session started for {user.username}")
        return user

    def logout(self) -> None:
        if self.current_user is not None:
            logger.info(f"Session ended for {self.current_user.username}")
        self.current_user = None

    @property
    def logged_in(self) -> bool:
        return self.current_user is not None

    # ── Commands ─────────────────────────────────────

    def add_board(self, name: str) -> Board:
        """Append a board. Names need not be unique."""
        if self.current_user is None:
            raise NotLoggedIn("Log in before creating boards")
        board = Board(name=name)
        self._boards.append(board)
        logger.debug(f"Board added: {name!r} by {self.current_user.username}")
        return board

    def add_column(self, board: Board, name: str) -> Column:
        column = board.add_column(name)
        logger.debug(f"Column added: {name!r} on board {board.name!r}")
        return column

    def add_task(self, column: Column, title: str) -> Task:
        task = column.add_task(title)
        logger.debug(f"Task added: {title!r} in column {column.name!r}")
        return task

    def set_task_status(self, task: Task, status: Status) -> None:
        """Unconditional overwrite; every transition is allowed."""
        task.set_status(status)

    def add_milestone(self, task: Task, name: str) -> Milestone:
        return task.add_milestone(name)

    def toggle_milestone(self, task: Task, index: int) -> bool:
        """Flip milestone at index, return its new completed flag."""
        _check_selection(index)
        try:
            return task.toggle_milestone(index)
        except IndexError as e:
            raise InvalidReference(str(e))

    # ── Snapshots ────────────────────────────────────

    def boards(self) -> Tuple[Board, ...]:
        return tuple(self._boards)

    def columns(self, board: Board) -> Tuple[Column, ...]:
        return tuple(board.columns)

    def tasks(self, column: Column) -> Tuple[Task, ...]:
        return tuple(column.tasks)

    # ── Selection by display index ───────────────────

    def board_at(self, index: Optional[int]) -> Board:
        return _select(self._boards, index, "board")

    def column_at(self, board: Board, index: Optional[int]) -> Column:
        return _select(board.columns, index, "column")

    def task_at(self, column: Column, index: Optional[int]) -> Task:
        return _select(column.tasks, index, "task")


def _check_selection(index: Optional[int]) -> None:
    if index is None or index < 0:
        raise InvalidSelection("Nothing selected")


def _select(items: list, index: Optional[int], kind: str):
    """
    Pick an item by list position.

    None or a negative index means "no selection" (a list view with nothing
    highlighted); past the end means the reference does not exist.
    """
    _check_selection(index)
    if index >= len(items):
        raise InvalidReference(f"No {kind} #{index} (have {len(items)})")
    return items[index]
