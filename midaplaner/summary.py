"""
Plain-text projections of the planner model.

Read-only: nothing here mutates a board, column or task.
"""
from typing import Iterable

from .schema import Board, Column, Status, Task

STATUS_MARK = {
    Status.TO_DO: "○",
    Status.IN_PROGRESS: "◐",
    Status.DONE: "●",
}


def task_line(task: Task) -> str:
    """One list row: 'Write spec [TO_DO] - 0%'."""
    return f"{task.title} [{task.status.name}] - {task.progress_percent()}%"


def task_summary(task: Task) -> str:
    """Task row followed by its milestones as a checklist."""
    lines = [f"{STATUS_MARK[task.status]} {task_line(task)}"]
    for i, m in enumerate(task.milestones):
        box = "x" if m.completed else " "
        lines.append(f"    [{box}] {i}. {m.name}")
    return "\n".join(lines)


def column_summary(column: Column) -> str:
    lines = [f"{column.name} ({len(column.tasks)} tasks)"]
    if not column.tasks:
        lines.append("  (empty)")
    for task in column.tasks:
        lines.append("  " + task_summary(task).replace("\n", "\n  "))
    return "\n".join(lines)


def board_summary(board: Board) -> str:
    lines = [f"📋 {board.name}"]
    if not board.columns:
        lines.append("(empty)")
    for column in board.columns:
        lines.append(column_summary(column))
    return "\n".join(lines)


def boards_summary(boards: Iterable[Board]) -> str:
    boards = list(boards)
    if not boards:
        return "No boards."
    return "\n\n".join(board_summary(b) for b in boards)
