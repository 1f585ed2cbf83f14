"""
Tests for PlannerController: session, commands, snapshots, selection.
"""
import pytest

from midaplaner.auth import AuthService
from midaplaner.controller import PlannerController
from midaplaner.errors import InvalidReference, InvalidSelection, NotLoggedIn
from midaplaner.schema import Role, Status


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Session
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_login_sets_current_user(auth):
    ctl = PlannerController(auth)
    auth.register("employee", "123", Role.EMPLOYEE)
    assert not ctl.logged_in

    user = ctl.login("employee", "123")
    assert user is auth.get("employee")
    assert ctl.current_user is user


def test_failed_login_keeps_previous_user(controller):
    before = controller.current_user
    assert controller.login("manager", "nope") is None
    assert controller.current_user is before


def test_logout(controller):
    controller.logout()
    assert controller.current_user is None
    with pytest.raises(NotLoggedIn):
        controller.add_board("Sprint1")


def test_controller_creates_own_auth():
    ctl = PlannerController()
    assert isinstance(ctl.auth, AuthService)
    assert ctl.boards() == ()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Commands
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_add_board_appends(controller):
    a = controller.add_board("Sprint1")
    b = controller.add_board("Sprint1")  # duplicates allowed
    assert controller.boards() == (a, b)


def test_add_column_and_task(controller):
    board = controller.add_board("Sprint1")
    col = controller.add_column(board, "To Do")
    task = controller.add_task(col, "Write spec")

    assert controller.columns(board) == (col,)
    assert controller.tasks(col) == (task,)
    assert task.status == Status.TO_DO
    assert task.milestones == []


def test_set_task_status_unconditional(controller):
    col = controller.add_column(controller.add_board("b"), "c")
    task = controller.add_task(col, "t")
    controller.set_task_status(task, Status.DONE)
    assert task.progress_percent() == 100
    controller.set_task_status(task, Status.TO_DO)
    assert task.progress_percent() == 0


def test_milestones_through_controller(controller):
    col = controller.add_column(controller.add_board("b"), "c")
    task = controller.add_task(col, "t")
    controller.add_milestone(task, "one")
    controller.add_milestone(task, "two")
    assert controller.toggle_milestone(task, 1) is True
    assert task.progress_percent() == 50


def test_toggle_missing_milestone(controller):
    col = controller.add_column(controller.add_board("b"), "c")
    task = controller.add_task(col, "t")
    with pytest.raises(InvalidReference):
        controller.toggle_milestone(task, 0)
    with pytest.raises(InvalidSelection):
        controller.toggle_milestone(task, -1)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Snapshots & selection
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_snapshots_are_read_only(controller):
    controller.add_board("Sprint1")
    snapshot = controller.boards()
    assert isinstance(snapshot, tuple)
    controller.add_board("Sprint2")
    assert len(snapshot) == 1
    assert [b.name for b in controller.boards()] == ["Sprint1", "Sprint2"]


def test_selection_by_index(controller):
    board = controller.add_board("Sprint1")
    col = controller.add_column(board, "To Do")
    task = controller.add_task(col, "Write spec")

    assert controller.board_at(0) is board
    assert controller.column_at(board, 0) is col
    assert controller.task_at(col, 0) is task


@pytest.mark.parametrize("index", [None, -1])
def test_no_selection(controller, index):
    controller.add_board("Sprint1")
    with pytest.raises(InvalidSelection):
        controller.board_at(index)


def test_selection_out_of_range(controller):
    board = controller.add_board("Sprint1")
    with pytest.raises(InvalidReference):
        controller.board_at(1)
    with pytest.raises(InvalidReference):
        controller.column_at(board, 0)
