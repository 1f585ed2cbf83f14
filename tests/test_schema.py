"""
Tests for the planner schema: enums, task progress, milestones, containers.
"""
import pytest

from midaplaner.schema import Board, Column, Milestone, Role, Status, Task, User


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Enums
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestStatusParsing:

    @pytest.mark.parametrize("raw, expected", [
        ("TO_DO", Status.TO_DO),
        ("to_do", Status.TO_DO),
        ("in-progress", Status.IN_PROGRESS),
        ("In Progress", Status.IN_PROGRESS),
        ("done", Status.DONE),
        (Status.DONE, Status.DONE),
    ])
    def test_from_str(self, raw, expected):
        assert Status.from_str(raw) is expected

    def test_unknown_status_raises(self):
        with pytest.raises(ValueError, match="Invalid status"):
            Status.from_str("archived")


def test_role_from_str():
    assert Role.from_str("MANAGER") is Role.MANAGER
    assert Role.from_str("employee") is Role.EMPLOYEE
    with pytest.raises(ValueError):
        Role.from_str("admin")


def test_user_repr_hides_password():
    user = User("manager", "123", Role.MANAGER)
    assert "123" not in repr(user)
    assert user.to_dict() == {"username": "manager", "role": "MANAGER"}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Task progress
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_fresh_task_defaults():
    """New task: TO_DO, no milestones, 0%"""
    task = Task("Write spec")
    assert task.status == Status.TO_DO
    assert task.milestones == []
    assert task.progress() == 0
    assert task.progress_percent() == 0


def test_done_without_milestones_is_100():
    task = Task("Write spec")
    task.set_status(Status.DONE)
    assert task.progress() == 100
    assert task.progress_percent() == 100


def test_in_progress_without_milestones_is_0():
    task = Task("Write spec", status=Status.IN_PROGRESS)
    assert task.progress_percent() == 0


@pytest.mark.parametrize("total, completed, expected", [
    (1, 0, 0),
    (1, 1, 100),
    (3, 1, 33),
    (3, 2, 66),
    (3, 3, 100),
    (7, 1, 14),
])
def test_milestone_progress_truncates(total, completed, expected):
    task = Task("t")
    for i in range(total):
        task.add_milestone(f"m{i}")
    for i in range(completed):
        task.toggle_milestone(i)
    assert task.progress_percent() == expected
    assert int(task.progress()) == expected


def test_milestones_override_status():
    """With milestones, DONE status alone does not give 100%"""
    task = Task("t", status=Status.DONE)
    task.add_milestone("only")
    assert task.progress_percent() == 0


def test_status_transitions_are_free():
    """All transitions allowed, DONE can revert"""
    task = Task("t")
    for target in (Status.DONE, Status.TO_DO, Status.IN_PROGRESS, Status.DONE, Status.IN_PROGRESS):
        task.set_status(target)
        assert task.status == target


def test_empty_title_accepted():
    task = Task("")
    assert task.title == ""
    assert task.to_dict()["title"] == ""


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Milestones
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_milestone_toggle():
    m = Milestone("draft")
    assert m.completed is False
    assert m.toggle() is True
    assert m.toggle() is False


def test_toggle_milestone_bad_index():
    task = Task("t")
    task.add_milestone("a")
    with pytest.raises(IndexError):
        task.toggle_milestone(1)
    with pytest.raises(IndexError):
        task.toggle_milestone(-1)


def test_task_to_dict():
    task = Task("Write spec")
    task.add_milestone("outline")
    task.toggle_milestone(0)
    assert task.to_dict() == {
        "title": "Write spec",
        "status": "TO_DO",
        "progress": 100,
        "milestones": [{"name": "outline", "completed": True}],
    }


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Containers
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_board_and_column_keep_insertion_order():
    board = Board("Sprint1")
    names = ["To Do", "Doing", "Done"]
    for n in names:
        board.add_column(n)
    assert [c.name for c in board.columns] == names

    column = board.columns[0]
    column.add_task("b")
    column.add_task("a")
    assert [t.title for t in column.tasks] == ["b", "a"]


def test_same_named_containers_are_distinct():
    assert Board("x") != Board("x")
    assert Column("x") != Column("x")
    assert Task("x") != Task("x")
