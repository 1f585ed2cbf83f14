"""
Planner error taxonomy.

Core objects (AuthService, PlannerController) report failures the simple
way: False / None. The handle-based API raises these instead, and the
presentation layers (HTTP, CLI) translate them into their own idiom.
"""


class PlannerError(Exception):
    """Base class for all planner errors."""
    pass


class DuplicateUsername(PlannerError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(f"User '{username}' already exists")
        self.username = username


class AuthenticationFailure(PlannerError):
    """Raised on bad credentials or an unknown session handle."""
    pass


class NotLoggedIn(AuthenticationFailure):
    """Raised when an operation needs a logged-in user and there is none."""
    pass


class InvalidReference(PlannerError):
    """Raised when a board/column/task/milestone handle does not exist."""
    pass


class InvalidSelection(PlannerError):
    """Raised when the caller acts on nothing (no selection, missing field)."""
    pass
