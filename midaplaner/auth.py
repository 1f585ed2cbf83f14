"""
In-memory user registry.

Usernames are unique and case-sensitive. Passwords are compared by exact
string equality and kept in plaintext.
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .schema import Role, User

logger = logging.getLogger(__name__)

SeedEntry = Union[Tuple[str, str, Role], Dict[str, str]]


class AuthService:
    """Owns the user registry; exposes register/login."""

    def __init__(self):
        self._users: Dict[str, User] = {}

    def register(self, username: str, password: str, role: Role = Role.EMPLOYEE) -> bool:
        """
        Register a new user.

        Returns False (and leaves the existing user untouched) when the
        username is taken, True otherwise.
        """
        if username in self._users:
            logger.info(f"Registration rejected, user exists: {username}")
            return False
        self._users[username] = User(username=username, password=password, role=role)
        logger.info(f"Registered user {username} ({role.name})")
        return True

    def login(self, username: str, password: str) -> Optional[User]:
        """Return the user on an exact credential match, else None."""
        user = self._users.get(username)
        if user is not None and user.password == password:
            return user
        # same outcome for unknown user and wrong password
        logger.info(f"Login failed for {username}")
        return None

    def get(self, username: str) -> Optional[User]:
        return self._users.get(username)

    def users(self) -> List[User]:
        return list(self._users.values())

    def seed(self, entries: Iterable[SeedEntry]) -> int:
        """
        Register a batch of users, skipping ones that already exist.

        Entries are (username, password, role) tuples or dicts with
        username/password/role keys (role as name or value string).
        Malformed entries are logged and skipped. Returns how many users
        were added.
        """
        added = 0
        for entry in entries:
            try:
                username, password, role = self._seed_fields(entry)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping seed user {entry!r}: {e}")
                continue
            if self.register(username, password, role):
                added += 1
        return added

    @staticmethod
    def _seed_fields(entry: SeedEntry) -> Tuple[str, str, Role]:
        if isinstance(entry, dict):
            username = entry["username"]
            password = entry["password"]
            role = entry.get("role", Role.EMPLOYEE)
        else:
            username, password, role = entry
        if not isinstance(username, str) or not username:
            raise ValueError("username must be a non-empty string")
        if password is None or isinstance(password, (list, dict)):
            raise ValueError("password must be a string")
        return username, str(password), Role.from_str(role)

    def __contains__(self, username: str) -> bool:
        return username in self._users

    def __len__(self) -> int:
        return len(self._users)
