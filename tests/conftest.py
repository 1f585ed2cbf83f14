"""Shared test fixtures for MiDaPlaner tests."""

import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from midaplaner.api import PlannerAPI
from midaplaner.auth import AuthService
from midaplaner.controller import PlannerController
from midaplaner.schema import Role


@pytest.fixture
def auth():
    return AuthService()


@pytest.fixture
def controller(auth):
    """Controller with manager/123 registered and logged in."""
    ctl = PlannerController(auth)
    auth.register("manager", "123", Role.MANAGER)
    ctl.login("manager", "123")
    return ctl


@pytest.fixture
def api():
    return PlannerAPI()


@pytest.fixture
def session(api):
    api.register("manager", "123", Role.MANAGER)
    return api.login("manager", "123")
