"""Gemeinsame Testkonfiguration für das core-Modul."""
from importlib import import_module
from unittest.mock import patch

import pytest
from django.core.cache import cache
from django.utils import translation

pytest_plugins = ["core.tests.factories"]


def run_task_inline(func, *args, **kwargs):
    """Führt einen Django-Q-Task sofort im aktuellen Prozess aus."""
    if isinstance(func, str):
        module_name, _, attr = func.rpartition(".")
        func = getattr(import_module(module_name), attr)
    func(*args)
    return "inline"


@pytest.fixture(autouse=True)
def clear_cache(db):
    """Leert den Cache vor und nach jedem Test.

    Der Cache liegt in der Datenbank, daher braucht jeder Test Zugriff darauf.
    """
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def reset_active_language():
    """Setzt die aktive Sprache nach jedem Test zurück (LocaleMiddleware aktiviert sie threadweit)."""
    yield
    translation.deactivate()


@pytest.fixture(autouse=True)
def inline_async_tasks():
    """Ersetzt ``async_task`` durch eine synchrone Ausführung."""
    with patch("core.collage_cache.async_task", side_effect=run_task_inline) as mock:
        yield mock


@pytest.fixture
def owner(user_factory):
    return user_factory(username="owner-user", role="OWNER")


@pytest.fixture
def superadmin(user_factory):
    return user_factory(username="super-user", role="SUPERADMIN")


@pytest.fixture
def dept_admin(user_factory):
    return user_factory(username="admin-user", role="ADMIN")


@pytest.fixture
def guest(user_factory):
    return user_factory(username="guest-user", role="GUEST")
