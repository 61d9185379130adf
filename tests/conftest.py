"""Shared fixtures for botbus tests."""

from unittest.mock import MagicMock

import pytest

from botbus.commands import CommandBus

from helpers import make_update


@pytest.fixture
def bus():
    return CommandBus()


@pytest.fixture
def update():
    return make_update()


@pytest.fixture
def client():
    return MagicMock()
