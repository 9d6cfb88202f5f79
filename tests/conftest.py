"""Shared fixtures."""

from __future__ import annotations

import random

import pytest

from sena_simulator import create_app
from sena_simulator.config import TestingConfig
from sena_simulator.services.draw_service import DrawService


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    app.extensions["simulation_jobs"].shutdown(wait=True)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def draw_service():
    return DrawService(random.Random(20240611))


class ScriptedDrawService(DrawService):
    """Returns pre-set draws in order: the reference first, then each ticket."""

    def __init__(self, draws):
        super().__init__(random.Random(0))
        self._draws = iter(draws)

    def draw_distinct_numbers(self, count, universe_max=60):
        ticket = next(self._draws)
        assert len(ticket) == count
        return tuple(sorted(ticket))


@pytest.fixture
def scripted_draws():
    return ScriptedDrawService
