"""Общие фикстуры тестов змейки."""
import os
import sys

import numpy as np
import pytest

# Модули лежат в корне репозитория
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import SnakeDatabase
from env import Grid
from session import GameSession
from timers import Scheduler


class ScriptedRandom:
    """randint всегда возвращает следующее значение из списка (по кругу)"""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def randint(self, high):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return min(value, high - 1)


@pytest.fixture
def rng():
    return np.random.RandomState(42)


@pytest.fixture
def grid10():
    return Grid(10, 10)


@pytest.fixture
def db():
    database = SnakeDatabase(":memory:")
    yield database
    database.close()


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def session(db, scheduler, rng):
    return GameSession(20, 20, db=db, scheduler=scheduler, rng=rng)
