# tests/conftest.py
import os

# 창 없이 돌리기
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random
from concurrent.futures import Future

import pygame
import pytest

from snowfall.geometry import Viewport


class FakeLoader:
    """load() 할 때마다 아직 안 끝난 Future를 돌려주고, 끝내는 건 테스트가 직접."""

    def __init__(self):
        self.requests = []
        self.closed = False

    def load(self, handle):
        future = Future()
        self.requests.append((handle, future))
        return future

    def shutdown(self):
        self.closed = True


@pytest.fixture
def viewport():
    return Viewport(400, 800)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fake_loader():
    return FakeLoader()


@pytest.fixture
def solid_image():
    def make(color, size=(4, 4)):
        surf = pygame.Surface(size)
        surf.fill(color)
        return surf
    return make
