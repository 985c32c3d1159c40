"""Pytest configuration and fixtures."""

from typing import Callable

import httpx
import pytest

from trust import prober
from utils.settings import get_settings

ENDPOINT_URL = "https://data.example.com/prices"


class FakeClock:
    """Stand-in for ``perf_counter``: every probe reads it twice, start then stop."""

    def __init__(self, latency_ms: float = 150) -> None:
        self.latency_ms = latency_ms
        self.calls = 0

    def __call__(self) -> float:
        tick = self.calls
        self.calls += 1
        base = 100.0 * (tick // 2)
        if tick % 2 == 0:
            return base
        return base + self.latency_ms / 1000


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(prober, "_clock", fake)
    return fake


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient whose network is the given handler."""

    def factory(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
