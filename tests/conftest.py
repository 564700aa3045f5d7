from __future__ import annotations

import httpx
import pytest


class FakeSleep:
    """Records requested backoff delays without waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def status_error(status: int, body=None, method: str = "GET", url: str = "http://test/resource"):
    request = httpx.Request(method, url)
    if body is None:
        response = httpx.Response(status, request=request)
    else:
        response = httpx.Response(status, json=body, request=request)
    return httpx.HTTPStatusError(f"status {status}", request=request, response=response)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()
