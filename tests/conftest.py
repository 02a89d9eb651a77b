"""Shared helpers for the galaxy-export tests.

Nodes are simulated with ``httpx.MockTransport``: a routing handler looks up
the request host in a table of per-node behaviours.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, Dict

import httpx
import pytest

from galaxy_export.models.schemas import StarSystem

DESCRIPTIONS = {
    "O": "Blue Supergiant",
    "B": "Blue Giant",
    "A": "White Star",
    "F": "Yellow-White Star",
    "G": "Yellow Dwarf",
    "K": "Orange Dwarf",
    "M": "Red Dwarf",
}

SEEN_AT = "2024-05-01T12:30:45Z"


def system_payload(name: str, star_class: str = "G", x: float = 0.0, y: float = 0.0, z: float = 0.0,
                   last_seen_at: str = SEEN_AT) -> Dict[str, Any]:
    return {
        "name": name,
        "star_type": {"class": star_class, "description": DESCRIPTIONS.get(star_class, "Unknown")},
        "x": x,
        "y": y,
        "z": z,
        "last_seen_at": last_seen_at,
    }


def make_system(name: str, star_class: str = "G", x: float = 0.0, y: float = 0.0, z: float = 0.0,
                last_seen_at: str = SEEN_AT) -> StarSystem:
    return StarSystem.model_validate(system_payload(name, star_class, x, y, z, last_seen_at))


class FailingStream(httpx.AsyncByteStream):
    async def __aiter__(self):
        raise httpx.ReadError("connection reset while reading body")
        yield b""  # pragma: no cover


def refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def respond_with(payload: Any, delay: float = 0.0) -> Callable:
    async def handler(request: httpx.Request) -> httpx.Response:
        if delay:
            await asyncio.sleep(delay)
        return httpx.Response(200, json=payload)
    return handler


def node_transport(routes: Dict[str, Callable], calls: list | None = None) -> httpx.MockTransport:
    """Route each request by ``host:port``; unknown hosts refuse the connection."""

    async def handler(request: httpx.Request) -> httpx.Response:
        port = request.url.port or (443 if request.url.scheme == "https" else 80)
        address = f"{request.url.host}:{port}"
        if calls is not None:
            calls.append((address, request.url.path))
        route = routes.get(address, refuse)
        response = route(request)
        if asyncio.iscoroutine(response):
            response = await response
        return response

    return httpx.MockTransport(handler)


@pytest.fixture
def utc_seen_at() -> datetime:
    return datetime(2024, 5, 1, 12, 30, 45, tzinfo=timezone.utc)
