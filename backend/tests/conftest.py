"""Shared fixtures: fake HTTP transports and display surfaces."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from jsonguard.reporting.surface import DisplaySurface

BASE_URL = "https://data.test"


def json_handler(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Handler that answers every request with `payload` as JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return handler


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)


@pytest.fixture
def surface() -> DisplaySurface:
    page = DisplaySurface(title="test page")
    page.add_mount("app")
    return page


@pytest.fixture
def menu_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "required": ["title", "items"],
        "properties": {
            "title": {"type": "string"},
            "items": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "object",
                    "required": ["name", "price"],
                    "properties": {
                        "name": {"type": "string"},
                        "price": {"type": "number"},
                    },
                },
            },
        },
    }


@pytest.fixture
def menu_document() -> dict[str, Any]:
    return {
        "title": "Lunch",
        "items": [
            {"name": "Soup", "price": 4.5},
            {"name": "Bread", "price": 2},
        ],
    }
