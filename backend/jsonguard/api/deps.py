"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import AsyncGenerator

import httpx

from jsonguard.pipeline.steps.fetch_json import build_client


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield an httpx client for the duration of one request."""
    async with build_client() as client:
        yield client
