"""
FetchJsonStep — GET the JSON resource with caching disabled and decode it.

The decoded value is stored in ctx.data for the validation step.
Any transport, status or decode failure raises FetchError.
"""

from __future__ import annotations

import httpx

from jsonguard.core.config import settings
from jsonguard.core.errors import FetchError
from jsonguard.core.logging import get_logger
from jsonguard.pipeline.context import RunContext, StepResult
from jsonguard.pipeline.step import PipelineStep

logger = get_logger(__name__)

NO_CACHE_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


def build_client() -> httpx.AsyncClient:
    """HTTP client configured from settings.  Redirects are not followed."""
    return httpx.AsyncClient(
        base_url=settings.FETCH_BASE_URL,
        timeout=settings.FETCH_TIMEOUT_SECONDS,
        headers={"User-Agent": settings.FETCH_USER_AGENT},
        follow_redirects=False,
    )


class FetchJsonStep(PipelineStep):
    """Fetch the resource and decode its body as JSON."""

    name = "fetch_json"
    description = "Fetch JSON resource (no-cache)"

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """
        Args:
            client: Shared client to use.  When omitted a client is built
                    from settings for this single request and closed after.
        """
        self._client = client

    async def execute(self, ctx: RunContext) -> StepResult:
        started_at = self._now()

        logger.info("Fetching JSON", url=ctx.url, execution_id=ctx.execution_id)

        try:
            if self._client is not None:
                response = await self._client.get(ctx.url, headers=NO_CACHE_HEADERS)
            else:
                async with build_client() as client:
                    response = await client.get(ctx.url, headers=NO_CACHE_HEADERS)
        except Exception as exc:
            raise FetchError(
                f"{ctx.url} request failed: {exc}",
                execution_id=ctx.execution_id,
                step_name=self.name,
            ) from exc

        ctx.status_code = response.status_code
        if not response.is_success:
            raise FetchError(
                f"{ctx.url} HTTP {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
                execution_id=ctx.execution_id,
                step_name=self.name,
            )

        try:
            ctx.data = response.json()
        except ValueError as exc:
            raise FetchError(
                f"{ctx.url} is not valid JSON: {exc}",
                status_code=response.status_code,
                execution_id=ctx.execution_id,
                step_name=self.name,
            ) from exc
        ctx.loaded = True

        return self._success(started_at, metadata={
            "status_code": response.status_code,
            "bytes": len(response.content),
        })
