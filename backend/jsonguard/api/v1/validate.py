"""
Validation endpoints — check a JSON resource, or preview it as a page.
"""

from __future__ import annotations

import html
import json
from typing import Any

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from jsonguard.api.deps import get_http_client
from jsonguard.api.schemas.validation import ValidateRequest, ValidateResponse
from jsonguard.core.config import settings
from jsonguard.core.errors import SchemaDefinitionError
from jsonguard.core.logging import get_logger
from jsonguard.pipeline.orchestrator import RenderOptions, validate_and_render
from jsonguard.reporting.presenter import HtmlPanelPresenter, LogReportSink
from jsonguard.reporting.surface import DisplaySurface
from jsonguard.validation.schema import Schema

logger = get_logger(__name__)

router = APIRouter(tags=["Validation"])

CONTENT_MOUNT_ID = "content"


def _parse_schema(payload: dict[str, Any]) -> Schema:
    try:
        return Schema.parse(payload)
    except SchemaDefinitionError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "errors": exc.details.get("errors", [])},
        ) from exc


def _check_locator(url: str) -> None:
    """
    Refuse locators the service must not fetch.

    Relative locators resolve against FETCH_BASE_URL.  Absolute ones are
    only fetched over http(s) from a host listed in FETCH_ALLOWED_HOSTS.
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": f"Invalid url: {exc}", "errors": []},
        ) from exc

    if not parsed.scheme and not parsed.host:
        return

    allowed = {host.lower() for host in settings.FETCH_ALLOWED_HOSTS}
    if parsed.scheme in ("http", "https") and parsed.host in allowed:
        return

    logger.warning("Refused locator", url=url, host=parsed.host)
    raise HTTPException(
        status_code=422,
        detail={"message": f"Refusing to fetch {url}: host not allowed", "errors": []},
    )


# ─── Validate ─────────────────────────────────────────────
@router.post("/validate", response_model=ValidateResponse)
async def validate_resource(
    body: ValidateRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> ValidateResponse:
    """Fetch the resource, validate it, and return errors/warnings."""
    _check_locator(body.url)
    schema = _parse_schema(body.schema_)
    outcome = await validate_and_render(
        RenderOptions(url=body.url, schema=schema),
        sink=LogReportSink(),
        client=client,
    )
    return ValidateResponse.model_validate(outcome.to_dict())


# ─── Preview ──────────────────────────────────────────────
@router.post("/preview", response_class=HTMLResponse)
async def preview_resource(
    body: ValidateRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> HTMLResponse:
    """
    Render a page for the resource: report panel on top, then the
    pretty-printed document (or the fallback message) in the content mount.
    """
    _check_locator(body.url)
    schema = _parse_schema(body.schema_)

    surface = DisplaySurface(title=f"{settings.REPORT_TITLE}: {body.url}")
    content = surface.add_mount(CONTENT_MOUNT_ID)

    def render(data: Any) -> None:
        pretty = json.dumps(data, indent=2, ensure_ascii=False)
        content.replace(f"<pre>{html.escape(pretty)}</pre>")

    outcome = await validate_and_render(
        RenderOptions(
            url=body.url,
            schema=schema,
            render=render,
            mount_on_error_id=CONTENT_MOUNT_ID,
        ),
        surface=surface,
        sink=HtmlPanelPresenter(surface),
        client=client,
    )
    logger.info("Preview built", url=body.url, status=outcome.status, failure=outcome.failure)
    return HTMLResponse(surface.to_html())
