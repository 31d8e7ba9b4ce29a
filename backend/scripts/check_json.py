#!/usr/bin/env python3
"""
Check a JSON resource against a schema file from the command line.

Prints the step-by-step run result, optionally writes the preview page.

Usage:
    cd backend
    python -m scripts.check_json https://example.com/data/menu.json schemas/menu.json
    python -m scripts.check_json data/menu.json schemas/menu.json --out preview.html
"""

from __future__ import annotations

import argparse
import asyncio
import html
import json
import sys
from pathlib import Path

import httpx

from jsonguard.core.config import settings
from jsonguard.core.errors import SchemaDefinitionError
from jsonguard.core.logging import setup_logging
from jsonguard.pipeline.orchestrator import RenderOptions, RunOutcome, validate_and_render
from jsonguard.reporting.surface import DisplaySurface
from jsonguard.validation.schema import Schema

CONTENT_MOUNT_ID = "content"


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a JSON resource against a schema file.")
    parser.add_argument("url", help="resource locator (absolute, or relative to FETCH_BASE_URL)")
    parser.add_argument("schema", type=Path, help="path to a JSON schema description")
    parser.add_argument("--out", type=Path, default=None, help="write the preview page here")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def _print_outcome(outcome: RunOutcome) -> None:
    """Pretty-print a RunOutcome."""
    print(f"\n{'─' * 50}")
    print(f"  URL          : {outcome.url}")
    print(f"  Status       : {outcome.status}")
    if outcome.run is not None:
        print(f"  Steps        : {outcome.run.steps_completed}/{outcome.run.total_steps}")
        print(f"  Duration     : {outcome.run.total_duration_ms}ms")
    if outcome.message:
        print(f"  Message      : {outcome.message}")

    if outcome.run is not None:
        print("\n  Step Results:")
        for sr in outcome.run.step_results:
            icon = "✓" if sr["status"] == "COMPLETED" else "✗" if sr["status"] == "FAILED" else "⊘"
            print(f"    {icon} {sr['step_name']} ({sr['duration_ms']}ms)")

    if outcome.validation is not None:
        for error in outcome.validation.errors:
            print(f"  ✗ {error}")
        for warning in outcome.validation.warnings:
            print(f"  ⚠ {warning}")

    print(f"{'─' * 50}\n")


async def run(argv: list[str] | None = None, client: httpx.AsyncClient | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(args.log_level)

    try:
        schema = Schema.parse(json.loads(args.schema.read_text(encoding="utf-8")))
    except (OSError, ValueError, SchemaDefinitionError) as exc:
        print(f"Cannot use schema {args.schema}: {exc}", file=sys.stderr)
        return 2

    surface = DisplaySurface(title=f"{settings.REPORT_TITLE}: {args.url}")
    content = surface.add_mount(CONTENT_MOUNT_ID)

    def render(data) -> None:
        content.replace(f"<pre>{html.escape(json.dumps(data, indent=2, ensure_ascii=False))}</pre>")

    outcome = await validate_and_render(
        RenderOptions(url=args.url, schema=schema, render=render, mount_on_error_id=CONTENT_MOUNT_ID),
        surface=surface,
        client=client,
    )
    _print_outcome(outcome)

    if args.out is not None:
        args.out.write_text(surface.to_html(), encoding="utf-8")
        print(f"Preview written to {args.out}")

    return 0 if outcome.ok else 1


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
