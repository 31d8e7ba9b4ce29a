"""
Result presenters — sinks that report a validation outcome.

Every sink emits the same diagnostics (errors at error level, warnings at
warning level, both tagged with the source).  HtmlPanelPresenter also
prepends a summary panel to a DisplaySurface; LogReportSink is the
diagnostics-only variant for non-UI contexts.
"""

from __future__ import annotations

import html
from typing import Protocol, Sequence, runtime_checkable

from jsonguard.core.config import settings
from jsonguard.core.logging import get_logger
from jsonguard.reporting.surface import DisplaySurface

logger = get_logger(__name__)

_PANEL_STYLE = (
    "background:#fff7ed;color:#7c2d12;border:1px solid #fed7aa;padding:12px;"
    "margin:12px;border-radius:10px;font-family:system-ui,Segoe UI,Roboto,sans-serif"
)
_SUCCESS_STYLE = (
    "margin-top:8px;color:#166534;background:#dcfce7;border:1px solid #bbf7d0;"
    "padding:8px;border-radius:8px"
)
_WARNINGS_STYLE = "margin-top:8px;color:#854d0e"


@runtime_checkable
class ReportSink(Protocol):
    """Anything that can report a validation outcome for a source."""

    def present(self, source_name: str, errors: Sequence[str], warnings: Sequence[str]) -> None:
        ...


def log_diagnostics(source_name: str, errors: Sequence[str], warnings: Sequence[str]) -> None:
    """Emit the outcome to the error/warning diagnostic channels."""
    if errors:
        logger.error("json_validation", source=source_name, errors=list(errors))
    if warnings:
        logger.warning("json_validation", source=source_name, warnings=list(warnings))


class LogReportSink:
    """Diagnostics only."""

    def present(self, source_name: str, errors: Sequence[str], warnings: Sequence[str]) -> None:
        log_diagnostics(source_name, errors, warnings)


class HtmlPanelPresenter:
    """Prepend a visually distinct summary panel to a DisplaySurface."""

    def __init__(self, surface: DisplaySurface, title: str | None = None) -> None:
        self.surface = surface
        self.title = title or settings.REPORT_TITLE

    def present(self, source_name: str, errors: Sequence[str], warnings: Sequence[str]) -> None:
        self.surface.prepend(self.build_panel(source_name, errors, warnings))
        log_diagnostics(source_name, errors, warnings)

    def build_panel(self, source_name: str, errors: Sequence[str], warnings: Sequence[str]) -> str:
        if errors:
            error_block = (
                f'<div style="margin-top:8px"><b>Errors ({len(errors)}):</b>'
                f"{_bullet_list(errors)}</div>"
            )
        else:
            error_block = f'<div style="{_SUCCESS_STYLE}">No errors found.</div>'

        warning_block = ""
        if warnings:
            warning_block = (
                f'<div style="{_WARNINGS_STYLE}"><b>Warnings ({len(warnings)}):</b>'
                f"{_bullet_list(warnings)}</div>"
            )

        return (
            f'<div class="jsonguard-panel" style="{_PANEL_STYLE}">'
            f"<strong>{html.escape(self.title)}: <code>{html.escape(source_name)}</code></strong>"
            f"{error_block}{warning_block}</div>"
        )


def _bullet_list(lines: Sequence[str]) -> str:
    return "<ul>" + "".join(f"<li>{html.escape(line)}</li>" for line in lines) + "</ul>"
