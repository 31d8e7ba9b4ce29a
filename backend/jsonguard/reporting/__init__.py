"""Report sinks and the display surface they write to."""

from jsonguard.reporting.presenter import HtmlPanelPresenter, LogReportSink, ReportSink
from jsonguard.reporting.surface import DisplaySurface, Mount

__all__ = ["DisplaySurface", "Mount", "ReportSink", "HtmlPanelPresenter", "LogReportSink"]
