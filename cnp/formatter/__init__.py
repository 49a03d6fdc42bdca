"""Formatter layer."""

from cnp.formatter.report import (
    format_clean_result,
    format_json,
    format_plan,
    format_report,
)

__all__ = [
    "format_clean_result",
    "format_json",
    "format_plan",
    "format_report",
]
