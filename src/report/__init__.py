"""Violation reports and their renderings."""

from report.format import render_json, render_text, to_records, write_json
from report.models import Violation, ViolationReport

__all__ = [
    "Violation",
    "ViolationReport",
    "render_json",
    "render_text",
    "to_records",
    "write_json",
]
