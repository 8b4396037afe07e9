"""Text and structured rendering of violation reports.

Both forms carry the same information: every violation's rule, endpoints and
explanation, plus the violation count. Either one can be used as the sole
basis for assertions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson

if TYPE_CHECKING:
    from pathlib import Path

    from report.models import Violation, ViolationReport

SUCCESS_MESSAGE = "No layer violations found."


def format_violation(violation: Violation) -> str:
    return (
        f"[{violation.rule}] {violation.from_module} -> {violation.to_module}: "
        f"{violation.explanation}"
    )


def render_text(report: ViolationReport) -> str:
    """Render a report as console text, one line per violation."""
    if report.ok:
        return f"{SUCCESS_MESSAGE}\n"

    lines = [format_violation(v) for v in report.violations]
    count = len(report.violations)
    noun = "violation" if count == 1 else "violations"
    lines.append(f"{count} layer {noun} found.")
    return "\n".join(lines) + "\n"


def to_records(report: ViolationReport) -> list[dict[str, Any]]:
    """Return one plain dict per violation, in report order."""
    return [v.model_dump() for v in report.violations]


def _to_payload(report: ViolationReport) -> dict[str, Any]:
    return {
        "ok": report.ok,
        "violation_count": len(report.violations),
        "violations": to_records(report),
    }


def render_json(report: ViolationReport) -> bytes:
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(_to_payload(report), option=opts) + b"\n"


def write_json(path: Path, report: ViolationReport) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(render_json(report))


__all__ = [
    "SUCCESS_MESSAGE",
    "format_violation",
    "render_json",
    "render_text",
    "to_records",
    "write_json",
]
