from __future__ import annotations

from typing import TYPE_CHECKING

import orjson
import pytest
from pydantic import ValidationError

from report.format import (
    SUCCESS_MESSAGE,
    render_json,
    render_text,
    to_records,
    write_json,
)
from report.models import Violation, ViolationReport

if TYPE_CHECKING:
    from pathlib import Path


def _report() -> ViolationReport:
    return ViolationReport.from_violations(
        [
            Violation(
                rule="NoCyclicModuleDependency",
                from_module="B",
                to_module="A",
                explanation="dependency cycle: B -> A -> B",
            ),
            Violation(
                rule="DomainMustNotDependOnInfrastructure",
                from_module="Domain.Order",
                to_module="Infra.OrderRepo",
                explanation="Domain.Order (Domain) depends on Infra.OrderRepo",
            ),
            Violation(
                rule="NoCyclicModuleDependency",
                from_module="A",
                to_module="B",
                explanation="dependency cycle: A -> B -> A",
            ),
        ]
    )


def test_report_is_sorted_on_construction() -> None:
    report = _report()

    assert [(v.rule, v.from_module) for v in report.violations] == [
        ("DomainMustNotDependOnInfrastructure", "Domain.Order"),
        ("NoCyclicModuleDependency", "A"),
        ("NoCyclicModuleDependency", "B"),
    ]


def test_report_drops_duplicate_violations() -> None:
    violation = Violation(
        rule="R", from_module="a", to_module="b", explanation="x"
    )

    report = ViolationReport.from_violations([violation, violation])

    assert len(report) == 1


def test_report_is_immutable() -> None:
    report = _report()

    with pytest.raises(ValidationError):
        report.violations = ()  # type: ignore[misc]


def test_render_text_snapshot() -> None:
    assert render_text(_report()) == (
        "[DomainMustNotDependOnInfrastructure] Domain.Order -> Infra.OrderRepo: "
        "Domain.Order (Domain) depends on Infra.OrderRepo\n"
        "[NoCyclicModuleDependency] A -> B: dependency cycle: A -> B -> A\n"
        "[NoCyclicModuleDependency] B -> A: dependency cycle: B -> A -> B\n"
        "3 layer violations found.\n"
    )


def test_render_text_singular_summary() -> None:
    report = ViolationReport.from_violations(
        [Violation(rule="R", from_module="a", to_module="b", explanation="x")]
    )

    assert render_text(report).splitlines()[-1] == "1 layer violation found."


def test_render_text_empty_report() -> None:
    assert render_text(ViolationReport()) == f"{SUCCESS_MESSAGE}\n"


def test_records_carry_the_same_information_as_text() -> None:
    report = _report()

    records = to_records(report)
    rebuilt = ViolationReport.from_records(records)

    assert records[0] == {
        "rule": "DomainMustNotDependOnInfrastructure",
        "from_module": "Domain.Order",
        "to_module": "Infra.OrderRepo",
        "explanation": "Domain.Order (Domain) depends on Infra.OrderRepo",
    }
    assert rebuilt == report
    assert render_text(rebuilt) == render_text(report)


def test_render_json_payload() -> None:
    payload = orjson.loads(render_json(_report()))

    assert payload["ok"] is False
    assert payload["violation_count"] == 3
    assert payload["violations"] == to_records(_report())


def test_write_json_creates_parent_dirs(tmp_path: Path) -> None:
    target = tmp_path / "reports" / "layers.json"

    write_json(target, ViolationReport())

    assert orjson.loads(target.read_bytes()) == {
        "ok": True,
        "violation_count": 0,
        "violations": [],
    }
