"""Violation and report models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Iterable


class Violation(BaseModel):
    """A dependency edge that breaks a configured rule."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rule: str
    from_module: str
    to_module: str
    explanation: str

    def sort_key(self) -> tuple[str, str, str]:
        return (self.rule, self.from_module, self.to_module)


class ViolationReport(BaseModel):
    """Immutable, deterministically ordered result of one conformance check."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    violations: tuple[Violation, ...] = Field(default_factory=tuple)

    @classmethod
    def from_violations(cls, violations: Iterable[Violation]) -> ViolationReport:
        """Build a report, dropping duplicates and sorting by (rule, from, to)."""
        unique = {v.sort_key(): v for v in violations}
        return cls(violations=tuple(unique[key] for key in sorted(unique)))

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> ViolationReport:
        return cls.from_violations(Violation.model_validate(r) for r in records)

    @property
    def ok(self) -> bool:
        return not self.violations

    def rule_names(self) -> list[str]:
        return sorted({v.rule for v in self.violations})

    def __len__(self) -> int:
        return len(self.violations)


__all__ = ["Violation", "ViolationReport"]
