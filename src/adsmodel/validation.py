"""Violation reporting shared by every schema family.

Validation never stops at the first problem: checks append to a
``ValidationResult`` so callers can show every issue at once.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from adsmodel.wire.message import WireMessage

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"


@dataclass
class Violation:
    """A single broken invariant."""

    field_path: str
    reason: str
    code: str
    severity: str = ERROR  # "error" or "warning"

    def __str__(self) -> str:
        return f"{self.field_path}: {self.reason}"


class ValidationError(Exception):
    """Raised for well-formed data that violates a semantic invariant."""

    def __init__(self, violations: List[Violation]) -> None:
        self.violations = list(violations)
        lines = "; ".join(str(v) for v in self.violations)
        super().__init__(f"{len(self.violations)} violation(s): {lines}")


@dataclass
class ValidationResult:
    """Outcome of validating a message."""

    violations: List[Violation] = field(default_factory=list)

    @property
    def errors(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == ERROR]

    @property
    def warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == WARNING]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> List[str]:
        return [v.code for v in self.violations]

    def add(
        self, field_path: str, reason: str, code: str, severity: str = ERROR
    ) -> None:
        if severity == WARNING:
            logger.warning(f"{field_path}: {reason}")
        self.violations.append(Violation(field_path, reason, code, severity))

    def extend(self, other: "ValidationResult") -> None:
        self.violations.extend(other.violations)

    def raise_for_violations(self) -> None:
        """Raise ValidationError if any error-severity violation was found."""
        if self.errors:
            raise ValidationError(self.errors)


def join_path(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def check_oneofs(
    message: WireMessage,
    result: ValidationResult,
    path: str = "",
    severity: str = ERROR,
) -> None:
    """Report every oneof group holding more than one member.

    Walks nested messages, repeated messages and map values so the same
    exclusivity check covers all schema families.
    """
    for group, members in message.__oneofs__.items():
        set_members = message.set_oneof_members(group)
        if len(set_members) > 1:
            result.add(
                join_path(path, group),
                f"only one of {', '.join(members)} may be set, "
                f"found {', '.join(set_members)}",
                "oneof_conflict",
                severity,
            )

    for name, spec in message.__wire_fields__.items():
        if spec.kind != "message" and spec.map_value != "message":
            continue
        value = getattr(message, name)
        child_path = join_path(path, name)
        if spec.repeated:
            for i, item in enumerate(value):
                check_oneofs(item, result, f"{child_path}[{i}]", severity)
        elif spec.kind == "map":
            for key, item in value.items():
                check_oneofs(item, result, f"{child_path}[{key}]", severity)
        elif value is not None:
            check_oneofs(value, result, child_path, severity)
