"""Findings: the structured diagnostics produced by reconciliation."""

from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from param_check.parser.signature import SourceLocation


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class FindingKind(str, Enum):
    MISSING_PARAMETER = "missing_parameter"
    UNDEFINED_PARAMETER = "undefined_parameter"
    TYPE_MISMATCH_PARAMETER = "type_mismatch_parameter"


# kind -> (code, template); templates are filled from Finding.message_args
MESSAGES = {
    FindingKind.MISSING_PARAMETER: (
        "PARAM_001",
        "missing implementation for the '{0}' parameter documented in the contract "
        "for the '{1}' operation on path '{2}'",
    ),
    FindingKind.UNDEFINED_PARAMETER: (
        "PARAM_002",
        "undefined parameter '{0}' in the '{1}' operation on path '{2}': "
        "it is not documented in the contract",
    ),
    FindingKind.TYPE_MISMATCH_PARAMETER: (
        "PARAM_003",
        "type mismatch: the contract declares '{0}' but the implementation declares '{1}' "
        "for the '{2}' parameter of the '{3}' operation on path '{4}'",
    ),
}


class Finding(BaseModel):
    """A single parameter inconsistency between contract and implementation."""

    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    severity: Severity
    location: SourceLocation | None = None
    message_args: tuple[str, ...] = ()

    @property
    def code(self) -> str:
        return MESSAGES[self.kind][0]

    @property
    def message(self) -> str:
        return MESSAGES[self.kind][1].format(*self.message_args)

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data.update(code=self.code, message=self.message)
        return data


class DiagnosticSink(Protocol):
    """Anything that accepts reported findings; the return value is ignored."""

    def report(self, kind: FindingKind, location: SourceLocation | None, severity: Severity, *args: str) -> None:
        ...


class FindingCollector:
    """In-memory sink that keeps findings in report order."""

    def __init__(self):
        self.findings: list[Finding] = []

    def report(self, kind: FindingKind, location: SourceLocation | None, severity: Severity, *args: str) -> None:
        self.findings.append(
            Finding(kind=kind, severity=severity, location=location, message_args=tuple(str(a) for a in args))
        )
