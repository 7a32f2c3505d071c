"""Parameter reconciliation between a contract operation and a resource function.

Two passes run over the same inputs:

* implementation -> contract: every implemented parameter must have a
  same-named contract parameter whose type maps onto the declared type.
* contract -> implementation: every non-exempt contract parameter must be
  implemented.

Nothing here raises on bad contract data. Unresolvable references are
skipped in both passes and every inconsistency becomes a Finding.
"""

from typing import Iterable

import structlog
from pydantic import BaseModel, ConfigDict, field_validator

from param_check.parser.base import SpecParameter
from param_check.parser.signature import ImplementedParameter, SourceLocation
from .findings import DiagnosticSink, Finding, FindingCollector, FindingKind, Severity
from .refs import normalize_path, resolve_parameter
from .types import ARRAY_MARKER, is_array_schema, is_array_type, oas_type_name, to_host_type

logger = structlog.get_logger(__name__)


class ValidationContext(BaseModel):
    """Per-operation metadata that every finding is reported against."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    severity: Severity = Severity.ERROR
    location: SourceLocation | None = None  # resource-level fallback
    exempt_locations: frozenset[str] = frozenset({"header"})

    @field_validator("exempt_locations")
    @classmethod
    def _lowercase_locations(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(loc.lower() for loc in value)


class ParameterReconciler:
    """Reconciles implemented parameters against contract parameters for one operation."""

    def __init__(self, context: ValidationContext, sink: DiagnosticSink | None = None):
        self.context = context
        self.sink = sink

    def reconcile(
        self,
        implemented: Iterable[ImplementedParameter],
        spec_params: list[SpecParameter] | None,
        components: dict[str, SpecParameter] | None = None,
    ) -> list[Finding]:
        """Run both passes and return the findings, implementation pass first."""
        implemented = list(implemented)
        spec_params = spec_params or []
        components = components or {}
        collector = FindingCollector()

        for param in implemented:
            self._check_implemented(param, spec_params, components, collector)
        self._check_documented(implemented, spec_params, components, collector)

        if self.sink is not None:
            for finding in collector.findings:
                self.sink.report(finding.kind, finding.location, finding.severity, *finding.message_args)

        logger.debug(
            "reconciliation_finished",
            method=self.context.method,
            path=self.context.path,
            findings=len(collector.findings),
        )
        return collector.findings

    def _check_implemented(
        self,
        param: ImplementedParameter,
        spec_params: list[SpecParameter],
        components: dict[str, SpecParameter],
        collector: FindingCollector,
    ) -> None:
        ctx = self.context
        documented = False

        for candidate in spec_params:
            resolved = resolve_parameter(candidate, components)
            if resolved is None or resolved.name != param.name:
                continue

            documented = True
            schema = resolved.param_schema
            oas_type = oas_type_name(schema)
            host_type = to_host_type(oas_type)
            declared = param.declared_type

            if host_type is None or (is_array_type(declared) and declared != host_type + ARRAY_MARKER):
                collector.report(
                    FindingKind.TYPE_MISMATCH_PARAMETER, param.location, ctx.severity,
                    oas_type + ARRAY_MARKER, declared, param.name, ctx.method, ctx.path,
                )
            elif host_type != declared and not (is_array_schema(schema) and is_array_type(declared)):
                collector.report(
                    FindingKind.TYPE_MISMATCH_PARAMETER, param.location, ctx.severity,
                    oas_type, declared, param.name, ctx.method, ctx.path,
                )
            # first name match decides, matching or not
            break

        if not documented:
            collector.report(
                FindingKind.UNDEFINED_PARAMETER, param.location, ctx.severity,
                param.name, ctx.method, normalize_path(ctx.path),
            )

    def _check_documented(
        self,
        implemented: list[ImplementedParameter],
        spec_params: list[SpecParameter],
        components: dict[str, SpecParameter],
        collector: FindingCollector,
    ) -> None:
        ctx = self.context
        names = {p.name for p in implemented}

        for candidate in spec_params:
            resolved = resolve_parameter(candidate, components)
            if resolved is None or resolved.name is None:
                continue
            if (resolved.location or "").lower() in ctx.exempt_locations:
                continue
            if resolved.name not in names:
                collector.report(
                    FindingKind.MISSING_PARAMETER, ctx.location, ctx.severity,
                    resolved.name, ctx.method, ctx.path,
                )


def reconcile(
    implemented: Iterable[ImplementedParameter],
    spec_params: list[SpecParameter] | None,
    components: dict[str, SpecParameter] | None,
    method: str,
    path: str,
    severity: Severity = Severity.ERROR,
    location: SourceLocation | None = None,
    sink: DiagnosticSink | None = None,
) -> list[Finding]:
    """Reconcile one operation's parameters without building the context by hand."""
    context = ValidationContext(method=method, path=path, severity=severity, location=location)
    return ParameterReconciler(context, sink).reconcile(implemented, spec_params, components)
