"""Service-level validation: pair resource functions with contract operations."""

import structlog

from param_check.config import ValidatorConfig
from param_check.parser.base import SpecDocument
from param_check.parser.signature import ServiceManifest
from .findings import DiagnosticSink, Finding
from .parameters import ParameterReconciler, ValidationContext

logger = structlog.get_logger(__name__)


def validate_service(
    document: SpecDocument,
    manifest: ServiceManifest,
    config: ValidatorConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> list[Finding]:
    """Reconcile every resource function that has a contract operation.

    Resources without a matching operation are skipped: operation-level drift
    is not a parameter finding.
    """
    config = config or ValidatorConfig()
    exempt = frozenset(loc.lower() for loc in config.exempt_locations)
    findings: list[Finding] = []

    for resource in manifest.resources:
        operation = document.find_operation(resource.method, resource.path)
        if operation is None:
            logger.info("resource_without_operation", method=resource.method, path=resource.path)
            continue

        context = ValidationContext(
            method=operation.method,
            path=operation.path,
            severity=config.severity,
            location=resource.location,
            exempt_locations=exempt,
        )
        reconciler = ParameterReconciler(context, sink)
        findings.extend(
            reconciler.reconcile(
                resource.implemented_parameters().values(),
                operation.parameters,
                document.components,
            )
        )

    logger.info("service_validated", resources=len(manifest.resources), findings=len(findings))
    return findings
