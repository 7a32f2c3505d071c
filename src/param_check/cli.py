"""CLI entry point for param-check."""

import json
from pathlib import Path

import click

from param_check.config import ValidatorConfig, load_config
from param_check.errors import ParamCheckError
from param_check.logging_config import configure_logging
from param_check.parser.openapi import parse_openapi
from param_check.parser.signature import parse_manifest
from param_check.validator.findings import Finding, Severity
from param_check.validator.refs import resolve_parameter
from param_check.validator.service import validate_service
from param_check.validator.types import ARRAY_MARKER, is_array_schema, oas_type_name


def _load_config(config_path: Path | None, severity: str | None, log_level: str | None) -> ValidatorConfig:
    """Load the config file and apply CLI overrides."""
    try:
        config = load_config(config_path)
    except ParamCheckError as e:
        raise click.ClickException(str(e)) from e

    overrides = {}
    if severity is not None:
        overrides["severity"] = Severity(severity)
    if log_level is not None:
        overrides["log_level"] = log_level
    return config.model_copy(update=overrides)


def _format_finding(finding: Finding) -> str:
    location = str(finding.location) if finding.location else "<contract>"
    return f"{location}: {finding.severity.value.upper()} [{finding.code}] {finding.message}"


def _is_failure(findings: list[Finding], config: ValidatorConfig) -> bool:
    if config.fail_on_warning:
        return bool(findings)
    return any(f.severity == Severity.ERROR for f in findings)


@click.group()
def main():
    """param-check: reconcile contract parameters with resource function signatures."""
    pass


@main.command()
@click.argument("contract_path", type=click.Path(exists=True, path_type=Path))
@click.argument("manifest_path", type=click.Path(exists=True, path_type=Path))
@click.option("--severity", default=None, type=click.Choice(["error", "warning"]), help="Severity of reported findings.")
@click.option("--format", "fmt", default="text", type=click.Choice(["text", "json"]), help="Output format.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Config file path.")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...).")
def validate(contract_path: Path, manifest_path: Path, severity: str | None, fmt: str, config_path: Path | None, log_level: str | None):
    """Validate the parameters of MANIFEST_PATH's resources against CONTRACT_PATH."""
    config = _load_config(config_path, severity, log_level)
    configure_logging(config.log_level, config.log_format)

    try:
        document = parse_openapi(contract_path)
        manifest = parse_manifest(manifest_path)
    except ParamCheckError as e:
        raise click.ClickException(str(e)) from e

    findings = validate_service(document, manifest, config)

    if fmt == "json":
        click.echo(json.dumps([f.to_dict() for f in findings], indent=2))
    else:
        for finding in findings:
            click.echo(_format_finding(finding))
        click.echo(f"{len(findings)} finding(s) in {len(manifest.resources)} resource(s).")

    if _is_failure(findings, config):
        raise SystemExit(1)


@main.command()
@click.argument("contract_path", type=click.Path(exists=True, path_type=Path))
def params(contract_path: Path):
    """List every operation of CONTRACT_PATH with its resolved parameters."""
    try:
        document = parse_openapi(contract_path)
    except ParamCheckError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"{document.title} {document.version}".strip())
    for operation in document.operations:
        click.echo(f"{operation.method.upper()} {operation.path}")
        for param in operation.parameters:
            resolved = resolve_parameter(param, document.components)
            if resolved is None:
                click.echo(f"  ? unresolved reference {param.ref}")
                continue
            type_name = oas_type_name(resolved.param_schema)
            if is_array_schema(resolved.param_schema):
                type_name += ARRAY_MARKER
            required = " (required)" if resolved.required else ""
            click.echo(f"  {resolved.name} [{resolved.location}] {type_name}{required}")
