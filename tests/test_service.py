from pathlib import Path

from param_check.config import ValidatorConfig
from param_check.parser.openapi import parse_openapi
from param_check.parser.signature import parse_manifest
from param_check.validator.findings import FindingCollector, FindingKind, Severity
from param_check.validator.service import validate_service

FIXTURES = Path(__file__).parent / "fixtures"


class TestValidateService:
    def test_consistent_service(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        manifest = parse_manifest(FIXTURES / "petstore_service.yaml")
        assert validate_service(document, manifest) == []

    def test_drifted_service(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        manifest = parse_manifest(FIXTURES / "drifted_service.yaml")
        findings = validate_service(document, manifest)

        assert [(f.kind, f.message_args[0]) for f in findings] == [
            (FindingKind.TYPE_MISMATCH_PARAMETER, "int32"),
            (FindingKind.UNDEFINED_PARAMETER, "debug"),
            (FindingKind.MISSING_PARAMETER, "tags"),
            (FindingKind.TYPE_MISMATCH_PARAMETER, "integer"),
            (FindingKind.MISSING_PARAMETER, "verbose"),
        ]

    def test_findings_use_contract_method_and_path(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        manifest = parse_manifest(FIXTURES / "drifted_service.yaml")
        findings = validate_service(document, manifest)
        assert findings[3].message_args == ("integer", "string", "petId", "get", "/pets/{petId}")
        assert findings[4].location.line == 25

    def test_config_severity_and_exemptions(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        manifest = parse_manifest(FIXTURES / "drifted_service.yaml")
        config = ValidatorConfig(severity=Severity.WARNING, exempt_locations=["header", "query"])
        findings = validate_service(document, manifest, config)
        assert {f.severity for f in findings} == {Severity.WARNING}
        assert FindingKind.MISSING_PARAMETER not in {f.kind for f in findings}

    def test_sink_receives_every_finding(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        manifest = parse_manifest(FIXTURES / "drifted_service.yaml")
        sink = FindingCollector()
        findings = validate_service(document, manifest, sink=sink)
        assert sink.findings == findings

    def test_swagger2_body_parameters_not_reported(self, tmp_path):
        manifest_file = tmp_path / "svc.yaml"
        manifest_file.write_text(
            "resources:\n"
            "  - method: post\n"
            "    path: /pets\n"
            "    parameters:\n"
            "      - {kind: required, name: dryRun, type: boolean}\n"
        )
        document = parse_openapi(FIXTURES / "swagger2.yaml")
        assert validate_service(document, parse_manifest(manifest_file)) == []
