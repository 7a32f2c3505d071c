"""OpenAPI / Swagger contract parser.

Parses OpenAPI 3.x and Swagger 2.0 documents into SpecDocument models.
Only the parameter contract is kept: bodies and responses are dropped.
"""

from pathlib import Path

import structlog
import yaml

from param_check.errors import DocumentError
from .base import Operation, ParamSchema, SpecDocument, SpecParameter

logger = structlog.get_logger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Swagger 2.0 request-body parameters; bodies are not part of the parameter contract
BODY_LOCATIONS = ("body", "formData")


def read_document(file_path: Path) -> dict:
    """Read a YAML or JSON file into a dict, raising DocumentError on failure."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"Cannot read {file_path}: {e}", {"path": str(file_path)}) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentError(f"Invalid YAML/JSON in {file_path}: {e}", {"path": str(file_path)}) from e

    if not isinstance(data, dict):
        raise DocumentError(f"Expected a mapping at the top of {file_path}", {"path": str(file_path)})
    return data


def parse_openapi(file_path: Path) -> SpecDocument:
    """Parse an OpenAPI/Swagger file into a SpecDocument."""
    doc = read_document(file_path)
    if "openapi" not in doc and "swagger" not in doc:
        raise DocumentError(f"{file_path} is not an OpenAPI or Swagger document", {"path": str(file_path)})
    document = build_document(doc)
    logger.debug(
        "contract_loaded",
        path=str(file_path),
        operations=len(document.operations),
        components=len(document.components),
    )
    return document


def build_document(doc: dict) -> SpecDocument:
    """Build a SpecDocument from an already-loaded OpenAPI mapping."""
    info = doc.get("info") or {}
    operations = []

    for path, path_item in (doc.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        shared = _parse_parameters(path_item.get("parameters") or [])

        for method, operation in path_item.items():
            if method.lower() not in HTTP_METHODS or not isinstance(operation, dict):
                continue

            params = _merge_parameters(shared, _parse_parameters(operation.get("parameters") or []))
            operations.append(
                Operation(
                    method=method.lower(),
                    path=str(path),
                    operation_id=operation.get("operationId"),
                    summary=operation.get("summary") or "",
                    parameters=params,
                )
            )

    return SpecDocument(
        title=str(info.get("title", "")),
        version=str(info.get("version", "")),
        operations=operations,
        components=_parse_components(doc),
    )


def _parse_components(doc: dict) -> dict[str, SpecParameter]:
    # Swagger 2.0 keeps reusable parameters at the top level
    raw = dict(doc.get("parameters") or {})
    raw.update((doc.get("components") or {}).get("parameters") or {})
    return {str(name): _parse_parameter(p) for name, p in raw.items() if _is_parameter(p)}


def _parse_parameters(params: list) -> list[SpecParameter]:
    return [_parse_parameter(p) for p in params if _is_parameter(p)]


def _is_parameter(p) -> bool:
    return isinstance(p, dict) and p.get("in") not in BODY_LOCATIONS


def _parse_parameter(p: dict) -> SpecParameter:
    if "$ref" in p:
        return SpecParameter(ref=str(p["$ref"]))

    schema = p.get("schema")
    if schema is None and "type" in p:
        # Swagger 2.0: type, format and items live on the parameter itself
        schema = p

    name = p.get("name")
    return SpecParameter(
        name=str(name) if name is not None else None,
        location=p.get("in"),
        required=bool(p.get("required", False)),
        param_schema=_parse_schema(schema),
    )


def _parse_schema(schema) -> ParamSchema | None:
    if not isinstance(schema, dict):
        return None
    return ParamSchema(
        type=_schema_type(schema.get("type")),
        format=schema.get("format"),
        items=_parse_schema(schema.get("items")),
    )


def _schema_type(value) -> str | None:
    # OpenAPI 3.1 allows a list of types, e.g. [integer, "null"]
    if isinstance(value, list):
        value = next((t for t in value if t != "null"), None)
    return str(value) if value is not None else None


def _merge_parameters(shared: list[SpecParameter], own: list[SpecParameter]) -> list[SpecParameter]:
    """Operation-level parameters override path-level ones with the same name and location."""
    merged = {_param_key(p): p for p in shared}
    for p in own:
        merged[_param_key(p)] = p
    return list(merged.values())


def _param_key(p: SpecParameter) -> tuple:
    if p.ref is not None:
        return ("$ref", p.ref)
    return (p.name, p.location)
