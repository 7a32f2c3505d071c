"""Resource-function signature models and the manifest loader.

A signature manifest describes the resource functions of a service: their
method, path and parameters in one of three syntactic forms. Each form is
normalized into an ImplementedParameter before reconciliation.

Manifest format (YAML or JSON):

    name: petstore
    source: service.bal
    resources:
      - method: get
        path: /pets/[int petId]
        line: 12
        parameters:
          - {kind: path, name: petId, type_kind: INT_TYPE_DESC, line: 12}
          - {kind: required, name: limit, type: "int?", line: 12}
          - {kind: defaultable, name: tags, type: "string[]", default: "[]"}
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from param_check.errors import DocumentError
from param_check.validator.refs import unescape_identifier
from param_check.validator.types import path_kind_to_type, strip_optional
from .openapi import read_document

logger = structlog.get_logger(__name__)


class ParamKind(str, Enum):
    REQUIRED = "required"
    DEFAULTABLE = "defaultable"
    PATH = "path"


class SourceLocation(BaseModel):
    """Where a parameter or resource is declared."""

    model_config = ConfigDict(frozen=True)

    file: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.file or '<unknown>'}:{self.line}:{self.column}"


class RequiredParam(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["required"] = "required"
    name: str
    type: str
    location: SourceLocation = SourceLocation()


class DefaultableParam(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["defaultable"] = "defaultable"
    name: str
    type: str
    default: Any = None
    location: SourceLocation = SourceLocation()


class PathSegmentParam(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["path"] = "path"
    name: str
    type_kind: str  # INT_TYPE_DESC / STRING_TYPE_DESC / ...
    location: SourceLocation = SourceLocation()


ParameterNode = Annotated[Union[RequiredParam, DefaultableParam, PathSegmentParam], Field(discriminator="kind")]


class ImplementedParameter(BaseModel):
    """A parameter as the reconciler sees it: unescaped name plus normalized type."""

    model_config = ConfigDict(frozen=True)

    name: str
    declared_type: str
    kind: ParamKind
    location: SourceLocation = SourceLocation()


def normalize_parameter(node: ParameterNode) -> ImplementedParameter:
    """Normalize any parameter form into an ImplementedParameter."""
    if isinstance(node, PathSegmentParam):
        return _from_path_segment(node)
    return _from_named(node)


def _from_named(node: RequiredParam | DefaultableParam) -> ImplementedParameter:
    return ImplementedParameter(
        name=unescape_identifier(node.name),
        declared_type=strip_optional(node.type),
        kind=ParamKind(node.kind),
        location=node.location,
    )


def _from_path_segment(node: PathSegmentParam) -> ImplementedParameter:
    return ImplementedParameter(
        name=unescape_identifier(node.name),
        declared_type=path_kind_to_type(node.type_kind),
        kind=ParamKind.PATH,
        location=node.location,
    )


class ResourceFunction(BaseModel):
    """One resource function of a service."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    parameters: list[ParameterNode] = []
    location: SourceLocation = SourceLocation()

    def implemented_parameters(self) -> dict[str, ImplementedParameter]:
        """Normalized parameters keyed by name, in declaration order."""
        result: dict[str, ImplementedParameter] = {}
        for node in self.parameters:
            param = normalize_parameter(node)
            result.setdefault(param.name, param)
        return result


class ServiceManifest(BaseModel):
    name: str = ""
    source: str = ""
    resources: list[ResourceFunction] = []


def parse_manifest(file_path: Path) -> ServiceManifest:
    """Parse a signature manifest file into a ServiceManifest."""
    data = read_document(file_path)
    source = str(data.get("source") or file_path)

    resources = []
    for raw in data.get("resources") or []:
        if not isinstance(raw, dict):
            raise DocumentError(f"Resource entries in {file_path} must be mappings", {"path": str(file_path)})
        resources.append(_with_locations(raw, source))

    try:
        manifest = ServiceManifest(
            name=str(data.get("name", "")),
            source=source,
            resources=resources,
        )
    except ValidationError as e:
        raise DocumentError(f"Invalid signature manifest {file_path}: {e}", {"path": str(file_path)}) from e

    logger.debug("manifest_loaded", path=str(file_path), resources=len(manifest.resources))
    return manifest


def _with_locations(raw: dict, source: str) -> dict:
    """Turn the flat line/column keys of the manifest into SourceLocation data."""
    resource = dict(raw)
    resource["location"] = _location(resource, source)
    parameters = []
    for p in resource.get("parameters") or []:
        if isinstance(p, dict):
            p = dict(p)
            p["location"] = _location(p, source)
        parameters.append(p)
    resource["parameters"] = parameters
    return resource


def _location(raw: dict, source: str) -> dict:
    return {
        "file": str(raw.pop("file", source)),
        "line": raw.pop("line", 0),
        "column": raw.pop("column", 0),
    }
