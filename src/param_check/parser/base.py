"""Data models for parsed API contracts.

The OpenAPI loader converts its input into these models; the reconciler
reads them without ever touching the raw document.
"""

import re

from pydantic import BaseModel, ConfigDict

PATH_TEMPLATE = re.compile(r"\{[^}]*\}|\[[^\]]*\]")


class ParamSchema(BaseModel):
    """The primitive/array part of a parameter schema."""

    model_config = ConfigDict(frozen=True)

    type: str | None = None  # string / integer / number / boolean / array / object
    format: str | None = None  # int32 / int64 / float / double / ...
    items: "ParamSchema | None" = None

    @property
    def item_type(self) -> str | None:
        if self.items is None:
            return None
        return self.items.type


class SpecParameter(BaseModel):
    """A single contract parameter (query, path, header, or cookie)."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    location: str | None = None  # query / path / header / cookie
    required: bool = False
    param_schema: ParamSchema | None = None
    ref: str | None = None  # raw $ref, resolved against the components table


class Operation(BaseModel):
    """A single contract operation with the parameters that apply to it."""

    model_config = ConfigDict(frozen=True)

    method: str  # get / post / put / delete / patch / ...
    path: str  # /pets/{petId}
    operation_id: str | None = None
    summary: str = ""
    parameters: list[SpecParameter] = []


class SpecDocument(BaseModel):
    """A parsed contract: its operations and reusable parameter components."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    version: str = ""
    operations: list[Operation] = []
    components: dict[str, SpecParameter] = {}

    def find_operation(self, method: str, path: str) -> Operation | None:
        """Find the operation for a method and path, ignoring template variable names."""
        key = (method.lower(), path_shape(path))
        for operation in self.operations:
            if (operation.method, path_shape(operation.path)) == key:
                return operation
        return None


def path_shape(path: str) -> str:
    """Reduce a path to its shape: /pets/{petId} and pets/[int id] both become /pets/{}."""
    segments = [s for s in path.strip().split("/") if s]
    return "/" + "/".join(PATH_TEMPLATE.sub("{}", s) for s in segments)
