"""Type-name normalization between contract schemas and resource signatures.

Every function here is total: an input either maps to a name in the
signature vocabulary or to an explicit "cannot map" value.
"""

from param_check.parser.base import ParamSchema

ARRAY = "array"
ARRAY_MARKER = "[]"
OPTIONAL_MARKER = "?"
UNMATCHED = "unmatched"
UNKNOWN = "unknown"

PATH_TYPE_KINDS = {
    "INT_TYPE_DESC": "int",
    "STRING_TYPE_DESC": "string",
    "BOOLEAN_TYPE_DESC": "boolean",
    "FLOAT_TYPE_DESC": "float",
    "DECIMAL_TYPE_DESC": "decimal",
}

OAS_TO_HOST = {
    "integer": "int",
    "int32": "int",
    "int64": "int",
    "string": "string",
    "boolean": "boolean",
    "number": "decimal",
    "float": "float",
    "double": "float",
    "object": "map<json>",
}

NUMBER_FORMATS = {
    "integer": ("int32", "int64"),
    "number": ("float", "double"),
}


def strip_optional(type_name: str) -> str:
    """Drop one trailing optionality marker: 'int?' -> 'int'."""
    type_name = type_name.strip()
    if type_name.endswith(OPTIONAL_MARKER):
        type_name = type_name[: -len(OPTIONAL_MARKER)].rstrip()
    return type_name


def path_kind_to_type(kind: str) -> str:
    """Map a path-segment type descriptor kind to its primitive type name.

    Both 'INT_TYPE_DESC' and the short 'int' are accepted; anything not in
    PATH_TYPE_KINDS maps to UNMATCHED.
    """
    key = kind.strip().upper()
    if not key.endswith("_TYPE_DESC"):
        key = f"{key}_TYPE_DESC"
    return PATH_TYPE_KINDS.get(key, UNMATCHED)


def number_format_type(schema: ParamSchema) -> str:
    """Return the schema type, refined by its numeric format where one applies."""
    if schema.type is None:
        return UNKNOWN
    if schema.format in NUMBER_FORMATS.get(schema.type, ()):
        return schema.format
    return schema.type


def oas_type_name(schema: ParamSchema | None) -> str:
    """The contract-side type to compare: the item type for arrays, else the primitive."""
    if schema is None:
        return UNKNOWN
    if schema.type == ARRAY:
        return schema.item_type or UNKNOWN
    return number_format_type(schema)


def to_host_type(oas_type: str) -> str | None:
    return OAS_TO_HOST.get(oas_type)


def is_array_type(declared_type: str) -> bool:
    return ARRAY_MARKER in declared_type


def is_array_schema(schema: ParamSchema | None) -> bool:
    return schema is not None and schema.type == ARRAY
