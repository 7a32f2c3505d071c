"""Reference resolution and name normalization.

A `$ref` is followed exactly once into the components table. Anything that
cannot be resolved yields None so callers can skip the parameter.
"""

import re

import structlog

from param_check.parser.base import SpecParameter

logger = structlog.get_logger(__name__)

UNICODE_ESCAPE = re.compile(r"\\u\{([0-9A-Fa-f]{1,6})\}")
CHAR_ESCAPE = re.compile(r"\\(.)")


def extract_reference_name(ref: str | None) -> str | None:
    """Return the component name a local reference points to.

    '#/components/parameters/limitParam' -> 'limitParam'. Returns None for
    external or malformed references.
    """
    if not ref or not ref.startswith("#") or "/" not in ref:
        return None
    name = ref.rsplit("/", 1)[-1]
    # JSON pointer escapes
    name = name.replace("~1", "/").replace("~0", "~")
    return name or None


def resolve_parameter(param: SpecParameter, components: dict[str, SpecParameter]) -> SpecParameter | None:
    """Resolve a parameter's `$ref` through the components table.

    The resolved parameter takes the component's own name when it has one,
    otherwise the reference name.
    """
    if param.ref is None:
        return param

    ref_name = extract_reference_name(param.ref)
    target = components.get(ref_name) if ref_name else None
    if target is None or target.ref is not None:
        logger.debug("reference_unresolved", ref=param.ref)
        return None

    return target.model_copy(update={"name": target.name or ref_name})


def unescape_identifier(name: str) -> str:
    """Remove identifier escaping: "'limit" -> "limit", "x\\-id" -> "x-id"."""
    if name.startswith("'"):
        name = name[1:]
    name = UNICODE_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), name)
    return CHAR_ESCAPE.sub(r"\1", name)


def normalize_path(path: str) -> str:
    """Normalize a resource path for display: '/pets//'petId/' -> '/pets/petId'."""
    segments = [unescape_identifier(s) for s in path.strip().split("/") if s]
    return "/" + "/".join(segments)
