"""Identifier and literal helpers for TypeScript emission.

Declaration names for per-operation types are derived from the operationId:

1. Every run of hyphens or whitespace becomes a single underscore.
2. Every other character outside ``[A-Za-z0-9_]`` becomes an underscore.
3. Repeated underscores are collapsed and leading/trailing ones trimmed.
4. The first character is upper-cased.

So ``list-pets`` becomes ``List_pets`` and its parameter declaration is
``List_petsParams``.
"""

from __future__ import annotations

import json
import re
from typing import Any

# ---------------------------------------------------------------------------
# Declaration names
# ---------------------------------------------------------------------------

_DASH_OR_SPACE_RUN = re.compile(r"[-\s]+")
_NON_IDENTIFIER_CHAR = re.compile(r"[^A-Za-z0-9_]")
_UNDERSCORE_RUN = re.compile(r"_+")
_BARE_KEY = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def sanitize_identifier(value: str) -> str:
    """Reduce *value* to ``[A-Za-z0-9_]`` characters without edge underscores.

    Example::

        sanitize_identifier("get pets/{id}")  # "get_pets_id"
    """
    result = _DASH_OR_SPACE_RUN.sub("_", value)
    result = _NON_IDENTIFIER_CHAR.sub("_", result)
    result = _UNDERSCORE_RUN.sub("_", result)
    return result.strip("_")


def operation_type_name(operation_id: str) -> str:
    """Sanitize an operationId and capitalize its first character."""
    name = sanitize_identifier(operation_id)
    return name[:1].upper() + name[1:]


def params_type_name(operation_id: str) -> str:
    return f"{operation_type_name(operation_id)}Params"


def request_body_type_name(operation_id: str) -> str:
    return f"{operation_type_name(operation_id)}RequestBody"


def response_type_name(operation_id: str, status_code: str) -> str:
    return f"{operation_type_name(operation_id)}Response{status_code}"


def reference_name(ref: str) -> str:
    """Return the last ``/``-separated segment of a ``$ref`` target string.

    No existence check is made: ``#/components/schemas/Widget`` gives
    ``Widget`` whether or not the registry defines it.
    """
    return ref.rsplit("/", 1)[-1]


def dedupe_name(name: str, emitted: dict[str, int]) -> str:
    """Return *name*, or a numbered variant if it was already emitted.

    *emitted* counts occurrences per requested name and is updated in place.
    The second ``Pet`` becomes ``Pet2``, the third ``Pet3``; a suffix that
    itself collides with an emitted name is bumped until free.
    """
    count = emitted.get(name, 0) + 1
    emitted[name] = count
    if count == 1:
        return name

    candidate = f"{name}{count}"
    while candidate in emitted:
        count += 1
        candidate = f"{name}{count}"
    emitted[candidate] = 1
    return candidate


# ---------------------------------------------------------------------------
# Keys and literals
# ---------------------------------------------------------------------------


def is_bare_identifier(key: str) -> bool:
    return bool(_BARE_KEY.match(key))


def property_key(key: str) -> str:
    """Emit *key* bare when it is a valid identifier, otherwise as a quoted string."""
    return key if is_bare_identifier(key) else string_literal(key)


def string_literal(value: str) -> str:
    """Quote *value* as a TypeScript string literal.

    JSON escaping covers quotes, backslashes and control characters; the
    line and paragraph separators are escaped too so the literal is valid in
    any JavaScript source.
    """
    return (
        json.dumps(value, ensure_ascii=False)
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def literal(value: Any) -> str:
    """Render an enum value as a TypeScript literal.

    Strings, numbers, booleans and null map to themselves. Any other value
    (a YAML date, a nested list) is rendered as the string form of the value.
    """
    if value is None or isinstance(value, (bool, int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return string_literal(value)
    return string_literal(str(value))
