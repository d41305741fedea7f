"""Read and write the parser's tagged-dict interchange as JSON text.

Parsers written outside Python hand programs over as JSON documents whose
top level is a single tagged object, e.g. ``{"tag": "var", "name": "x"}``.
`term_from_json` is what a caller of `typecheck` normally wants; it refuses
a document that holds a type where a term is expected.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rectyping.codecs import (
    from_builtins,
    term_from_builtins,
    to_builtins,
    type_from_builtins,
)

if TYPE_CHECKING:
    from rectyping.nodes import Term
    from rectyping.types import Type


def to_json(obj: Term | Type, *, indent: int | None = 2) -> str:
    """Encode a term or type as JSON, with camelCase field names.

    Pass ``indent=None`` for a single line.
    """
    return json.dumps(to_builtins(obj), indent=indent)


def _load_tagged(source: str) -> dict[str, Any]:
    data = json.loads(source)
    if not isinstance(data, dict):
        msg = f"Top-level JSON value must be a tagged object, got {type(data).__name__}"
        raise ValueError(msg)
    return data


def from_json(source: str) -> Term | Type:
    """Decode a JSON document holding either a term or a type.

    The tag decides which: lowercase tags (``"if"``, ``"objectGet"``) are
    terms, capitalized ones (``"Func"``, ``"Rec"``) are types.

    Raises:
        json.JSONDecodeError: If `source` is not JSON at all
        ValueError: If the top level is not an object, or a tag is unknown
        KeyError: If a tag or a required field is missing

    """
    return from_builtins(_load_tagged(source))


def term_from_json(source: str) -> Term:
    """Decode a JSON document that must hold a term, ready for `typecheck`."""
    return term_from_builtins(_load_tagged(source))


def type_from_json(source: str) -> Type:
    """Decode a JSON document that must hold a type annotation."""
    return type_from_builtins(_load_tagged(source))
