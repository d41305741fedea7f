"""Conversion between terms/types and tagged builtins.

The external parser hands over programs as plain tagged dicts:

    {"tag": "add", "left": {"tag": "number", "n": 1}, "right": {"tag": "true"}}
    {"tag": "Func", "params": [{"name": "x", "type": {"tag": "Number"}}],
     "retType": {"tag": "Number"}}

Field names are camelCase on the wire (`retType`, `propName`, `funcName`)
and snake_case on the Python side.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import fields, is_dataclass
from functools import cache
from typing import Any, TypeVar, get_type_hints

from rectyping.nodes import Prop, Term
from rectyping.types import Param, PropType, Type

_TAG_KEY = "tag"

X = TypeVar("X")


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_builtins(obj: Any) -> Any:
    """Convert a Term, Type, or one of their parts to JSON-compatible builtins.

    Args:
        obj: A Term, Type, Param, PropType, Prop, sequence, or primitive

    Returns:
        Tagged dicts for terms and types, plain dicts for their parts,
        lists for sequences, and primitives unchanged.

    """
    if isinstance(obj, Term | Type):
        result: dict[str, Any] = {_TAG_KEY: obj.tag}
        for f in fields(obj):
            result[_to_camel(f.name)] = to_builtins(getattr(obj, f.name))
        return result

    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_builtins(getattr(obj, f.name)) for f in fields(obj)}

    if isinstance(obj, Sequence) and not isinstance(obj, str | bytes):
        return [to_builtins(item) for item in obj]

    return obj


def from_builtins(data: dict[str, Any]) -> Term | Type:
    """Deserialize a tagged dict to a Term or Type.

    Args:
        data: Dict with a 'tag' field

    Returns:
        The decoded Term (lowercase tags) or Type (capitalized tags)

    Raises:
        KeyError: If the 'tag' field or a required field is missing
        ValueError: If the tag is unknown

    """
    if _TAG_KEY not in data:
        msg = f"Missing required '{_TAG_KEY}' field"
        raise KeyError(msg)
    tag = data[_TAG_KEY]
    if tag in Term.registry:
        return _decode_tagged(Term.registry[tag], data)
    if tag in Type.registry:
        return _decode_tagged(Type.registry[tag], data)
    msg = f"Unknown tag '{tag}'"
    raise ValueError(msg)


def term_from_builtins(data: dict[str, Any]) -> Term:
    """Deserialize a tagged dict that must describe a Term."""
    return _expect(data, Term.registry, "term")


def type_from_builtins(data: dict[str, Any]) -> Type:
    """Deserialize a tagged dict that must describe a Type."""
    return _expect(data, Type.registry, "type")


def _expect(data: Any, registry: dict[str, type[X]], kind: str) -> X:
    if not isinstance(data, dict):
        msg = f"Expected a tagged {kind} object, got {type(data).__name__}"
        raise ValueError(msg)
    if _TAG_KEY not in data:
        msg = f"Missing required '{_TAG_KEY}' field"
        raise KeyError(msg)
    cls = registry.get(data[_TAG_KEY])
    if cls is None:
        msg = f"Unknown {kind} tag '{data[_TAG_KEY]}'. Available: {list(registry)}"
        raise ValueError(msg)
    return _decode_tagged(cls, data)


def _decode_tagged(cls: type[X], data: dict[str, Any]) -> X:
    hints = _field_hints(cls)
    values = {}
    for name, hint in hints.items():
        key = _to_camel(name)
        if key not in data:
            msg = f"Missing required '{key}' field for '{data[_TAG_KEY]}'"
            raise KeyError(msg)
        values[name] = _decode_value(hint, data[key])
    return cls(**values)


def _decode_part(cls: type[X], data: dict[str, Any]) -> X:
    values = {}
    for name, hint in _field_hints(cls).items():
        if name not in data:
            msg = f"Missing required '{name}' field for {cls.__name__}"
            raise KeyError(msg)
        values[name] = _decode_value(hint, data[name])
    return cls(**values)


@cache
def _field_hints(cls: type[Any]) -> dict[str, Any]:
    hints = get_type_hints(cls)
    return {f.name: hints[f.name] for f in fields(cls)}


_DECODERS: dict[Any, Callable[[Any], Any]] = {
    Term: term_from_builtins,
    Type: type_from_builtins,
    tuple[Term, ...]: lambda v: tuple(term_from_builtins(t) for t in v),
    tuple[Param, ...]: lambda v: tuple(_decode_part(Param, p) for p in v),
    tuple[PropType, ...]: lambda v: tuple(_decode_part(PropType, p) for p in v),
    tuple[Prop, ...]: lambda v: tuple(_decode_part(Prop, p) for p in v),
}


def _decode_value(hint: Any, value: Any) -> Any:
    if decoder := _DECODERS.get(hint):
        return decoder(value)
    # Primitives pass through
    return value
