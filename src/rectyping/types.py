"""Type representation for the checker.

Types are immutable trees. Each concrete type class registers itself under a
tag (the same tag used by the tagged-dict interchange format), so the
registry doubles as the decoder table in `rectyping.codecs`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, dataclass_transform


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Type:
    """Base for type representations."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[Type]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register type subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.removesuffix("Type")

        if (existing := Type.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Type.registry[cls.tag] = cls

    def __str__(self) -> str:
        return type_name(self)


@dataclass(frozen=True)
class Param:
    """A named, typed function parameter.

    The name is only used in diagnostics; comparisons look at `type` alone.
    """

    name: str
    type: Type


@dataclass(frozen=True)
class PropType:
    """A named property of an object type."""

    name: str
    type: Type


class BooleanType(Type, tag="Boolean"):
    """Boolean type."""


class NumberType(Type, tag="Number"):
    """Number type."""


class FuncType(Type, tag="Func"):
    """Function type: (x: Number, y: Boolean) => Number."""

    params: tuple[Param, ...]
    ret_type: Type


class ObjectType(Type, tag="Object"):
    """Structural object type: { x: Number, y: Boolean }.

    Property order is kept for display but never matters for comparison.
    """

    props: tuple[PropType, ...]

    def get(self, name: str) -> PropType | None:
        """Look up a property by name."""
        return next((p for p in self.props if p.name == name), None)


class TypeVarType(Type, tag="TypeVar"):
    """Reference to the enclosing `RecType` binder with the same name."""

    name: str


class RecType(Type, tag="Rec"):
    """Equi-recursive type: inside `type`, `TypeVar(name)` stands for this node."""

    name: str
    type: Type


# =============================================================================
# Type name formatting: Type -> str
# =============================================================================


def _params_name(params: tuple[Param, ...]) -> str:
    return ", ".join(f"{p.name}: {type_name(p.type)}" for p in params)


_TYPE_FORMATTERS: dict[type[Type], Callable[[Any], str]] = {
    BooleanType: lambda _: "boolean",
    NumberType: lambda _: "number",
    FuncType: lambda t: f"({_params_name(t.params)}) => {type_name(t.ret_type)}",
    ObjectType: lambda t: (
        "{ "
        + "; ".join(f"{p.name}: {type_name(p.type)}" for p in t.props)
        + " }"
        if t.props
        else "{}"
    ),
    TypeVarType: lambda t: t.name,
    RecType: lambda t: f"mu {t.name}. {type_name(t.type)}",
}


def type_name(typ: Type) -> str:
    """Get a human-readable name for a Type."""
    if formatter := _TYPE_FORMATTERS.get(type(typ)):
        return formatter(typ)
    return typ.tag
