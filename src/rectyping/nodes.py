"""Term nodes with automatic registration.

Terms are produced by an external parser; the checker only consumes them.
Tags follow the tagged-dict interchange format the parser emits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, dataclass_transform

from rectyping.types import Param, Type


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Term:
    """Base for term nodes."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[Term]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register term subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.lower()

        if (existing := Term.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Term.registry[cls.tag] = cls


@dataclass(frozen=True)
class Prop:
    """A property initializer in an object literal."""

    name: str
    term: Term


class TrueLit(Term, tag="true"):
    """The literal `true`."""


class FalseLit(Term, tag="false"):
    """The literal `false`."""


class NumberLit(Term, tag="number"):
    """A numeric literal."""

    n: float


class If(Term, tag="if"):
    """Conditional: `cond ? thn : els`."""

    cond: Term
    thn: Term
    els: Term


class Add(Term, tag="add"):
    left: Term
    right: Term


class Var(Term, tag="var"):
    name: str


class Func(Term, tag="func"):
    """Function literal: `(x: number, y: boolean) => body`."""

    params: tuple[Param, ...]
    body: Term


class Call(Term, tag="call"):
    func: Term
    args: tuple[Term, ...]


class Seq(Term, tag="seq"):
    """`body; rest`. The value of `body` is discarded."""

    body: Term
    rest: Term


class Const(Term, tag="const"):
    """`const name = init; rest`."""

    name: str
    init: Term
    rest: Term


class ObjectNew(Term, tag="objectNew"):
    """Object literal: `{ k: v, ... }`."""

    props: tuple[Prop, ...]


class ObjectGet(Term, tag="objectGet"):
    """Property access: `obj.prop_name`."""

    obj: Term
    prop_name: str


class RecFunc(Term, tag="recFunc"):
    """Recursive function declaration scoped over `rest`.

    `func_name` is visible inside `body` with the declared signature.
    """

    func_name: str
    params: tuple[Param, ...]
    ret_type: Type
    body: Term
    rest: Term
