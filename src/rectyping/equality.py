"""Exact equality of possibly recursive types.

A `RecType` stands for its own infinite unfolding, so two types are equal
when the (possibly infinite) trees they denote are equal. Comparing those
trees by plain structural recursion would unfold forever; instead the
comparison records every pair it starts unfolding and treats a pair it has
already seen as equal (bisimulation up to assumptions). Because only finitely
many distinct unfoldings are reachable from a finite type, this terminates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TypeAlias

from rectyping.errors import NonContractiveTypeError, UnboundTypeVarError
from rectyping.types import (
    BooleanType,
    FuncType,
    NumberType,
    ObjectType,
    Param,
    PropType,
    RecType,
    Type,
    TypeVarType,
)

logger = logging.getLogger(__name__)

Seen: TypeAlias = tuple[tuple[Type, Type], ...]
"""Pairs assumed equal while their unfoldings are being compared."""


def expand_type(typ: Type, var_name: str, replacement: Type) -> Type:
    """Substitute `replacement` for every free `TypeVar(var_name)` in `typ`.

    A nested `Rec` binding the same name shadows `var_name`, so its body is
    left untouched.

    Args:
        typ: The type to substitute into.
        var_name: Name of the type variable to replace.
        replacement: The type to put in its place.

    Returns:
        The substituted type. Unchanged subtrees are shared, not copied.

    """
    match typ:
        case BooleanType() | NumberType():
            return typ
        case FuncType(params, ret_type):
            return FuncType(
                tuple(
                    Param(p.name, expand_type(p.type, var_name, replacement))
                    for p in params
                ),
                expand_type(ret_type, var_name, replacement),
            )
        case ObjectType(props):
            return ObjectType(
                tuple(
                    PropType(p.name, expand_type(p.type, var_name, replacement))
                    for p in props
                ),
            )
        case TypeVarType(name):
            return replacement if name == var_name else typ
        case RecType(name, body):
            if name == var_name:
                return typ
            return RecType(name, expand_type(body, var_name, replacement))
    msg = f"Unknown type: {typ!r}"
    raise TypeError(msg)


def simplify_type(typ: Type) -> Type:
    """Unfold `typ` until its outermost constructor is not `Rec`.

    Only the head is unfolded; recursive occurrences further down remain
    `RecType` nodes. A `Rec` that unfolds back to itself without ever
    exposing a constructor (`mu X. X`) has no head-normal form and is
    rejected.
    """
    unfolded: set[Type] = set()
    while isinstance(typ, RecType):
        if typ in unfolded:
            msg = f"Recursive type has no structure: {typ}"
            raise NonContractiveTypeError(msg)
        unfolded.add(typ)
        typ = expand_type(typ.type, typ.name, typ)
    return typ


def alpha_equal(t1: Type, t2: Type, renaming: Mapping[str, str]) -> bool:  # noqa: PLR0911
    """Compare two types syntactically, up to renaming of `Rec` binders.

    Nothing is unfolded. Walking into a pair of `Rec` binders records that
    the left binder's name corresponds to the right one's; two type variables
    are equal when the left name maps to the right name.
    """
    match (t1, t2):
        case (BooleanType(), BooleanType()) | (NumberType(), NumberType()):
            return True
        case (FuncType(params1, ret1), FuncType(params2, ret2)):
            if len(params1) != len(params2):
                return False
            return all(
                alpha_equal(p1.type, p2.type, renaming)
                for p1, p2 in zip(params1, params2, strict=True)
            ) and alpha_equal(ret1, ret2, renaming)
        case (ObjectType(props1), ObjectType() as obj2):
            if len(props1) != len(obj2.props):
                return False
            for prop1 in props1:
                prop2 = obj2.get(prop1.name)
                if prop2 is None or not alpha_equal(prop1.type, prop2.type, renaming):
                    return False
            return True
        case (TypeVarType(name1), TypeVarType(name2)):
            return renaming.get(name1) == name2
        case (RecType(name1, body1), RecType(name2, body2)):
            return alpha_equal(body1, body2, {**renaming, name1: name2})
    return False


def _assumed(t1: Type, t2: Type, seen: Seen) -> bool:
    return any(
        alpha_equal(s1, t1, {}) and alpha_equal(s2, t2, {}) for s1, s2 in seen
    )


def type_eq_sub(t1: Type, t2: Type, seen: Seen) -> bool:  # noqa: PLR0911
    """Decide equality of `t1` and `t2` under the assumptions in `seen`.

    Args:
        t1: Left type.
        t2: Right type.
        seen: Pairs already being compared further up the recursion.

    Returns:
        True if the two types denote the same (possibly infinite) tree.

    Raises:
        UnboundTypeVarError: If a type variable is reached outside of the
            `Rec` binder that gives it meaning.

    """
    if _assumed(t1, t2, seen):
        logger.debug("assuming %s == %s", t1, t2)
        return True

    if isinstance(t1, RecType):
        logger.debug("unfolding left %s", t1)
        return type_eq_sub(simplify_type(t1), t2, (*seen, (t1, t2)))
    if isinstance(t2, RecType):
        logger.debug("unfolding right %s", t2)
        return type_eq_sub(t1, simplify_type(t2), (*seen, (t1, t2)))

    match t1:
        case BooleanType() | NumberType():
            return t1.tag == t2.tag
        case FuncType(params1, ret1):
            if not isinstance(t2, FuncType) or len(params1) != len(t2.params):
                return False
            for p1, p2 in zip(params1, t2.params, strict=True):
                if not type_eq_sub(p1.type, p2.type, seen):
                    return False
            return type_eq_sub(ret1, t2.ret_type, seen)
        case ObjectType(props1):
            if not isinstance(t2, ObjectType) or len(props1) != len(t2.props):
                return False
            for prop1 in props1:
                prop2 = t2.get(prop1.name)
                if prop2 is None or not type_eq_sub(prop1.type, prop2.type, seen):
                    return False
            return True
        case TypeVarType(name):
            msg = f"Type variable {name} is not bound by any Rec"
            raise UnboundTypeVarError(msg)
    msg = f"Unknown type: {t1!r}"
    raise TypeError(msg)


def type_equal(t1: Type, t2: Type) -> bool:
    """Return True if `t1` and `t2` are exactly equal types.

    Equality is structural and equi-recursive: a `Rec` equals its own
    unfolding, and two differently written recursive types are equal when
    their infinite unfoldings agree. Function parameter names and object
    property order are ignored.
    """
    return type_eq_sub(t1, t2, ())


type_equql = type_equal
