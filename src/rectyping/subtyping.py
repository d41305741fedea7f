"""Structural subtyping."""

from __future__ import annotations

import logging

from rectyping.errors import UnsupportedTypeError
from rectyping.types import BooleanType, FuncType, NumberType, ObjectType, Type

logger = logging.getLogger(__name__)


def subtype(t1: Type, t2: Type) -> bool:  # noqa: PLR0911
    """Check if a value of type `t1` may be used where `t2` is expected.

    - Function parameters are contravariant and results covariant.
    - Objects use width subtyping: `t1` may carry properties `t2` lacks,
      and shared properties are compared covariantly.

    Neither side is unfolded. Callers that may hold recursive types must
    head-normalize them first with `simplify_type`.

    Args:
        t1: The candidate subtype.
        t2: The candidate supertype.

    Returns:
        True if `t1` is a subtype of `t2`.

    Raises:
        UnsupportedTypeError: If `t1` is a `Rec` or a type variable.

    """
    logger.debug("%s <: %s ?", t1, t2)
    match t1:
        case BooleanType() | NumberType():
            return t1.tag == t2.tag
        case FuncType(params1, ret1):
            if not isinstance(t2, FuncType) or len(params1) != len(t2.params):
                return False
            for p1, p2 in zip(params1, t2.params, strict=True):
                if not subtype(p2.type, p1.type):
                    return False
            return subtype(ret1, t2.ret_type)
        case ObjectType():
            if not isinstance(t2, ObjectType):
                return False
            for prop2 in t2.props:
                prop1 = t1.get(prop2.name)
                if prop1 is None or not subtype(prop1.type, prop2.type):
                    return False
            return True
    msg = f"Subtyping is not defined for {t1.tag} types: {t1}"
    raise UnsupportedTypeError(msg)
