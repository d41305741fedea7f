"""Type checking of terms.

`typecheck` walks a term once, synthesizing a type for every node and
raising a `TypeCheckError` at the first rule violation. There is no
inference: function parameters and recursive function signatures carry
their types, and everything else is computed bottom-up.

Example usage:
    from rectyping import Add, NumberLit, typecheck

    typecheck(Add(NumberLit(1), NumberLit(2)))  # NumberType()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rectyping.env import TypeEnv
from rectyping.equality import simplify_type, type_equal
from rectyping.errors import (
    ArgumentTypeMismatchError,
    ArityMismatchError,
    BranchTypeMismatchError,
    CheckResult,
    NonBooleanConditionError,
    NonNumberOperandError,
    NotAFunctionError,
    NotAnObjectError,
    ReturnTypeMismatchError,
    TypeCheckError,
    UndefinedVariableError,
    UnknownPropertyError,
)
from rectyping.nodes import (
    Add,
    Call,
    Const,
    FalseLit,
    Func,
    If,
    NumberLit,
    ObjectGet,
    ObjectNew,
    RecFunc,
    Seq,
    Term,
    TrueLit,
    Var,
)
from rectyping.subtyping import subtype
from rectyping.types import (
    BooleanType,
    FuncType,
    NumberType,
    ObjectType,
    PropType,
    Type,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


def typecheck(term: Term, env: Mapping[str, Type] | None = None) -> Type:
    """Type check a term.

    Args:
        term: Root of the term tree to check.
        env: Types of the free variables of `term`. Not modified.

    Returns:
        The type of `term`.

    Raises:
        TypeCheckError: The first rule violation found, in evaluation order.

    """
    return _check(term, TypeEnv.of(env))


def check(term: Term, env: Mapping[str, Type] | None = None) -> CheckResult:
    """Type check a term, reporting failure as a value instead of raising.

    Args:
        term: Root of the term tree to check.
        env: Types of the free variables of `term`.

    Returns:
        CheckResult holding either the type or the first type error.

    Example:
        result = check(term)
        if not result:
            print(result.error.format())

    """
    try:
        return CheckResult(type=typecheck(term, env))
    except TypeCheckError as err:
        return CheckResult(error=err)


def _fail(err: TypeCheckError) -> TypeCheckError:
    logger.debug("%s: %s", err.kind, err.format())
    return err


def _check(term: Term, env: TypeEnv) -> Type:  # noqa: C901, PLR0911, PLR0912
    match term:
        case TrueLit() | FalseLit():
            return BooleanType()

        case NumberLit():
            return NumberType()

        case If(cond, thn, els):
            cond_type = simplify_type(_check(cond, env))
            if not isinstance(cond_type, BooleanType):
                raise _fail(NonBooleanConditionError(cond_type))
            then_type = _check(thn, env)
            else_type = _check(els, env)
            if not type_equal(then_type, else_type):
                raise _fail(BranchTypeMismatchError(then_type, else_type))
            return then_type

        case Add(left, right):
            left_type = simplify_type(_check(left, env))
            right_type = simplify_type(_check(right, env))
            if not (
                isinstance(left_type, NumberType) and isinstance(right_type, NumberType)
            ):
                raise _fail(NonNumberOperandError(left_type, right_type))
            return NumberType()

        case Var(name):
            if name not in env:
                raise _fail(UndefinedVariableError(name))
            return env[name]

        case Func(params, body):
            ret_type = _check(body, env.bind_params(params))
            return FuncType(params, ret_type)

        case Call(func, args):
            func_type = simplify_type(_check(func, env))
            if not isinstance(func_type, FuncType):
                raise _fail(NotAFunctionError(func_type))
            if len(func_type.params) != len(args):
                raise _fail(ArityMismatchError(len(func_type.params), len(args)))
            for arg, param in zip(args, func_type.params, strict=True):
                arg_type = _check(arg, env)
                if not subtype(arg_type, param.type):
                    raise _fail(ArgumentTypeMismatchError(param, arg_type))
            return func_type.ret_type

        case Seq(body, rest):
            _check(body, env)
            return _check(rest, env)

        case Const(name, init, rest):
            init_type = _check(init, env)
            return _check(rest, env.bind(name, init_type))

        case ObjectNew(props):
            return ObjectType(tuple(PropType(p.name, _check(p.term, env)) for p in props))

        case ObjectGet(obj, prop_name):
            obj_type = simplify_type(_check(obj, env))
            if not isinstance(obj_type, ObjectType):
                raise _fail(NotAnObjectError(obj_type))
            prop = obj_type.get(prop_name)
            if prop is None:
                raise _fail(UnknownPropertyError(prop_name, obj_type))
            return prop.type

        case RecFunc(func_name, params, ret_type, body, rest):
            func_type = FuncType(params, ret_type)
            body_env = env.bind(func_name, func_type).bind_params(params)
            body_type = _check(body, body_env)
            if not type_equal(body_type, ret_type):
                raise _fail(ReturnTypeMismatchError(ret_type, body_type))
            return _check(rest, env.bind(func_name, func_type))

    msg = f"Unknown term: {term!r}"
    raise TypeError(msg)
