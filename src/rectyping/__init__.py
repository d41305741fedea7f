"""rectyping - Type checker for a small language with equi-recursive types."""

from rectyping.codecs import (
    from_builtins,
    to_builtins,
)
from rectyping.env import TypeEnv
from rectyping.equality import (
    alpha_equal,
    expand_type,
    simplify_type,
    type_eq_sub,
    type_equal,
    type_equql,
)
from rectyping.errors import (
    ArgumentTypeMismatchError,
    ArityMismatchError,
    BranchTypeMismatchError,
    CheckResult,
    NonBooleanConditionError,
    NonContractiveTypeError,
    NonNumberOperandError,
    NotAFunctionError,
    NotAnObjectError,
    RectypingError,
    ReturnTypeMismatchError,
    TypeCheckError,
    UnboundTypeVarError,
    UndefinedVariableError,
    UnknownPropertyError,
    UnsupportedTypeError,
)
from rectyping.formats.json import (
    from_json,
    term_from_json,
    to_json,
    type_from_json,
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
    Prop,
    RecFunc,
    Seq,
    Term,
    TrueLit,
    Var,
)
from rectyping.subtyping import subtype
from rectyping.typecheck import check, typecheck
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
    type_name,
)

__all__ = [
    # Terms
    "Add",
    # Errors
    "ArgumentTypeMismatchError",
    "ArityMismatchError",
    # Types
    "BooleanType",
    "BranchTypeMismatchError",
    "Call",
    # Type checking
    "CheckResult",
    "Const",
    "FalseLit",
    "Func",
    "FuncType",
    "If",
    "NonBooleanConditionError",
    "NonContractiveTypeError",
    "NonNumberOperandError",
    "NotAFunctionError",
    "NotAnObjectError",
    "NumberLit",
    "NumberType",
    "ObjectGet",
    "ObjectNew",
    "ObjectType",
    "Param",
    "Prop",
    "PropType",
    "RecFunc",
    "RecType",
    "RectypingError",
    "ReturnTypeMismatchError",
    "Seq",
    "Term",
    "TrueLit",
    "Type",
    "TypeCheckError",
    # Environments
    "TypeEnv",
    "TypeVarType",
    "UnboundTypeVarError",
    "UndefinedVariableError",
    "UnknownPropertyError",
    "UnsupportedTypeError",
    "Var",
    # Type relations
    "alpha_equal",
    "check",
    "expand_type",
    # Serialization
    "from_builtins",
    "from_json",
    "simplify_type",
    "subtype",
    "term_from_json",
    "to_builtins",
    "to_json",
    "type_eq_sub",
    "type_equal",
    "type_equql",
    "type_from_json",
    "type_name",
    "typecheck",
]
