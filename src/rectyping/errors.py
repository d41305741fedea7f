"""Error types raised by the checker and the result wrapper around them.

Every rule violation in `typecheck` raises a subclass of `TypeCheckError`.
The exception's `str()` is the stable diagnostic message; `format()` adds
the offending types for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, cast

from rectyping.types import Param, Type, type_name


class RectypingError(Exception):
    """Base class for all errors raised by this package."""


class UnboundTypeVarError(RectypingError):
    """A type variable was reached outside of any `Rec` binder."""


class NonContractiveTypeError(RectypingError):
    """A recursive type unfolds to itself without exposing a constructor."""


class UnsupportedTypeError(RectypingError):
    """Subtyping was asked about a recursive type it does not define."""


@dataclass(eq=False)
class TypeCheckError(RectypingError):
    """Base class for type errors found in a term.

    `message` may be passed directly. Left empty, it is filled in from
    `template`, a `str.format` pattern over the subclass's fields.
    """

    kind: ClassVar[str] = "TypeCheckError"
    template: ClassVar[str] = "Type error"

    message: str = field(default="", kw_only=True)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.template.format_map(vars(self))
        super().__init__(self.message)

    def details(self) -> list[tuple[str, str]]:
        """Label/value pairs shown under the message by `format()`."""
        return []

    def format(self) -> str:
        """Format the error for display."""
        lines = [self.message]
        lines.extend(f"  {label + ':':<10}{value}" for label, value in self.details())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class NonBooleanConditionError(TypeCheckError):
    kind = "NonBooleanCondition"

    actual: Type

    template = "Condition of if must be a Boolean"

    def details(self) -> list[tuple[str, str]]:
        return [("Actual", type_name(self.actual))]


@dataclass(eq=False)
class BranchTypeMismatchError(TypeCheckError):
    kind = "BranchTypeMismatch"

    then_type: Type
    else_type: Type

    template = "Then and else branches must have the same type"

    def details(self) -> list[tuple[str, str]]:
        return [
            ("Then", type_name(self.then_type)),
            ("Else", type_name(self.else_type)),
        ]


@dataclass(eq=False)
class NonNumberOperandError(TypeCheckError):
    kind = "NonNumberOperand"

    left: Type
    right: Type

    template = "Both operands of add must be Numbers"

    def details(self) -> list[tuple[str, str]]:
        return [("Left", type_name(self.left)), ("Right", type_name(self.right))]


@dataclass(eq=False)
class UndefinedVariableError(TypeCheckError):
    kind = "UndefinedVariable"

    name: str

    template = "Undefined variable: {name}"


@dataclass(eq=False)
class NotAFunctionError(TypeCheckError):
    kind = "NotAFunction"

    actual: Type

    template = "Can only call functions"

    def details(self) -> list[tuple[str, str]]:
        return [("Actual", type_name(self.actual))]


@dataclass(eq=False)
class ArityMismatchError(TypeCheckError):
    kind = "ArityMismatch"

    expected: int
    actual: int

    template = "Argument count mismatch"

    def details(self) -> list[tuple[str, str]]:
        return [("Expected", str(self.expected)), ("Actual", str(self.actual))]


@dataclass(eq=False)
class ArgumentTypeMismatchError(TypeCheckError):
    kind = "ArgumentTypeMismatch"

    param: Param
    actual: Type

    template = "Argument type mismatch for parameter {param.name}"

    def details(self) -> list[tuple[str, str]]:
        return [
            ("Expected", type_name(self.param.type)),
            ("Actual", type_name(self.actual)),
        ]


@dataclass(eq=False)
class NotAnObjectError(TypeCheckError):
    kind = "NotAnObject"

    actual: Type

    template = "Can only get properties from objects"

    def details(self) -> list[tuple[str, str]]:
        return [("Actual", type_name(self.actual))]


@dataclass(eq=False)
class UnknownPropertyError(TypeCheckError):
    kind = "UnknownProperty"

    prop_name: str
    actual: Type

    template = "Property {prop_name} does not exist on object"

    def details(self) -> list[tuple[str, str]]:
        return [("Object", type_name(self.actual))]


@dataclass(eq=False)
class ReturnTypeMismatchError(TypeCheckError):
    kind = "ReturnTypeMismatch"

    declared: Type
    actual: Type

    template = "Return type does not match declared return type"

    def details(self) -> list[tuple[str, str]]:
        return [
            ("Declared", type_name(self.declared)),
            ("Actual", type_name(self.actual)),
        ]


@dataclass(frozen=True)
class CheckResult:
    """Result of checking a term without raising.

    Exactly one of `type` and `error` is set.
    """

    type: Type | None = None
    error: TypeCheckError | None = None

    def __post_init__(self) -> None:
        if (self.type is None) == (self.error is None):
            msg = "CheckResult needs exactly one of type and error"
            raise ValueError(msg)

    @property
    def is_valid(self) -> bool:
        """Return True if the term type checked."""
        return self.error is None

    def __bool__(self) -> bool:
        return self.is_valid

    def unwrap(self) -> Type:
        """Return the type, re-raising the error if checking failed."""
        if self.error is not None:
            raise self.error
        return cast("Type", self.type)

    def __str__(self) -> str:
        if self.error is not None:
            return f"CheckResult: {self.error.kind}\n  {self.error.format()}"
        return f"CheckResult: {type_name(cast('Type', self.type))}"
