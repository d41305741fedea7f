"""Tests for rectyping.equality module."""

import pytest

from rectyping.equality import (
    alpha_equal,
    expand_type,
    simplify_type,
    type_eq_sub,
    type_equal,
    type_equql,
)
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

NUM = NumberType()
BOOL = BooleanType()


def obj(**props: Type) -> ObjectType:
    """Build an object type, keeping keyword order."""
    return ObjectType(tuple(PropType(name, t) for name, t in props.items()))


def fn(*params: Type, ret: Type) -> FuncType:
    """Build a function type with positional parameter names."""
    return FuncType(tuple(Param(f"p{i}", t) for i, t in enumerate(params)), ret)


def var(name: str) -> TypeVarType:
    """Build a type variable."""
    return TypeVarType(name)


# mu L. { head: number, tail: L }
NUM_LIST = RecType("L", obj(head=NUM, tail=var("L")))


class TestExpandType:
    """Test substitution of type variables."""

    def test_replaces_free_variable(self) -> None:
        assert expand_type(obj(a=var("X")), "X", NUM) == obj(a=NUM)

    def test_leaves_other_variables_alone(self) -> None:
        assert expand_type(var("Y"), "X", NUM) == var("Y")

    def test_recurses_into_functions(self) -> None:
        typ = fn(var("X"), ret=var("X"))
        assert expand_type(typ, "X", BOOL) == fn(BOOL, ret=BOOL)

    def test_keeps_parameter_names(self) -> None:
        typ = FuncType((Param("n", var("X")),), NUM)
        assert expand_type(typ, "X", NUM) == FuncType((Param("n", NUM),), NUM)

    def test_stops_at_shadowing_binder(self) -> None:
        inner = RecType("X", obj(next=var("X")))
        assert expand_type(inner, "X", NUM) == inner

    def test_enters_binder_with_other_name(self) -> None:
        typ = RecType("Y", fn(var("X"), ret=var("Y")))
        assert expand_type(typ, "X", NUM) == RecType("Y", fn(NUM, ret=var("Y")))

    def test_primitives_unchanged(self) -> None:
        assert expand_type(NUM, "X", BOOL) == NUM
        assert expand_type(BOOL, "X", NUM) == BOOL


class TestSimplifyType:
    """Test head normalization of recursive types."""

    def test_unfolds_one_level(self) -> None:
        assert simplify_type(NUM_LIST) == obj(head=NUM, tail=NUM_LIST)

    def test_non_recursive_unchanged(self) -> None:
        typ = obj(x=NUM)
        assert simplify_type(typ) is typ

    def test_idempotent(self) -> None:
        once = simplify_type(NUM_LIST)
        assert simplify_type(once) == once

    def test_nested_binders_unfold_until_constructor(self) -> None:
        typ = RecType("A", RecType("B", obj(a=var("A"), b=var("B"))))
        result = simplify_type(typ)
        assert isinstance(result, ObjectType)

    def test_rejects_type_without_structure(self) -> None:
        with pytest.raises(NonContractiveTypeError):
            simplify_type(RecType("X", var("X")))

    def test_rejects_cycle_through_nested_binders(self) -> None:
        with pytest.raises(NonContractiveTypeError):
            simplify_type(RecType("X", RecType("Y", var("X"))))


class TestAlphaEqual:
    """Test syntactic comparison up to binder renaming."""

    def test_renamed_binders_are_equal(self) -> None:
        a = RecType("X", obj(next=var("X")))
        b = RecType("Y", obj(next=var("Y")))
        assert alpha_equal(a, b, {})

    def test_does_not_unfold(self) -> None:
        assert not alpha_equal(NUM_LIST, simplify_type(NUM_LIST), {})

    def test_free_variables_need_renaming(self) -> None:
        assert not alpha_equal(var("X"), var("X"), {})
        assert alpha_equal(var("X"), var("Y"), {"X": "Y"})

    def test_object_property_order_ignored(self) -> None:
        a = ObjectType((PropType("x", NUM), PropType("y", BOOL)))
        b = ObjectType((PropType("y", BOOL), PropType("x", NUM)))
        assert alpha_equal(a, b, {})


class TestTypeEqual:
    """Test exact equi-recursive type equality."""

    def test_primitives(self) -> None:
        assert type_equal(NUM, NUM)
        assert type_equal(BOOL, BOOL)
        assert not type_equal(NUM, BOOL)

    def test_functions_compare_positionally(self) -> None:
        a = FuncType((Param("x", NUM),), BOOL)
        b = FuncType((Param("y", NUM),), BOOL)
        assert type_equal(a, b)
        assert not type_equal(a, fn(NUM, NUM, ret=BOOL))
        assert not type_equal(a, fn(BOOL, ret=BOOL))
        assert not type_equal(a, fn(NUM, ret=NUM))

    def test_objects_need_same_properties(self) -> None:
        assert type_equal(obj(x=NUM, y=BOOL), obj(y=BOOL, x=NUM))
        assert not type_equal(obj(x=NUM, y=BOOL), obj(x=NUM))
        assert not type_equal(obj(x=NUM), obj(x=NUM, y=BOOL))
        assert not type_equal(obj(x=NUM), obj(z=NUM))

    def test_mismatched_constructors(self) -> None:
        assert not type_equal(obj(x=NUM), fn(NUM, ret=NUM))
        assert not type_equal(fn(NUM, ret=NUM), NUM)

    def test_recursive_type_is_reflexive(self) -> None:
        assert type_equal(NUM_LIST, NUM_LIST)

    def test_recursive_function_type_is_reflexive(self) -> None:
        stream = RecType("S", fn(NUM, ret=var("S")))
        assert type_equal(stream, stream)

    def test_equals_its_unfolding(self) -> None:
        unfolded = expand_type(NUM_LIST.type, NUM_LIST.name, NUM_LIST)
        assert type_equal(NUM_LIST, unfolded)
        assert type_equal(unfolded, NUM_LIST)

    def test_binder_names_do_not_matter(self) -> None:
        other = RecType("M", obj(head=NUM, tail=var("M")))
        assert type_equal(NUM_LIST, other)

    def test_differently_folded_types_are_equal(self) -> None:
        # Unrolled twice per binder, but the same infinite tree.
        twice = RecType("M", obj(head=NUM, tail=obj(head=NUM, tail=var("M"))))
        assert type_equal(NUM_LIST, twice)
        assert type_equal(twice, NUM_LIST)

    def test_different_recursive_types(self) -> None:
        bool_list = RecType("L", obj(head=BOOL, tail=var("L")))
        assert not type_equal(NUM_LIST, bool_list)

    def test_recursive_vs_finite(self) -> None:
        assert not type_equal(NUM_LIST, obj(head=NUM, tail=NUM))
        assert not type_equal(NUM_LIST, NUM)

    def test_unbound_variable_is_an_error(self) -> None:
        with pytest.raises(UnboundTypeVarError):
            type_equal(var("X"), NUM)

    def test_seen_pairs_are_assumed_equal(self) -> None:
        # Unsound in isolation, but that is what an assumption means.
        assert type_eq_sub(NUM, BOOL, ((NUM, BOOL),))

    def test_compatibility_alias(self) -> None:
        assert type_equql is type_equal
