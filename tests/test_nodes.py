"""Tests for rectyping.nodes module."""

import pytest

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


class TestTermRegistry:
    """Test automatic tag registration of term classes."""

    @pytest.mark.parametrize(
        ("cls", "tag"),
        [
            (TrueLit, "true"),
            (FalseLit, "false"),
            (NumberLit, "number"),
            (If, "if"),
            (Add, "add"),
            (Var, "var"),
            (Func, "func"),
            (Call, "call"),
            (Seq, "seq"),
            (Const, "const"),
            (ObjectNew, "objectNew"),
            (ObjectGet, "objectGet"),
            (RecFunc, "recFunc"),
        ],
    )
    def test_tags(self, cls: type[Term], tag: str) -> None:
        assert cls.tag == tag
        assert Term.registry[tag] is cls

    def test_tag_defaults_to_lowercase_name(self) -> None:
        class Neg(Term):
            operand: Term

        assert Neg.tag == "neg"
        assert Term.registry.pop("neg") is Neg

    def test_duplicate_tag_rejected(self) -> None:
        with pytest.raises(ValueError, match="already registered"):

            class Other(Term, tag="if"):
                pass


class TestTermValues:
    """Test value semantics of terms."""

    def test_terms_are_immutable(self) -> None:
        term = Var("x")
        with pytest.raises(AttributeError):
            term.name = "y"  # type: ignore[misc]

    def test_structural_equality(self) -> None:
        assert Add(NumberLit(1), Var("x")) == Add(NumberLit(1), Var("x"))
        assert Add(NumberLit(1), Var("x")) != Add(Var("x"), NumberLit(1))
