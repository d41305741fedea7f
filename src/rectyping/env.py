"""Persistent typing environments."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from rectyping.types import Param, Type


@dataclass(frozen=True, eq=False)
class TypeEnv(Mapping[str, Type]):
    """An immutable chain of binding frames.

    Extending an environment allocates a new frame whose parent is the
    receiver; the receiver itself is never modified. Lookups walk the chain
    innermost first, so inner bindings shadow outer ones.
    """

    frame: Mapping[str, Type] = field(default_factory=dict)
    parent: TypeEnv | None = None

    def __post_init__(self) -> None:
        # Detach from the caller's dict so later mutation cannot leak in.
        object.__setattr__(self, "frame", MappingProxyType(dict(self.frame)))

    @classmethod
    def of(cls, env: Mapping[str, Type] | None = None) -> TypeEnv:
        """Wrap a plain mapping (or nothing) as a root environment."""
        if isinstance(env, TypeEnv):
            return env
        return cls(dict(env or {}))

    def bind(self, name: str, typ: Type) -> TypeEnv:
        """Return a new environment with `name` bound to `typ`."""
        return TypeEnv({name: typ}, self)

    def extend(self, bindings: Mapping[str, Type]) -> TypeEnv:
        """Return a new environment with all of `bindings` added."""
        if not bindings:
            return self
        return TypeEnv(bindings, self)

    def bind_params(self, params: Iterable[Param]) -> TypeEnv:
        """Bind function parameters by their declared types.

        A later parameter with a repeated name wins.
        """
        return self.extend({p.name: p.type for p in params})

    def __getitem__(self, name: str) -> Type:
        env: TypeEnv | None = self
        while env is not None:
            if name in env.frame:
                return env.frame[name]
            env = env.parent
        raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        env: TypeEnv | None = self
        while env is not None:
            for name in env.frame:
                if name not in seen:
                    seen.add(name)
                    yield name
            env = env.parent

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        bindings = ", ".join(f"{k}: {v}" for k, v in self.items())
        return f"TypeEnv({{{bindings}}})"
