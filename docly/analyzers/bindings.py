"""Per-file binding table with literal resolution and framework role tags."""

from __future__ import annotations

from typing import FrozenSet, List, Optional, Set, Tuple

from ..config import FrameworkConfig
from ..models import Binding, LiteralValue, Role
from .syntax import Call, Expression, Identifier, Literal, LogicalOr, Member, VariableDeclaration


def is_env_lookup(expr: Expression) -> bool:
    """True for ``process.env.NAME`` and ``process.env["NAME"]``."""
    return (
        isinstance(expr, Member)
        and isinstance(expr.object, Member)
        and isinstance(expr.object.object, Identifier)
        and expr.object.object.name == "process"
        and expr.object.property == "env"
        and not expr.object.computed
    )


def env_default(expr: Optional[Expression]) -> Optional[Tuple[LiteralValue]]:
    """Return ``(literal,)`` for ``process.env.X || literal`` or its mirror, else None."""
    if not isinstance(expr, LogicalOr):
        return None
    left_env = is_env_lookup(expr.left)
    right_env = is_env_lookup(expr.right)
    if left_env == right_env:
        return None
    fallback = expr.right if left_env else expr.left
    if not isinstance(fallback, Literal):
        return None
    return (fallback.value,)


class BindingTable:
    """Bindings of one file, appended strictly in declaration order.

    Lookups only see what has been declared so far, which gives forward
    references the unresolved (None) result.
    """

    def __init__(self, framework: FrameworkConfig | None = None) -> None:
        self._framework = framework or FrameworkConfig()
        self._bindings: List[Binding] = []
        self.servers: Set[str] = set()
        self.routers: Set[str] = set()

    def __iter__(self):
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    @property
    def bindings(self) -> Tuple[Binding, ...]:
        return tuple(self._bindings)

    def declare(self, declaration: VariableDeclaration) -> Optional[Binding]:
        if len(declaration.declarators) != 1:
            return None
        declarator = declaration.declarators[0]
        if declarator.name is None:
            return None
        init = declarator.init

        value: LiteralValue = None
        is_env = False
        fallback = env_default(init)
        if fallback is not None:
            value = fallback[0]
            is_env = True
        elif isinstance(init, Literal):
            value = init.value

        binding = Binding(name=declarator.name, value=value, is_env_default=is_env)
        self._bindings.append(binding)

        role = self._factory_role(init)
        if role is Role.SERVER:
            self.servers.add(declarator.name)
        elif role is Role.ROUTER:
            self.routers.add(declarator.name)
        return binding

    def lookup(self, name: str) -> Optional[Binding]:
        for binding in self._bindings:
            if binding.name == name:
                return binding
        return None

    def resolve(self, expr: Optional[Expression]) -> LiteralValue:
        """Resolve a literal directly or an identifier through the table."""
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Identifier):
            binding = self.lookup(expr.name)
            return binding.value if binding is not None else None
        return None

    def roles_of(self, name: str) -> FrozenSet[Role]:
        """Every role tag ``name`` carries in this file; a name can hold both."""
        roles = set()
        if name in self.servers:
            roles.add(Role.SERVER)
        if name in self.routers:
            roles.add(Role.ROUTER)
        return frozenset(roles)

    def _factory_role(self, init: Optional[Expression]) -> Optional[Role]:
        if not isinstance(init, Call):
            return None
        callee = init.callee
        factory = self._framework.factory
        if isinstance(callee, Identifier) and callee.name == factory:
            return Role.SERVER
        if (
            isinstance(callee, Member)
            and not callee.computed
            and isinstance(callee.object, Identifier)
            and callee.object.name == factory
            and callee.property == self._framework.router_factory
        ):
            return Role.ROUTER
        return None


__all__ = ["BindingTable", "env_default", "is_env_lookup"]
