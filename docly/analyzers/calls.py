"""Call-site pattern matching for server, router and middleware idioms."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..models import ANONYMOUS_MIDDLEWARE, HTTP_METHODS, FileExtract, GlobalMiddleware, Role, RouteDeclaration
from .bindings import BindingTable
from .syntax import Call, Comment, Expression, ExpressionStatement, Function, Identifier, Literal, Member

DEFAULT_MARKER = "--Docly--"


class CallSiteMatcher:
    """Turns recognised ``<binding>.<method>(...)`` statements into facts.

    Only a closed set of shapes is understood. Anything else (chained
    builders, spread handlers, computed members) is skipped without error.
    """

    def __init__(
        self,
        table: BindingTable,
        extract: FileExtract,
        *,
        marker: str = DEFAULT_MARKER,
        resolve_mounts: bool = False,
    ) -> None:
        self._table = table
        self._extract = extract
        self._marker = marker
        self._resolve_mounts = resolve_mounts

    def visit(self, statement: ExpressionStatement) -> None:
        call = statement.expression
        if not isinstance(call, Call) or not isinstance(call.callee, Member):
            return
        callee = call.callee
        if callee.computed or callee.property is None or not isinstance(callee.object, Identifier):
            return
        name = callee.object.name
        roles = self._table.roles_of(name)
        if not roles:
            return
        prop = callee.property
        args = call.arguments

        if Role.SERVER in roles and prop == "use":
            self._match_use(args)
        elif Role.SERVER in roles and prop == "listen":
            self._match_listen(args)
        elif prop in HTTP_METHODS:
            self._match_route(name, Role.ROUTER in roles, prop, args, statement.leading_comments)

        if self._resolve_mounts and prop == "use":
            self._match_mount(args)

    def describe(self, comments: Sequence[Comment]) -> Optional[str]:
        for comment in comments:
            if self._marker in comment.value:
                return comment.value.replace(self._marker, "", 1).strip()
        return None

    def _match_use(self, args: Tuple[Expression, ...]) -> None:
        middlewares = self._extract.middlewares
        if len(args) == 1:
            arg = args[0]
            if isinstance(arg, Call) and isinstance(arg.callee, Identifier):
                middlewares.global_.append(GlobalMiddleware(name=arg.callee.name))
            elif isinstance(arg, Function) and arg.name is None:
                middlewares.global_.append(GlobalMiddleware(name=ANONYMOUS_MIDDLEWARE))
        elif len(args) == 2:
            path, factory = args
            if (
                _is_string(path)
                and isinstance(factory, Call)
                and isinstance(factory.callee, Identifier)
            ):
                middlewares.add_local(factory.callee.name, path.value)

    def _match_listen(self, args: Tuple[Expression, ...]) -> None:
        port, host, backlog = (tuple(args) + (None, None, None))[:3]
        port_binding = self._table.lookup(port.name) if isinstance(port, Identifier) else None
        details = self._extract.api_details
        details["port_number"] = self._table.resolve(port)
        details["is_port_env"] = bool(port_binding is not None and port_binding.is_env_default)
        details["host"] = self._table.resolve(host)
        details["backlog"] = self._table.resolve(backlog)

    def _match_route(
        self,
        name: str,
        is_router: bool,
        method: str,
        args: Tuple[Expression, ...],
        comments: Sequence[Comment],
    ) -> None:
        if not args or not _is_string(args[0]):
            return
        middleware = tuple(arg.name for arg in args[1:-1] if isinstance(arg, Identifier))
        self._extract.routes.append(
            RouteDeclaration(
                path=args[0].value,
                method=method,
                router=name if is_router else None,
                source_file=self._extract.file,
                middleware=middleware,
                description=self.describe(comments),
            )
        )

    def _match_mount(self, args: Tuple[Expression, ...]) -> None:
        if len(args) != 2:
            return
        path, target = args
        if _is_string(path) and isinstance(target, Identifier):
            self._extract.mounts.setdefault(target.name, []).append(path.value)


def _is_string(expr: Optional[Expression]) -> bool:
    return isinstance(expr, Literal) and expr.kind == "string"


__all__ = ["CallSiteMatcher", "DEFAULT_MARKER"]
