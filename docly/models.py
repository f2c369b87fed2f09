"""Core data models shared across docly components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

LiteralValue = Union[str, int, float, bool, None]

HTTP_METHODS: Tuple[str, ...] = ("get", "post", "put", "patch", "delete")

ANONYMOUS_MIDDLEWARE = "Anonymous Middleware"


class Role(Enum):
    """Framework role carried by a binding."""

    SERVER = "server"
    ROUTER = "router"


@dataclass(frozen=True)
class Binding:
    """A single variable declaration with its resolved literal value.

    ``value`` is ``None`` when the initializer could not be resolved to a
    literal; the binding still exists so later lookups find it.
    """

    name: str
    value: LiteralValue
    is_env_default: bool = False


@dataclass(frozen=True)
class GlobalMiddleware:
    name: str


@dataclass(frozen=True)
class LocalMiddleware:
    path: str


@dataclass(frozen=True)
class RouteDeclaration:
    """One HTTP route registered on a server or router binding."""

    path: str
    method: str
    router: Optional[str]
    source_file: str
    middleware: Tuple[str, ...] = ()
    description: Optional[str] = None


@dataclass
class ServerConfig:
    """Startup details recovered from a ``listen`` call."""

    port_number: object = None
    is_port_env: bool = False
    host: object = None
    backlog: object = None


@dataclass
class MiddlewareRegistry:
    """Mutable per-file middleware facts, filled in during extraction."""

    global_: List[GlobalMiddleware] = field(default_factory=list)
    local: Dict[str, List[LocalMiddleware]] = field(default_factory=dict)

    def add_local(self, name: str, path: str) -> None:
        self.local.setdefault(name, []).append(LocalMiddleware(path=path))


@dataclass
class FileExtract:
    """Everything extracted from a single source file.

    ``api_details`` only holds the ``ServerConfig`` fields a ``listen`` call
    in this file actually set, so aggregation can merge field by field.
    """

    file: str
    imports: Dict[str, str] = field(default_factory=dict)
    mounts: Dict[str, List[str]] = field(default_factory=dict)
    api_details: Dict[str, object] = field(default_factory=dict)
    routes: List[RouteDeclaration] = field(default_factory=list)
    middlewares: MiddlewareRegistry = field(default_factory=MiddlewareRegistry)
    bindings: Tuple[Binding, ...] = ()
    servers: FrozenSet[str] = frozenset()
    routers: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class MiddlewareSummary:
    global_: Tuple[GlobalMiddleware, ...] = ()
    local: Dict[str, Tuple[LocalMiddleware, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class AggregatedDocument:
    """Final merged view of the API, handed to the renderers."""

    api_details: ServerConfig
    routes: Tuple[RouteDeclaration, ...]
    middlewares: MiddlewareSummary
