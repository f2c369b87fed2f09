"""Tests for call-site pattern matching."""

from __future__ import annotations

import textwrap

from docly.analyzers import FileExtractor
from docly.config import DoclyConfig
from docly.models import ANONYMOUS_MIDDLEWARE, FileExtract, GlobalMiddleware, LocalMiddleware

_PATH = "/srv/app/server.ts"


def _extract(code: str, extractor: FileExtractor | None = None) -> FileExtract:
    extractor = extractor or FileExtractor()
    return extractor.extract_source(textwrap.dedent(code).lstrip("\n"), _PATH)


def test_global_middleware_registrations() -> None:
    extract = _extract(
        """
        const app = express();
        app.use(cors());
        app.use((req, res, next) => next());
        app.use(function (req, res, next) { next(); });
        app.use(express.json());
        app.use(helmet);
        """
    )
    assert extract.middlewares.global_ == [
        GlobalMiddleware("cors"),
        GlobalMiddleware(ANONYMOUS_MIDDLEWARE),
        GlobalMiddleware(ANONYMOUS_MIDDLEWARE),
    ]


def test_local_middleware_is_keyed_by_factory_name() -> None:
    extract = _extract(
        """
        const app = express();
        app.use("/api", limiter());
        app.use("/admin", limiter());
        app.use("/static", serveStatic);
        """
    )
    assert extract.middlewares.local == {
        "limiter": [LocalMiddleware("/api"), LocalMiddleware("/admin")],
    }


def test_listen_resolves_env_default_port() -> None:
    extract = _extract(
        """
        const port = process.env.PORT || 4000;
        const app = express();
        app.listen(port, "localhost");
        """
    )
    assert extract.api_details == {
        "port_number": 4000,
        "is_port_env": True,
        "host": "localhost",
        "backlog": None,
    }


def test_listen_with_literals_and_callback() -> None:
    extract = _extract(
        """
        const app = express();
        const HOST = "0.0.0.0";
        app.listen(8080, HOST, 511, () => console.log("up"));
        """
    )
    assert extract.api_details == {
        "port_number": 8080,
        "is_port_env": False,
        "host": "0.0.0.0",
        "backlog": 511,
    }


def test_listen_before_port_declaration_is_unresolved() -> None:
    extract = _extract(
        """
        const app = express();
        app.listen(port);
        const port = 3000;
        """
    )
    assert extract.api_details["port_number"] is None
    assert extract.api_details["is_port_env"] is False


def test_route_middleware_sits_between_path_and_handler() -> None:
    extract = _extract(
        """
        const app = express();
        app.get("/x", auth, log, handler);
        app.get("/y", handler);
        app.post("/z", auth, (req, res) => res.send(), handler);
        """
    )
    assert [route.middleware for route in extract.routes] == [("auth", "log"), (), ("auth",)]
    assert [route.method for route in extract.routes] == ["get", "get", "post"]
    assert all(route.router is None for route in extract.routes)
    assert all(route.source_file == _PATH for route in extract.routes)


def test_router_routes_are_attributed_to_the_router() -> None:
    extract = _extract(
        """
        const router = express.Router();
        router.post("/users", create);
        router.delete("/users/:id", remove);
        router.patch("/users/:id", update);
        router.put("/users/:id", replace);
        """
    )
    assert [(route.method, route.path, route.router) for route in extract.routes] == [
        ("post", "/users", "router"),
        ("delete", "/users/:id", "router"),
        ("patch", "/users/:id", "router"),
        ("put", "/users/:id", "router"),
    ]


def test_description_comes_from_marked_leading_comment() -> None:
    extract = _extract(
        """
        const app = express();
        // --Docly-- Returns health status
        app.get("/health", handler);
        // an ordinary comment
        app.get("/plain", handler);
        """
    )
    assert extract.routes[0].description == "Returns health status"
    assert extract.routes[1].description is None


def test_description_marker_is_configurable() -> None:
    config = DoclyConfig(description_marker="@api")
    extract = _extract(
        """
        const app = express();
        /* @api Lists users */
        app.get("/users", handler);
        """,
        FileExtractor(config),
    )
    assert extract.routes[0].description == "Lists users"


def test_unrecognised_shapes_are_skipped() -> None:
    extract = _extract(
        """
        const app = express();
        app.get(path, handler);
        app.get(`/template`, handler);
        app["get"]("/computed", handler);
        other.get("/unknown", handler);
        app.route("/chained").get(handler);
        app.get(...handlers);
        app.options("/opts", handler);
        """
    )
    assert extract.routes == []
    assert extract.middlewares.global_ == []


def test_routes_registered_inside_functions_are_found() -> None:
    extract = _extract(
        """
        const app = express();
        function register() {
          app.get("/nested", handler);
        }
        """
    )
    assert [route.path for route in extract.routes] == ["/nested"]


def test_mount_detection_is_off_by_default() -> None:
    code = """
        const app = express();
        app.use("/api", usersRouter);
        app.use("/v2", usersRouter);
        """
    assert _extract(code).mounts == {}
    enabled = _extract(code, FileExtractor(resolve_mounts=True))
    assert enabled.mounts == {"usersRouter": ["/api", "/v2"]}
    assert enabled.middlewares.local == {}


def test_malformed_source_yields_partial_results_without_error() -> None:
    extract = _extract(
        """
        const app = express();
        app.get("/ok", handler);
        app.get("/broken", (req, res => {
        """
    )
    assert isinstance(extract, FileExtract)
    assert "app" in extract.servers


def test_name_tagged_as_server_and_router_keeps_both_behaviours() -> None:
    extract = _extract(
        """
        function sub() { const app = express.Router(); }
        const app = express();
        app.use(cors());
        app.listen(3000);
        app.get("/shared", handler);
        """
    )
    assert extract.middlewares.global_ == [GlobalMiddleware("cors")]
    assert extract.api_details["port_number"] == 3000
    assert [(route.path, route.router) for route in extract.routes] == [("/shared", "app")]
