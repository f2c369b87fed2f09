"""CLI entrypoint for docly."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docly",
        description="Generate API documentation from an Express-style source tree.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Root folder of the JavaScript/TypeScript sources.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .docly.yml file (defaults to ./.docly.yml).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the JSON and HTML output (defaults to the current directory).",
    )
    parser.add_argument(
        "--resolve-mounts",
        action="store_true",
        default=None,
        help="Prefix routes of router files mounted with app.use(path, router).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a DEBUG-level log of the run to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docly."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if not args.path:
        parser.exit(1, "Usage: docly <src-folder>\n")

    root = Path(args.path).expanduser().resolve()
    if not root.exists():
        parser.exit(1, f"Folder not found: {root}\n")

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    orchestrator = Orchestrator(config, resolve_mounts=args.resolve_mounts)
    try:
        outcome = orchestrator.run(root, args.output_dir)
    except NotADirectoryError as exc:
        parser.exit(1, f"{exc}\n")

    print(f"Documented {len(outcome.document.routes)} route(s)")
    print(f"JSON written to {_relativize(outcome.json_path)}")
    print(f"HTML written to {_relativize(outcome.html_path)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
