"""Command line entry points: dump a document or serve an app with its document."""
from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO

import uvicorn
from starlette.applications import Starlette
from starlette.routing import BaseRoute, Router

from .api.routes import compile_routes
from .api.serving import make_docs_route
from .app import build_app, configure
from .docs.assembler import assemble
from .utils.config import DOCS_PATH


class TargetError(ValueError):
    """Raised when a ``module:attr`` target cannot be loaded."""


def load_target(spec: str) -> Any:
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise TargetError(f"Expected 'module:attribute', got {spec!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise TargetError(f"Cannot import {module_name!r}: {exc}") from exc
    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise TargetError(f"{module_name!r} has no attribute {attr!r}") from None
    if callable(target) and not isinstance(target, (Starlette, Router)):
        target = target()
    return target


def routes_of(target: Any) -> List[BaseRoute]:
    if isinstance(target, Starlette):
        return list(target.router.routes)
    if isinstance(target, Router):
        return list(target.routes)
    if isinstance(target, (list, tuple)):
        return list(target)
    raise TargetError(f"Cannot read routes from {type(target).__name__}")


def load_skeleton(path: Optional[str], api_ids: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    skeleton: Dict[str, Any] = {}
    if path:
        try:
            with Path(path).open("r", encoding="utf-8") as handle:
                skeleton = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise TargetError(f"Cannot read skeleton {path!r}: {exc}") from exc
        if not isinstance(skeleton, dict):
            raise TargetError(f"Skeleton {path!r} must contain a JSON object")
    if api_ids:
        skeleton["id"] = api_ids[0] if len(api_ids) == 1 else list(api_ids)
    return skeleton


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routedoc",
        description="Build Swagger 2.0 documents from Starlette route metadata",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "target",
            help="module:attribute naming a Starlette app, a route list, or a factory for either",
        )
        sub.add_argument("--skeleton", type=str, default=None, help="JSON file with top-level document fields")
        sub.add_argument(
            "--api-id",
            dest="api_ids",
            action="append",
            default=None,
            help="API identifier to document; repeat to combine several",
        )

    dump = commands.add_parser("dump", help="Print the assembled document as JSON")
    add_common(dump)
    dump.add_argument("--indent", type=int, default=2, help="JSON indentation, default: 2")

    serve = commands.add_parser("serve", help="Run the app with its document route")
    add_common(serve)
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Bind host, default: 127.0.0.1")
    serve.add_argument("--port", type=int, default=8000, help="Bind port, default: 8000")
    serve.add_argument(
        "--docs-path",
        type=str,
        default=DOCS_PATH,
        help=f"Path serving the document, default: {DOCS_PATH}",
    )
    return parser


def run(
    args: argparse.Namespace,
    *,
    logger: logging.Logger,
    out: TextIO = sys.stdout,
) -> int:
    """Execute a parsed command. Raises :class:`TargetError` for bad targets."""

    if args.debug:
        logger.setLevel(logging.DEBUG)

    target = load_target(args.target)
    skeleton = load_skeleton(args.skeleton, args.api_ids)

    if args.command == "dump":
        document = assemble(skeleton, compile_routes(routes_of(target)), logger=logger)
        logger.info("[routedoc] assembled %d paths for %s", len(document["paths"]), sorted(document.identifiers))
        json.dump(document, out, indent=args.indent)
        out.write("\n")
        return 0

    if isinstance(target, Starlette):
        target.router.routes.append(make_docs_route(args.docs_path, skeleton))
        app = target
    else:
        app = build_app(routes_of(target), skeleton=skeleton, docs_path=args.docs_path)
    logger.info("[routedoc] Document on http://%s:%s%s", args.host, args.port, args.docs_path)
    uvicorn.run(app, host=args.host, port=int(args.port))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return run(args, logger=logging.getLogger("routedoc.cli"))
    except TargetError as exc:
        parser.error(str(exc))
    return 2


__all__ = ["TargetError", "build_parser", "load_skeleton", "load_target", "main", "routes_of", "run"]
