"""Perch CLI — inspect routers and try URLs against them.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — URL-scheme routing for desktop applications.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered handlers")
    routes_parser.add_argument(
        "router",
        help="Import string (e.g. myapp.urls:router)",
    )

    # -- perch route ------------------------------------------------------
    route_parser = subparsers.add_parser("route", help="Dispatch a URL through a router")
    route_parser.add_argument(
        "router",
        help="Import string (e.g. myapp.urls:router)",
    )
    route_parser.add_argument("url", help="URL to route")
    route_parser.add_argument(
        "--resolve-fragments",
        action="store_true",
        help="Merge the URL fragment into path and query before matching",
    )

    # -- perch parse ------------------------------------------------------
    parse_parser = subparsers.add_parser("parse", help="Show how a URL is parsed")
    parse_parser.add_argument("url", help="URL to parse")
    parse_parser.add_argument(
        "--resolve-fragments",
        action="store_true",
        help="Merge the URL fragment into path and query",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "route":
        from perch.cli._route import run_route

        run_route(args)
    elif args.command == "parse":
        from perch.cli._parse import run_parse

        run_parse(args)
