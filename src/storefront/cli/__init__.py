"""Storefront CLI — render pages and inspect the route table.

Entry point registered as ``storefront`` in ``pyproject.toml``::

    [project.scripts]
    storefront = "storefront.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``storefront`` command."""
    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Storefront — server-rendered catalog with client hydration.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=("debug", "info", "warning", "error"),
        help="Logging level (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- storefront render ------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Server-render a URL")
    render_parser.add_argument("url", help="URL to render (e.g. /product/42/?ref=home)")
    render_parser.add_argument(
        "--data",
        default=None,
        help="JSON product list to use instead of the packaged sample",
    )
    render_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the hydration payload instead of the document",
    )

    # -- storefront routes ------------------------------------------------
    subparsers.add_parser("routes", help="List the route table")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "render":
        from storefront.cli._render import run_render

        run_render(args)
    elif args.command == "routes":
        from storefront.cli._routes import run_routes

        run_routes(args)
