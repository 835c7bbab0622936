"""``storefront render`` — server-render one URL to stdout."""

import argparse
import json
import sys

import anyio

from storefront.catalog.memory import InMemoryCatalog
from storefront.config import StorefrontConfig
from storefront.errors import CatalogError
from storefront.server.document import compose_document, load_shell
from storefront.server.renderer import ServerRenderer


def run_render(args: argparse.Namespace) -> None:
    """Render ``args.url`` and print the document (or, with ``--json``, the payload)."""
    try:
        catalog = InMemoryCatalog.from_json(args.data) if args.data else InMemoryCatalog.sample()
    except CatalogError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    config = StorefrontConfig.from_env()
    renderer = ServerRenderer(catalog, config=config)
    result = anyio.run(renderer.render, args.url)

    if args.json:
        print(json.dumps(result.initial_data, indent=2, ensure_ascii=False))
        return
    print(compose_document(load_shell(config), result))
