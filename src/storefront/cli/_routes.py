"""``storefront routes`` — list the route table in priority order."""

import argparse

from storefront.routing.route import PageId
from storefront.routing.router import default_router


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATTERN and PAGE, first match first."""
    rows = [(entry.pattern, str(entry.page_id)) for entry in default_router().routes]
    rows.append(("(no match)", str(PageId.NOT_FOUND)))

    width = max(max(len(pattern) for pattern, _ in rows), len("PATTERN"))
    fmt = f"{{:<{width}}}  {{}}"
    print(fmt.format("PATTERN", "PAGE"))
    print("-" * (width + 2 + max(len(page) for _, page in rows)))
    for pattern, page in rows:
        print(fmt.format(pattern, page))
