"""``perch route`` — dispatch one URL through a router.

Exit status: 0 if a handler accepted the URL, 1 if none did, 2 if the URL
is invalid.
"""

import argparse
import sys

from perch.cli._resolve import load_router
from perch.errors import InvalidURL


def run_route(args: argparse.Namespace) -> None:
    router = load_router(args.router)
    if args.resolve_fragments:
        router.configure(resolve_fragments=True)

    try:
        handled = router.route(args.url, strict=True)
    except InvalidURL as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    if handled:
        print(f"Routed {args.url}")
        return
    print(f"No handler for {args.url}", file=sys.stderr)
    raise SystemExit(1)
