"""``perch parse`` — show the scheme, path segments, and query of a URL."""

import argparse
import sys

from perch.errors import InvalidURL
from perch.request import parse_url


def run_parse(args: argparse.Namespace) -> None:
    try:
        request = parse_url(args.url, resolve_fragment=args.resolve_fragments)
    except InvalidURL as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    print(f"scheme: {request.scheme}")
    print(f"path:   {'/'.join(request.path) or '(empty)'}")
    for index, segment in enumerate(request.path):
        print(f"  [{index}] {segment}")
    if request.query:
        print("query:")
        for name, value in request.query:
            print(f"  {name} = {value!r}")
