"""``perch routes`` — list registered handlers.

Prints handlers in dispatch order with id, priority, scheme, route, and
action name.
"""

import argparse

from perch.cli._resolve import load_router


def run_routes(args: argparse.Namespace) -> None:
    router = load_router(args.router)

    handlers = router.handlers
    if not handlers:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str, str]] = []
    for handler in handlers:
        action_name = getattr(handler.action, "__name__", type(handler.action).__name__)
        rows.append(
            (
                str(handler.id),
                str(handler.priority),
                handler.scheme or "*",
                handler.route or "(empty)",
                action_name,
            )
        )

    headers = ("ID", "PRIORITY", "SCHEME", "ROUTE", "ACTION")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(4)]

    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 2 * len(widths) + max(len(row[4]) for row in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
