"""Route components and the route compiler.

A route string such as ``"user/:name/*"`` compiles into a tuple of
components::

    compile_route("user/:name/*")
    -> (Literal("user"), Placeholder("name"), Wildcard())
"""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Literal:
    """A path segment that must match exactly."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A named segment that binds whatever path segment sits at its position."""

    name: str


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Trailing ``*`` — absorbs all remaining path segments."""


RouteComponent: TypeAlias = Literal | Placeholder | Wildcard


def split_route(route: str) -> list[str]:
    """Split *route* on ``/`` after dropping one leading and one trailing slash.

    ``"/a/b/"``, ``"a/b/"``, ``"/a/b"`` and ``"a/b"`` all give ``["a", "b"]``.
    The empty route and ``"/"`` give ``[]``.
    """
    if route.startswith("/"):
        route = route[1:]
    if route.endswith("/"):
        route = route[:-1]
    if not route:
        return []
    return route.split("/")


def compile_route(route: str) -> tuple[RouteComponent, ...]:
    """Compile a route string into its component tuple.

    Any string compiles. Only a ``*`` in the final position becomes a
    ``Wildcard``; elsewhere it is the literal text ``"*"``.
    """
    segments = split_route(route)
    components: list[RouteComponent] = []
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        if segment == "*" and index == last:
            components.append(Wildcard())
            break
        if segment.startswith(":"):
            components.append(Placeholder(segment[1:]))
        else:
            components.append(Literal(segment))
    return tuple(components)
