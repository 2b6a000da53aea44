"""Route fulfillment — match a parsed request against compiled components.

Walks the request path and the route components in lock-step::

    fulfill(parse_url("app://user/ada/posts/1/2"), compile_route("user/:name/*"))
    -> parameters={"name": "ada"}, wildcard="posts/1/2"

Fulfillment never mutates its input. A match returns a new request value
carrying the extracted data; a miss returns ``None``.
"""

from collections.abc import Sequence
from dataclasses import replace
from types import MappingProxyType

from perch.request import RoutingRequest
from perch.routing.components import Literal, Placeholder, RouteComponent, Wildcard


def _walk(
    path: tuple[str, ...],
    components: Sequence[RouteComponent],
) -> tuple[dict[str, str], str | None] | None:
    """Match *path* against *components*.

    Returns ``(placeholder_bindings, wildcard_remainder)`` or ``None``.
    """
    params: dict[str, str] = {}
    consumed = 0

    for index, segment in enumerate(path):
        if index >= len(components):
            # Route too short for this path
            return None

        component = components[index]
        consumed = index + 1
        match component:
            case Literal(text=text):
                if segment != text:
                    return None
            case Placeholder(name=name):
                params[name] = segment
            case Wildcard():
                return params, "/".join(path[index:])

    remaining = components[consumed:]
    if not remaining:
        return params, None
    # Only a trailing wildcard may match zero segments
    if len(remaining) == 1 and isinstance(remaining[0], Wildcard):
        return params, None
    return None


def fulfill(
    request: RoutingRequest,
    components: Sequence[RouteComponent],
) -> RoutingRequest | None:
    """Fulfill *request* with *components*.

    Query values are merged over the placeholder bindings in URL order;
    pairs with an empty value are skipped rather than stored as ``""``.
    The scheme is not looked at here.

    Returns:
        A fresh ``RoutingRequest`` with ``parameters`` and ``wildcard`` set,
        or ``None`` if the route does not match.
    """
    result = _walk(request.path, components)
    if result is None:
        return None

    params, wildcard = result
    for name, value in request.query:
        if value:
            params[name] = value

    parameters = MappingProxyType(params) if params else None
    return replace(request, parameters=parameters, wildcard=wildcard)
