"""Perch — URL-scheme routing for desktop applications.

Matches URLs delivered by "open URL" events against registered routes and
runs the first matching handler in priority order.

Basic usage::

    from perch import Router

    router = Router()

    @router.on("user/:name/*", scheme="myapp")
    def open_user(request):
        show(request.parameters["name"], request.wildcard)
        return True

    router.route("myapp://user/ada/posts/42")

Routes support literal segments, ``:placeholders``, and a trailing ``*``
wildcard. Query parameters are merged into ``request.parameters``.
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "InvalidURL",
    "PerchError",
    "RouteHandler",
    "Router",
    "RouterConfig",
    "RoutingRequest",
    "Subscription",
    "URLEventSource",
    "compile_route",
    "default_router",
    "parse_url",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` cheap; anyio is only loaded with ``perch.events``.
    """
    if name == "Router":
        from perch.router import Router

        return Router

    if name == "RouterConfig":
        from perch.config import RouterConfig

        return RouterConfig

    if name in ("RoutingRequest", "parse_url"):
        from perch import request as _request

        return getattr(_request, name)

    if name == "RouteHandler":
        from perch.routing.handler import RouteHandler

        return RouteHandler

    if name == "compile_route":
        from perch.routing.components import compile_route

        return compile_route

    if name in ("Subscription", "URLEventSource"):
        from perch import events as _events

        return getattr(_events, name)

    if name == "default_router":
        from perch.globals import default_router

        return default_router

    if name in ("ConfigurationError", "InvalidURL", "PerchError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
