"""Router — handler registry and priority-ordered dispatch.

Usage::

    router = Router()

    @router.on("user/:name", scheme="myapp", priority=10)
    def show_user(request):
        open_profile(request.parameters["name"])
        return True

    router.route("myapp://user/ada")  # True

Handlers are tried from highest to lowest priority; handlers with equal
priority are tried in registration order. The first action that returns
``True`` ends dispatch. An action that returns ``False`` declines the URL
even though its route matched, and the next handler is tried.

A router is not thread-safe. Drive each instance from a single thread.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import TYPE_CHECKING, Any
from urllib.parse import SplitResult

from perch.config import RouterConfig
from perch.errors import InvalidURL
from perch.request import RoutingRequest, parse_url
from perch.routing.handler import RouteAction, RouteHandler

if TYPE_CHECKING:
    from perch.events import Subscription, URLEventSource

logger = logging.getLogger("perch.router")


class Router:
    """Stores route handlers and dispatches URLs to them.

    Each registered handler gets an integer id that is unique for the
    lifetime of the router. Ids are never reused, even after a handler is
    unregistered.
    """

    __slots__ = ("_config", "_handlers", "_last_id")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._handlers: dict[int, RouteHandler] = {}
        self._last_id = -1

    def __repr__(self) -> str:
        return f"Router(handlers={len(self._handlers)}, config={self._config!r})"

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, handler_id: object) -> bool:
        return handler_id in self._handlers

    # -- Configuration --

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def resolve_fragments(self) -> bool:
        """Whether URL fragments are merged into path and query before matching."""
        return self._config.resolve_fragments

    def configure(self, **changes: Any) -> RouterConfig:
        """Replace config fields, e.g. ``router.configure(resolve_fragments=True)``."""
        self._config = replace(self._config, **changes)
        return self._config

    # -- Registration --

    def register(
        self,
        route: str,
        action: RouteAction,
        *,
        scheme: str | None = None,
        priority: int = 0,
        handler_class: type[RouteHandler] = RouteHandler,
    ) -> int:
        """Register *action* for *route*.

        Args:
            route: Route string, e.g. ``"user/:name/*"``. Any string is
                accepted; ``""`` only matches an empty path.
            action: Called with the fulfilled request. Return ``True`` to
                stop dispatch.
            scheme: Only match URLs with this scheme. ``None`` matches all.
            priority: Higher priorities are tried first.
            handler_class: ``RouteHandler`` subclass to build. Dispatch calls
                its ``handle()``, so a subclass can customise matching.

        Returns:
            The handler id. Pass it to ``unregister()`` to remove the handler.
        """
        self._last_id += 1
        handler = handler_class(
            id=self._last_id,
            route=route,
            action=action,
            scheme=scheme,
            priority=priority,
        )
        self._handlers[handler.id] = handler
        logger.debug(
            "Registered handler %d: route=%r scheme=%r priority=%d",
            handler.id,
            route,
            scheme,
            priority,
        )
        return handler.id

    def register_many(
        self,
        routes: Iterable[str],
        action: RouteAction,
        *,
        scheme: str | None = None,
        priority: int = 0,
    ) -> list[int]:
        """Register *action* for each route. Ids are returned in input order."""
        return [self.register(route, action, scheme=scheme, priority=priority) for route in routes]

    def on(
        self,
        route: str,
        *,
        scheme: str | None = None,
        priority: int = 0,
    ) -> Callable[[RouteAction], RouteAction]:
        """Decorator form of ``register()``. Returns the function unchanged."""

        def decorator(action: RouteAction) -> RouteAction:
            self.register(route, action, scheme=scheme, priority=priority)
            return action

        return decorator

    def unregister(self, handler_id: int) -> None:
        """Remove a handler. Unknown ids are ignored."""
        if self._handlers.pop(handler_id, None) is not None:
            logger.debug("Unregistered handler %d", handler_id)

    def unregister_all(self) -> None:
        self._handlers.clear()
        logger.debug("Unregistered all handlers")

    def unregister_route(self, route: str, scheme: str | None = None) -> int:
        """Remove every handler registered with exactly *route*.

        With a *scheme*, only handlers bound to that scheme are removed.
        Without one, the scheme is ignored.

        Returns:
            The number of handlers removed.
        """
        doomed = [
            handler.id
            for handler in self._handlers.values()
            if handler.route == route and (scheme is None or handler.scheme == scheme)
        ]
        for handler_id in doomed:
            del self._handlers[handler_id]
        logger.debug("Unregistered %d handler(s) for route=%r scheme=%r", len(doomed), route, scheme)
        return len(doomed)

    # -- Introspection --

    @property
    def handlers(self) -> tuple[RouteHandler, ...]:
        """Live handlers in dispatch order."""
        # sorted() is stable and the dict keeps registration order
        return tuple(sorted(self._handlers.values(), key=lambda h: -h.priority))

    def get(self, handler_id: int) -> RouteHandler | None:
        return self._handlers.get(handler_id)

    # -- Dispatch --

    def route(self, url: str | SplitResult, *, strict: bool = False) -> bool:
        """Parse *url* and dispatch it.

        Returns:
            ``True`` if a handler accepted the URL. ``False`` if none did, or
            if the URL is invalid and *strict* is off.

        Raises:
            InvalidURL: If the URL is invalid and *strict* is set.
        """
        try:
            request = parse_url(url, resolve_fragment=self._config.resolve_fragments)
        except InvalidURL as exc:
            if strict:
                raise
            logger.warning("Not routing %s", exc)
            return False
        return self.route_request(request)

    def route_request(self, request: RoutingRequest) -> bool:
        """Dispatch an already parsed request."""
        for handler in self.handlers:
            if handler.handle(request):
                return True

        logger.debug("No handler for %s", request.url)
        return False

    def handle_url(self, url: str) -> None:
        """Listener entry point for ``URLEventSource``."""
        self.route(url)

    def listen(self, source: "URLEventSource") -> "Subscription":
        """Route every URL emitted by *source* until the subscription is cancelled."""
        return source.subscribe(self.handle_url)
