"""Route handlers — a compiled route bound to an action."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeAlias

from perch.request import RoutingRequest
from perch.routing.components import RouteComponent, compile_route
from perch.routing.matcher import fulfill

# Receives the fulfilled request; returns True if it handled the URL
RouteAction: TypeAlias = Callable[[RoutingRequest], bool]

logger = logging.getLogger("perch.router")


@dataclass(frozen=True, slots=True)
class RouteHandler:
    """A registered route.

    Created by ``Router.register()``, which assigns the id. ``scheme=None``
    matches every scheme. Higher ``priority`` is tried earlier.
    """

    id: int
    route: str
    action: RouteAction
    scheme: str | None = None
    priority: int = 0
    components: tuple[RouteComponent, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", compile_route(self.route))

    def matches_scheme(self, scheme: str) -> bool:
        return self.scheme is None or self.scheme == scheme

    def fulfill(self, request: RoutingRequest) -> RoutingRequest | None:
        """Return the fulfilled request if scheme and route both match."""
        if not self.matches_scheme(request.scheme):
            return None
        return fulfill(request, self.components)

    def handle(self, request: RoutingRequest) -> bool:
        """Fulfill *request* and run the action on the result.

        This is the step the router calls for every handler during dispatch.
        Override it in a subclass to customise matching.

        Returns ``True`` only when the route matched and the action
        accepted the request.
        """
        fulfilled = self.fulfill(request)
        if fulfilled is None:
            return False
        if self.action(fulfilled):
            logger.debug("Handler %d (%r) handled %s", self.id, self.route, request.url)
            return True
        logger.debug("Handler %d (%r) declined %s", self.id, self.route, request.url)
        return False
