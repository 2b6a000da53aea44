"""Process-wide default router.

Prefer passing a ``Router`` explicitly to whatever owns the URL entry
point. For applications that want one shared instance, this module holds
a lazily built default::

    from perch.globals import default_router

    default_router().register("settings", open_settings)

Install a configured instance up front with ``set_default_router()``;
otherwise the first ``default_router()`` call builds one with the default
``RouterConfig``.
"""

import threading

from perch.config import RouterConfig
from perch.router import Router

_lock = threading.Lock()
_default: Router | None = None


def default_router(config: RouterConfig | None = None) -> Router:
    """Return the default router, building it on first use.

    *config* is only used when the router is built by this call.
    """
    global _default
    with _lock:
        if _default is None:
            _default = Router(config)
        return _default


def set_default_router(router: Router) -> Router:
    """Install *router* as the default, replacing any existing one."""
    global _default
    with _lock:
        _default = router
    return router


def reset_default_router() -> None:
    """Drop the default router. The next ``default_router()`` builds a new one."""
    global _default
    with _lock:
        _default = None
