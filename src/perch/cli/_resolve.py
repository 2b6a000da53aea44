"""Router import resolution for ``perch routes`` and ``perch route``.

``"myapp.urls:router"`` names a Router (or a zero-argument factory that
builds one). ``"myapp.urls"`` alone uses the module's ``router`` attribute,
or, when the module has none, the process-wide default router the module
registered its handlers on at import time.
"""

import importlib
import sys

from perch.errors import ConfigurationError
from perch.globals import default_router
from perch.router import Router


def _as_router(candidate: object, import_string: str) -> Router:
    if isinstance(candidate, Router):
        return candidate
    if not callable(candidate):
        msg = f"{import_string!r} resolved to {type(candidate).__name__}, not a perch.Router instance"
        raise ConfigurationError(msg)

    try:
        built = candidate()
    except Exception as exc:
        msg = f"Router factory {import_string!r} raised an error: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(built, Router):
        msg = f"Router factory {import_string!r} returned {type(built).__name__}, not a perch.Router instance"
        raise ConfigurationError(msg)
    return built


def resolve_router(import_string: str) -> Router:
    """Import the module named by *import_string* and return its router.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If an explicit attribute does not exist on the module.
        ConfigurationError: If the target is neither a Router nor a factory
            returning one.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)

    if attr_name:
        return _as_router(getattr(module, attr_name), import_string)

    candidate = getattr(module, "router", None)
    if candidate is None:
        return default_router()
    return _as_router(candidate, f"{module_path}:router")


def load_router(import_string: str) -> Router:
    """``resolve_router`` for CLI commands: print the error and exit 1 on failure."""
    try:
        return resolve_router(import_string)
    except (ModuleNotFoundError, AttributeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
