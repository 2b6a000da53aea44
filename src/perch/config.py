"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, one instance
per router.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    Override what you need::

        config = RouterConfig(resolve_fragments=True)
        router = Router(config)
    """

    # Merge "#fragment" path/query into the routed URL before matching
    resolve_fragments: bool = False
