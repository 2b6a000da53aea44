"""URL event fan-out with explicit subscription lifetimes.

An embedding application owns one ``URLEventSource`` and calls ``emit()``
whenever the OS delivers an "open URL" event. Routers (or any callable
taking a URL string) subscribe and receive every emitted URL until they
cancel their subscription::

    source = URLEventSource()
    subscription = router.listen(source)
    source.emit("myapp://open/settings")
    subscription.cancel()

Listeners are held strongly. Nothing is pruned behind the owner's back;
cancel the subscription (or use it as a context manager) when done.

For async applications, ``open_url_stream()`` and ``pump()`` move URLs
from an OS callback thread onto the event loop::

    send, receive = open_url_stream()
    async with anyio.create_task_group() as tg:
        tg.start_soon(pump, source, receive)
        # OS callback thread, via a BlockingPortal:
        #   portal.call(send.send, url)
"""

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeAlias

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

logger = logging.getLogger("perch.events")

URLListener: TypeAlias = Callable[[str], Any]


class Subscription:
    """Handle returned by ``URLEventSource.subscribe()``.

    ``cancel()`` is idempotent. Using the subscription as a context manager
    cancels it on exit.
    """

    __slots__ = ("_key", "_source", "listener")

    def __init__(self, source: "URLEventSource", key: int, listener: URLListener) -> None:
        self._source = source
        self._key = key
        self.listener = listener

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"<Subscription {self._key} {state}>"

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cancel()

    @property
    def active(self) -> bool:
        return self._source._has(self._key)

    def cancel(self) -> None:
        self._source._remove(self._key)


class URLEventSource:
    """Delivers URL strings to subscribed listeners in subscription order.

    There is no deduplication: subscribing the same callable twice delivers
    each URL to it twice.
    """

    __slots__ = ("_last_key", "_listeners")

    def __init__(self) -> None:
        self._listeners: dict[int, URLListener] = {}
        self._last_key = -1

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: URLListener) -> Subscription:
        self._last_key += 1
        self._listeners[self._last_key] = listener
        logger.debug("Subscribed listener %d: %r", self._last_key, listener)
        return Subscription(self, self._last_key, listener)

    def emit(self, url: str) -> int:
        """Deliver *url* to every active listener.

        A listener that raises stops delivery; the exception is logged and
        re-raised.

        Returns:
            The number of listeners the URL was delivered to.
        """
        delivered = 0
        # Copy so listeners may cancel subscriptions while we iterate
        for key, listener in list(self._listeners.items()):
            if key not in self._listeners:
                continue
            try:
                listener(url)
            except Exception:
                logger.exception("URL listener %d failed for %s", key, url)
                raise
            delivered += 1
        return delivered

    def _has(self, key: int) -> bool:
        return key in self._listeners

    def _remove(self, key: int) -> None:
        if self._listeners.pop(key, None) is not None:
            logger.debug("Cancelled listener %d", key)


def open_url_stream(
    max_buffer_size: float = 16,
) -> tuple[MemoryObjectSendStream[str], MemoryObjectReceiveStream[str]]:
    """Create the anyio memory stream that ``pump()`` reads URLs from."""
    return anyio.create_memory_object_stream[str](max_buffer_size)


async def pump(source: URLEventSource, receive: MemoryObjectReceiveStream[str]) -> int:
    """Emit every URL received on *receive* until the send side closes.

    Returns:
        The number of URLs emitted.
    """
    count = 0
    async with receive:
        async for url in receive:
            source.emit(url)
            count += 1
    return count
