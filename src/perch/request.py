"""Routing requests — parsed, immutable views of an incoming URL.

``parse_url`` decomposes a URL once; the resulting ``RoutingRequest`` is
then tried against many routes. Fulfilling a route never mutates the
request: every attempt produces a new value with ``parameters`` and
``wildcard`` filled in (see ``perch.routing.matcher.fulfill``).

Two rules shape the parsed path:

* **Host folding** — ``myapp://open/settings`` treats ``open`` as the first
  path segment, so it parses the same as ``myapp:///open/settings``.
* **Fragment resolution** (opt-in) — ``myapp://a/b#c?x=1`` merges ``x=1``
  into the query and keeps ``#c`` on the path as ``("a", "b#c")``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from urllib.parse import SplitResult, parse_qsl, unquote, urlsplit

from perch.errors import InvalidURL

QueryPairs = tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class RoutingRequest:
    """A parsed URL, ready to be fulfilled against route components.

    Attributes:
        url: The URL text that was parsed.
        scheme: Lower-cased URL scheme.
        path: Path segments, host folded in, empty segments removed.
        query: Query pairs in URL order. Duplicates are kept.
        parameters: Read-only placeholder bindings plus non-empty query values.
            ``None`` until fulfilled, and ``None`` after fulfillment when
            nothing was extracted.
        wildcard: Path remainder captured by a trailing ``*``, joined
            with ``/``. ``None`` when no segment was left for it.
    """

    url: str
    scheme: str
    path: tuple[str, ...] = ()
    query: QueryPairs = ()
    parameters: Mapping[str, str] | None = field(default=None, hash=False)
    wildcard: str | None = None

    @classmethod
    def from_url(cls, url: str | SplitResult, *, resolve_fragment: bool = False) -> "RoutingRequest":
        """Alias for ``parse_url``."""
        return parse_url(url, resolve_fragment=resolve_fragment)

    @property
    def wildcard_components(self) -> SplitResult | None:
        """The wildcard remainder decomposed into path, query, and fragment."""
        if self.wildcard is None:
            return None
        return urlsplit(self.wildcard)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return an extracted parameter, or *default* if missing."""
        if self.parameters is None:
            return default
        return self.parameters.get(name, default)

    def fresh(self) -> "RoutingRequest":
        """Return a copy sharing the parsed data with empty result fields."""
        return replace(self, parameters=None, wildcard=None)


def split_path(path: str) -> tuple[str, ...]:
    """Split a URL path into percent-decoded segments.

    One leading and one trailing slash are ignored; empty segments are
    dropped, so ``"/a//b/"`` gives ``("a", "b")``.
    """
    return tuple(unquote(part) for part in path.split("/") if part)


def parse_query(query: str) -> list[tuple[str, str]]:
    """Parse a query string into ordered ``(name, value)`` pairs.

    Blank values are kept as ``""`` (``"a=&b"`` gives two pairs). A ``+``
    stays a literal plus sign; only percent escapes are decoded.
    """
    return parse_qsl(query.replace("+", "%2B"), keep_blank_values=True)


def _host_of(netloc: str) -> str:
    """Strip userinfo and port from *netloc*, preserving case."""
    host = netloc.rpartition("@")[2]
    if host.startswith("["):
        return host.partition("]")[0] + "]"
    return host.partition(":")[0]


def _resolve_fragment(path: str, query: list[tuple[str, str]], fragment: str) -> str:
    """Merge *fragment* into *path* and *query*. Returns the new path.

    The fragment is parsed as a URL of its own. When it has no query, its
    path is read as one instead, so ``#a=1&b=2`` counts as query-only.
    """
    try:
        inner = urlsplit(fragment)
    except ValueError:
        return path

    query_text = inner.query or inner.path
    pairs = parse_query(query_text)
    query_only = bool(pairs) and pairs[0][1] != ""

    if query_only:
        query.extend(pairs)
    if not query_only or inner.path != query_text:
        path = f"{path}#{inner.path}"
    return path


def _check_text(url: str) -> None:
    if not url:
        raise InvalidURL(url, "empty string")
    for ch in url:
        if ch.isspace() or not ch.isprintable():
            raise InvalidURL(url, f"illegal character {ch!r}")


def parse_url(url: str | SplitResult, *, resolve_fragment: bool = False) -> RoutingRequest:
    """Parse *url* into a ``RoutingRequest``.

    Accepts URL text or an already split ``urllib.parse.SplitResult``.

    Raises:
        InvalidURL: If the input cannot be split into URL components or
            has no scheme.
    """
    if isinstance(url, SplitResult):
        parts = url
        text = url.geturl()
    elif isinstance(url, str):
        _check_text(url)
        text = url
        try:
            parts = urlsplit(url)
            parts.port  # noqa: B018 — raises ValueError for a malformed port
        except ValueError as exc:
            raise InvalidURL(url, str(exc)) from exc
    else:
        raise InvalidURL(url, f"expected str or SplitResult, got {type(url).__name__}")

    if not parts.scheme:
        raise InvalidURL(text, "missing scheme")

    path = parts.path
    host = _host_of(parts.netloc)
    if host and host != "/":
        path = host + path

    query = parse_query(parts.query)
    # An empty trailing "#" still counts as a fragment
    if resolve_fragment and (parts.fragment or text.endswith("#")):
        path = _resolve_fragment(path, query, parts.fragment)

    return RoutingRequest(
        url=text,
        scheme=parts.scheme,
        path=split_path(path),
        query=tuple(query),
    )
