"""Tests for perch.router — registration and priority-ordered dispatch."""

import logging
from urllib.parse import urlsplit

import pytest

from perch.config import RouterConfig
from perch.errors import InvalidURL
from perch.request import RoutingRequest
from perch.routing.handler import RouteHandler
from perch.router import Router
from perch.testing import Recorder


def _decline(request: RoutingRequest) -> bool:
    return False


class TestRegistration:
    def test_single(self) -> None:
        router = Router()
        handler_id = router.register("", _decline)
        assert len(router) == 1
        assert router.handlers[0].id == handler_id
        assert handler_id in router

    def test_first_id_is_zero(self) -> None:
        assert Router().register("a", _decline) == 0

    def test_many(self) -> None:
        router = Router()
        ids = router.register_many(["a", "b", "c"], _decline, scheme="s", priority=3)
        assert len(router) == 3
        assert [router.get(i).route for i in ids] == ["a", "b", "c"]  # type: ignore[union-attr]
        assert all(h.scheme == "s" and h.priority == 3 for h in router.handlers)

    def test_decorator(self) -> None:
        router = Router()

        @router.on("user/:name", scheme="app", priority=7)
        def show(request: RoutingRequest) -> bool:
            return True

        (handler,) = router.handlers
        assert handler.action is show
        assert handler.scheme == "app"
        assert handler.priority == 7

    def test_ids_never_reused(self) -> None:
        router = Router()
        seen: set[int] = set()
        for _ in range(3):
            handler_id = router.register("x", _decline)
            assert handler_id not in seen
            seen.add(handler_id)
            router.unregister(handler_id)
        router.unregister_all()
        assert router.register("x", _decline) not in seen


class TestUnregistration:
    def test_by_id(self) -> None:
        router = Router()
        handler_id = router.register("", _decline)
        router.unregister(handler_id)
        assert len(router) == 0

    def test_unknown_id_ignored(self) -> None:
        router = Router()
        router.register("", _decline)
        router.unregister(999)
        assert len(router) == 1

    def test_all(self) -> None:
        router = Router()
        router.register_many(["a", "b"], _decline)
        router.unregister_all()
        assert len(router) == 0

    def test_route_any_scheme(self) -> None:
        router = Router()
        router.register("/test", _decline)
        router.register("/test", _decline, scheme="test1")
        keep = router.register("/test2", _decline)
        assert router.unregister_route("/test") == 2
        assert [h.id for h in router.handlers] == [keep]

    def test_route_with_scheme(self) -> None:
        router = Router()
        keep1 = router.register("/test", _decline)
        router.register("/test", _decline, scheme="test1")
        keep2 = router.register("/test2", _decline, scheme="test1")
        router.unregister_route("/test", scheme="test1")
        assert {h.id for h in router.handlers} == {keep1, keep2}

    def test_route_matches_original_string(self) -> None:
        router = Router()
        router.register("/test", _decline)
        assert router.unregister_route("test") == 0
        assert len(router) == 1


class TestDispatchOrder:
    def test_priority_descending(self) -> None:
        router = Router()
        tried: list[int] = []

        def action(priority: int):
            def record(request: RoutingRequest) -> bool:
                tried.append(priority)
                return False

            return record

        for priority in (50, 100, 150, 1, 0):
            router.register("*", action(priority), priority=priority)

        assert router.route("scheme://") is False
        assert tried == [150, 100, 50, 1, 0]

    def test_ties_in_registration_order(self) -> None:
        router = Router()
        tried: list[str] = []
        for name in ("first", "second", "third"):
            router.register("*", lambda r, n=name: tried.append(n) or False)
        router.route("scheme://x")
        assert tried == ["first", "second", "third"]

    def test_stops_on_success(self) -> None:
        router = Router()
        first, second, third = Recorder(False), Recorder(True), Recorder(True)
        router.register("*", first, priority=100)
        router.register("*", second, priority=99)
        router.register("*", third, priority=98)

        assert router.route("scheme://") is True
        assert first.called
        assert second.called
        assert not third.called

    def test_skips_other_schemes(self) -> None:
        router = Router()
        other, mine = Recorder(), Recorder()
        router.register("x", other, scheme="other", priority=10)
        router.register("x", mine, scheme="mine")
        assert router.route("mine://x") is True
        assert not other.called
        assert mine.called


class AlwaysHandler(RouteHandler):
    """Accepts every URL, ignoring its route."""

    def handle(self, request: RoutingRequest) -> bool:
        return bool(self.action(request))


class TestHandlerClass:
    def test_subclass_handle_used_for_dispatch(self) -> None:
        router = Router()
        recorder = Recorder()
        handler_id = router.register("never/matches", recorder, handler_class=AlwaysHandler)
        assert isinstance(router.get(handler_id), AlwaysHandler)
        assert router.route("scheme://something/else") is True
        assert recorder.last.path == ("something", "else")

    def test_subclass_respects_priority(self) -> None:
        router = Router()
        fallback, first = Recorder(), Recorder()
        router.register("x", fallback, priority=1, handler_class=AlwaysHandler)
        router.register("x", first, priority=5)
        assert router.route("scheme://x") is True
        assert first.called
        assert not fallback.called

    def test_declined_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        router = Router()
        handler_id = router.register("x", Recorder(result=False))
        with caplog.at_level(logging.DEBUG, logger="perch.router"):
            assert router.route("scheme://x") is False
        assert f"Handler {handler_id} ('x') declined scheme://x" in caplog.text


class TestRoute:
    def test_no_handlers(self) -> None:
        assert Router().route("scheme://a") is False

    def test_no_match(self) -> None:
        router = Router()
        recorder = Recorder()
        router.register("a/b", recorder)
        assert router.route("scheme://a/c") is False
        assert not recorder.called

    def test_action_receives_fulfilled_request(self) -> None:
        router = Router()
        recorder = Recorder()
        router.register("/test", recorder)
        assert router.route("scheme://test?x=1") is True
        assert recorder.last.url == "scheme://test?x=1"
        assert recorder.last.parameters == {"x": "1"}

    def test_split_result(self) -> None:
        router = Router()
        router.register("a", Recorder())
        assert router.route(urlsplit("scheme://a")) is True

    def test_invalid_url_returns_false(self, caplog: pytest.LogCaptureFixture) -> None:
        router = Router()
        recorder = Recorder()
        router.register("*", recorder)
        with caplog.at_level(logging.WARNING, logger="perch.router"):
            assert router.route("not a url") is False
        assert not recorder.called
        assert "Invalid URL" in caplog.text

    def test_invalid_url_strict(self) -> None:
        with pytest.raises(InvalidURL):
            Router().route("s/t", strict=True)

    def test_action_exception_propagates(self) -> None:
        router = Router()

        def boom(request: RoutingRequest) -> bool:
            raise RuntimeError("boom")

        router.register("*", boom)
        with pytest.raises(RuntimeError, match="boom"):
            router.route("scheme://")

    def test_handle_url(self) -> None:
        router = Router()
        recorder = Recorder()
        router.register("test", recorder)
        router.handle_url("scheme://test")
        assert recorder.called


class TestFragmentConfig:
    URL = "scheme://path/to#/fragment?foo=bar"

    def test_default_off(self) -> None:
        router = Router()
        recorder = Recorder()
        router.register("path/to", recorder)
        assert router.resolve_fragments is False
        assert router.route(self.URL) is True
        assert recorder.last.parameters is None

    def test_enabled(self) -> None:
        router = Router(RouterConfig(resolve_fragments=True))
        recorder = Recorder()
        router.register("path/to#/fragment", recorder)
        assert router.route(self.URL) is True
        assert recorder.last.parameters == {"foo": "bar"}

    def test_configure(self) -> None:
        router = Router()
        config = router.configure(resolve_fragments=True)
        assert config.resolve_fragments is True
        assert router.config is config
        assert router.resolve_fragments is True
