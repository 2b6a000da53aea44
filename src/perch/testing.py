"""Testing helpers for code that registers perch routes.

``Recorder`` is a route action that remembers what it was called with::

    recorder = Recorder()
    router.register("user/:name", recorder)
    router.route("app://user/ada")
    assert recorder.last.parameters == {"name": "ada"}
"""

from perch.request import RoutingRequest


class Recorder:
    """Route action that records every fulfilled request it receives.

    Returns *result* from each call, so it can stand in for an accepting
    (``True``) or declining (``False``) action.
    """

    __slots__ = ("calls", "result")

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.calls: list[RoutingRequest] = []

    def __call__(self, request: RoutingRequest) -> bool:
        self.calls.append(request)
        return self.result

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def last(self) -> RoutingRequest:
        """The most recent request. Raises ``IndexError`` if never called."""
        return self.calls[-1]
