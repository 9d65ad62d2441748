import json
from typing import Any, Callable, List, Optional

import httpx
import pytest


class StubUpstream:
    """
    Stands in for every provider API: records each outbound request and
    answers it with a fixed response or a handler's result.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request reached the upstream"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def make_upstream() -> Callable[..., StubUpstream]:
    def _make(
        status_code: int = 200,
        json_body: Any = None,
        *,
        content: Optional[bytes] = None,
        error: Optional[Exception] = None,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> StubUpstream:
        if handler is not None:
            return StubUpstream(handler)

        def respond(request: httpx.Request) -> httpx.Response:
            if error is not None:
                raise error
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json_body if json_body is not None else {})

        return StubUpstream(respond)

    return _make
