"""Tests for outbound JSON pushes."""

import httpx
import orjson
import pytest

from toolbox.core.errors import SerializationError, TransportError
from toolbox.tools.remote import push_json


def make_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestPushJSON:
    """Tests for push_json."""

    def test_posts_json_payload(self) -> None:
        """Verify the payload, method and content type of the outbound request."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="ok")

        with make_client(handler) as client:
            response, status = push_json("http://remote.test/hook", {"bar": "baar"}, client)

        assert status == 200
        assert response.text == "ok"
        assert seen[0].method == "POST"
        assert seen[0].headers["content-type"] == "application/json"
        assert orjson.loads(seen[0].content) == {"bar": "baar"}

    def test_non_2xx_is_returned_not_raised(self) -> None:
        """Verify error statuses are handed back to the caller."""
        with make_client(lambda request: httpx.Response(503)) as client:
            _, status = push_json("http://remote.test/", {"a": 1}, client)

        assert status == 503

    def test_caller_client_is_left_open(self) -> None:
        """Verify a supplied client is not closed."""
        client = make_client(lambda request: httpx.Response(204))

        push_json("http://remote.test/", [], client)

        assert not client.is_closed
        client.close()

    def test_transport_failure_raises(self) -> None:
        """Verify connection errors become TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client, pytest.raises(TransportError) as exc_info:
            push_json("http://remote.test/", {"a": 1}, client)

        assert exc_info.value.status_code == 502
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_unserializable_payload_raises(self) -> None:
        """Verify nothing is sent when the payload cannot be encoded."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        with make_client(handler) as client, pytest.raises(SerializationError):
            push_json("http://remote.test/", {"obj": object()}, client)

        assert calls == []

    def test_default_client(self, monkeypatch) -> None:
        """Verify a client is created when none is supplied."""
        transport = httpx.MockTransport(lambda request: httpx.Response(201, json={"id": 7}))
        original = httpx.Client

        monkeypatch.setattr(httpx, "Client", lambda **kwargs: original(transport=transport, **kwargs))

        response, status = push_json("http://remote.test/", {"a": 1})

        assert status == 201
        assert response.json() == {"id": 7}
