import json

import httpx
import pytest

from hep.config import HepConfig
from hep.http.client import HTTPClient
from hep.parse.request import assemble


def make_client(handler, **config):
    return HTTPClient(HepConfig(**config), transport=httpx.MockTransport(handler))


def test_sends_assembled_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = request.url
        seen["headers"] = request.headers
        seen["body"] = request.content
        return httpx.Response(201, json={"ok": True})

    parsed = assemble([
        "POST", ":8080/people",
        "person.name=brett", "person.age:=100",
        "X-Tag:a", "X-Tag:b", "page==2",
    ])
    with make_client(handler) as client:
        result = client.execute(parsed.request)

    assert result.success
    assert result.error is None
    assert result.request is parsed.request
    assert seen["method"] == "POST"
    assert seen["url"] == httpx.URL("http://localhost:8080/people?page=2")
    assert seen["headers"].get_list("x-tag") == ["a", "b"]
    assert seen["headers"]["content-type"] == "application/json"
    assert seen["headers"]["user-agent"].startswith("hep/")
    assert json.loads(seen["body"]) == {"person": {"name": "brett", "age": 100}}

    response = result.response
    assert response.status_code == 201
    assert response.is_success
    assert response.content_type == "application/json"
    assert json.loads(response.body) == {"ok": True}


def test_explicit_content_type_is_kept():
    seen = {}

    def handler(request):
        seen["content-type"] = request.headers.get_list("content-type")
        return httpx.Response(200)

    parsed = assemble(["PUT", ":", "Content-Type:application/vnd.api+json", "a=1"])
    with make_client(handler) as client:
        client.execute(parsed.request)

    assert seen["content-type"] == ["application/vnd.api+json"]


def test_get_without_fields_sends_no_body():
    seen = {}

    def handler(request):
        seen["body"] = request.content
        seen["content-type"] = request.headers.get("content-type")
        return httpx.Response(204)

    with make_client(handler) as client:
        result = client.execute(assemble(["httpbin.org/get"]).request)

    assert result.success
    assert seen["body"] == b""
    assert seen["content-type"] is None


def test_user_agent_from_config():
    seen = {}

    def handler(request):
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(200)

    with make_client(handler, user_agent="tester/1.0") as client:
        client.execute(assemble([":"]).request)

    assert seen["ua"] == "tester/1.0"


def test_response_headers_keep_repeats():
    def handler(request):
        return httpx.Response(
            200,
            headers=[("Set-Cookie", "a=1"), ("Set-Cookie", "b=2"), ("X-One", "1")],
            text="hello",
        )

    with make_client(handler) as client:
        result = client.execute(assemble([":"]).request)

    grouped = result.response.grouped_headers()
    assert grouped["Set-Cookie"] == ["a=1", "b=2"]
    assert grouped["X-One"] == ["1"]
    assert result.response.body == "hello"


def test_follows_redirects():
    def handler(request):
        if request.url.path == "/old":
            return httpx.Response(302, headers={"Location": "http://localhost/new"})
        return httpx.Response(200, text="moved")

    with make_client(handler) as client:
        result = client.execute(assemble([":/old"]).request)

    assert result.success
    assert result.response.status_code == 200
    assert result.redirect_chain == ["http://localhost/old"]


def test_no_follow_returns_redirect():
    def handler(request):
        return httpx.Response(302, headers={"Location": "http://localhost/new"})

    with make_client(handler, follow_redirects=False) as client:
        result = client.execute(assemble([":/old"]).request)

    assert result.success
    assert result.response.is_redirect
    assert result.redirect_chain == []


@pytest.mark.parametrize(
    "exc,message",
    [
        (httpx.ConnectError("refused"), "Connection failed"),
        (httpx.ReadTimeout("slow"), "timed out"),
        (httpx.RemoteProtocolError("garbage"), "garbage"),
    ],
)
def test_transport_errors_become_result_errors(exc, message):
    def handler(request):
        raise exc

    with make_client(handler) as client:
        result = client.execute(assemble([":"]).request)

    assert not result.success
    assert result.response is None
    assert message in result.error


def test_close_is_idempotent():
    client = make_client(lambda request: httpx.Response(200))
    client.execute(assemble([":"]).request)
    client.close()
    client.close()


def test_non_ascii_header_values_are_sent_as_utf8():
    seen = {}

    def handler(request):
        seen["raw"] = dict(request.headers.raw)
        return httpx.Response(200)

    with make_client(handler) as client:
        result = client.execute(assemble([":8080", "X-Name:José"]).request)

    assert result.success, result.error
    assert seen["raw"][b"X-Name"] == "José".encode("utf-8")


def test_unencodable_header_becomes_result_error():
    def handler(request):
        return httpx.Response(200)

    with make_client(handler) as client:
        result = client.execute(assemble([":8080", "X-Name:bad\udce9"]).request)

    assert not result.success
    assert result.response is None
    assert "Could not encode request" in result.error
