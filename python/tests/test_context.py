"""Unit tests for RequestContext."""

from starlette.datastructures import Headers

from content_negotiation.context import HandlerResult, RequestContext


class TestRequestContext:
    def test_defaults(self):
        context = RequestContext()

        assert context.path == "/"
        assert isinstance(context.headers, Headers)
        assert context.query == {}
        assert context.body is None
        assert context.env == {}

    def test_plain_mapping_headers_are_case_insensitive(self):
        context = RequestContext(headers={"Accept": "application/json"})

        assert context.headers.get("accept") == "application/json"
        assert context.headers.get("ACCEPT") == "application/json"

    def test_headers_instance_kept(self):
        headers = Headers(headers={"x-test": "1"})

        context = RequestContext(headers=headers)

        assert context.headers is headers

    def test_item_access_uses_env(self):
        key = object()
        value = ["shared"]
        context = RequestContext(env={key: value})

        context["api.format"] = "json"

        assert context[key] is value
        assert "api.format" in context
        assert context.env["api.format"] == "json"
        assert context.get("missing") is None
        assert context.get("missing", "default") == "default"

    def test_contexts_do_not_share_env(self):
        first = RequestContext()
        second = RequestContext()

        first["api.format"] = "xml"

        assert "api.format" not in second


class TestHandlerResult:
    def test_unpacks_like_a_tuple(self):
        status, headers, body = HandlerResult(200, {"a": "b"}, [b"x"])

        assert status == 200
        assert headers == {"a": "b"}
        assert body == [b"x"]
