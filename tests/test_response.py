"""Tests for the Response envelope."""

import pytest

from tumblr_client.core.exceptions import DecodeError, EmptyBodyError
from tumblr_client.core.response import Response, response_payload


class TestDecode:
    def test_empty_body_raises(self):
        with pytest.raises(EmptyBodyError, match="Unable to populate from empty body"):
            Response(b"").decode()

    def test_invalid_json_raises(self):
        with pytest.raises(DecodeError):
            Response(b"{not json").decode()

    def test_str_body_is_encoded(self):
        assert Response('{"a": 1}').body == b'{"a": 1}'


class TestPopulateFromBody:
    def test_fills_sections(self):
        r = Response(b'{"meta": {"status": 200}, "response": {"x": 1}}')
        r.populate_from_body()
        assert r.meta == {"status": 200}
        assert r.result == {"x": 1}
        assert r.errors is None

    def test_second_populate_is_noop(self):
        r = Response(b'{"response": {"x": 1}}')
        r.populate_from_body()
        r.result["x"] = 99
        r.populate_from_body()
        assert r.result == {"x": 99}

    def test_empty_body_raises(self):
        with pytest.raises(EmptyBodyError):
            Response().populate_from_body()

    def test_non_object_section_raises(self):
        with pytest.raises(DecodeError):
            Response(b'{"response": [1, 2]}').populate_from_body()

    def test_non_object_envelope_raises(self):
        with pytest.raises(DecodeError):
            Response(b"[1]").populate_from_body()


class TestHeaders:
    def test_headers_case_insensitive(self):
        r = Response(b"{}", {"Location": "https://example.com/a.png"})
        assert r.headers.get("location") == "https://example.com/a.png"


class TestResponsePayload:
    def test_returns_response_member(self):
        assert response_payload(Response(b'{"response": {"posts": []}}')) == {"posts": []}

    def test_empty_object_gives_empty_payload(self):
        assert response_payload(Response(b"{}")) == {}

    def test_list_envelope_raises(self):
        with pytest.raises(DecodeError):
            response_payload(Response(b"[]"))
