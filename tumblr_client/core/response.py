"""API response envelope: raw body + headers, JSON sections on demand."""

import json
from typing import Any, Mapping, Optional

from requests.structures import CaseInsensitiveDict

from tumblr_client.core.exceptions import DecodeError, EmptyBodyError


class Response:
    """Raw response from a transport.

    ``meta``, ``result`` and ``errors`` mirror the ``{meta, response, errors}``
    envelope. They stay None until populate_from_body() is called, and
    after one successful populate further calls are no-ops.
    """

    def __init__(self, body: bytes = b"", headers: Optional[Mapping[str, str]] = None):
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = body
        self.headers = CaseInsensitiveDict(headers or {})
        self.meta: Optional[dict] = None
        self.result: Optional[dict] = None
        self.errors: Optional[dict] = None

    @property
    def body(self) -> bytes:
        return self._body

    def decode(self) -> Any:
        """Parse the whole body as JSON.

        Raises:
            EmptyBodyError: body has no bytes
            DecodeError: body is not valid JSON
        """
        if len(self._body) < 1:
            raise EmptyBodyError()
        try:
            return json.loads(self._body)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON in response body: {e}") from e

    def populate_from_body(self) -> None:
        """Fill meta/result/errors from the body, once."""
        if len(self._body) < 1:
            raise EmptyBodyError()
        if self.meta is not None or self.result is not None or self.errors is not None:
            return
        data = self.decode()
        if not isinstance(data, dict):
            raise DecodeError("Response envelope is not a JSON object")
        self.meta = _section(data, "meta")
        self.result = _section(data, "response")
        self.errors = _section(data, "errors")

    def __repr__(self) -> str:
        return f"Response(body={len(self._body)} bytes, headers={dict(self.headers)!r})"


def _section(data: dict, key: str) -> Optional[dict]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise DecodeError(f"Envelope section '{key}' is not an object")
    return value


def response_payload(response: Response) -> Any:
    """Decode the body and return the ``response`` member.

    A body without a ``response`` member yields an empty dict, so "{}"
    decodes to an empty page rather than an error.
    """
    data = response.decode()
    if not isinstance(data, dict):
        raise DecodeError("Response envelope is not a JSON object")
    payload = data.get("response")
    if payload is None:
        return {}
    return payload
