"""Transport implementation over a requests.Session."""

import logging
from typing import Optional

import requests
from requests.auth import AuthBase

from tumblr_client.adapters.transport import Transport
from tumblr_client.core.exceptions import TransportError
from tumblr_client.core.params import Params
from tumblr_client.core.response import Response


logger = logging.getLogger("tumblr_client")

# App version for User-Agent
_APP_VERSION = "1.0.0"

DEFAULT_BASE_URL = "https://api.tumblr.com/v2"


class RequestsTransport(Transport):
    """Sends API requests with ``requests``.

    GET/DELETE parameters go in the query string, POST/PUT parameters in
    a form-encoded body. Redirects are not followed so callers can read
    ``Location`` headers (the avatar endpoint answers with one).

    Signing is delegated to ``auth``: any requests auth object, e.g. an
    OAuth1 signer. ``api_key`` is appended to every request when set,
    which is enough for the public read endpoints.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        auth: Optional[AuthBase] = None,
        api_key: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._session = session or requests.Session()
        if auth is not None:
            self._session.auth = auth
        self._session.headers.update({
            "User-Agent": f"tumblr_client/{_APP_VERSION}",
            "Accept": "application/json",
        })

    def get(self, path: str) -> Response:
        return self._request("GET", path, Params())

    def get_with_params(self, path: str, params: Params) -> Response:
        return self._request("GET", path, params)

    def post(self, path: str) -> Response:
        return self._request("POST", path, Params())

    def post_with_params(self, path: str, params: Params) -> Response:
        return self._request("POST", path, params)

    def put(self, path: str) -> Response:
        return self._request("PUT", path, Params())

    def put_with_params(self, path: str, params: Params) -> Response:
        return self._request("PUT", path, params)

    def delete(self, path: str) -> Response:
        return self._request("DELETE", path, Params())

    def delete_with_params(self, path: str, params: Params) -> Response:
        return self._request("DELETE", path, params)

    def _request(self, method: str, path: str, params: Params) -> Response:
        """Send one request and wrap the reply in a Response.

        Raises:
            TransportError: connection failure or HTTP status >= 400
        """
        url = f"{self._base_url}{path}"
        values = params.to_dict()
        logger.debug(f"API Request: {method} {url} params={values}")
        if self._api_key:
            values["api_key"] = [self._api_key]

        if method in ("GET", "DELETE"):
            kwargs = {"params": values}
        else:
            kwargs = {"data": values}

        try:
            raw = self._session.request(
                method,
                url,
                timeout=self._timeout,
                allow_redirects=False,
                **kwargs,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        response = Response(raw.content, raw.headers)
        logger.debug(f"API Response: {method} {path} -> HTTP {raw.status_code}")
        if raw.status_code >= 400:
            raise TransportError(
                f"{method} {path} returned HTTP {raw.status_code}",
                status_code=raw.status_code,
                response=response,
            )
        return response
