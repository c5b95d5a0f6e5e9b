"""Abstract base class for issuing requests to the Tumblr API."""

from abc import ABC, abstractmethod

from tumblr_client.core.params import Params
from tumblr_client.core.response import Response


class Transport(ABC):
    """Abstract interface every API operation calls through.

    Implement this to point the library at any compatible backend: the
    real API, a local fixture server, or a test double. Paths are relative
    to the API root (e.g. "/user/dashboard").

    Every method returns a Response or raises TransportError.
    """

    @abstractmethod
    def get(self, path: str) -> Response:
        """Issue a GET request."""
        ...

    @abstractmethod
    def get_with_params(self, path: str, params: Params) -> Response:
        """Issue a GET request with query parameters."""
        ...

    @abstractmethod
    def post(self, path: str) -> Response:
        """Issue a POST request."""
        ...

    @abstractmethod
    def post_with_params(self, path: str, params: Params) -> Response:
        """Issue a POST request with form parameters."""
        ...

    @abstractmethod
    def put(self, path: str) -> Response:
        ...

    @abstractmethod
    def put_with_params(self, path: str, params: Params) -> Response:
        ...

    @abstractmethod
    def delete(self, path: str) -> Response:
        ...

    @abstractmethod
    def delete_with_params(self, path: str, params: Params) -> Response:
        ...
