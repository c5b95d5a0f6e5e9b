"""Shared test fixtures for tumblr_client tests."""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from tumblr_client.adapters.transport import Transport
from tumblr_client.core.config_manager import ConfigManager
from tumblr_client.core.params import Params
from tumblr_client.core.response import Response


def envelope(payload, status=200, msg="OK"):
    """Build a standard API response body around payload."""
    return json.dumps({"meta": {"status": status, "msg": msg}, "response": payload})


class FakeTransport(Transport):
    """Transport double that records calls and replays queued responses.

    Queue a Response (or an exception to raise) per expected call with
    ``queue()``. When the queue is empty ``default`` is returned.
    """

    def __init__(self, default=None):
        self.calls = []
        self._queue = []
        self.default = default if default is not None else Response(envelope({}))

    def queue(self, *items):
        for item in items:
            if isinstance(item, (dict, list)):
                item = Response(envelope(item))
            self._queue.append(item)
        return self

    def _reply(self, method, path, params):
        self.calls.append((method, path, params.copy()))
        item = self._queue.pop(0) if self._queue else self.default
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last(self):
        return self.calls[-1]

    def get(self, path):
        return self._reply("GET", path, Params())

    def get_with_params(self, path, params):
        return self._reply("GET", path, params)

    def post(self, path):
        return self._reply("POST", path, Params())

    def post_with_params(self, path, params):
        return self._reply("POST", path, params)

    def put(self, path):
        return self._reply("PUT", path, Params())

    def put_with_params(self, path, params):
        return self._reply("PUT", path, params)

    def delete(self, path):
        return self._reply("DELETE", path, Params())

    def delete_with_params(self, path, params):
        return self._reply("DELETE", path, params)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset all singletons after each test."""
    yield
    ConfigManager.reset()


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def transport():
    return FakeTransport()


def raw_post(post_id=1, post_type="text", blog_name="staff", reblog_key="key", **extra):
    """A raw post object as it appears in list responses."""
    data = {
        "id": post_id,
        "type": post_type,
        "blog_name": blog_name,
        "reblog_key": reblog_key,
    }
    data.update(extra)
    return data
