"""Tag search, paged by timestamp."""

import logging
from typing import Any

from tumblr_client.adapters.transport import Transport
from tumblr_client.core.exceptions import DecodeError, NoNextPageError
from tumblr_client.core.params import Params, ParamsLike, as_params
from tumblr_client.core.response import Response, response_payload
from tumblr_client.core.types import MiniPost
from tumblr_client.services.posts import LazyPostList, Post

logger = logging.getLogger("tumblr_client")


def _post_list(payload: Any) -> list:
    # "/tagged" returns a bare list under "response"; a missing member decodes as {}
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and not payload:
        return []
    raise DecodeError("Tagged search payload is not a JSON list")


class SearchResults(LazyPostList):
    """One page of posts carrying a tag."""

    def __init__(
        self,
        minis: list[MiniPost],
        response: Response,
        transport: Transport,
        params: Params,
        mask_errors: bool = True,
    ):
        super().__init__(minis, response, transport, mask_errors)
        self._params = params

    @property
    def params(self) -> Params:
        return self._params.copy()

    @property
    def tag(self) -> str:
        return self._params.get("tag")

    @property
    def posts(self) -> list[Post]:
        return self.all()

    def _extract_items(self, payload: Any) -> list:
        return _post_list(payload)

    def next(self) -> "SearchResults":
        """Results published before the last post of this page.

        The featured timestamp is used when the post has one, otherwise
        the post timestamp.

        Raises:
            NoNextPageError: this page is empty
        """
        posts = self.all()
        if len(posts) < 1:
            raise NoNextPageError()
        last = posts[-1]
        before = last.featured_timestamp
        if before < 1:
            before = last.timestamp
        params = self._params.copy()
        params.set("before", before)
        return tagged_search(self._transport, params.get("tag"), params, mask_errors=self._mask_errors)


def tagged_search(
    transport: Transport,
    tag: str,
    params: ParamsLike = None,
    mask_errors: bool = True,
) -> SearchResults:
    """Retrieve a page of posts tagged with ``tag``."""
    values = as_params(params)
    values.set("tag", tag)
    response = transport.get_with_params("/tagged", values)
    items = _post_list(response_payload(response))
    minis = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise DecodeError(f"Post at index {index} is not a JSON object")
        minis.append(MiniPost.from_dict(item))

    results = SearchResults(minis, response, transport, values, mask_errors=mask_errors)
    results.all()
    logger.debug(f"Fetched {len(minis)} posts tagged '{tag}'")
    return results
