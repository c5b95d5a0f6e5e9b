"""Liked posts, like and unlike."""

import logging
from typing import Optional

from tumblr_client.adapters.transport import Transport
from tumblr_client.core.exceptions import DecodeError
from tumblr_client.core.params import Params, ParamsLike, as_params, set_post_id
from tumblr_client.core.response import Response, response_payload
from tumblr_client.core.types import MiniPost, read_int, read_list
from tumblr_client.services.posts import LazyPostList

logger = logging.getLogger("tumblr_client")


class Likes(LazyPostList):
    """One page of the user's liked posts."""

    POSTS_KEY = "liked_posts"

    def __init__(
        self,
        minis: list[MiniPost],
        response: Response,
        transport: Optional[Transport],
        total_likes: int = 0,
        mask_errors: bool = True,
    ):
        super().__init__(minis, response, transport, mask_errors)
        self.total_likes = total_likes


def get_likes(transport: Transport, params: ParamsLike = None, mask_errors: bool = True) -> Likes:
    """Retrieve the posts the current user has liked.

    Params may include limit, offset, before (timestamp) and after
    (timestamp).
    """
    response = transport.get_with_params("/user/likes", as_params(params))
    payload = response_payload(response)
    if not isinstance(payload, dict):
        raise DecodeError("Likes payload is not a JSON object")
    minis = [MiniPost.from_dict(p) for p in read_list(payload, "liked_posts")]
    logger.debug(f"Fetched {len(minis)} liked posts")
    return Likes(
        minis,
        response,
        transport,
        total_likes=read_int(payload, "liked_count"),
        mask_errors=mask_errors,
    )


def _do_like(transport: Transport, path: str, post_id: int, reblog_key: str) -> None:
    params = Params()
    params.set("reblog_key", reblog_key)
    transport.post_with_params(path, set_post_id(post_id, params))


def like_post(transport: Transport, post_id: int, reblog_key: str) -> None:
    """Like a post on behalf of the current user."""
    _do_like(transport, "/user/like", post_id, reblog_key)


def unlike_post(transport: Transport, post_id: int, reblog_key: str) -> None:
    _do_like(transport, "/user/unlike", post_id, reblog_key)
