"""Following and follower lists (offset paged), follow and unfollow."""

import logging
from typing import Optional

from tumblr_client.adapters.transport import Transport
from tumblr_client.core.exceptions import DecodeError
from tumblr_client.core.params import Params, ParamsLike, as_params, blog_path, normalize_blog_name, param_int
from tumblr_client.core.response import Response, response_payload
from tumblr_client.core.types import Follower, read_int, read_list
from tumblr_client.services import blogs as blog_ops
from tumblr_client.services.pagination import effective_limit, next_offset, prev_offset

logger = logging.getLogger("tumblr_client")


class FollowingList:
    """One page of blogs followed by the user, or by a given blog."""

    def __init__(
        self,
        transport: Transport,
        blogs: list["blog_ops.Blog"],
        total: int,
        params: Params,
        blog_name: Optional[str] = None,
    ):
        self._transport = transport
        self.blogs = blogs
        self.total = total
        self._params = params
        self._blog_name = blog_name
        self.offset = param_int(params, "offset")
        self.limit = param_int(params, "limit")

    @property
    def params(self) -> Params:
        return self._params.copy()

    def _fetch(self, offset: int) -> "FollowingList":
        params = self._params.copy()
        params.set("limit", effective_limit(self.limit, len(self.blogs)))
        params.set("offset", offset)
        if self._blog_name is None:
            return get_following(self._transport, params)
        return get_following_of_blog(self._transport, self._blog_name, params)

    def next(self) -> "FollowingList":
        """Raises NoNextPageError past the last page."""
        return self._fetch(next_offset(self.offset, self.limit, len(self.blogs), self.total))

    def prev(self) -> "FollowingList":
        """Raises NoPrevPageError on the first page."""
        return self._fetch(prev_offset(self.offset, self.limit, len(self.blogs)))


class FollowerList:
    """One page of a blog's followers."""

    def __init__(
        self,
        transport: Transport,
        name: str,
        followers: list[Follower],
        total: int,
        params: Params,
    ):
        self._transport = transport
        self.name = name
        self.followers = followers
        self.total = total
        self._params = params
        self.offset = param_int(params, "offset")
        self.limit = param_int(params, "limit")

    @property
    def params(self) -> Params:
        return self._params.copy()

    def _fetch(self, offset: int) -> "FollowerList":
        params = self._params.copy()
        params.set("limit", effective_limit(self.limit, len(self.followers)))
        params.set("offset", offset)
        return get_followers(self._transport, self.name, params)

    def next(self) -> "FollowerList":
        return self._fetch(next_offset(self.offset, self.limit, len(self.followers), self.total))

    def prev(self) -> "FollowerList":
        return self._fetch(prev_offset(self.offset, self.limit, len(self.followers)))


def _payload(response: Response) -> dict:
    payload = response_payload(response)
    if not isinstance(payload, dict):
        raise DecodeError("List payload is not a JSON object")
    return payload


def _following_list(
    transport: Transport,
    response: Response,
    params: Params,
    blog_name: Optional[str] = None,
) -> FollowingList:
    payload = _payload(response)
    return FollowingList(
        transport,
        [blog_ops.Blog.from_dict(b, transport) for b in read_list(payload, "blogs")],
        read_int(payload, "total_blogs"),
        params,
        blog_name=blog_name,
    )


def get_following(transport: Transport, params: ParamsLike = None) -> FollowingList:
    """Retrieve the blogs the current user follows (limit/offset in params)."""
    values = as_params(params)
    response = transport.get_with_params("/user/following", values)
    return _following_list(transport, response, values)


def get_following_of_blog(transport: Transport, name: str, params: ParamsLike = None) -> FollowingList:
    """Retrieve the blogs a given blog follows."""
    values = as_params(params)
    response = transport.get_with_params(blog_path("/blog/%s/following", name), values)
    return _following_list(transport, response, values, blog_name=name)


def get_followers(transport: Transport, name: str, params: ParamsLike = None) -> FollowerList:
    """Retrieve a blog's followers (limit/offset in params)."""
    values = as_params(params)
    response = transport.get_with_params(blog_path("/blog/%s/followers", name), values)
    payload = _payload(response)
    followers = [Follower.from_dict(u) for u in read_list(payload, "users")]
    logger.debug(f"Fetched {len(followers)} followers of {name}")
    return FollowerList(transport, name, followers, read_int(payload, "total_users"), values)


def follow(transport: Transport, blog_name: str) -> None:
    transport.post_with_params("/user/follow", Params({"url": normalize_blog_name(blog_name)}))


def unfollow(transport: Transport, blog_name: str) -> None:
    transport.post_with_params("/user/unfollow", Params({"url": normalize_blog_name(blog_name)}))
