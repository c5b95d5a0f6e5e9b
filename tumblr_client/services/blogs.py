"""Blogs: blog references, blog info and avatar lookups."""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional

from tumblr_client.adapters.transport import Transport
from tumblr_client.core.exceptions import DecodeError
from tumblr_client.core.params import ParamsLike, blog_path
from tumblr_client.core.response import response_payload
from tumblr_client.core.types import read_bool, read_dict, read_int, read_str, to_plain
from tumblr_client.services import followers as follower_ops
from tumblr_client.services import posts as post_ops

logger = logging.getLogger("tumblr_client")


@dataclass
class BlogRef:
    """Reference to a blog, bound to a transport, used to act on it.

    Every method forwards to the matching module-level operation with
    this blog's name.
    """

    name: str = ""
    transport: Optional[Transport] = field(default=None, repr=False, compare=False)

    def get_info(self) -> "Blog":
        return get_blog_info(self.transport, self.name)

    def get_avatar(self, size: Optional[int] = None) -> str:
        return get_avatar(self.transport, self.name, size)

    def get_followers(self, params: ParamsLike = None) -> "follower_ops.FollowerList":
        return follower_ops.get_followers(self.transport, self.name, params)

    def get_following(self, params: ParamsLike = None) -> "follower_ops.FollowingList":
        return follower_ops.get_following_of_blog(self.transport, self.name, params)

    def get_posts(self, params: ParamsLike = None) -> "post_ops.Posts":
        return post_ops.get_posts(self.transport, self.name, params)

    def get_queue(self, params: ParamsLike = None) -> "post_ops.Posts":
        return post_ops.get_queue(self.transport, self.name, params)

    def get_drafts(self, params: ParamsLike = None) -> "post_ops.Posts":
        return post_ops.get_drafts(self.transport, self.name, params)

    def get_submissions(self, params: ParamsLike = None) -> "post_ops.Posts":
        return post_ops.get_submissions(self.transport, self.name, params)

    def create_post(self, params: ParamsLike = None) -> "post_ops.PostRef":
        return post_ops.create_post(self.transport, self.name, params)

    def reblog_post(self, post: "post_ops.PostRef", params: ParamsLike = None) -> "post_ops.PostRef":
        """Reblog ``post`` onto this blog."""
        return post.reblog_on_blog(self.name, params)

    def follow(self) -> None:
        follower_ops.follow(self.transport, self.name)

    def unfollow(self) -> None:
        follower_ops.unfollow(self.transport, self.name)


@dataclass
class ShortBlog(BlogRef):
    """Subset of blog information, as listed in a user's blogs."""

    url: str = ""
    title: str = ""
    primary: bool = False
    followers: int = 0
    tweet: str = ""                  # post-to-Twitter setting
    facebook: str = ""               # post-to-Facebook setting
    type: str = ""                   # visibility: "public" | "private"

    @classmethod
    def from_dict(cls, data: dict, transport: Optional[Transport] = None) -> "ShortBlog":
        return cls(
            name=read_str(data, "name"),
            transport=transport,
            url=read_str(data, "url"),
            title=read_str(data, "title"),
            primary=read_bool(data, "primary"),
            followers=read_int(data, "followers"),
            tweet=read_str(data, "tweet"),
            facebook=read_str(data, "facebook"),
            type=read_str(data, "type"),
        )


@dataclass
class Blog(BlogRef):
    """Full blog information."""

    url: str = ""
    title: str = ""
    posts: int = 0
    ask: bool = False
    ask_anon: bool = False
    ask_page_title: str = ""
    can_send_fan_mail: bool = False
    can_submit: bool = False
    can_subscribe: bool = False
    description: str = ""
    followed: bool = False
    is_blocked_from_primary: bool = False
    is_nsfw: bool = False
    share_likes: bool = False
    submission_page_title: str = ""
    subscribed: bool = False
    total_posts: int = 0
    updated: int = 0

    @classmethod
    def from_dict(cls, data: dict, transport: Optional[Transport] = None) -> "Blog":
        return cls(
            name=read_str(data, "name"),
            transport=transport,
            url=read_str(data, "url"),
            title=read_str(data, "title"),
            posts=read_int(data, "posts"),
            ask=read_bool(data, "ask"),
            ask_anon=read_bool(data, "ask_anon"),
            ask_page_title=read_str(data, "ask_page_title"),
            can_send_fan_mail=read_bool(data, "can_send_fan_mail"),
            can_submit=read_bool(data, "can_submit"),
            can_subscribe=read_bool(data, "can_subscribe"),
            description=read_str(data, "description"),
            followed=read_bool(data, "followed"),
            is_blocked_from_primary=read_bool(data, "is_blocked_from_primary"),
            is_nsfw=read_bool(data, "is_nsfw"),
            share_likes=read_bool(data, "share_likes"),
            submission_page_title=read_str(data, "submission_page_title"),
            subscribed=read_bool(data, "subscribed"),
            total_posts=read_int(data, "total_posts"),
            updated=read_int(data, "updated"),
        )

    def to_json(self) -> str:
        return json.dumps(to_plain(self), indent=2)

    def __str__(self) -> str:
        return self.to_json()


def new_blog_ref(transport: Transport, name: str) -> BlogRef:
    return BlogRef(name=name, transport=transport)


def get_blog_info(transport: Transport, name: str) -> Blog:
    """Retrieve information about a blog."""
    response = transport.get(blog_path("/blog/%s/info", name))
    payload = response_payload(response)
    if not isinstance(payload, dict):
        raise DecodeError("Blog info payload is not a JSON object")
    logger.debug(f"Fetched info for blog {name}")
    return Blog.from_dict(read_dict(payload, "blog"), transport)


def get_avatar(transport: Transport, name: str, size: Optional[int] = None) -> str:
    """Retrieve the URL of a blog's avatar.

    The API answers with a redirect, so the Location header is checked
    first; otherwise the location is read from the response envelope.

    Raises:
        DecodeError: no avatar location could be found
    """
    path = blog_path("/blog/%s/avatar", name)
    if size:
        path = f"{path}/{int(size)}"
    response = transport.get(path)

    location = response.headers.get("Location")
    if location:
        return location

    response.populate_from_body()
    result = response.result or {}
    for key in ("location", "avatar_url"):
        value = result.get(key)
        if isinstance(value, str) and value:
            return value
    raise DecodeError("Unable to detect avatar location")
