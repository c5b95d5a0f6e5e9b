"""The authenticated user's account information."""

from dataclasses import dataclass, field

from tumblr_client.adapters.transport import Transport
from tumblr_client.core.exceptions import DecodeError
from tumblr_client.core.response import response_payload
from tumblr_client.core.types import read_dict, read_int, read_list, read_str
from tumblr_client.services.blogs import ShortBlog


@dataclass
class User:
    following: int = 0
    default_post_format: str = ""
    name: str = ""
    likes: int = 0
    blogs: list[ShortBlog] = field(default_factory=list)


def get_user_info(transport: Transport) -> User:
    """Retrieve the current user's info (identified by the transport's credentials).

    The user's blogs come back as ShortBlogs bound to the same transport.
    """
    response = transport.get("/user/info")
    payload = response_payload(response)
    if not isinstance(payload, dict):
        raise DecodeError("User info payload is not a JSON object")
    data = read_dict(payload, "user")
    return User(
        following=read_int(data, "following"),
        default_post_format=read_str(data, "default_post_format"),
        name=read_str(data, "name"),
        likes=read_int(data, "likes"),
        blogs=[ShortBlog.from_dict(b, transport) for b in read_list(data, "blogs")],
    )
