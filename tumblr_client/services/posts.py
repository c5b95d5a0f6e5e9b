"""Posts: the polymorphic post model, lazy post lists, and post operations."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, Optional

from tumblr_client.adapters.transport import Transport
from tumblr_client.core.exceptions import (
    DecodeError,
    MissingBlogNameError,
    MissingReblogKeyError,
    PropertyNotFoundError,
    UnknownPostTypeError,
)
from tumblr_client.core.params import Params, ParamsLike, as_params, blog_path, set_post_id
from tumblr_client.core.response import Response, response_payload
from tumblr_client.core.types import (
    AnswerContent,
    AudioContent,
    ChatContent,
    LinkContent,
    MiniPost,
    PhotoContent,
    PostContent,
    QuoteContent,
    ReblogInfo,
    TextContent,
    VideoContent,
    read_bool,
    read_dict,
    read_int,
    read_list,
    read_str,
    read_str_list,
    to_plain,
)
from tumblr_client.services import blogs

logger = logging.getLogger("tumblr_client")


@dataclass
class PostRef(MiniPost):
    """A MiniPost bound to a transport: enough to act on the post."""

    transport: Optional[Transport] = field(default=None, repr=False, compare=False)

    def set_transport(self, transport: Transport) -> None:
        self.transport = transport

    def edit(self, params: ParamsLike = None) -> None:
        edit_post(self.transport, self.blog_name, self.id, params)

    def delete(self) -> None:
        delete_post(self.transport, self.blog_name, self.id)

    def reblog_on_blog(self, name: str, params: ParamsLike = None) -> "PostRef":
        """Reblog this post onto the blog ``name``."""
        return reblog_post(self.transport, name, self.id, self.reblog_key, params)

    def like(self) -> None:
        from tumblr_client.services.likes import like_post
        like_post(self.transport, self.id, self.reblog_key)

    def unlike(self) -> None:
        from tumblr_client.services.likes import unlike_post
        unlike_post(self.transport, self.id, self.reblog_key)


@dataclass
class ReblogTrailItem:
    """One hop in the chain back to the root post."""

    blog: "blogs.Blog" = field(default_factory=lambda: blogs.Blog())
    content: str = ""
    content_raw: str = ""
    is_current_item: bool = False
    post_id: Any = None              # sometimes an int, sometimes a numeric string

    @classmethod
    def from_dict(cls, data: dict) -> "ReblogTrailItem":
        return cls(
            blog=blogs.Blog.from_dict(read_dict(data, "blog")),
            content=read_str(data, "content"),
            content_raw=read_str(data, "content_raw"),
            is_current_item=read_bool(data, "is_current_item"),
            post_id=read_dict(data, "post").get("id"),
        )


@dataclass
class Post(PostRef):
    """A fully hydrated post.

    Common fields live on the Post itself; type-specific fields live in
    ``content``, one of the variant dataclasses selected by ``type``.
    ``content`` is None when the type tag was not recognized.
    """

    body: str = ""
    can_like: bool = False
    can_reblog: bool = False
    can_reply: bool = False
    can_send_in_message: bool = False
    caption: str = ""
    date: str = ""
    display_avatar: bool = False
    followed: bool = False
    format: str = ""
    highlighted: list = field(default_factory=list)
    liked: bool = False
    note_count: int = 0
    permalink_url: str = ""
    post_url: str = ""
    reblog: ReblogInfo = field(default_factory=ReblogInfo)
    recommended_color: str = ""
    recommended_source: bool = False
    short_url: str = ""
    slug: str = ""
    source_title: str = ""
    source_url: str = ""
    state: str = ""
    summary: str = ""
    tags: list[str] = field(default_factory=list)
    timestamp: int = 0
    featured_timestamp: int = 0
    track_name: str = ""
    trail: list[ReblogTrailItem] = field(default_factory=list)
    content: Optional[PostContent] = None

    def populate(self, data: dict) -> None:
        """Fill this post in place from one raw post object.

        The variant was chosen before this call; only its fields are read.
        """
        mini = MiniPost.from_dict(data)
        self.id = mini.id
        self.type = mini.type
        self.blog_name = mini.blog_name
        self.reblog_key = mini.reblog_key
        self.body = read_str(data, "body")
        self.can_like = read_bool(data, "can_like")
        self.can_reblog = read_bool(data, "can_reblog")
        self.can_reply = read_bool(data, "can_reply")
        self.can_send_in_message = read_bool(data, "can_send_in_message")
        self.caption = read_str(data, "caption")
        self.date = read_str(data, "date")
        self.display_avatar = read_bool(data, "display_avatar")
        self.followed = read_bool(data, "followed")
        self.format = read_str(data, "format")
        self.highlighted = read_list(data, "highlighted")
        self.liked = read_bool(data, "liked")
        self.note_count = read_int(data, "note_count")
        self.permalink_url = read_str(data, "permalink_url")
        self.post_url = read_str(data, "post_url")
        self.reblog = ReblogInfo.from_dict(read_dict(data, "reblog"))
        self.recommended_color = read_str(data, "recommended_color")
        self.recommended_source = read_bool(data, "recommended_source")
        self.short_url = read_str(data, "short_url")
        self.slug = read_str(data, "slug")
        self.source_title = read_str(data, "source_title")
        self.source_url = read_str(data, "source_url")
        self.state = read_str(data, "state")
        self.summary = read_str(data, "summary")
        self.tags = read_str_list(data, "tags")
        self.timestamp = read_int(data, "timestamp")
        self.featured_timestamp = read_int(data, "featured_timestamp")
        self.track_name = read_str(data, "track_name")
        self.trail = [ReblogTrailItem.from_dict(t) for t in read_list(data, "trail")]
        if self.content is not None:
            self.content = type(self.content).from_dict(data)

    def get_property(self, key: str) -> Any:
        """Look up a common Post field by name.

        Only the fields listed in POST_PROPERTIES are reachable; variant
        fields are read through ``content``.

        Raises:
            PropertyNotFoundError: key is not a Post field
        """
        getter = POST_PROPERTIES.get(key)
        if getter is None:
            raise PropertyNotFoundError(f"Property {key} does not exist")
        return getter(self)

    def to_dict(self) -> dict:
        data = to_plain(self)
        content = data.pop("content")
        if content:
            data.update(content)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def __str__(self) -> str:
        return self.to_json()


_PROPERTY_NAMES = (
    "id", "type", "blog_name", "reblog_key",
    "body", "can_like", "can_reblog", "can_reply", "can_send_in_message",
    "caption", "date", "display_avatar", "followed", "format", "highlighted",
    "liked", "note_count", "permalink_url", "post_url", "reblog",
    "recommended_color", "recommended_source", "short_url", "slug",
    "source_title", "source_url", "state", "summary", "tags", "timestamp",
    "featured_timestamp", "track_name", "trail",
)

POST_PROPERTIES: dict[str, Callable[[Post], Any]] = {
    name: attrgetter(name) for name in _PROPERTY_NAMES
}

VARIANTS: dict[str, type] = {
    "quote": QuoteContent,
    "chat": ChatContent,
    "photo": PhotoContent,
    "text": TextContent,
    "link": LinkContent,
    "answer": AnswerContent,
    "audio": AudioContent,
    "video": VideoContent,
}


def make_post_from_type(tag: str) -> Post:
    """Create an empty Post shaped for the given type tag.

    Raises:
        UnknownPostTypeError: tag is not a known variant. The error's
            ``fallback`` is a base Post (``content=None``) the caller can
            still use.
    """
    content_cls = VARIANTS.get(tag)
    if content_cls is None:
        raise UnknownPostTypeError(tag, fallback=Post(type=tag))
    return Post(type=tag, content=content_cls())


def _shell_for(mini: MiniPost, transport: Optional[Transport]) -> Post:
    try:
        post = make_post_from_type(mini.type)
    except UnknownPostTypeError as e:
        post = e.fallback
    post.id = mini.id
    post.blog_name = mini.blog_name
    post.reblog_key = mini.reblog_key
    post.set_transport(transport)
    return post


def hydrate(minis: list[MiniPost], transport: Optional[Transport]) -> list[Post]:
    """Build one variant-shaped Post per stub, bound to the transport.

    Unknown types degrade to a base Post instead of failing the batch.
    """
    return [_shell_for(mini, transport) for mini in minis]


def fill_posts(shells: list[Post], items: list, transport: Optional[Transport]) -> list[Post]:
    """Populate shells from raw post objects at the same positions.

    Raw items beyond the shells get their shape from their own type tag.
    """
    posts = []
    for index, raw in enumerate(items):
        if not isinstance(raw, dict):
            raise DecodeError(f"Post at index {index} is not a JSON object")
        if index < len(shells):
            post = shells[index]
        else:
            post = _shell_for(MiniPost.from_dict(raw), transport)
        post.populate(raw)
        posts.append(post)
    return posts


class HydrationState(Enum):
    NOT_LOADED = "not_loaded"
    LOADED = "loaded"
    FAILED = "failed"


class LazyPostList:
    """Page of MiniPosts whose full Posts are decoded on first request.

    ``all()`` re-decodes the stored response body into variant-shaped
    Posts once and caches the result. If that decode fails the error is
    raised and ``[]`` is cached; later calls return the cached ``[]``
    quietly when ``mask_errors`` is set, or raise the stored error again
    when it is not.
    """

    POSTS_KEY = "posts"

    def __init__(
        self,
        minis: list[MiniPost],
        response: Response,
        transport: Optional[Transport],
        mask_errors: bool = True,
    ):
        self.minis = minis
        self._response = response
        self._transport = transport
        self._mask_errors = mask_errors
        self._state = HydrationState.NOT_LOADED
        self._parsed: list[Post] = []
        self._error: Optional[DecodeError] = None

    @property
    def state(self) -> HydrationState:
        return self._state

    @property
    def response(self) -> Response:
        return self._response

    def _extract_items(self, payload: Any) -> list:
        if not isinstance(payload, dict):
            raise DecodeError("Response payload is not a JSON object")
        return read_list(payload, self.POSTS_KEY)

    def all(self) -> list[Post]:
        """Return the full Posts for this page, decoding them at most once.

        Raises:
            DecodeError: the stored body could not be decoded (first call,
                or every call when mask_errors is False)
        """
        if self._state is HydrationState.LOADED:
            return self._parsed
        if self._state is HydrationState.FAILED:
            if self._mask_errors:
                return self._parsed
            raise self._error

        try:
            items = self._extract_items(response_payload(self._response))
            shells = hydrate(self.minis, self._transport)
            posts = fill_posts(shells, items, self._transport)
        except DecodeError as e:
            self._state = HydrationState.FAILED
            self._parsed = []
            self._error = e
            raise

        self._state = HydrationState.LOADED
        self._parsed = posts
        return posts

    def get(self, index: int) -> Optional[Post]:
        """Post at index, or None when out of range or undecodable."""
        try:
            posts = self.all()
        except DecodeError:
            return None
        if index < 0 or index >= len(posts):
            return None
        return posts[index]

    def __len__(self) -> int:
        return len(self.minis)


class Posts(LazyPostList):
    """A blog's posts (or queue, drafts, submissions)."""

    def __init__(
        self,
        minis: list[MiniPost],
        response: Response,
        transport: Optional[Transport],
        total_posts: int = 0,
        mask_errors: bool = True,
    ):
        super().__init__(minis, response, transport, mask_errors)
        self.total_posts = total_posts


def query_posts(
    transport: Transport,
    path: str,
    name: str,
    params: ParamsLike = None,
    mask_errors: bool = True,
) -> Posts:
    """GET a path that returns ``response.posts`` and wrap it as Posts."""
    response = transport.get_with_params(blog_path(path, name), as_params(params))
    payload = response_payload(response)
    if not isinstance(payload, dict):
        raise DecodeError("Posts payload is not a JSON object")
    minis = [MiniPost.from_dict(p) for p in read_list(payload, "posts")]
    logger.debug(f"Fetched {len(minis)} posts from {path % name}")
    return Posts(
        minis,
        response,
        transport,
        total_posts=read_int(payload, "total_posts"),
        mask_errors=mask_errors,
    )


def get_posts(transport: Transport, name: str, params: ParamsLike = None, **kwargs) -> Posts:
    """Retrieve a blog's posts. Filter by id, type, tag etc. through params."""
    return query_posts(transport, "/blog/%s/posts", name, params, **kwargs)


def get_queue(transport: Transport, name: str, params: ParamsLike = None, **kwargs) -> Posts:
    return query_posts(transport, "/blog/%s/posts/queue", name, params, **kwargs)


def get_drafts(transport: Transport, name: str, params: ParamsLike = None, **kwargs) -> Posts:
    return query_posts(transport, "/blog/%s/posts/draft", name, params, **kwargs)


def get_submissions(transport: Transport, name: str, params: ParamsLike = None, **kwargs) -> Posts:
    return query_posts(transport, "/blog/%s/posts/submission", name, params, **kwargs)


def new_post_ref_by_id(transport: Transport, post_id: int) -> PostRef:
    return PostRef(id=post_id, transport=transport)


def new_post_ref(transport: Transport, mini: MiniPost) -> PostRef:
    return PostRef(
        id=mini.id,
        type=mini.type,
        blog_name=mini.blog_name,
        reblog_key=mini.reblog_key,
        transport=transport,
    )


def _do_post(transport: Transport, path: str, blog_name: str, params: Params) -> PostRef:
    """POST to a write endpoint and wrap the returned id in a PostRef."""
    if not blog_name:
        raise MissingBlogNameError()
    response = transport.post_with_params(blog_path(path, blog_name), params)
    payload = response_payload(response)
    if not isinstance(payload, dict):
        raise DecodeError("Post write payload is not a JSON object")
    ref = new_post_ref_by_id(transport, read_int(payload, "id"))
    ref.blog_name = blog_name
    return ref


def create_post(transport: Transport, name: str, params: ParamsLike = None) -> PostRef:
    """Create a post on the blog ``name``."""
    return _do_post(transport, "/blog/%s/post", name, as_params(params))


def edit_post(transport: Transport, blog_name: str, post_id: int, params: ParamsLike = None) -> None:
    if not blog_name:
        raise MissingBlogNameError()
    transport.post_with_params(
        blog_path("/blog/%s/post/edit", blog_name),
        set_post_id(post_id, as_params(params)),
    )


def reblog_post(
    transport: Transport,
    blog_name: str,
    post_id: int,
    reblog_key: str,
    params: ParamsLike = None,
) -> PostRef:
    """Reblog the post identified by post_id/reblog_key onto blog_name."""
    if not reblog_key:
        raise MissingReblogKeyError()
    values = as_params(params)
    values.set("reblog_key", reblog_key)
    return _do_post(transport, "/blog/%s/post/reblog", blog_name, set_post_id(post_id, values))


def delete_post(transport: Transport, name: str, post_id: int) -> None:
    if not name:
        raise MissingBlogNameError()
    transport.post_with_params(
        blog_path("/blog/%s/post/delete", name),
        set_post_id(post_id, Params()),
    )
