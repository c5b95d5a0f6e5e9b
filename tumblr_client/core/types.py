"""Data Transfer Objects for tumblr_client.

Every ``from_dict`` reads with the ``read_*`` helpers below: a missing key
gives the zero value, a value of the wrong JSON type raises DecodeError.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Union

from tumblr_client.core.exceptions import DecodeError


def to_plain(value: Any) -> Any:
    """Convert nested dataclasses to dicts/lists for JSON output.

    Transport handles are skipped: they are live objects, not data.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_plain(getattr(value, f.name))
            for f in fields(value)
            if f.name != "transport"
        }
    if isinstance(value, list):
        return [to_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    return value


# --- Field readers ---

def _check(data: Any) -> dict:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def read_str(data: dict, key: str) -> str:
    value = _check(data).get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Field '{key}' should be a string, got {value!r}")
    return value


def read_int(data: dict, key: str) -> int:
    value = _check(data).get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Field '{key}' should be an integer, got {value!r}")
    return value


def read_bool(data: dict, key: str) -> bool:
    value = _check(data).get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"Field '{key}' should be a boolean, got {value!r}")
    return value


def read_list(data: dict, key: str) -> list:
    value = _check(data).get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"Field '{key}' should be a list, got {value!r}")
    return value


def read_dict(data: dict, key: str) -> dict:
    value = _check(data).get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"Field '{key}' should be an object, got {value!r}")
    return value


def read_str_list(data: dict, key: str) -> list[str]:
    values = read_list(data, key)
    for v in values:
        if not isinstance(v, str):
            raise DecodeError(f"Field '{key}' should hold strings, got {v!r}")
    return list(values)


# --- Post identity ---

@dataclass
class MiniPost:
    """Minimal post identity returned by every list endpoint."""

    id: int = 0
    type: str = ""                   # quote|chat|photo|text|link|answer|audio|video
    blog_name: str = ""
    reblog_key: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "MiniPost":
        return cls(
            id=read_int(data, "id"),
            type=read_str(data, "type"),
            blog_name=read_str(data, "blog_name"),
            reblog_key=read_str(data, "reblog_key"),
        )


@dataclass
class ReblogInfo:
    comment: str = ""
    tree_html: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ReblogInfo":
        return cls(comment=read_str(data, "comment"), tree_html=read_str(data, "tree_html"))


# --- Variant content ---

@dataclass
class QuoteContent:
    source: str = ""
    text: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "QuoteContent":
        return cls(source=read_str(data, "source"), text=read_str(data, "text"))


@dataclass
class DialogLine:
    label: str = ""
    name: str = ""
    phrase: str = ""


@dataclass
class ChatContent:
    dialog: list[DialogLine] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ChatContent":
        return cls(dialog=[
            DialogLine(
                label=read_str(line, "label"),
                name=read_str(line, "name"),
                phrase=read_str(line, "phrase"),
            )
            for line in read_list(data, "dialog")
        ])


@dataclass
class TextContent:
    title: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "TextContent":
        return cls(title=read_str(data, "title"))


@dataclass
class LinkContent:
    description: str = ""
    excerpt: str = ""
    link_author: str = ""
    title: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "LinkContent":
        return cls(
            description=read_str(data, "description"),
            excerpt=read_str(data, "excerpt"),
            link_author=read_str(data, "link_author"),
            title=read_str(data, "title"),
            url=read_str(data, "url"),
        )


@dataclass
class AnswerContent:
    answer: str = ""
    asking_name: str = ""
    asking_url: str = ""
    publisher: str = ""
    question: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "AnswerContent":
        return cls(
            answer=read_str(data, "answer"),
            asking_name=read_str(data, "asking_name"),
            asking_url=read_str(data, "asking_url"),
            publisher=read_str(data, "publisher"),
            question=read_str(data, "question"),
        )


@dataclass
class AudioContent:
    album_art: str = ""
    artist: str = ""
    audio_source_url: str = ""
    audio_type: str = ""
    audio_url: str = ""
    embed: str = ""
    player: str = ""
    plays: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "AudioContent":
        return cls(
            album_art=read_str(data, "album_art"),
            artist=read_str(data, "artist"),
            audio_source_url=read_str(data, "audio_source_url"),
            audio_type=read_str(data, "audio_type"),
            audio_url=read_str(data, "audio_url"),
            embed=read_str(data, "embed"),
            player=read_str(data, "player"),
            plays=read_int(data, "plays"),
        )


def read_str_or_bool(data: dict, key: str) -> str:
    """Embed codes arrive either as a string or as ``false``."""
    value = _check(data).get(key)
    if isinstance(value, bool):
        return "true" if value else "false"
    return read_str(data, key)


@dataclass
class VideoPlayer:
    embed_code: str = ""
    width: Any = None                # int or string such as "100%"


@dataclass
class VideoSource:
    height: int = 0
    width: int = 0
    video_id: str = ""


@dataclass
class VideoContent:
    html5_capable: bool = False
    permalink_url: str = ""
    players: list[VideoPlayer] = field(default_factory=list)
    thumbnail_height: int = 0
    thumbnail_url: str = ""
    thumbnail_width: int = 0
    video: dict[str, VideoSource] = field(default_factory=dict)
    video_type: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "VideoContent":
        return cls(
            html5_capable=read_bool(data, "html5_capable"),
            permalink_url=read_str(data, "permalink_url"),
            players=[
                VideoPlayer(
                    embed_code=read_str_or_bool(p, "embed_code"),
                    width=_check(p).get("width"),
                )
                for p in read_list(data, "player")
            ],
            thumbnail_height=read_int(data, "thumbnail_height"),
            thumbnail_url=read_str(data, "thumbnail_url"),
            thumbnail_width=read_int(data, "thumbnail_width"),
            video={
                name: VideoSource(
                    height=read_int(src, "height"),
                    width=read_int(src, "width"),
                    video_id=read_str(src, "video_id"),
                )
                for name, src in read_dict(data, "video").items()
            },
            video_type=read_str(data, "video_type"),
        )


@dataclass
class PhotoSize:
    height: int = 0
    width: int = 0
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "PhotoSize":
        return cls(
            height=read_int(data, "height"),
            width=read_int(data, "width"),
            url=read_str(data, "url"),
        )


@dataclass
class Photo:
    alt_sizes: list[PhotoSize] = field(default_factory=list)
    caption: str = ""
    original_size: PhotoSize = field(default_factory=PhotoSize)

    @classmethod
    def from_dict(cls, data: dict) -> "Photo":
        return cls(
            alt_sizes=[PhotoSize.from_dict(s) for s in read_list(data, "alt_sizes")],
            caption=read_str(data, "caption"),
            original_size=PhotoSize.from_dict(read_dict(data, "original_size")),
        )


@dataclass
class PhotoContent:
    image_permalink: str = ""
    photos: list[Photo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "PhotoContent":
        return cls(
            image_permalink=read_str(data, "image_permalink"),
            photos=[Photo.from_dict(p) for p in read_list(data, "photos")],
        )


PostContent = Union[
    QuoteContent, ChatContent, TextContent, LinkContent,
    AnswerContent, AudioContent, VideoContent, PhotoContent,
]


# --- Followers ---

@dataclass
class Follower:
    """One entry of a blog's follower list."""

    following: bool = False
    name: str = ""
    updated: int = 0
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Follower":
        return cls(
            following=read_bool(data, "following"),
            name=read_str(data, "name"),
            updated=read_int(data, "updated"),
            url=read_str(data, "url"),
        )
