"""Tests for the Post model and its variant content."""

import json

import pytest

from tumblr_client.core.exceptions import DecodeError, PropertyNotFoundError, UnknownPostTypeError
from tumblr_client.core.types import (
    ChatContent,
    MiniPost,
    PhotoContent,
    QuoteContent,
    TextContent,
    VideoContent,
)
from tumblr_client.services.posts import Post, VARIANTS, hydrate, make_post_from_type


class TestMakePostFromType:
    @pytest.mark.parametrize("tag", sorted(VARIANTS))
    def test_known_tags_get_content(self, tag):
        post = make_post_from_type(tag)
        assert post.type == tag
        assert isinstance(post.content, VARIANTS[tag])

    def test_unknown_tag_raises_with_fallback(self):
        with pytest.raises(UnknownPostTypeError, match="Unknown type blerg") as exc:
            make_post_from_type("blerg")
        assert isinstance(exc.value.fallback, Post)
        assert exc.value.fallback.content is None
        assert exc.value.fallback.type == "blerg"


class TestHydrate:
    def test_unknown_types_degrade_to_base_post(self):
        minis = [
            MiniPost(id=1, type="text", blog_name="a", reblog_key="k1"),
            MiniPost(id=2, type="blerg", blog_name="b", reblog_key="k2"),
        ]
        posts = hydrate(minis, None)
        assert isinstance(posts[0].content, TextContent)
        assert posts[1].content is None
        assert posts[1].id == 2
        assert posts[1].reblog_key == "k2"


class TestPopulate:
    def test_quote_fields(self):
        post = make_post_from_type("quote")
        post.populate({
            "id": 5, "type": "quote", "blog_name": "staff",
            "text": "hello", "source": "someone", "note_count": 3,
            "tags": ["a", "b"],
        })
        assert post.id == 5
        assert post.note_count == 3
        assert post.tags == ["a", "b"]
        assert post.content == QuoteContent(source="someone", text="hello")

    def test_chat_dialog(self):
        post = make_post_from_type("chat")
        post.populate({
            "type": "chat",
            "dialog": [{"label": "A:", "name": "A", "phrase": "hi"}],
        })
        assert isinstance(post.content, ChatContent)
        assert post.content.dialog[0].phrase == "hi"

    def test_photo_sizes(self):
        post = make_post_from_type("photo")
        post.populate({
            "type": "photo",
            "photos": [{
                "caption": "c",
                "original_size": {"width": 500, "height": 400, "url": "u"},
                "alt_sizes": [{"width": 100, "height": 80, "url": "s"}],
            }],
        })
        assert isinstance(post.content, PhotoContent)
        assert post.content.photos[0].original_size.width == 500
        assert post.content.photos[0].alt_sizes[0].url == "s"

    def test_video_players_and_false_embed(self):
        post = make_post_from_type("video")
        post.populate({
            "type": "video",
            "player": [
                {"embed_code": "<iframe/>", "width": 250},
                {"embed_code": False, "width": "100%"},
            ],
            "video": {"youtube": {"video_id": "abc", "width": 1, "height": 2}},
        })
        assert isinstance(post.content, VideoContent)
        assert post.content.players[0].width == 250
        assert post.content.players[1].embed_code == "false"
        assert post.content.video["youtube"].video_id == "abc"

    def test_trail_post_id_kept_raw(self):
        post = make_post_from_type("text")
        post.populate({
            "type": "text",
            "trail": [{"blog": {"name": "root"}, "post": {"id": "123"}, "is_current_item": True}],
        })
        assert post.trail[0].blog.name == "root"
        assert post.trail[0].post_id == "123"
        assert post.trail[0].is_current_item is True

    def test_wrong_field_type_raises(self):
        post = make_post_from_type("text")
        with pytest.raises(DecodeError):
            post.populate({"type": "text", "note_count": "many"})


class TestGetProperty:
    def test_reads_common_field(self):
        post = Post(id=9, type="text", note_count=4)
        assert post.get_property("note_count") == 4
        assert post.get_property("id") == 9

    def test_variant_field_not_reachable(self):
        post = make_post_from_type("quote")
        with pytest.raises(PropertyNotFoundError, match="Property source does not exist"):
            post.get_property("source")

    def test_missing_property_raises(self):
        with pytest.raises(PropertyNotFoundError):
            Post().get_property("nope")


class TestSerialization:
    def test_to_json_flattens_content_and_skips_transport(self):
        post = make_post_from_type("quote")
        post.populate({"id": 1, "type": "quote", "text": "t"})
        data = json.loads(post.to_json())
        assert data["text"] == "t"
        assert data["id"] == 1
        assert "content" not in data
        assert "transport" not in data

    def test_str_is_json(self):
        assert json.loads(str(Post(id=3)))["id"] == 3
