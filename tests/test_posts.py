"""Tests for post queries, lazy post lists and post writes."""

import pytest
from conftest import FakeTransport, envelope, raw_post

from tumblr_client.core.exceptions import (
    DecodeError,
    MissingBlogNameError,
    MissingReblogKeyError,
    TransportError,
)
from tumblr_client.core.params import Params
from tumblr_client.core.response import Response
from tumblr_client.core.types import MiniPost, QuoteContent
from tumblr_client.services.posts import (
    HydrationState,
    LazyPostList,
    PostRef,
    create_post,
    delete_post,
    edit_post,
    get_drafts,
    get_posts,
    get_queue,
    get_submissions,
    new_post_ref,
    reblog_post,
)


class TestQueryPosts:
    def test_get_posts_path_and_totals(self, transport):
        transport.queue({"posts": [raw_post(1), raw_post(2, "quote")], "total_posts": 40})
        posts = get_posts(transport, "staff", {"limit": 2})

        method, path, params = transport.last
        assert method == "GET"
        assert path == "/blog/staff.tumblr.com/posts"
        assert params.get("limit") == "2"
        assert len(posts) == 2
        assert posts.total_posts == 40
        assert posts.minis[1] == MiniPost(id=2, type="quote", blog_name="staff", reblog_key="key")

    @pytest.mark.parametrize("func, suffix", [
        (get_queue, "/posts/queue"),
        (get_drafts, "/posts/draft"),
        (get_submissions, "/posts/submission"),
    ])
    def test_other_post_lists(self, transport, func, suffix):
        func(transport, "staff")
        assert transport.last[1] == f"/blog/staff.tumblr.com{suffix}"

    def test_caller_params_not_mutated(self, transport):
        params = Params({"limit": "5"})
        get_posts(transport, "staff", params)
        assert params == Params({"limit": "5"})

    def test_transport_error_propagates(self, transport):
        transport.queue(TransportError("boom", status_code=500))
        with pytest.raises(TransportError):
            get_posts(transport, "staff")

    def test_empty_body_object_is_empty_page(self):
        transport = FakeTransport(default=Response(b"{}"))
        posts = get_posts(transport, "staff")
        assert len(posts) == 0
        assert posts.all() == []


class TestLazyPostList:
    def _page(self, body, mask_errors=True):
        minis = [MiniPost(id=1, type="quote")]
        return LazyPostList(minis, Response(body), FakeTransport(), mask_errors=mask_errors)

    def test_all_hydrates_variants_once(self):
        page = self._page(envelope({"posts": [raw_post(1, "quote", text="hi")]}))
        assert page.state is HydrationState.NOT_LOADED

        first = page.all()
        assert page.state is HydrationState.LOADED
        assert isinstance(first[0].content, QuoteContent)
        assert first[0].content.text == "hi"
        assert page.all() is first

    def test_hydrated_posts_bound_to_transport(self):
        page = self._page(envelope({"posts": [raw_post(1, "quote")]}))
        assert page.all()[0].transport is page._transport

    def test_failure_then_masked_empty(self):
        page = self._page(envelope({"posts": [raw_post(1, "quote", text=5)]}))
        with pytest.raises(DecodeError):
            page.all()
        assert page.state is HydrationState.FAILED
        assert page.all() == []

    def test_failure_repeated_when_unmasked(self):
        page = self._page(envelope({"posts": [raw_post(1, "quote", text=5)]}), mask_errors=False)
        with pytest.raises(DecodeError):
            page.all()
        with pytest.raises(DecodeError):
            page.all()

    def test_get_by_index(self):
        page = self._page(envelope({"posts": [raw_post(1, "quote")]}))
        assert page.get(0).id == 1
        assert page.get(1) is None
        assert page.get(-1) is None

    def test_get_returns_none_on_failure(self):
        page = self._page(b"not json")
        assert page.get(0) is None


class TestWrites:
    def test_create_post(self, transport):
        transport.queue({"id": 777})
        ref = create_post(transport, "staff", {"type": "text", "body": "hi"})

        method, path, params = transport.last
        assert (method, path) == ("POST", "/blog/staff.tumblr.com/post")
        assert params.get("body") == "hi"
        assert isinstance(ref, PostRef)
        assert ref.id == 777
        assert ref.blog_name == "staff"
        assert ref.transport is transport

    def test_create_post_requires_blog_name(self, transport):
        with pytest.raises(MissingBlogNameError):
            create_post(transport, "")
        assert transport.calls == []

    def test_edit_post_sets_id(self, transport):
        edit_post(transport, "staff", 42, {"body": "new"})
        method, path, params = transport.last
        assert path == "/blog/staff.tumblr.com/post/edit"
        assert params.get("id") == "42"
        assert params.get("body") == "new"

    def test_reblog_sets_key_and_id(self, transport):
        transport.queue({"id": 900})
        ref = reblog_post(transport, "mine", 42, "rk", {"comment": "nice"})
        _, path, params = transport.last
        assert path == "/blog/mine.tumblr.com/post/reblog"
        assert params.get("reblog_key") == "rk"
        assert params.get("id") == "42"
        assert ref.id == 900

    def test_reblog_requires_key(self, transport):
        with pytest.raises(MissingReblogKeyError):
            reblog_post(transport, "mine", 42, "")
        assert transport.calls == []

    def test_delete_post(self, transport):
        delete_post(transport, "staff", 42)
        method, path, params = transport.last
        assert (method, path) == ("POST", "/blog/staff.tumblr.com/post/delete")
        assert params.get("id") == "42"

    def test_delete_requires_blog_name(self, transport):
        with pytest.raises(MissingBlogNameError):
            delete_post(transport, "", 42)


class TestPostRef:
    def test_actions_forward_identity(self, transport):
        ref = new_post_ref(transport, MiniPost(id=3, type="text", blog_name="staff", reblog_key="rk"))
        ref.like()
        assert transport.last[1] == "/user/like"
        assert transport.last[2].get("reblog_key") == "rk"

        ref.unlike()
        assert transport.last[1] == "/user/unlike"

        ref.delete()
        assert transport.last[1] == "/blog/staff.tumblr.com/post/delete"

        ref.edit({"body": "x"})
        assert transport.last[1] == "/blog/staff.tumblr.com/post/edit"

    def test_reblog_on_blog(self, transport):
        transport.queue({"id": 11})
        ref = PostRef(id=3, reblog_key="rk", transport=transport)
        reblogged = ref.reblog_on_blog("other")
        assert transport.last[1] == "/blog/other.tumblr.com/post/reblog"
        assert reblogged.id == 11
