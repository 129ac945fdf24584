"""Tests for post page linking and slice declarations."""

from datetime import datetime

import pytest

from blogkit.actions import Actions, BuildError
from blogkit.authors import source_nodes
from blogkit.ingest import ingest_content
from blogkit.models import Frontmatter, PostFields, PostRecord
from blogkit.pages import (
    bio_slice_id,
    create_pages,
    create_slices,
    link_posts,
    query_posts,
)
from blogkit.store import NodeStore

from conftest import write_post


def make_post(post_id, author_id="kylem"):
    return PostRecord(
        id=post_id,
        frontmatter=Frontmatter(author_id=author_id),
        fields=PostFields(slug=f"/{post_id}/"),
    )


class TestLinkPosts:
    """Tests for the neighbour-linking pass."""

    def test_links_each_post_to_neighbours(self):
        posts = [make_post(i) for i in ("a", "b", "c", "d")]

        pages = link_posts(posts, "/site/src/templates/blog-post.js")

        assert len(pages) == 4
        assert [p.context["id"] for p in pages] == ["a", "b", "c", "d"]
        assert [p.context["previousPostId"] for p in pages] == [None, "a", "b", "c"]
        assert [p.context["nextPostId"] for p in pages] == ["b", "c", "d", None]
        assert [p.path for p in pages] == ["/a/", "/b/", "/c/", "/d/"]
        assert all(p.component == "/site/src/templates/blog-post.js" for p in pages)

    def test_no_posts_no_pages(self):
        assert link_posts([], "blog-post.js") == []

    def test_single_post_has_no_neighbours(self):
        (page,) = link_posts([make_post("only")], "blog-post.js")

        assert page.context == {
            "id": "only",
            "previousPostId": None,
            "nextPostId": None,
        }

    def test_bio_slice_bound_from_author(self):
        pages = link_posts(
            [make_post("a", "joshj"), make_post("b", "kylem")], "blog-post.js"
        )

        assert pages[0].slices == {"bio": "bio--joshj"}
        assert pages[1].slices == {"bio": "bio--kylem"}

    def test_unknown_author_is_not_validated(self):
        (page,) = link_posts([make_post("a", "nobody")], "blog-post.js")

        assert page.slices["bio"] == bio_slice_id("nobody") == "bio--nobody"


class TestQueryPosts:
    """Tests for the date-ordered post query."""

    def test_posts_sorted_by_date(self, site, store, actions, reporter):
        write_post(site, "jan/index.md", date="2020-01-01", author_id="kylem")
        write_post(site, "jun/index.md", date="2020-06-01", author_id="joshj")
        write_post(site, "mar/index.md", date="2020-03-01", author_id="kylem")
        ingest_content(actions, reporter, site)

        result = query_posts(store)

        assert result.errors == []
        assert [p.fields.slug for p in result.data] == ["/jan/", "/mar/", "/jun/"]

        jan, mar, jun = result.data
        pages = link_posts(result.data, "blog-post.js")
        assert pages[1].context["previousPostId"] == jan.id
        assert pages[1].context["nextPostId"] == jun.id
        assert pages[1].path == "/mar/"

    def test_same_day_posts_sorted_by_time(self, site, store, actions, reporter):
        write_post(site, "a.md", date="2020-01-01T18:00:00")
        write_post(site, "b.md", date="2020-01-01T09:00:00")
        write_post(site, "c.md", date="2020-01-01")
        ingest_content(actions, reporter, site)

        result = query_posts(store)

        assert [p.fields.slug for p in result.data] == ["/c/", "/b/", "/a/"]
        assert result.data[1].frontmatter.date == datetime(2020, 1, 1, 9, 0)
        pages = link_posts(result.data, "blog-post.js")
        assert pages[1].context["previousPostId"] == result.data[0].id
        assert pages[1].context["nextPostId"] == result.data[2].id

    def test_undated_posts_sort_last(self, site, store, actions, reporter):
        write_post(site, "draft.md", title="Draft")
        write_post(site, "first.md", date="2021-02-03")
        ingest_content(actions, reporter, site)

        result = query_posts(store)

        assert [p.fields.slug for p in result.data] == ["/first/", "/draft/"]
        assert result.data[1].frontmatter.date is None

    def test_limit(self, site, store, actions, reporter):
        for day in range(1, 6):
            write_post(site, f"p{day}.md", date=f"2022-01-0{day}")
        ingest_content(actions, reporter, site)

        result = query_posts(store, limit=3)

        assert [p.fields.slug for p in result.data] == ["/p1/", "/p2/", "/p3/"]


class TestCreateSlices:
    """Tests for header/footer/bio slice declarations."""

    def test_global_and_bio_slices(self, site, store, actions, reporter):
        source_nodes(actions)

        create_slices(store, actions, reporter, site)

        assert list(actions.slices) == ["header", "footer", "bio--kylem", "bio--joshj"]
        bio = actions.slices["bio--joshj"]
        assert bio.context == {"id": "joshj"}
        assert bio.component.endswith("src/components/bio.js")
        assert actions.slices["header"].context == {}

    def test_no_authors_only_global_slices(self, site, store, actions, reporter):
        create_slices(store, actions, reporter, site)

        assert list(actions.slices) == ["header", "footer"]

    def test_declaring_twice_is_idempotent(self, site, store, actions, reporter):
        source_nodes(actions)

        create_slices(store, actions, reporter, site)
        first = dict(actions.slices)
        create_slices(store, actions, reporter, site)

        assert actions.slices == first

    def test_missing_header_component(self, site, store, actions, reporter):
        (site / "src" / "components" / "header.js").unlink()

        with pytest.raises(BuildError, match="header.js"):
            create_slices(store, actions, reporter, site)

    def test_author_query_error_is_fatal(self, site, reporter):
        store = NodeStore()
        actions = Actions(store)

        with pytest.raises(BuildError, match="error loading your authors"):
            create_slices(store, actions, reporter, site)


class TestCreatePages:
    """Tests for the full page creation hook."""

    def test_creates_linked_pages(self, site, store, actions, reporter):
        source_nodes(actions)
        write_post(site, "one/index.md", date="2020-01-01", author_id="joshj")
        write_post(site, "two/index.md", date="2020-02-01", author_id="kylem")
        ingest_content(actions, reporter, site)

        pages = create_pages(store, actions, reporter, site)

        assert [p.path for p in pages] == ["/one/", "/two/"]
        assert list(actions.pages) == ["/one/", "/two/"]
        assert actions.pages["/one/"].slices == {"bio": "bio--joshj"}
        assert actions.pages["/two/"].context["previousPostId"] == pages[0].context["id"]

    def test_zero_posts_is_not_an_error(self, site, store, actions, reporter):
        source_nodes(actions)

        pages = create_pages(store, actions, reporter, site)

        assert pages == []
        assert actions.pages == {}
        assert "header" in actions.slices

    def test_query_error_halts_without_pages(self, site, reporter):
        # no schema declared and no posts: the post type is unknown
        store = NodeStore()
        actions = Actions(store)
        source_nodes(actions)

        with pytest.raises(BuildError, match="error loading your blog posts") as exc:
            create_pages(store, actions, reporter, site)

        assert actions.pages == {}
        assert exc.value.errors == ['Cannot query type "MarkdownRemark"']
