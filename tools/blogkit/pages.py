from __future__ import annotations

import pathlib
from typing import List, Optional, Sequence

from .actions import BuildError
from .config import (
    BIO_COMPONENT,
    BLOG_POST_TEMPLATE,
    FOOTER_COMPONENT,
    HEADER_COMPONENT,
    POSTS_QUERY_LIMIT,
    ROOT,
)
from .models import (
    AuthorRecord,
    Frontmatter,
    PageRequest,
    PostFields,
    PostRecord,
    QueryResult,
    SliceDeclaration,
)


def resolve_component(
    rel: str, root: pathlib.Path, must_exist: bool = False
) -> str:
    path = (root / rel).resolve()
    if must_exist and not path.is_file():
        raise BuildError(f"Cannot find component {rel}", [path.as_posix()])
    return path.as_posix()


def bio_slice_id(author_id: Optional[str]) -> str:
    return f"bio--{author_id}"


def query_authors(store) -> QueryResult:
    res = store.query_all("Author", ["authorId", "name", "summary", "twitter"])
    if res.errors:
        return res
    return QueryResult(
        data=[
            AuthorRecord(
                author_id=row["authorId"],
                name=row["name"] or "",
                summary=row["summary"],
                twitter=row["twitter"],
            )
            for row in res.data
        ]
    )


def query_posts(store, limit: int = POSTS_QUERY_LIMIT) -> QueryResult:
    """All posts, oldest first. Undated posts come last."""
    res = store.query_all(
        "MarkdownRemark",
        [
            "id",
            "frontmatter.title",
            "frontmatter.date",
            "frontmatter.authorId",
            "fields.slug",
        ],
        sort="frontmatter.date",
        limit=limit,
    )
    if res.errors:
        return res
    return QueryResult(
        data=[
            PostRecord(
                id=row["id"],
                frontmatter=Frontmatter(
                    title=row["frontmatter.title"],
                    date=row["frontmatter.date"],
                    author_id=row["frontmatter.authorId"],
                ),
                fields=PostFields(slug=row["fields.slug"]),
            )
            for row in res.data
        ]
    )


def link_posts(posts: Sequence[PostRecord], component: str) -> List[PageRequest]:
    """One page per post, linked to its neighbours in the given order."""
    pages: List[PageRequest] = []
    for index, post in enumerate(posts):
        previous_post_id = None if index == 0 else posts[index - 1].id
        next_post_id = None if index == len(posts) - 1 else posts[index + 1].id
        pages.append(
            PageRequest(
                path=post.fields.slug,
                component=component,
                context={
                    "id": post.id,
                    "previousPostId": previous_post_id,
                    "nextPostId": next_post_id,
                },
                # wherever the page uses the "bio" alias, render this
                # author's bio slice
                slices={"bio": bio_slice_id(post.frontmatter.author_id)},
            )
        )
    return pages


def create_slices(store, actions, reporter, root: Optional[pathlib.Path] = None) -> None:
    root = root or ROOT

    actions.create_slice(
        SliceDeclaration(
            id="header",
            component=resolve_component(HEADER_COMPONENT, root, must_exist=True),
        )
    )
    actions.create_slice(
        SliceDeclaration(
            id="footer",
            component=resolve_component(FOOTER_COMPONENT, root, must_exist=True),
        )
    )

    author_bio = resolve_component(BIO_COMPONENT, root)
    result = query_authors(store)
    if result.errors:
        reporter.panic_on_build(
            "There was an error loading your authors", result.errors
        )

    for author in result.data:
        actions.create_slice(
            SliceDeclaration(
                id=bio_slice_id(author.author_id),
                component=author_bio,
                context={"id": author.author_id},
            )
        )


def create_pages(
    store,
    actions,
    reporter,
    root: Optional[pathlib.Path] = None,
    limit: int = POSTS_QUERY_LIMIT,
) -> List[PageRequest]:
    root = root or ROOT
    create_slices(store, actions, reporter, root)

    blog_post = resolve_component(BLOG_POST_TEMPLATE, root)
    result = query_posts(store, limit=limit)
    if result.errors:
        reporter.panic_on_build(
            "There was an error loading your blog posts", result.errors
        )

    pages = link_posts(result.data, blog_post)
    for page in pages:
        actions.create_page(page)
    if pages:
        reporter.info(f"created {len(pages)} post pages")
    else:
        reporter.note("no posts found in content/blog, no post pages created")
    return pages
