"""Pytest configuration and fixtures."""

import pytest

from blogkit.actions import Actions, Reporter
from blogkit.schema import create_schema_customization
from blogkit.store import NodeStore

COMPONENTS = (
    "src/components/header.js",
    "src/components/footer.js",
    "src/components/bio.js",
    "src/templates/blog-post.js",
)


def write_post(site, rel, date=None, author_id=None, title=None, body="Hello.\n"):
    """Write a Markdown post under content/blog."""
    fm = []
    if title is not None:
        fm.append(f"title: {title}")
    if date is not None:
        fm.append(f"date: {date}")
    if author_id is not None:
        fm.append(f"authorId: {author_id}")
    text = ("---\n" + "\n".join(fm) + "\n---\n\n" if fm else "") + body
    path = site / "content" / "blog" / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def reporter():
    return Reporter()


@pytest.fixture
def store():
    """Store with the site schema declared."""
    s = NodeStore()
    create_schema_customization(s)
    return s


@pytest.fixture
def actions(store):
    return Actions(store)


@pytest.fixture
def site(tmp_path):
    """A minimal site tree: config plus component files, no content."""
    (tmp_path / "site-config.yml").write_text(
        "siteMetadata:\n"
        "  title: Test Blog\n"
        "  siteUrl: https://blog.example.com\n",
        encoding="utf-8",
    )
    for rel in COMPONENTS:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("export default () => null\n", encoding="utf-8")
    return tmp_path
