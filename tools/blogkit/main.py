#!/usr/bin/env python3
"""
Build driver for a multi-author Markdown blog.

- Authors -> Author nodes from a fixed catalog
- content/blog/**/*.md -> MarkdownRemark nodes with a `slug` field
- content/assets/author/<authorId>.* -> ImageSharp nodes with `authorId`
- Posts -> public/<slug>/index.md
  frontmatter: path, url?, component, context {id, previousPostId, nextPostId},
  slices {bio: bio--<authorId>}
- Slices -> public/_slices.yml (header, footer, bio--<authorId> per author)

Key behaviour:
- Posts are linked to their neighbours in ascending date order
- Unchanged pages are skipped via `.hash-<digest>` markers
- Pages that are no longer produced are removed
- Any query error stops the build before anything is written
"""

from __future__ import annotations

import pathlib
import sys
from typing import Any, Dict, Optional

from .actions import Actions, BuildError, Reporter
from .authors import source_nodes
from .config import POSTS_QUERY_LIMIT, PUBLIC_DIR, ROOT, SITE_CONFIG_NAME
from .ingest import ingest_content
from .models import Node, SiteMetadata
from .pages import create_pages
from .schema import create_schema_customization
from .store import NodeStore
from .utils import create_content_digest, create_node_id, read_yaml
from .writer import write_site


def load_site_config(root: pathlib.Path) -> Dict[str, Any]:
    path = root / SITE_CONFIG_NAME
    if not path.exists():
        raise BuildError(f"{SITE_CONFIG_NAME} missing at site root", [root])
    config = read_yaml(path)
    if not isinstance(config, dict):
        raise BuildError(f"{SITE_CONFIG_NAME} must be a mapping", [path])
    return config


def posts_limit(build_config: Dict[str, Any]) -> int:
    value = build_config.get("postsLimit", POSTS_QUERY_LIMIT)
    if isinstance(value, bool):
        raise BuildError("build.postsLimit must be an integer", [value])
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BuildError("build.postsLimit must be an integer", [value]) from None


def site_node(config: Dict[str, Any]) -> Node:
    data = {"siteMetadata": config.get("siteMetadata") or {}}
    return Node(
        id=create_node_id("Site"),
        type="Site",
        data=data,
        content_digest=create_content_digest(data),
        owner="site",
    )


def query_site_metadata(store) -> SiteMetadata:
    res = store.query_all(
        "Site",
        [
            "siteMetadata.title",
            "siteMetadata.description",
            "siteMetadata.author",
            "siteMetadata.siteUrl",
        ],
    )
    if res.errors or not res.data:
        return SiteMetadata()
    row = res.data[0]
    author = row["siteMetadata.author"]
    return SiteMetadata(
        title=row["siteMetadata.title"],
        description=row["siteMetadata.description"],
        author=author if isinstance(author, dict) else None,
        site_url=row["siteMetadata.siteUrl"],
    )


def build(
    root: Optional[pathlib.Path] = None,
    reporter: Optional[Reporter] = None,
) -> Actions:
    root = root or ROOT
    reporter = reporter or Reporter()

    config = load_site_config(root)
    build_config = config.get("build") or {}

    store = NodeStore()
    actions = Actions(store)

    create_schema_customization(store)
    actions.create_node(site_node(config))

    changed = source_nodes(actions)
    reporter.info(f"sourced authors ({changed} new or changed)")

    ingest_content(actions, reporter, root)
    create_pages(
        store,
        actions,
        reporter,
        root,
        limit=posts_limit(build_config),
    )

    write_site(
        actions,
        root / PUBLIC_DIR,
        reporter,
        site_metadata=query_site_metadata(store),
        strict_slices=bool(build_config.get("strictSlices", False)),
    )
    return actions


def main():
    try:
        build()
    except BuildError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
