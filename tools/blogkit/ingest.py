from __future__ import annotations

import pathlib
from typing import List, Optional

from .config import (
    CONTENT_ASSETS,
    CONTENT_BLOG,
    IMAGE_EXTENSIONS,
    MARKDOWN_EXTENSIONS,
    ROOT,
)
from .models import Node
from .nodes import on_create_node
from .utils import (
    _norm_text,
    content_hash,
    create_node_id,
    natural_key,
    normalize_frontmatter_dates,
    parse_frontmatter,
)


def _walk(source_dir: pathlib.Path) -> List[pathlib.Path]:
    files = [p for p in source_dir.rglob("*") if p.is_file()]
    files.sort(key=lambda p: natural_key(p.relative_to(source_dir).as_posix()))
    return files


def file_node(path: pathlib.Path, source_dir: pathlib.Path, source_name: str) -> Node:
    rel = path.relative_to(source_dir)
    rel_dir = rel.parent.as_posix()
    return Node(
        id=create_node_id(path.resolve().as_posix(), owner="filesystem"),
        type="File",
        data={
            "sourceInstanceName": source_name,
            "absolutePath": path.resolve().as_posix(),
            "relativePath": rel.as_posix(),
            "relativeDirectory": "" if rel_dir == "." else rel_dir,
            "name": path.stem,
            "extension": path.suffix.lstrip(".").lower(),
        },
        content_digest=content_hash(path),
        owner="filesystem",
    )


def markdown_node(parent: Node, path: pathlib.Path) -> Node:
    text = _norm_text(path.read_text(encoding="utf-8"))
    fm, body = parse_frontmatter(text)
    if not isinstance(fm, dict):
        fm = {}
    return Node(
        id=create_node_id(f"{parent.id} >>> MarkdownRemark", owner="markdown"),
        type="MarkdownRemark",
        data={
            "frontmatter": normalize_frontmatter_dates(fm),
            "rawMarkdownBody": body,
        },
        parent=parent.id,
        content_digest=parent.content_digest,
        owner="markdown",
    )


def image_node(parent: Node) -> Node:
    return Node(
        id=create_node_id(f"{parent.id} >>> ImageSharp", owner="images"),
        type="ImageSharp",
        data={"src": parent.get("absolutePath")},
        parent=parent.id,
        content_digest=parent.content_digest,
        owner="images",
    )


def _create(actions, node: Node) -> None:
    if actions.create_node(node):
        on_create_node(node, actions, actions.store.get_node)


def ingest_content(actions, reporter, root: Optional[pathlib.Path] = None) -> int:
    """Create File nodes for site content plus their Markdown/image children.

    Returns the number of files seen.
    """
    root = root or ROOT
    seen = 0
    sources = (
        ("blog", root / CONTENT_BLOG),
        ("assets", root / CONTENT_ASSETS),
    )
    for name, source_dir in sources:
        if not source_dir.is_dir():
            reporter.note(f"no {source_dir.relative_to(root).as_posix()} in site")
            continue
        for path in _walk(source_dir):
            fnode = file_node(path, source_dir, name)
            _create(actions, fnode)
            suffix = path.suffix.lower()
            if suffix in MARKDOWN_EXTENSIONS:
                _create(actions, markdown_node(fnode, path))
            elif suffix in IMAGE_EXTENSIONS:
                _create(actions, image_node(fnode))
            seen += 1
    reporter.info(f"ingested {seen} content files")
    return seen
