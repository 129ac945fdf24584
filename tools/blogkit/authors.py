from __future__ import annotations

from typing import Tuple

from .models import AuthorRecord, Node
from .utils import create_content_digest, create_node_id

AUTHORS: Tuple[AuthorRecord, ...] = (
    AuthorRecord(
        author_id="kylem",
        name="Kyle Mathews",
        summary="who lives and works in San Francisco building useful things.",
        twitter="kylemathews",
    ),
    AuthorRecord(
        author_id="joshj",
        name="Josh Johnson",
        summary="who lives and works in Michigan building neat things.",
        twitter="0xJ05H",
    ),
)


def author_node(author: AuthorRecord) -> Node:
    data = author.as_node_data()
    return Node(
        id=create_node_id(author.author_id),
        type="Author",
        data=data,
        content_digest=create_content_digest(data),
        owner="authors",
    )


def source_nodes(actions, authors: Tuple[AuthorRecord, ...] = AUTHORS) -> int:
    """Add one Author node per catalog entry; return how many changed."""
    changed = 0
    for author in authors:
        if actions.create_node(author_node(author)):
            changed += 1
    return changed
