from __future__ import annotations

from .config import AUTHOR_IMAGE_DIR
from .models import Node
from .slugs import create_file_path


def on_create_node(node: Node, actions, get_node) -> None:
    # slugs for all blog posts
    if node.type == "MarkdownRemark":
        actions.create_node_field(
            node, "slug", create_file_path(node, get_node)
        )

    # authorId for author avatars, taken from the image file name
    if node.type == "ImageSharp":
        parent = get_node(node.parent)
        if parent is not None and parent.get("relativeDirectory") == AUTHOR_IMAGE_DIR:
            actions.create_node_field(node, "authorId", parent.get("name"))
