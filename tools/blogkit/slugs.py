from __future__ import annotations

import posixpath
from typing import Callable, Optional

from .models import Node

GetNode = Callable[[Optional[str]], Optional[Node]]


def find_file_node(node: Node, get_node: GetNode) -> Optional[Node]:
    """Walk up the parent chain to the `File` node a record came from."""
    seen = set()
    current: Optional[Node] = node
    while current is not None and current.id not in seen:
        if current.type == "File":
            return current
        seen.add(current.id)
        current = get_node(current.parent)
    return None


def create_file_path(
    node: Node,
    get_node: GetNode,
    base_path: str = "",
    trailing_slash: bool = True,
) -> Optional[str]:
    """
    URL path for a record, from its source file location.

    `blog/hello-world/index.md` -> `/blog/hello-world/`
    `hello-world.md`            -> `/hello-world/`
    """
    file_node = find_file_node(node, get_node)
    if file_node is None:
        return None

    rel = str(file_node.get("relativePath", "")).replace("\\", "/")
    base = base_path.replace("\\", "/").strip("/")
    if base and (rel == base or rel.startswith(base + "/")):
        rel = rel[len(base):].lstrip("/")

    directory, filename = posixpath.split(rel)
    name = posixpath.splitext(filename)[0]
    if name == "index":
        name = ""

    parts = [p for p in directory.split("/") + [name] if p and p != "."]
    path = "/" + "/".join(parts)
    if trailing_slash and not path.endswith("/"):
        path += "/"
    return path
