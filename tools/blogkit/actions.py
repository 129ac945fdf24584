from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .models import Node, PageRequest, SliceDeclaration
from .store import NodeStore


class BuildError(Exception):
    """A fatal build condition; the build stops and nothing is written."""

    def __init__(self, message: str, errors: Optional[Iterable[Any]] = None):
        super().__init__(message)
        self.message = message
        self.errors: List[Any] = list(errors or [])

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return f"{self.message}: " + "; ".join(str(e) for e in self.errors)


class Reporter:
    def info(self, msg: str) -> None:
        print(f"✓ {msg}")

    def skip(self, msg: str) -> None:
        print(f"= {msg}")

    def note(self, msg: str) -> None:
        print(f"- {msg}")

    def warn(self, msg: str) -> None:
        print(f"! {msg}")

    def panic_on_build(self, msg: str, errors: Optional[Iterable[Any]] = None):
        raise BuildError(msg, errors)


class Actions:
    """Collects what the build hooks ask for: nodes, fields, pages, slices."""

    def __init__(self, store: NodeStore) -> None:
        self.store = store
        self.pages: Dict[str, PageRequest] = {}
        self.slices: Dict[str, SliceDeclaration] = {}

    def create_node(self, node: Node) -> bool:
        return self.store.create_node(node)

    def create_node_field(self, node: Node, name: str, value: Any) -> None:
        self.store.create_node_field(node, name, value)

    def create_page(self, page: PageRequest) -> None:
        if not page.path:
            raise BuildError(
                f"page for {page.component} has no path",
                [f"context: {dict(page.context)}"],
            )
        # same path: the later request replaces the earlier one
        self.pages[page.path] = page

    def create_slice(self, decl: SliceDeclaration) -> None:
        self.slices[decl.id] = decl
