from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class Node:
    """A record in the content store.

    `data` is fixed at creation; `fields` collects values attached later
    by node hooks (slug, authorId, ...).
    """

    id: str
    type: str
    data: Dict[str, Any] = field(default_factory=dict)
    fields: Dict[str, Any] = field(default_factory=dict)
    parent: Optional[str] = None
    children: List[str] = field(default_factory=list)
    content_digest: str = ""
    owner: str = ""

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)


@dataclass(frozen=True)
class AuthorRecord:
    author_id: str
    name: str
    summary: Optional[str] = None
    twitter: Optional[str] = None

    def as_node_data(self) -> Dict[str, Any]:
        return {
            "authorId": self.author_id,
            "name": self.name,
            "summary": self.summary,
            "twitter": self.twitter,
        }


@dataclass(frozen=True)
class Frontmatter:
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[date] = None
    author_id: Optional[str] = None


@dataclass(frozen=True)
class PostFields:
    slug: Optional[str] = None


@dataclass(frozen=True)
class PostRecord:
    id: str
    frontmatter: Frontmatter = Frontmatter()
    fields: PostFields = PostFields()


@dataclass(frozen=True)
class SiteMetadata:
    title: Optional[str] = None
    description: Optional[str] = None
    author: Optional[Mapping[str, Any]] = None
    site_url: Optional[str] = None


@dataclass(frozen=True)
class PageRequest:
    path: str
    component: str
    context: Mapping[str, Any] = field(default_factory=dict)
    slices: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SliceDeclaration:
    id: str
    component: str
    context: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class QueryResult:
    data: List[Any] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
