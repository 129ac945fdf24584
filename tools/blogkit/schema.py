from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .config import SDL_FIELD, SDL_TYPE

# siteMetadata is declared so it resolves even when removed from
# site-config.yml. MarkdownRemark and its frontmatter are declared so
# that post queries return an empty list instead of an error when no
# posts exist under content/blog.
TYPE_DEFS = """
    type SiteSiteMetadata {
      title: String
      description: String
      author: Author
      siteUrl: String
    }

    type Site implements Node {
      siteMetadata: SiteSiteMetadata
    }

    type Author implements Node {
      id: String
      authorId: String
      name: String
      summary: String
      twitter: String
    }

    type MarkdownRemark implements Node {
      frontmatter: Frontmatter
      fields: Fields
    }

    type Frontmatter {
      title: String
      description: String
      date: Date @dateformat
      authorId: String
    }

    type Fields {
      slug: String
    }
"""


@dataclass(frozen=True)
class TypeDef:
    name: str
    fields: Dict[str, str] = field(default_factory=dict)
    interfaces: Tuple[str, ...] = ()
    directives: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def is_node(self) -> bool:
        return "Node" in self.interfaces

    def field_type(self, name: str) -> str:
        """Named type of a field with list/non-null wrappers removed."""
        return self.fields[name].strip("[]!")


def parse_type_defs(sdl: str) -> Dict[str, TypeDef]:
    """Parse `type Name [implements A & B] { field: Type @directive }` blocks.

    Only object type definitions are understood; anything else in the
    string is ignored.
    """
    types: Dict[str, TypeDef] = {}
    for m in SDL_TYPE.finditer(sdl):
        fields: Dict[str, str] = {}
        directives: Dict[str, Tuple[str, ...]] = {}
        for fm in SDL_FIELD.finditer(m.group("body")):
            fields[fm.group("name")] = fm.group("type")
            found = tuple(
                d.lstrip("@") for d in fm.group("directives").split() if d
            )
            if found:
                directives[fm.group("name")] = found
        iface = m.group("iface") or ""
        interfaces = tuple(
            i.strip() for i in iface.replace("&", " ").split() if i.strip()
        )
        types[m.group("name")] = TypeDef(
            name=m.group("name"),
            fields=fields,
            interfaces=interfaces,
            directives=directives,
        )
    return types


def create_schema_customization(store) -> None:
    store.create_types(TYPE_DEFS)
