from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .models import Node, QueryResult
from .schema import TypeDef, parse_type_defs

_MISSING = object()


def _lookup(node: Node, parts: Sequence[str]) -> Any:
    head, rest = parts[0], parts[1:]
    if head == "id":
        return node.id if not rest else _MISSING
    if head == "fields":
        value: Any = node.fields
    elif head in node.data:
        value = node.data[head]
    else:
        return _MISSING
    for part in rest:
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _sort_value(v: Any):
    # None sorts after everything else on an ascending sort
    if v is None:
        return (1, "")
    if isinstance(v, datetime):
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return (0, v.isoformat(timespec="microseconds"))
    if isinstance(v, date):
        # a bare date sorts as midnight of that day
        return (0, datetime.combine(v, time.min).isoformat(timespec="microseconds"))
    return (0, str(v))


class NodeStore:
    """In-memory content store.

    Nodes are keyed by id. A node is replaced only when its content digest
    changes, so re-creating an unchanged node is a no-op.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, Node] = {}
        self._types: Dict[str, TypeDef] = {}

    # ---------- Schema

    def create_types(self, sdl: str) -> None:
        self._types.update(parse_type_defs(sdl))

    def type_def(self, name: str) -> Optional[TypeDef]:
        return self._types.get(name)

    # ---------- Nodes

    def create_node(self, node: Node) -> bool:
        """Store `node`; return False when an identical node already exists."""
        if not node.content_digest:
            raise ValueError(f"node {node.id} has no content digest")
        existing = self._nodes.get(node.id)
        if existing is not None:
            if existing.type != node.type:
                raise ValueError(
                    f"node id {node.id} already used by a {existing.type} node"
                )
            if existing.content_digest == node.content_digest:
                return False
            node.children = list(dict.fromkeys(existing.children + node.children))
            node.fields = {**existing.fields, **node.fields}
        self._nodes[node.id] = node
        if node.parent is not None:
            parent = self._nodes.get(node.parent)
            if parent is None:
                raise KeyError(f"parent node {node.parent} does not exist")
            if node.id not in parent.children:
                parent.children.append(node.id)
        return True

    def get_node(self, node_id: Optional[str]) -> Optional[Node]:
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def get_nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def get_nodes_by_type(self, type_name: str) -> List[Node]:
        return [n for n in self._nodes.values() if n.type == type_name]

    def create_node_field(self, node: Node, name: str, value: Any) -> None:
        stored = self._nodes.get(node.id)
        if stored is None:
            raise KeyError(f"cannot add field {name!r} to unknown node {node.id}")
        stored.fields[name] = value
        if stored is not node:
            node.fields[name] = value

    # ---------- Queries

    def _type_known(self, type_name: str) -> bool:
        return type_name in self._types or any(
            n.type == type_name for n in self._nodes.values()
        )

    def _field_known(self, type_name: str, path: str) -> bool:
        parts = path.split(".")
        if parts == ["id"]:
            return True
        current = type_name
        for part in parts:
            tdef = self._types.get(current)
            if tdef is None or part not in tdef.fields:
                break
            current = tdef.field_type(part)
        else:
            return True
        # not declared: infer from stored nodes
        return any(
            _lookup(n, parts) is not _MISSING
            for n in self.get_nodes_by_type(type_name)
        )

    def query_all(
        self,
        type_name: str,
        fields: Iterable[str],
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> QueryResult:
        """Return one `{path: value}` row per node of `type_name`.

        Unknown types or fields are reported in `errors` and no data is
        returned. Declared fields missing on a node resolve to None.
        """
        fields = list(fields)
        if not self._type_known(type_name):
            return QueryResult(errors=[f'Cannot query type "{type_name}"'])
        errors = [
            f'Cannot query field "{f}" on type "{type_name}"'
            for f in fields + ([sort] if sort else [])
            if not self._field_known(type_name, f)
        ]
        if errors:
            return QueryResult(errors=errors)

        nodes = self.get_nodes_by_type(type_name)
        if sort:
            sort_parts = sort.split(".")

            def _key(n: Node):
                v = _lookup(n, sort_parts)
                return _sort_value(None if v is _MISSING else v)

            nodes = sorted(nodes, key=_key)
        if limit is not None:
            nodes = nodes[:limit]

        rows = []
        for n in nodes:
            row = {}
            for f in fields:
                v = _lookup(n, f.split("."))
                row[f] = None if v is _MISSING else v
            rows.append(row)
        return QueryResult(data=rows)
