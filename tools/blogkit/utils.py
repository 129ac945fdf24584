from __future__ import annotations

import hashlib
import pathlib
import re
import uuid
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

import yaml

from .config import NODE_NAMESPACE

_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, NODE_NAMESPACE)


def natural_key(s: str):
    return [int(t) if t.isdigit() else t for t in re.split(r'(\d+)', s.lower())]


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}


def content_hash(path: pathlib.Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()[:16]


def create_content_digest(data: Any) -> str:
    """Stable fingerprint of a mapping or scalar, independent of key order."""
    if isinstance(data, (bytes, str)):
        raw = data.encode("utf-8") if isinstance(data, str) else data
    else:
        raw = yaml.safe_dump(
            data, sort_keys=True, allow_unicode=True
        ).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:16]


def create_node_id(key: str, owner: str = "") -> str:
    return str(uuid.uuid5(_NAMESPACE, f"{owner}{key}"))


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def _coerce_date_like(v):
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        s = v.strip().strip('"').strip("'")
        try:
            return date.fromisoformat(s)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            return v
    return v


def normalize_frontmatter_dates(
    fm: Dict[str, Any],
    keys=("date", "publishDate", "updateDate"),
) -> Dict[str, Any]:
    if not isinstance(fm, dict):
        return fm
    for k in keys:
        if k in fm:
            fm[k] = _coerce_date_like(fm[k])
    return fm


def yaml_frontmatter_block(data: Dict[str, Any]) -> str:
    def _fmt(v):
        if isinstance(v, datetime):
            return v.date().isoformat()
        if isinstance(v, date):
            return v.isoformat()
        return v

    data = normalize_frontmatter_dates({k: _fmt(v) for k, v in data.items()})
    dumped = yaml.safe_dump(
        data, sort_keys=False, allow_unicode=True
    ).rstrip()
    return f"---\n{dumped}\n---\n\n"


def parse_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    s = text.lstrip()
    if not s.startswith("---\n") and not s.startswith("---\r\n"):
        return None, text

    lines = text.splitlines(keepends=True)
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            fm_text = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            fm = yaml.safe_load(fm_text) or {}
            return fm, body
    return None, text
