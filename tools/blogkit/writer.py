from __future__ import annotations

import pathlib
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

import yaml

from .actions import BuildError
from .config import SLICES_MANIFEST
from .models import PageRequest, SliceDeclaration, SiteMetadata
from .utils import create_content_digest, yaml_frontmatter_block


def page_dir(out_dir: pathlib.Path, path: str) -> pathlib.Path:
    rel = path.strip("/")
    return out_dir / rel if rel else out_dir


def page_frontmatter(
    page: PageRequest, site_url: Optional[str] = None
) -> Dict[str, Any]:
    fm: Dict[str, Any] = {"path": page.path}
    if site_url:
        fm["url"] = site_url.rstrip("/") + page.path
    fm["component"] = page.component
    fm["context"] = dict(page.context)
    if page.slices:
        fm["slices"] = dict(page.slices)
    return fm


def check_slice_bindings(
    pages: Iterable[PageRequest],
    slices: Mapping[str, SliceDeclaration],
    reporter,
    strict: bool = False,
) -> List[str]:
    """Report page slice bindings that point at undeclared slices."""
    missing: List[str] = []
    for page in pages:
        for alias, slice_id in page.slices.items():
            if slice_id not in slices:
                msg = f'{page.path} binds "{alias}" to undeclared slice {slice_id}'
                missing.append(msg)
                reporter.warn(msg)
    if missing and strict:
        raise BuildError("Pages reference undeclared slices", missing)
    return missing


def write_page(
    page: PageRequest,
    out_dir: pathlib.Path,
    reporter,
    site_url: Optional[str] = None,
) -> bool:
    fm = page_frontmatter(page, site_url)
    target = page_dir(out_dir, page.path)
    target.mkdir(parents=True, exist_ok=True)
    index_md = target / "index.md"
    marker = target / f".hash-{create_content_digest(fm)}"

    if marker.exists() and index_md.exists():
        reporter.skip(f"{page.path} unchanged, skip")
        return False

    index_md.write_text(yaml_frontmatter_block(fm), encoding="utf-8")
    for old in target.glob(".hash-*"):
        old.unlink()
    marker.touch()
    return True


def remove_stale_pages(
    out_dir: pathlib.Path, keep: Set[pathlib.Path], reporter
) -> int:
    """Remove page output no longer produced by the build.

    Only directories carrying a `.hash-*` marker are touched.
    """
    removed = 0
    if not out_dir.exists():
        return removed
    dirs = {m.parent for m in out_dir.rglob(".hash-*")}
    for d in sorted(dirs, key=lambda p: len(p.parts), reverse=True):
        if d in keep:
            continue
        for f in list(d.glob(".hash-*")) + [d / "index.md"]:
            if f.exists():
                f.unlink()
        if d != out_dir and not any(d.iterdir()):
            d.rmdir()
        rel = d.relative_to(out_dir).as_posix()
        reporter.note(f"removed stale page {'/' if rel == '.' else f'/{rel}/'}")
        removed += 1
    return removed


def write_slices(
    slices: Iterable[SliceDeclaration], out_dir: pathlib.Path
) -> pathlib.Path:
    manifest = [
        {"id": s.id, "component": s.component, "context": dict(s.context)}
        for s in slices
    ]
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / SLICES_MANIFEST
    path.write_text(
        yaml.safe_dump(
            {"slices": manifest}, sort_keys=False, allow_unicode=True
        ),
        encoding="utf-8",
    )
    return path


def write_site(
    actions,
    out_dir: pathlib.Path,
    reporter,
    site_metadata: Optional[SiteMetadata] = None,
    strict_slices: bool = False,
) -> int:
    """Write every requested page and the slice manifest; return pages written."""
    pages = list(actions.pages.values())
    check_slice_bindings(pages, actions.slices, reporter, strict=strict_slices)

    site_url = site_metadata.site_url if site_metadata else None
    written = 0
    for page in pages:
        if write_page(page, out_dir, reporter, site_url=site_url):
            written += 1

    remove_stale_pages(
        out_dir, {page_dir(out_dir, p.path) for p in pages}, reporter
    )
    write_slices(actions.slices.values(), out_dir)

    reporter.info(
        f"wrote {written} of {len(pages)} pages, {len(actions.slices)} slices"
    )
    return written
