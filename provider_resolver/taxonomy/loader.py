"""Taxonomy loader.

Turns the raw service taxonomy document into :class:`Category` records and a
:class:`TaxonomyIndex`. Three shapes are accepted, matching what the storefront
data has used over time::

    {"services": [{"category": "Embroidery", "subServices": [{"id": ..., "name": ...}]}]}
    [{"title": "Embroidery", "subServices": [...]}]
    {"Embroidery": {"name": "Embroidery", "subServices": [...]}}

Invalid documents raise InvalidReferenceData with the offending location.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Tuple

from ..errors import InvalidReferenceData
from ..utils.documents import load_document, require
from ..utils.normalize import normalize_token
from .registry import Category, SubService, TaxonomyIndex


def _service_entries(data: Any, *, ctx: str) -> List[Tuple[str, Dict[str, Any]]]:
    """Return ``(ctx, entry)`` pairs regardless of the document shape."""

    if data is None:
        raise InvalidReferenceData(f"Taxonomy is missing in {ctx}")

    if isinstance(data, dict) and "services" in data:
        inner = data["services"]
        if not isinstance(inner, list):
            raise InvalidReferenceData(f"'services' must be a list in {ctx}")
        return [(f"{ctx}:services[{i}]", it) for i, it in enumerate(inner)]

    if isinstance(data, list):
        return [(f"{ctx}[{i}]", it) for i, it in enumerate(data)]

    if isinstance(data, dict):
        out: List[Tuple[str, Dict[str, Any]]] = []
        for key, it in data.items():
            if not isinstance(it, dict):
                raise InvalidReferenceData(f"Taxonomy entry must be an object in {ctx}[{key!r}]")
            entry = dict(it)
            entry.setdefault("name", key)
            out.append((f"{ctx}[{key!r}]", entry))
        return out

    raise InvalidReferenceData(f"Unsupported taxonomy structure in {ctx}: {type(data).__name__}")


def _parse_subservices(items: Any, *, ctx: str) -> Tuple[SubService, ...]:
    if not isinstance(items, list):
        raise InvalidReferenceData(f"subServices must be a list in {ctx}")
    out: List[SubService] = []
    for i, it in enumerate(items):
        sctx = f"{ctx}.subServices[{i}]"
        if not isinstance(it, dict):
            raise InvalidReferenceData(f"sub-service must be an object in {sctx}")
        token = normalize_token(require(it, ("id",), ctx=sctx))
        if not token:
            raise InvalidReferenceData(f"sub-service id normalizes to an empty token in {sctx}")
        out.append(SubService(token=token, name=str(it.get("name") or it["id"])))
    return tuple(out)


def parse_taxonomy(data: Any, *, ctx: str = "taxonomy") -> List[Category]:
    categories: List[Category] = []
    for ectx, entry in _service_entries(data, ctx=ctx):
        if not isinstance(entry, dict):
            raise InvalidReferenceData(f"Taxonomy entry must be an object in {ectx}")
        name = str(require(entry, ("category", "title", "name"), ctx=ectx))
        token = normalize_token(name)
        if not token:
            raise InvalidReferenceData(f"Category name normalizes to an empty token in {ectx}")
        if "subServices" not in entry:
            raise InvalidReferenceData(f"Missing required key 'subServices' in {ectx}")
        categories.append(
            Category(
                token=token,
                name=name,
                subservices=_parse_subservices(entry["subServices"], ctx=ectx),
            )
        )
    return categories


def build_taxonomy(data: Any, *, ctx: str = "taxonomy") -> TaxonomyIndex:
    return TaxonomyIndex.build(parse_taxonomy(data, ctx=ctx))


def load_taxonomy_file(path: Path | str) -> TaxonomyIndex:
    path = Path(path)
    return build_taxonomy(load_document(path), ctx=path.name)


__all__ = ["parse_taxonomy", "build_taxonomy", "load_taxonomy_file"]
