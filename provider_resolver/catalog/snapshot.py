# provider_resolver/catalog/snapshot.py
"""Immutable reference snapshot and its loaders.

The snapshot is built once at startup and then shared by every resolution.
Reloading means building a new snapshot and swapping the reference held by the
host; a snapshot is never mutated in place, so concurrent readers need no lock.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from ..config import PRODUCTS_STEM, PROVIDERS_STEM, REFERENCE_SUFFIXES, TAXONOMY_STEM
from ..errors import InvalidReferenceData
from ..taxonomy.loader import build_taxonomy
from ..taxonomy.registry import TaxonomyIndex
from ..utils.aliases import DEFAULT_ALIASES, AliasTable, load_alias_table
from ..utils.documents import find_document, load_document
from .models import ProductRecord, ProviderRecord

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ReferenceSnapshot:
    providers: Tuple[ProviderRecord, ...]
    products: Tuple[ProductRecord, ...]
    taxonomy: TaxonomyIndex
    aliases: AliasTable = DEFAULT_ALIASES


def _collection_items(data: Any, wrapper_key: str, *, ctx: str) -> List[Tuple[str, Any]]:
    """Flatten the storage shapes into ``(ctx, record)`` pairs.

    Accepted: a bare list, ``{wrapper_key: [...]}``, or an id-keyed mapping
    ``{"hand_0": {...}}`` where the key stands in for a missing ``id``.
    """

    if data is None:
        raise InvalidReferenceData(f"Reference collection '{ctx}' is missing")

    if isinstance(data, list):
        return [(f"{ctx}[{i}]", it) for i, it in enumerate(data)]

    if isinstance(data, dict):
        if wrapper_key in data:
            inner = data[wrapper_key]
            if not isinstance(inner, list):
                raise InvalidReferenceData(f"'{wrapper_key}' must be a list in {ctx}")
            return [(f"{ctx}.{wrapper_key}[{i}]", it) for i, it in enumerate(inner)]

        out: List[Tuple[str, Any]] = []
        for key, it in data.items():
            if isinstance(it, dict) and it.get("id") in (None, ""):
                it = {**it, "id": key}
            out.append((f"{ctx}[{key!r}]", it))
        return out

    raise InvalidReferenceData(f"Unsupported structure for '{ctx}': {type(data).__name__}")


def _parse_records(
    data: Any,
    wrapper_key: str,
    factory: Callable[..., T],
    *,
    ctx: str,
) -> Tuple[T, ...]:
    return tuple(factory(raw, ctx=rctx) for rctx, raw in _collection_items(data, wrapper_key, ctx=ctx))


def _warn_duplicate_ids(records: Tuple[Any, ...], kind: str) -> None:
    dupes = [rid for rid, n in Counter(r.id for r in records).items() if n > 1]
    if dupes:
        _LOGGER.warning("Duplicate %s ids in reference data (first occurrence wins): %s", kind, sorted(dupes))


def load_reference_data(
    providers: Any,
    products: Any,
    taxonomy: Any,
    aliases: Optional[AliasTable] = None,
) -> ReferenceSnapshot:
    """Validate raw collections and build an immutable snapshot.

    Raises InvalidReferenceData if any collection is absent or a record lacks
    its required fields. An empty provider list is accepted here; it only
    becomes an error when someone tries to resolve against it.
    """

    taxonomy_index = taxonomy if isinstance(taxonomy, TaxonomyIndex) else build_taxonomy(taxonomy)
    provider_records = _parse_records(providers, "providers", ProviderRecord.from_dict, ctx="providers")
    product_records = _parse_records(products, "products", ProductRecord.from_dict, ctx="products")

    _warn_duplicate_ids(provider_records, "provider")
    _warn_duplicate_ids(product_records, "product")

    _LOGGER.info(
        "Loaded reference snapshot: %d providers, %d products, %d categories",
        len(provider_records),
        len(product_records),
        len(taxonomy_index),
    )
    return ReferenceSnapshot(
        providers=provider_records,
        products=product_records,
        taxonomy=taxonomy_index,
        aliases=DEFAULT_ALIASES if aliases is None else aliases,
    )


def _require_document(base_dir: Path, stem: str) -> Any:
    path = find_document(base_dir, stem, REFERENCE_SUFFIXES)
    if path is None:
        wanted = ", ".join(stem + s for s in REFERENCE_SUFFIXES)
        raise InvalidReferenceData(f"No reference file found in {base_dir} (looked for {wanted})")
    _LOGGER.debug("Reading %s", path)
    return load_document(path)


def load_reference_files(
    data_dir: Path | str,
    alias_file: Optional[Path | str] = None,
) -> ReferenceSnapshot:
    """Load providers / products / services documents from ``data_dir``."""

    base = Path(data_dir)
    if not base.is_dir():
        raise InvalidReferenceData(f"Reference data directory does not exist: {base}")

    aliases = load_alias_table(alias_file) if alias_file else None
    return load_reference_data(
        providers=_require_document(base, PROVIDERS_STEM),
        products=_require_document(base, PRODUCTS_STEM),
        taxonomy=_require_document(base, TAXONOMY_STEM),
        aliases=aliases,
    )


def find_provider(snapshot: ReferenceSnapshot, provider_id: Any) -> Optional[ProviderRecord]:
    """Look a provider up by id, tolerating ids that were truncated or prefixed.

    Exact match first; otherwise the first provider whose id contains, or is
    contained in, the requested id.
    """

    wanted = "" if provider_id is None else str(provider_id)
    if not wanted:
        return None
    for p in snapshot.providers:
        if p.id == wanted:
            return p
    for p in snapshot.providers:
        if wanted in p.id or p.id in wanted:
            return p
    return None


__all__ = ["ReferenceSnapshot", "load_reference_data", "load_reference_files", "find_provider"]
