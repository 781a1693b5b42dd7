"""Ordered provider matching strategies.

Every strategy has the same signature: it receives a :class:`ResolutionContext`
and returns the first satisfying provider, or None. The resolver runs them in
the order of :data:`STRATEGIES` and stops at the first hit, so precedence lives
in that list and nowhere else.

Strategies 1-5 are category guarded and skip empty search tokens (an empty
prefix matches everything). Strategy 6 is the terminal case and always answers
when at least one provider exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ..catalog.models import ProductRecord, ProviderRecord
from ..catalog.snapshot import ReferenceSnapshot
from ..utils.normalize import normalize_token
from .filters import is_plausible

_LOGGER = logging.getLogger(__name__)

MATCH_EXACT = "exact_token"
MATCH_NAME = "name_prefix"
MATCH_PRODUCT = "product_seeded"
MATCH_TAXONOMY = "taxonomy"
MATCH_PARTIAL = "partial_token"
MATCH_DEFAULT = "default"


@dataclass(frozen=True)
class ResolutionContext:
    snapshot: ReferenceSnapshot
    search_token: str
    target_category: Optional[str]

    def plausible(self, provider: ProviderRecord, category: Optional[str] = None) -> bool:
        target = self.target_category if category is None else category
        return is_plausible(provider, target, self.snapshot.taxonomy)

    def first_provider(self, predicate: Callable[[ProviderRecord], bool]) -> Optional[ProviderRecord]:
        return next((p for p in self.snapshot.providers if predicate(p)), None)


Strategy = Callable[[ResolutionContext], Optional[ProviderRecord]]


def _token(provider: ProviderRecord) -> str:
    return normalize_token(provider.service_token)


def match_exact_token(ctx: ResolutionContext) -> Optional[ProviderRecord]:
    key = ctx.search_token
    if not key:
        return None
    return ctx.first_provider(lambda p: _token(p) == key and ctx.plausible(p))


def match_name_prefix(ctx: ResolutionContext) -> Optional[ProviderRecord]:
    # startswith also covers equality; "contains" would be too broad for short tokens
    key = ctx.search_token
    if not key:
        return None
    return ctx.first_provider(lambda p: normalize_token(p.name).startswith(key) and ctx.plausible(p))


def _seed_product(ctx: ResolutionContext) -> Optional[ProductRecord]:
    key = ctx.search_token
    first_loose: Optional[ProductRecord] = None
    for product in ctx.snapshot.products:
        if normalize_token(product.service_token) == key:
            return product
        if first_loose is None and (
            normalize_token(product.name).startswith(key) or normalize_token(product.category).startswith(key)
        ):
            first_loose = product
    return first_loose


def match_product_seeded(ctx: ResolutionContext) -> Optional[ProviderRecord]:
    if not ctx.search_token:
        return None
    seed = _seed_product(ctx)
    if seed is None:
        return None

    seed_token = ctx.snapshot.aliases.resolve(normalize_token(seed.service_token))
    _LOGGER.debug("Product seed for '%s': %s (token '%s')", ctx.search_token, seed.id, seed_token)

    if seed_token:
        provider = ctx.first_provider(lambda p: _token(p) == seed_token and ctx.plausible(p))
        if provider:
            return provider

    # weaker: the product names its provider explicitly
    if seed.provider_id is not None:
        return ctx.first_provider(lambda p: p.id == seed.provider_id and ctx.plausible(p))
    return None


def match_taxonomy(ctx: ResolutionContext) -> Optional[ProviderRecord]:
    key = ctx.search_token
    if not key:
        return None
    for category, sub in ctx.snapshot.taxonomy.iter_subservices():
        if sub.token != key and normalize_token(sub.name) != key:
            continue
        # a display-name hit may live in another category than the one requested
        if ctx.target_category and category.token != ctx.target_category:
            continue
        provider = ctx.first_provider(lambda p: _token(p) == sub.token and ctx.plausible(p, category.token))
        if provider:
            return provider
    return None


def match_partial_token(ctx: ResolutionContext) -> Optional[ProviderRecord]:
    key = ctx.search_token
    if not key:
        return None
    return ctx.first_provider(lambda p: _token(p).startswith(key) and ctx.plausible(p))


def match_default(ctx: ResolutionContext) -> Optional[ProviderRecord]:
    providers = ctx.snapshot.providers
    if not providers:
        return None
    if ctx.target_category:
        provider = ctx.first_provider(ctx.plausible)
        if provider:
            return provider
    return providers[0]


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    (MATCH_EXACT, match_exact_token),
    (MATCH_NAME, match_name_prefix),
    (MATCH_PRODUCT, match_product_seeded),
    (MATCH_TAXONOMY, match_taxonomy),
    (MATCH_PARTIAL, match_partial_token),
    (MATCH_DEFAULT, match_default),
)


__all__ = [
    "ResolutionContext",
    "Strategy",
    "STRATEGIES",
    "MATCH_EXACT",
    "MATCH_NAME",
    "MATCH_PRODUCT",
    "MATCH_TAXONOMY",
    "MATCH_PARTIAL",
    "MATCH_DEFAULT",
    "match_exact_token",
    "match_name_prefix",
    "match_product_seeded",
    "match_taxonomy",
    "match_partial_token",
    "match_default",
]
