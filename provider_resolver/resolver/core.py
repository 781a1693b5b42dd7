# provider_resolver/resolver/core.py
"""Resolver orchestration.

Flow for one request:
1) normalize the raw token and apply the alias table -> search token
2) pick the target category: the caller's hint when it names a known category,
   otherwise whatever the taxonomy says owns the search token
3) run the strategies in order, stop at the first provider found
4) attach the provider's product subset and a display label
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..catalog.models import ProductRecord, ProviderRecord
from ..catalog.products import products_for
from ..catalog.snapshot import ReferenceSnapshot
from ..errors import NoProvidersAvailable
from ..utils.normalize import normalize_token
from ..utils.trace import TraceLogger, new_request_id
from .filters import is_plausible
from .strategies import MATCH_DEFAULT, STRATEGIES, ResolutionContext, Strategy

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionRequest:
    raw_token: str
    category_hint: Optional[str] = None
    request_id: Optional[str] = None


@dataclass(frozen=True)
class ResolutionResult:
    provider: ProviderRecord
    products: Tuple[ProductRecord, ...]
    label: str
    matched_by: str
    search_token: str
    category: Optional[str] = None
    # True when the positional default answered without passing a category check
    unfiltered: bool = False
    attempts: Tuple[str, ...] = field(default_factory=tuple)
    request_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "provider_id": self.provider.id,
            "provider_name": self.provider.name,
            "service_token": self.provider.service_token,
            "label": self.label,
            "matched_by": self.matched_by,
            "search_token": self.search_token,
            "category": self.category,
            "unfiltered": self.unfiltered,
            "attempts": list(self.attempts),
            "product_ids": [p.id for p in self.products],
            "request_id": self.request_id,
        }


def search_token_for(snapshot: ReferenceSnapshot, raw_token: object) -> str:
    return snapshot.aliases.resolve(normalize_token(raw_token))


def target_category_for(snapshot: ReferenceSnapshot, search_token: str, category_hint: Optional[str]) -> Optional[str]:
    hint = normalize_token(category_hint)
    if hint:
        if snapshot.taxonomy.has_category(hint):
            return hint
        _LOGGER.warning("Ignoring unknown category hint '%s'; deriving category from '%s'", category_hint, search_token)
    return snapshot.taxonomy.category_of(search_token)


class Resolver:
    """Runs the strategy chain against one reference snapshot.

    ``strategies`` is an ordered sequence of ``(name, strategy)`` pairs; a new
    strategy is added by inserting it into that sequence.
    """

    def __init__(
        self,
        snapshot: ReferenceSnapshot,
        strategies: Sequence[Tuple[str, Strategy]] = STRATEGIES,
        trace: Optional[TraceLogger] = None,
    ):
        self.snapshot = snapshot
        self.strategies = tuple(strategies)
        self.trace = trace

    def resolve(
        self,
        raw_token: str,
        category_hint: Optional[str] = None,
        *,
        request_id: Optional[str] = None,
    ) -> ResolutionResult:
        snapshot = self.snapshot
        if not snapshot.providers:
            raise NoProvidersAvailable(str(raw_token))

        search_token = search_token_for(snapshot, raw_token)
        category = target_category_for(snapshot, search_token, category_hint)
        _LOGGER.debug("Resolving '%s' -> token '%s' (category=%s)", raw_token, search_token, category)

        ctx = ResolutionContext(snapshot=snapshot, search_token=search_token, target_category=category)
        attempts: List[str] = []
        provider: Optional[ProviderRecord] = None
        matched_by = ""
        for name, strategy in self.strategies:
            attempts.append(name)
            provider = strategy(ctx)
            if provider is not None:
                matched_by = name
                break
            _LOGGER.debug("Strategy %s: no match for '%s'", name, search_token)

        if provider is None:
            # only reachable when a custom strategy list drops the default
            raise NoProvidersAvailable(str(raw_token))

        unfiltered = matched_by == MATCH_DEFAULT and not (category and is_plausible(provider, category, snapshot.taxonomy))
        if unfiltered and category:
            _LOGGER.warning(
                "No provider in category '%s' for '%s'; falling back to first provider '%s'",
                category,
                search_token,
                provider.id,
            )
        _LOGGER.debug("Strategy %s matched provider '%s'", matched_by, provider.id)

        if request_id is None and self.trace is not None and self.trace.enabled:
            request_id = new_request_id()

        products = tuple(products_for(snapshot, provider))
        label = snapshot.taxonomy.display_name(search_token) or provider.name

        result = ResolutionResult(
            provider=provider,
            products=products,
            label=label,
            matched_by=matched_by,
            search_token=search_token,
            category=category,
            unfiltered=unfiltered,
            attempts=tuple(attempts),
            request_id=request_id,
        )
        if self.trace is not None:
            self.trace.record(
                "resolution",
                {"raw_token": str(raw_token), "category_hint": category_hint, **result.to_dict()},
                request_id=request_id,
            )
        return result

    def resolve_request(self, request: ResolutionRequest) -> ResolutionResult:
        return self.resolve(request.raw_token, request.category_hint, request_id=request.request_id)


def resolve(
    snapshot: ReferenceSnapshot,
    raw_token: str,
    category_hint: Optional[str] = None,
    *,
    trace: Optional[TraceLogger] = None,
    request_id: Optional[str] = None,
) -> ResolutionResult:
    """Resolve a raw service token to one provider and its products."""

    return Resolver(snapshot, trace=trace).resolve(raw_token, category_hint, request_id=request_id)


__all__ = [
    "ResolutionRequest",
    "ResolutionResult",
    "Resolver",
    "resolve",
    "search_token_for",
    "target_category_for",
]
