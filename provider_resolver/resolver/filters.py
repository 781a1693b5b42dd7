from __future__ import annotations

from typing import Optional

from ..catalog.models import ProviderRecord
from ..taxonomy.registry import TaxonomyIndex
from ..utils.normalize import normalize_token


def provider_category(provider: ProviderRecord, taxonomy: TaxonomyIndex) -> Optional[str]:
    """Category owning the provider's service token, or None for orphan providers."""

    return taxonomy.category_of(normalize_token(provider.service_token))


def is_plausible(provider: ProviderRecord, target_category: Optional[str], taxonomy: TaxonomyIndex) -> bool:
    """
    Category consistency guard.

    With no target category there is nothing to disprove, so every provider is
    plausible. Otherwise the provider must perform a sub-service of exactly that
    category; orphan providers never pass a category check.
    """

    if not target_category:
        return True
    return provider_category(provider, taxonomy) == target_category


__all__ = ["provider_category", "is_plausible"]
