from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..errors import InvalidReferenceData


@dataclass(frozen=True)
class SubService:
    token: str
    name: str


@dataclass(frozen=True)
class Category:
    token: str
    name: str
    subservices: Tuple[SubService, ...] = ()


class TaxonomyIndex:
    """
    Read-only index over the category -> sub-service reference data.
    This is the authoritative source of:
      - which category owns a sub-service token
      - the display name of a sub-service
      - the category order used by the taxonomy cross-reference strategy
    """

    def __init__(self, categories: Iterable[Category] = ()):
        ordered: List[Category] = []
        by_token: Dict[str, Category] = {}
        owner: Dict[str, str] = {}
        names: Dict[str, str] = {}

        for cat in categories:
            if cat.token in by_token:
                raise InvalidReferenceData(f"Duplicate category in taxonomy: {cat.token}")
            for sub in cat.subservices:
                if sub.token in owner and owner[sub.token] != cat.token:
                    raise InvalidReferenceData(
                        f"Sub-service '{sub.token}' listed under both '{owner[sub.token]}' and '{cat.token}'"
                    )
                owner[sub.token] = cat.token
                names.setdefault(sub.token, sub.name)
            by_token[cat.token] = cat
            ordered.append(cat)

        self._categories: Tuple[Category, ...] = tuple(ordered)
        self._by_token: Mapping[str, Category] = MappingProxyType(by_token)
        self._owner: Mapping[str, str] = MappingProxyType(owner)
        self._names: Mapping[str, str] = MappingProxyType(names)

    @classmethod
    def build(cls, categories: Iterable[Category]) -> "TaxonomyIndex":
        return cls(categories)

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    def category_of(self, subservice_token: str) -> Optional[str]:
        return self._owner.get(subservice_token)

    def has_category(self, category_token: str) -> bool:
        return category_token in self._by_token

    def get(self, category_token: str) -> Optional[Category]:
        return self._by_token.get(category_token)

    def subservices_of(self, category_token: str) -> List[str]:
        cat = self.get(category_token)
        return [s.token for s in cat.subservices] if cat else []

    def display_name(self, subservice_token: str) -> Optional[str]:
        return self._names.get(subservice_token)

    def iter_subservices(self) -> Iterator[Tuple[Category, SubService]]:
        """Yield (category, sub-service) pairs in taxonomy order."""

        for cat in self._categories:
            for sub in cat.subservices:
                yield cat, sub

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, subservice_token: object) -> bool:
        return subservice_token in self._owner
