"""Provider and product reference records.

Raw records keep all their descriptive fields in ``attributes``; only the
fields the resolver reasons about are lifted into typed attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..errors import InvalidReferenceData
from ..utils.documents import require


def _frozen(value: Any) -> Any:
    """Read-only copy of a raw value: mappings become proxies, lists become tuples."""

    if isinstance(value, dict):
        return MappingProxyType({k: _frozen(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_frozen(v) for v in value)
    return value


@dataclass(frozen=True)
class ProviderRecord:
    id: str
    name: str
    service_token: str
    attributes: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, raw: Any, *, ctx: str = "provider") -> "ProviderRecord":
        if not isinstance(raw, dict):
            raise InvalidReferenceData(f"provider must be an object in {ctx}")
        pid = require(raw, ("id",), ctx=ctx)
        name = require(raw, ("name",), ctx=ctx)

        service = raw.get("serviceId") or raw.get("serviceToken")
        if not service:
            # Hand-seeded providers list display names under "services" instead.
            services = raw.get("services")
            if isinstance(services, list) and services:
                service = services[0]
        if not service:
            raise InvalidReferenceData(f"Missing required key 'serviceId' / 'serviceToken' / 'services' in {ctx}")

        return cls(id=str(pid), name=str(name), service_token=str(service), attributes=_frozen(raw))

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)


@dataclass(frozen=True)
class ProductRecord:
    id: str
    name: str
    service_token: str = ""
    provider_id: Optional[str] = None
    category: str = ""
    attributes: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, raw: Any, *, ctx: str = "product") -> "ProductRecord":
        if not isinstance(raw, dict):
            raise InvalidReferenceData(f"product must be an object in {ctx}")
        pid = require(raw, ("id",), ctx=ctx)
        name = require(raw, ("name",), ctx=ctx)

        service = raw.get("serviceId") or raw.get("serviceToken") or ""
        provider_id = raw.get("providerId")
        if not service and provider_id in (None, ""):
            raise InvalidReferenceData(f"product needs 'serviceId' or 'providerId' in {ctx}")

        return cls(
            id=str(pid),
            name=str(name),
            service_token=str(service),
            provider_id=None if provider_id in (None, "") else str(provider_id),
            category=str(raw.get("category") or ""),
            attributes=_frozen(raw),
        )

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)


__all__ = ["ProviderRecord", "ProductRecord"]
