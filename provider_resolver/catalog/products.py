"""Catalog filter: which products belong to a resolved provider."""

from __future__ import annotations

from typing import List, Optional

from ..config import DEFAULT_PRODUCT_IMAGE
from ..utils.normalize import normalize_token
from .models import ProductRecord, ProviderRecord
from .snapshot import ReferenceSnapshot


def products_for(snapshot: ReferenceSnapshot, provider: ProviderRecord) -> List[ProductRecord]:
    """
    Return the products attributed to ``provider``, in catalog order.

    A product belongs to the provider when either
    - its normalized service token equals the provider's, or
    - its explicit providerId equals the provider id.

    An empty list is a valid answer (provider without a catalog).
    """

    token = normalize_token(provider.service_token)
    out: List[ProductRecord] = []
    for product in snapshot.products:
        same_token = bool(token) and normalize_token(product.service_token) == token
        if same_token or product.provider_id == provider.id:
            out.append(product)
    return out


def normalize_image_path(path: Optional[str]) -> str:
    """Turn stored image paths into web-root paths ("public/a.jpg" -> "/a.jpg")."""

    if not path:
        return DEFAULT_PRODUCT_IMAGE
    if path.startswith("public/"):
        return "/" + path[len("public/"):]
    if path.startswith("/"):
        return path
    return "/" + path


def display_price(product: ProductRecord) -> float:
    """Price shown for a product: ``price``, else ``basePrice``, else 0."""

    for key in ("price", "basePrice"):
        value = product.get(key)
        if value in (None, "", 0):
            continue
        try:
            return float(value)
        except (TypeError, ValueError):
            continue
    return 0.0


def display_image(product: ProductRecord) -> str:
    return normalize_image_path(product.get("image") or product.get("imagePath"))


__all__ = ["products_for", "normalize_image_path", "display_price", "display_image"]
