"""Cross-cutting resolution properties, checked against the bundled sample data."""

import itertools

import pytest

from provider_resolver.catalog.products import products_for
from provider_resolver.catalog.snapshot import load_reference_data, load_reference_files
from provider_resolver.config import PACKAGE_DATA_DIR
from provider_resolver.errors import NoProvidersAvailable
from provider_resolver.resolver import resolve
from provider_resolver.resolver.filters import provider_category
from provider_resolver.utils.normalize import normalize_token


@pytest.fixture(scope="module")
def sample():
    return load_reference_files(PACKAGE_DATA_DIR)


def _tokens(snapshot):
    tokens = ["", "totally_unknown_xyz", "%%%", "a", "hand", "Festive Kits", "éè"]
    tokens += [sub.token for _, sub in snapshot.taxonomy.iter_subservices()]
    tokens += [sub.name for _, sub in snapshot.taxonomy.iter_subservices()]
    tokens += list(snapshot.aliases.entries)
    tokens += [p.name for p in snapshot.providers]
    tokens += [p.name for p in snapshot.products]
    return tokens


def _hints(snapshot):
    return [None, "Unknown Category"] + [c.name for c in snapshot.taxonomy.categories]


def test_every_request_is_answered_deterministically(sample):
    for token, hint in itertools.product(_tokens(sample), _hints(sample)):
        first = resolve(sample, token, hint)
        second = resolve(sample, token, hint)
        assert first.provider.id == second.provider.id
        assert first.matched_by == second.matched_by


def test_category_is_never_crossed_unless_flagged(sample):
    for token, hint in itertools.product(_tokens(sample), _hints(sample)):
        result = resolve(sample, token, hint)
        if result.category and not result.unfiltered:
            assert provider_category(result.provider, sample.taxonomy) == result.category, (token, hint)


def test_alias_and_canonical_tokens_agree(sample):
    for bad, canonical in sample.aliases.entries.items():
        assert resolve(sample, bad).provider.id == resolve(sample, canonical).provider.id


def test_resolved_products_belong_to_provider(sample):
    for token in _tokens(sample):
        result = resolve(sample, token)
        assert list(result.products) == products_for(sample, result.provider)
        provider_token = normalize_token(result.provider.service_token)
        for product in result.products:
            assert normalize_token(product.service_token) == provider_token or product.provider_id == result.provider.id


@pytest.mark.parametrize(
    "token, provider_id, matched_by",
    [
        ("hand_embroidery", "hand_0", "exact_token"),
        ("hand_embroidry", "hand_0", "exact_token"),
        ("festive_delight_crafts", "fest_0", "product_seeded"),
        ("totally_unknown_xyz", "hand_0", "default"),
    ],
)
def test_example_requests(sample, token, provider_id, matched_by):
    result = resolve(sample, token)
    assert result.provider.id == provider_id
    assert result.matched_by == matched_by


def test_example_request_without_providers(sample):
    empty = load_reference_data([], [], sample.taxonomy)
    for token in ("hand_embroidery", "", "totally_unknown_xyz"):
        with pytest.raises(NoProvidersAvailable):
            resolve(empty, token)
