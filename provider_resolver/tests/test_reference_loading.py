import json

import pytest

from provider_resolver.catalog.models import ProductRecord, ProviderRecord
from provider_resolver.catalog.snapshot import find_provider, load_reference_data, load_reference_files
from provider_resolver.config import PACKAGE_DATA_DIR
from provider_resolver.errors import InvalidReferenceData


def test_snapshot_from_lists(snapshot):
    assert [p.id for p in snapshot.providers][:2] == ["food_0", "hand_0"]
    assert snapshot.providers[1].get("rating") == "4.5"
    assert snapshot.products[-1].provider_id == "pottery_0"
    assert snapshot.products[-1].service_token == ""
    assert snapshot.taxonomy.category_of("hand_embroidery") == "embroidery"


def test_wrapped_and_id_keyed_shapes(raw_products, raw_taxonomy):
    providers = {
        "hand_0": {"name": "Priya Sharma", "services": ["Hand Embroidery"]},
        "food_0": {"id": "food_0", "name": "Ananya Patel", "serviceId": "south_indian_meals"},
    }
    snap = load_reference_data(providers, {"products": raw_products}, raw_taxonomy)

    hand = snap.providers[0]
    assert hand.id == "hand_0"
    assert hand.service_token == "Hand Embroidery"
    assert len(snap.products) == len(raw_products)


def test_numeric_ids_are_strings(raw_taxonomy):
    snap = load_reference_data(
        [{"id": 7, "name": "Priya", "serviceId": "hand_embroidery"}],
        [{"id": 1, "name": "Design", "providerId": 7}],
        raw_taxonomy,
    )
    assert snap.providers[0].id == "7"
    assert snap.products[0].provider_id == "7"


@pytest.mark.parametrize(
    "providers, products, message",
    [
        (None, [], "providers"),
        ([], None, "products"),
        ([{"name": "No id", "serviceId": "x"}], [], "'id'"),
        ([{"id": "p1", "name": "No service"}], [], "serviceId"),
        (["not an object"], [], "must be an object"),
        ([], [{"id": "x1", "name": "Orphan product"}], "providerId"),
        ({"providers": {"p1": {}}}, [], "must be a list"),
        ("providers.json", [], "Unsupported"),
    ],
)
def test_invalid_reference_data(providers, products, message, raw_taxonomy):
    with pytest.raises(InvalidReferenceData, match=message):
        load_reference_data(providers, products, raw_taxonomy)


def test_missing_taxonomy_is_invalid(raw_providers, raw_products):
    with pytest.raises(InvalidReferenceData):
        load_reference_data(raw_providers, raw_products, None)


@pytest.mark.parametrize("services", [None, "embroidery", {"category": "Embroidery"}])
def test_wrapped_taxonomy_must_hold_a_list(raw_providers, raw_products, services):
    with pytest.raises(InvalidReferenceData, match="'services' must be a list"):
        load_reference_data(raw_providers, raw_products, {"services": services})


def test_wrapped_taxonomy_may_be_empty(raw_providers, raw_products):
    snap = load_reference_data(raw_providers, raw_products, {"services": []})
    assert len(snap.taxonomy) == 0


def test_empty_provider_list_loads(raw_products, raw_taxonomy):
    snap = load_reference_data([], raw_products, raw_taxonomy)
    assert snap.providers == ()


def test_records_are_immutable(snapshot):
    provider = snapshot.providers[0]
    with pytest.raises(Exception):
        provider.name = "Someone else"
    with pytest.raises(TypeError):
        provider.attributes["name"] = "Someone else"
    assert isinstance(provider, ProviderRecord)
    assert isinstance(snapshot.products[0], ProductRecord)


def test_nested_attributes_are_frozen(raw_taxonomy):
    raw = {
        "id": "hand_9",
        "name": "Asha",
        "services": ["Hand Embroidery", "Tailoring"],
        "location": {"city": "Pune", "areas": ["Kothrud"]},
    }
    provider = load_reference_data([raw], [], raw_taxonomy).providers[0]

    assert provider.service_token == "Hand Embroidery"
    assert provider.get("services") == ("Hand Embroidery", "Tailoring")
    assert provider.get("location")["areas"] == ("Kothrud",)
    with pytest.raises(AttributeError):
        provider.get("services").append("Pottery")
    with pytest.raises(TypeError):
        provider.get("location")["city"] = "Mumbai"

    raw["services"].append("Pottery")
    assert provider.get("services") == ("Hand Embroidery", "Tailoring")


def test_load_reference_files_mixed_formats(tmp_path, raw_providers, raw_products, raw_taxonomy):
    (tmp_path / "providers.json").write_text(json.dumps({"providers": raw_providers}), encoding="utf-8")
    (tmp_path / "products.json").write_text(json.dumps(raw_products), encoding="utf-8")
    (tmp_path / "services.yaml").write_text(
        "services:\n"
        "  - category: Embroidery\n"
        "    subServices:\n"
        "      - id: hand_embroidery\n"
        "        name: Hand Embroidery\n",
        encoding="utf-8",
    )
    (tmp_path / "aliases.yml").write_text("hand_stitch: hand_embroidery\n", encoding="utf-8")

    snap = load_reference_files(tmp_path, alias_file=tmp_path / "aliases.yml")

    assert len(snap.providers) == len(raw_providers)
    assert snap.taxonomy.category_of("hand_embroidery") == "embroidery"
    assert snap.aliases.resolve("hand_stitch") == "hand_embroidery"


def test_load_reference_files_missing_documents(tmp_path):
    with pytest.raises(InvalidReferenceData, match="does not exist"):
        load_reference_files(tmp_path / "nope")
    (tmp_path / "providers.json").write_text("[]", encoding="utf-8")
    with pytest.raises(InvalidReferenceData, match="products"):
        load_reference_files(tmp_path)


def test_bundled_sample_data_loads():
    snap = load_reference_files(PACKAGE_DATA_DIR)
    assert snap.providers
    assert snap.products
    assert snap.taxonomy.has_category("festive_crafts")


def test_find_provider_exact_then_containment(snapshot):
    assert find_provider(snapshot, "hand_0").name == "Priya Sharma"
    assert find_provider(snapshot, "fest_0_legacy").id == "fest_0"
    assert find_provider(snapshot, "nobody") is None
    assert find_provider(snapshot, "") is None
    assert find_provider(snapshot, None) is None
