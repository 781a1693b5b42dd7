from pathlib import Path

from provider_resolver.config import PACKAGE_DATA_DIR
from provider_resolver.reference_audit import build_reference_audit_report, main


def test_build_reference_audit_report(snapshot):
    report = build_reference_audit_report(snapshot)

    assert report.startswith("# Reference Data Audit Report")
    assert "### Category: Embroidery (`embroidery`)" in report
    assert "- `hand_embroidery` (Hand Embroidery) | providers=1 | products=2" in report
    assert "id=pottery_0 | name=Meera Joshi | serviceId=pottery_classes" in report
    assert "Every product can be attributed to a provider." in report
    assert "All alias targets exist in the taxonomy." in report
    assert "- `festive_craft_delight` (Festive Crafts)" in report


def test_unclaimed_products_are_listed(raw_providers, raw_taxonomy):
    from provider_resolver.catalog.snapshot import load_reference_data

    snap = load_reference_data(
        raw_providers,
        [{"id": "lost", "name": "Lost Item", "serviceId": "origami_workshop"}],
        raw_taxonomy,
    )
    report = build_reference_audit_report(snap)

    assert "id=lost | name=Lost Item | serviceId=origami_workshop | providerId=n/a" in report


def test_audit_main_writes_report(tmp_path: Path, capsys):
    out = tmp_path / "audit" / "report.md"
    main(["--data-dir", str(PACKAGE_DATA_DIR), "--out", str(out)])

    text = out.read_text(encoding="utf-8")
    assert "## Orphan providers" in text
    assert "pottery_0" in text
    assert "Reference audit written to" in capsys.readouterr().out


def test_dangling_alias_targets_are_listed(raw_providers, raw_products):
    from provider_resolver.catalog.snapshot import load_reference_data

    taxonomy = {"services": [{"category": "Embroidery", "subServices": [{"id": "hand_embroidery"}]}]}
    report = build_reference_audit_report(load_reference_data(raw_providers, raw_products, taxonomy))

    assert "- `quick_snaks` -> `quick_snacks`" in report
    assert "`hand_embroidry` -> `hand_embroidery`" not in report
