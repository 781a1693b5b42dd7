import json

import pytest

from provider_resolver import cli
from provider_resolver.config import PACKAGE_DATA_DIR


def test_cli_json_output(capsys):
    cli.main(["hand embroidry", "--data-dir", str(PACKAGE_DATA_DIR), "--output-format", "json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["provider_id"] == "hand_0"
    assert payload["matched_by"] == "exact_token"
    assert payload["label"] == "Hand Embroidery"
    assert [p["id"] for p in payload["products"]] == ["prod_hand_0_0", "prod_hand_0_1"]
    assert payload["products"][1]["price"] == 650.0
    assert payload["products"][1]["image"] == "/assets/products/cushion.jpg"


def test_cli_table_output(capsys):
    cli.main(["festive-delight-crafts", "--data-dir", str(PACKAGE_DATA_DIR)])

    out = capsys.readouterr().out
    assert "Festive Craft Delight" in out
    assert "Lakshmi Iyer" in out
    assert "product_seeded" in out


def test_cli_writes_trace(tmp_path, capsys):
    trace_path = tmp_path / "trace.jsonl"
    cli.main(
        [
            "quick_snaks",
            "--data-dir",
            str(PACKAGE_DATA_DIR),
            "--output-format",
            "json",
            "--trace",
            "--trace-path",
            str(trace_path),
            "--request-id",
            "cli-1",
        ]
    )
    payload = json.loads(capsys.readouterr().out)

    event = json.loads(trace_path.read_text(encoding="utf-8").splitlines()[0])
    assert event["event"] == "resolution"
    assert event["provider_id"] == "food_1"
    assert event["request_id"] == payload["request_id"] == "cli-1"


def test_cli_exits_on_empty_provider_collection(tmp_path):
    (tmp_path / "providers.json").write_text("[]", encoding="utf-8")
    (tmp_path / "products.json").write_text("[]", encoding="utf-8")
    (tmp_path / "services.json").write_text('{"services": []}', encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["hand_embroidery", "--data-dir", str(tmp_path)])
    assert excinfo.value.code == 2


def test_cli_exits_on_invalid_data(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["hand_embroidery", "--data-dir", str(tmp_path / "missing")])
    assert excinfo.value.code == 2
