"""Audit tool for the provider / product / taxonomy reference data.

Finds the data problems the fallback strategies silently route around:
orphan providers, products nobody can claim, alias targets that are not in the
taxonomy, and sub-services nobody offers.

Usage:
    python -m provider_resolver.reference_audit --data-dir data --out runs/_reference_audit.md
"""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import List

from .catalog.snapshot import ReferenceSnapshot, load_reference_files
from .config import ALIAS_FILE, DATA_DIR
from .resolver.filters import provider_category
from .utils.normalize import normalize_token


def _taxonomy_inventory(snapshot: ReferenceSnapshot) -> List[str]:
    provider_tokens = Counter(normalize_token(p.service_token) for p in snapshot.providers)
    product_tokens = Counter(normalize_token(p.service_token) for p in snapshot.products)

    lines: List[str] = []
    for category in snapshot.taxonomy.categories:
        lines.append(f"### Category: {category.name} (`{category.token}`)")
        for sub in category.subservices:
            lines.append(
                f"- `{sub.token}` ({sub.name}) | providers={provider_tokens[sub.token]} | "
                f"products={product_tokens[sub.token]}"
            )
        lines.append("")
    return lines


def _orphan_providers(snapshot: ReferenceSnapshot) -> List[str]:
    return [
        f"- id={p.id} | name={p.name} | serviceId={p.service_token}"
        for p in snapshot.providers
        if provider_category(p, snapshot.taxonomy) is None
    ]


def _unclaimed_products(snapshot: ReferenceSnapshot) -> List[str]:
    provider_tokens = {normalize_token(p.service_token) for p in snapshot.providers}
    provider_ids = {p.id for p in snapshot.providers}
    lines: List[str] = []
    for product in snapshot.products:
        token = normalize_token(product.service_token)
        if (token and token in provider_tokens) or product.provider_id in provider_ids:
            continue
        lines.append(
            f"- id={product.id} | name={product.name} | serviceId={product.service_token or 'n/a'} | "
            f"providerId={product.provider_id or 'n/a'}"
        )
    return lines


def _dangling_aliases(snapshot: ReferenceSnapshot) -> List[str]:
    return [
        f"- `{bad}` -> `{canonical}`"
        for bad, canonical in sorted(snapshot.aliases.entries.items())
        if canonical not in snapshot.taxonomy
    ]


def _uncovered_subservices(snapshot: ReferenceSnapshot) -> List[str]:
    provider_tokens = {normalize_token(p.service_token) for p in snapshot.providers}
    return [
        f"- `{sub.token}` ({category.name})"
        for category, sub in snapshot.taxonomy.iter_subservices()
        if sub.token not in provider_tokens
    ]


def _section(lines: List[str], title: str, body: List[str], empty_msg: str) -> None:
    lines.append(f"## {title}")
    lines.extend(body or [empty_msg])
    lines.append("")


def build_reference_audit_report(snapshot: ReferenceSnapshot) -> str:
    lines: List[str] = []
    lines.append("# Reference Data Audit Report")
    lines.append("")
    lines.append(
        f"Providers: {len(snapshot.providers)} | Products: {len(snapshot.products)} | "
        f"Categories: {len(snapshot.taxonomy)} | Aliases: {len(snapshot.aliases)}"
    )
    lines.append("")
    lines.append("## Taxonomy inventory")
    lines.extend(_taxonomy_inventory(snapshot))

    _section(
        lines,
        "Orphan providers",
        _orphan_providers(snapshot),
        "No orphan providers detected.",
    )
    _section(
        lines,
        "Unclaimed products",
        _unclaimed_products(snapshot),
        "Every product can be attributed to a provider.",
    )
    _section(
        lines,
        "Alias targets missing from taxonomy",
        _dangling_aliases(snapshot),
        "All alias targets exist in the taxonomy.",
    )
    _section(
        lines,
        "Sub-services without providers",
        _uncovered_subservices(snapshot),
        "Every sub-service has at least one provider.",
    )
    return "\n".join(lines).strip() + "\n"


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Audit provider / product / taxonomy reference data.")
    parser.add_argument(
        "--data-dir",
        default=DATA_DIR,
        help=f"Directory containing providers/products/services files (default: {DATA_DIR}).",
    )
    parser.add_argument(
        "--alias-file",
        default=ALIAS_FILE or None,
        help="Optional YAML/JSON alias overrides merged over the built-in table.",
    )
    parser.add_argument(
        "--out",
        default="runs/_reference_audit.md",
        help="Output markdown path for the audit report.",
    )
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    snapshot = load_reference_files(args.data_dir, alias_file=args.alias_file)
    output_path = Path(args.out)

    report = build_reference_audit_report(snapshot)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report, encoding="utf-8")
    print(f"Reference audit written to {output_path}")


if __name__ == "__main__":
    main()
