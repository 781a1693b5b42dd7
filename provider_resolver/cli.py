#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Provider Resolver – CLI

Flow:
- Loads the reference snapshot (providers, products, service taxonomy) once.
- Resolves the given sub-service slug to exactly one provider.
- Prints the provider, the strategy that matched and the provider's products,
  either as a rich table or as JSON.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .catalog.products import display_image, display_price
from .catalog.snapshot import load_reference_files
from .config import ALIAS_FILE, DATA_DIR, DEFAULT_LOG_LEVEL, TRACE_ENABLED, TRACE_PATH
from .errors import InvalidReferenceData, NoProvidersAvailable
from .resolver.core import ResolutionResult, Resolver
from .utils.trace import build_trace_logger

console = Console()


# --------------------------------------------------------------------
# Argument parsing
# --------------------------------------------------------------------
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="provider-resolver",
        description=(
            "Resolve a sub-service slug (as typed by a user or taken from a URL) "
            "to one provider and the products attributed to it."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("token", help="Sub-service slug, e.g. hand_embroidery or 'Hand Embroidry'.")

    parser.add_argument(
        "--category",
        type=str,
        default=None,
        help="Optional parent category hint (e.g. 'Embroidery'). Derived from the taxonomy when omitted.",
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=DATA_DIR,
        help="Directory with providers / products / services reference files.",
    )

    parser.add_argument(
        "--alias-file",
        type=str,
        default=ALIAS_FILE or None,
        help="YAML/JSON alias overrides merged over the built-in alias table.",
    )

    parser.add_argument(
        "--output-format",
        choices=["table", "json"],
        default="table",
        help="table: human readable summary; json: machine readable result.",
    )

    parser.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default=DEFAULT_LOG_LEVEL.upper(),
        help="Logging level for internal messages (DEBUG shows every strategy attempt).",
    )

    parser.add_argument(
        "--trace",
        action="store_true",
        default=TRACE_ENABLED,
        help="Append a JSONL trace event for the resolution.",
    )
    parser.add_argument(
        "--trace-path",
        type=str,
        default=TRACE_PATH,
        help="Trace output path (used with --trace).",
    )
    parser.add_argument(
        "--request-id",
        type=str,
        default=None,
        help="Id stamped on the trace event and the JSON output. Generated when tracing without one.",
    )

    return parser.parse_args(argv)


# --------------------------------------------------------------------
# Rendering
# --------------------------------------------------------------------
def _render_table(result: ResolutionResult) -> None:
    provider = result.provider
    console.print(f"[bold]{result.label}[/bold]")
    console.print(
        f"Provider: [green]{provider.name}[/green] (id={provider.id}, service={provider.service_token})"
    )
    console.print(
        f"Matched by: [cyan]{result.matched_by}[/cyan] | token={result.search_token or '(empty)'} | "
        f"category={result.category or 'n/a'}"
    )
    if result.unfiltered:
        console.print("[yellow]Fallback provider: not verified against the requested category.[/yellow]")

    if not result.products:
        console.print("[yellow]No products listed for this provider.[/yellow]")
        return

    table = Table(title=f"Products ({len(result.products)})")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Price", justify="right")
    table.add_column("Image")
    for product in result.products:
        table.add_row(product.id, product.name, f"{display_price(product):,.2f}", display_image(product))
    console.print(table)


# --------------------------------------------------------------------
# Main
# --------------------------------------------------------------------
def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    logger = logging.getLogger("provider_resolver")
    logger.debug("CLI arguments: %s", args)

    trace_logger = build_trace_logger(Path(args.trace_path), enabled=args.trace)

    try:
        snapshot = load_reference_files(args.data_dir, alias_file=args.alias_file)
        result = Resolver(snapshot, trace=trace_logger).resolve(
            args.token, args.category, request_id=args.request_id
        )
    except InvalidReferenceData as ex:
        logger.error("Reference data could not be loaded: %s", ex)
        console.print(f"[red]Invalid reference data: {ex}[/red]")
        raise SystemExit(2)
    except NoProvidersAvailable as ex:
        logger.error("%s", ex)
        console.print("[red]No providers are available; cannot resolve any service.[/red]")
        raise SystemExit(2)

    if args.output_format == "json":
        payload = result.to_dict()
        payload["products"] = [
            {
                "id": p.id,
                "name": p.name,
                "price": display_price(p),
                "image": display_image(p),
            }
            for p in result.products
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        _render_table(result)


if __name__ == "__main__":
    main()
