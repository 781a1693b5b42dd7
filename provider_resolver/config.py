#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
config.py

Configuration constants and defaults for the provider resolver.

Key idea: reference data is loaded ONCE
---------------------------------------
The resolver never reads files while answering a request. The host (or the CLI)
loads the three reference collections from DATA_DIR at startup, builds an
immutable snapshot and then resolves against it as often as it likes.

Everything here can be overridden through environment variables so the same
code runs against the bundled sample data, a staging dump or a test fixture.
"""

import os  # Standard library: access environment variables (os.getenv).
from pathlib import Path

# ---------------------------------------------------------------------
# Reference data location
# ---------------------------------------------------------------------
# PACKAGE_DATA_DIR:
# - Small sample dataset shipped with the package (providers, products, services).
# - Used by the CLI and the audit tool when nothing else is configured.
PACKAGE_DATA_DIR = Path(__file__).resolve().parent / "data"

# DATA_DIR:
# - Directory holding providers.json / products.json / services.json
#   (YAML variants with .yaml / .yml are accepted too).
# - Override with PROVIDER_RESOLVER_DATA_DIR.
DATA_DIR = os.getenv("PROVIDER_RESOLVER_DATA_DIR", str(PACKAGE_DATA_DIR))

# Reference file stems, looked up inside DATA_DIR.
PROVIDERS_STEM = "providers"
PRODUCTS_STEM = "products"
TAXONOMY_STEM = "services"

# Accepted suffixes, in lookup order.
REFERENCE_SUFFIXES = (".json", ".yaml", ".yml")

# ---------------------------------------------------------------------
# Alias overrides
# ---------------------------------------------------------------------
# ALIAS_FILE:
# - Optional YAML/JSON mapping {bad_token: canonical_token} merged over the
#   built-in alias table.
# - Empty string means "built-in table only".
ALIAS_FILE = os.getenv("PROVIDER_RESOLVER_ALIAS_FILE", "").strip()

# ---------------------------------------------------------------------
# Logging / tracing
# ---------------------------------------------------------------------
DEFAULT_LOG_LEVEL = os.getenv("PROVIDER_RESOLVER_LOG_LEVEL", "WARNING")

# TRACE_ENABLED:
# - When true the CLI appends one JSONL event per resolution to TRACE_PATH.
TRACE_ENABLED = os.getenv("PROVIDER_RESOLVER_TRACE", "").strip().lower() in {"1", "true", "yes"}
TRACE_PATH = os.getenv("PROVIDER_RESOLVER_TRACE_PATH", "runs/resolution_trace.jsonl")

# ---------------------------------------------------------------------
# Product display
# ---------------------------------------------------------------------
# Image shown for products that carry no image path at all.
DEFAULT_PRODUCT_IMAGE = "/assets/default-product.png"
