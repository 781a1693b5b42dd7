#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
aliases.py

This module defines:
1) The built-in alias table: known misspellings / slug variants of sub-service
   ids mapped to the canonical sub-service token.
2) Helpers to apply the table and to extend it from a YAML/JSON file.

KEY IDEA
--------
The alias table is the ONLY place where individual strings are special-cased.
If a new typo shows up in URLs or in the data, patch it here (or in the
override file), never in a strategy.

Rules every entry must follow:
- keys and targets are already normalized tokens
- targets are canonical: a target may never itself be an alias key
  (no alias-of-alias chains, so a single lookup is always enough)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml

from ..errors import InvalidReferenceData
from .normalize import normalize_token


# ---------------------------------------------------------------------
# Built-in alias map: "bad token" -> canonical sub-service token
# ---------------------------------------------------------------------
_SERVICE_ALIASES: Dict[str, str] = {
    # ---- hand embroidery typos ----
    "hand_embroidry": "hand_embroidery",
    "hand_embrodiery": "hand_embroidery",
    "hand_embroider": "hand_embroidery",

    # ---- festive craft slug variants ----
    "festive_delight_crafts": "festive_craft_delight",
    "festive_delight_craft": "festive_craft_delight",
    "festive_crafts_delight": "festive_craft_delight",

    # ---- ganesha festival kit variants ----
    "ganesha_festival_kit": "ganapati_festival_kit",
    "ganesh_festival_kit": "ganapati_festival_kit",
    "ganapathi_festival_kit": "ganapati_festival_kit",
    "ganapati_kit": "ganapati_festival_kit",

    # ---- snacks typo ----
    "quick_snaks": "quick_snacks",
}


@dataclass(frozen=True)
class AliasTable:
    """Immutable bad-token -> canonical-token mapping."""

    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_aliases(self.entries)
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def resolve(self, token: str) -> str:
        return self.entries.get(token, token)

    def merged(self, extra: Mapping[str, str]) -> "AliasTable":
        """Return a new table with ``extra`` entries layered over this one."""

        combined = dict(self.entries)
        combined.update(extra)
        return AliasTable(combined)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, token: object) -> bool:
        return token in self.entries


def validate_aliases(entries: Mapping[str, str]) -> None:
    """Raise InvalidReferenceData if the mapping breaks the alias rules."""

    for bad, canonical in entries.items():
        if not bad or not canonical:
            raise InvalidReferenceData(f"Alias entries cannot be empty: {bad!r} -> {canonical!r}")
        if normalize_token(bad) != bad or normalize_token(canonical) != canonical:
            raise InvalidReferenceData(f"Alias entry is not normalized: {bad!r} -> {canonical!r}")
        if bad == canonical:
            raise InvalidReferenceData(f"Alias maps a token onto itself: {bad!r}")
        if canonical in entries:
            raise InvalidReferenceData(
                f"Alias target {canonical!r} (from {bad!r}) is itself an alias of {entries[canonical]!r}"
            )


DEFAULT_ALIASES = AliasTable(_SERVICE_ALIASES)


def resolve_alias(token: str, aliases: Optional[AliasTable] = None) -> str:
    """Map a normalized token to its canonical form; unknown tokens pass through."""

    return (DEFAULT_ALIASES if aliases is None else aliases).resolve(token)


def _read_mapping(path: Path) -> Any:
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(raw) or {}
    if path.suffix.lower() == ".json":
        return json.loads(raw)
    raise InvalidReferenceData(f"Unsupported alias file type: {path}")


def load_alias_table(path: Path | str, base: Optional[AliasTable] = None) -> AliasTable:
    """Load alias overrides and merge them over ``base`` (built-in table by default).

    The file is a flat mapping ``{variant: canonical}``, optionally nested under
    an ``aliases`` key. Keys and values are normalized before merging, so the
    file can be written with display-style spellings ("Hand Embroidry").
    """

    path = Path(path)
    try:
        data = _read_mapping(path)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as ex:
        raise InvalidReferenceData(f"Cannot read alias file {path}: {ex}") from ex

    if isinstance(data, dict) and isinstance(data.get("aliases"), dict):
        data = data["aliases"]
    if not isinstance(data, dict):
        raise InvalidReferenceData(f"Alias file must contain a mapping: {path}")

    extra = {normalize_token(k): normalize_token(v) for k, v in data.items()}
    return (DEFAULT_ALIASES if base is None else base).merged(extra)


__all__ = [
    "AliasTable",
    "DEFAULT_ALIASES",
    "validate_aliases",
    "resolve_alias",
    "load_alias_table",
]
