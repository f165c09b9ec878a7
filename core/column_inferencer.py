#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Column role inference for listing sheets.

Carriers name their columns by hand ("Numéro Appelant", "Localisation
Numéro Appelant", "IMEI Numéro Appelant", ...), so several roles share
substrings. COLUMN_RULES is evaluated top to bottom for every header and
the first rule that matches decides the role. The order is authoritative:
"localisation" and "imei" must be checked before the caller prefix,
and the caller prefix before "numero appele" (a prefix of "numero appelant").
"""

import logging
from dataclasses import dataclass
from typing import Optional

from core.field_normalizer import normalize_text

# (role, predicate on the normalized header)
COLUMN_RULES = (
    ("location", lambda h: "localisation" in h),
    ("imei", lambda h: "imei" in h),
    ("caller", lambda h: h.startswith("numero appelant") or h.startswith("numero emetteur")),
    ("called", lambda h: h.startswith("numero appele") or h.startswith("numero recepteur")),
    ("date", lambda h: "date" in h),
    ("duration", lambda h: "duree" in h),
)


@dataclass
class ColumnMapping:
    caller: Optional[str] = None
    called: Optional[str] = None
    imei: Optional[str] = None
    date: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None


def classify_header(header):
    normalized = normalize_text(header)
    for role, matches in COLUMN_RULES:
        if matches(normalized):
            return role
    return None


def identify_columns(headers):
    """Map original header strings to roles; a later header overrides an earlier one."""
    mapping = ColumnMapping()
    for header in headers:
        role = classify_header(header)
        if role is not None:
            setattr(mapping, role, header)

    logging.info(f"Identified columns: {mapping}")
    return mapping
