#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Cell-site location strings.

Carrier exports describe the serving cell as free text:

    "Bastos (Cell: A1 Long: 11.5 Lat: 3.9 Azimut: 45)"

The site name and the parenthesis are both optional; only the Long/Lat
pair is required for a usable location.
"""

import re

from core.models import LocationData

UNKNOWN_SITE = "Site inconnu"
EMPTY_PLACEHOLDERS = ("", "--", UNKNOWN_SITE)

COORDS_RE = re.compile(r"Long:\s*([\d.-]+)\s*Lat:\s*([\d.-]+)", re.IGNORECASE)
CELL_RE = re.compile(r"Cell:\s*([^\s)]+)", re.IGNORECASE)
AZIMUTH_RE = re.compile(r"Azimut:\s*([^\s)]*)", re.IGNORECASE)


def _to_float(s):
    try:
        return float(s)
    except ValueError:
        return None


def _site_name(text):
    name = text.split("(")[0].strip()
    if not name or "long:" in name.lower():
        # no parenthesis: the coordinates leaked into the name
        name = text.split("Long:")[0].strip()
    return name or UNKNOWN_SITE


def decode_location(text):
    """Return a LocationData, or None when the text carries no valid coordinates."""
    if text is None or text.strip() in EMPTY_PLACEHOLDERS:
        return None

    match = COORDS_RE.search(text)
    if not match:
        return None

    longitude = _to_float(match.group(1))
    latitude = _to_float(match.group(2))
    if longitude is None or latitude is None:
        return None
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        return None

    cell = CELL_RE.search(text)
    azimuth = AZIMUTH_RE.search(text)

    return LocationData(
        site_name=_site_name(text),
        cell_id=cell.group(1) if cell else "",
        longitude=longitude,
        latitude=latitude,
        azimuth=(azimuth.group(1) if azimuth else "") or "-",
    )
