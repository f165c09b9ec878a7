#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Workbook classification from sheet names
"""

from collections import namedtuple

from core.field_normalizer import normalize_text

ListingSheets = namedtuple("ListingSheets", ["calls", "sms"])


def detect_file_type(sheet_names):
    names = [normalize_text(n) for n in sheet_names]

    if any("listing appel" in n or "listing sms" in n for n in names):
        return "NUMERO"
    if any("imei partage" in n for n in names):
        return "IMEI"
    return "CC"


def find_listing_sheets(sheet_names):
    """
    Calls and SMS listing sheets. A sheet named exactly "Listing" (IMEI/CC
    exports) is the calls sheet only when no "Listing Appel" sheet exists.
    """
    calls = sms = fallback = None
    for name in sheet_names:
        normalized = normalize_text(name)
        if calls is None and "listing appel" in normalized:
            calls = name
        if sms is None and "listing sms" in normalized:
            sms = name
        if fallback is None and normalized == "listing":
            fallback = name

    return ListingSheets(calls=calls or fallback, sms=sms)


def find_subscribers_sheet(sheet_names):
    for name in sheet_names:
        if "identification" in normalize_text(name):
            return name
    return None
