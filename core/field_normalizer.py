#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Field normalization: phone numbers, spreadsheet dates and header text
"""

import re
import unicodedata
from datetime import date, datetime, timedelta

import numpy as np
import pandas as pd

COUNTRY_PREFIX = "237"

# 1900 date system; serial 60 is the phantom 1900-02-29
EXCEL_EPOCH = datetime(1899, 12, 31)
EXCEL_EPOCH_AFTER_LEAP_BUG = datetime(1899, 12, 30)
MAX_EXCEL_SERIAL = 2958465  # 9999-12-31

SLASH_DATE_RE = re.compile(r"(\d{2})/(\d{2})/(\d{4})\s+(\d{2}):(\d{2}):(\d{2})")
DASH_DATE_RE = re.compile(r"(\d{2})-(\d{2})-(\d{4})\s+(\d{2}):(\d{2}):(\d{2})")


def is_missing(value):
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_number(value):
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, (bool, np.bool_))


def clean_text(s):
    """Cell value as trimmed text; integral floats lose their '.0'"""
    if is_missing(s):
        return ""
    if _is_number(s) and float(s).is_integer():
        return str(int(s))
    return str(s).strip()


def normalize_text(s):
    """Lower-case and strip diacritics ("Numéro Appelé" -> "numero appele")"""
    decomposed = unicodedata.normalize("NFD", str(s).lower())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_phone_number(phone):
    if is_missing(phone) or not phone:
        return ""
    s = clean_text(phone)
    if s.startswith(COUNTRY_PREFIX):
        s = s[len(COUNTRY_PREFIX):]
    return re.sub(r"\D", "", s)


def excel_serial_to_datetime(serial):
    if serial < 0 or serial > MAX_EXCEL_SERIAL:
        return None
    days = int(serial)
    seconds = int(round((serial - days) * 86400))
    if seconds >= 86400:
        days += 1
        seconds -= 86400
    base = EXCEL_EPOCH if days <= 60 else EXCEL_EPOCH_AFTER_LEAP_BUG
    return base + timedelta(days=days, seconds=seconds)


def _from_match(match):
    day, month, year, hour, minute, second = (int(g) for g in match.groups())
    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None


def parse_excel_date(value):
    """
    Parse a date cell. Tried in order: native date, spreadsheet serial,
    DD/MM/YYYY HH:MM:SS, DD-MM-YYYY HH:MM:SS, ISO-8601. Returns None when
    nothing matches; callers treat None as an unknown date.
    """
    if is_missing(value) or (not isinstance(value, (date, datetime)) and not value):
        return None

    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if _is_number(value):
        return excel_serial_to_datetime(float(value))

    if isinstance(value, str):
        for pattern in (SLASH_DATE_RE, DASH_DATE_RE):
            match = pattern.search(value)
            if match:
                parsed = _from_match(match)
                if parsed is not None:
                    return parsed

        ts = pd.to_datetime(value.strip(), format="ISO8601", errors="coerce")
        if pd.isna(ts):
            return None
        if ts.tzinfo is not None:
            ts = ts.tz_convert(None)
        return ts.to_pydatetime()

    return None


def format_locale_date(dt):
    """fr-FR short date, e.g. 05/01/1990"""
    return dt.strftime("%d/%m/%Y") if dt else None
