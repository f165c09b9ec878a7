#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Listing and identification sheet extraction.

Both functions take the sheet as a DataFrame whose columns are the header
row and whose empty cells are "" (see excel_parser.read_sheet).
"""

import logging
import uuid

from core.column_inferencer import identify_columns
from core.field_normalizer import (
    clean_text,
    format_locale_date,
    normalize_phone_number,
    normalize_text,
    parse_excel_date,
)
from core.location_decoder import decode_location
from core.models import CallRecord, SubscriberInfo

SMS_MARKER = "SMS"


def _new_record_id(row_index):
    return f"record-{row_index}-{uuid.uuid4().hex[:12]}"


def parse_listing_sheet(df, is_sms=False):
    """
    Turn a listing sheet into CallRecords. Rows without caller and called
    number are skipped. For SMS sheets an empty duration becomes "SMS".
    """
    records = []
    if df is None or df.empty:
        return records

    cols = identify_columns(list(df.columns))
    pick = lambda row, col: row.get(col, "") if col else ""

    for i, row in enumerate(df.to_dict(orient="records")):
        caller = normalize_phone_number(pick(row, cols.caller))
        called = normalize_phone_number(pick(row, cols.called))
        if not caller and not called:
            continue

        duration = clean_text(pick(row, cols.duration))
        if is_sms and not duration:
            duration = SMS_MARKER

        raw_location = clean_text(pick(row, cols.location))
        records.append(CallRecord(
            id=_new_record_id(i),
            caller_number=caller,
            called_number=called,
            imei=clean_text(pick(row, cols.imei)),
            date_time=parse_excel_date(pick(row, cols.date)) if cols.date else None,
            duration=duration,
            location=decode_location(raw_location),
            raw_location=raw_location,
        ))

    located = sum(1 for r in records if r.location)
    logging.info(f"Parsed {len(records)} records, {located} with location")
    return records


def _locale_date(value):
    return format_locale_date(parse_excel_date(value))


def parse_subscribers_sheet(df):
    subscribers = []
    if df is None or df.empty:
        return subscribers

    headers = [(col, normalize_text(col)) for col in df.columns]

    for row in df.to_dict(orient="records"):
        sub = SubscriberInfo(number="")
        for col, key in headers:
            value = row.get(col, "")

            if key == "numero" or (key.startswith("numero") and "cni" not in key):
                if not sub.number:
                    sub.number = normalize_phone_number(value)
            elif "nom" in key and "prenom" in key:
                sub.full_name = clean_text(value)
            elif "date" in key and "naissance" in key:
                sub.birth_date = _locale_date(value)
            elif "numero" in key and "cni" in key:
                sub.cni_number = clean_text(value)
            elif "expiration" in key:
                sub.cni_expiration = _locale_date(value)
            elif key == "adresse":
                sub.address = clean_text(value)

        if sub.number:
            subscribers.append(sub)

    logging.info(f"Parsed {len(subscribers)} subscribers")
    return subscribers
