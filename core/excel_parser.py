#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Workbook parsing: classify sheets, extract records and subscribers,
aggregate per phone number
"""

import io
import logging

import pandas as pd

from core.aggregator import aggregate_by_phone_number
from core.models import ParsedFileResult
from core.record_extractor import parse_listing_sheet, parse_subscribers_sheet
from core.sheet_classifier import detect_file_type, find_listing_sheets, find_subscribers_sheet
from utils.logger import PerformanceLogger


class WorkbookReadError(ValueError):
    """The bytes could not be opened as an .xlsx/.xls workbook"""


def open_workbook(buffer, file_name=""):
    try:
        # pandas picks openpyxl (xlsx) or xlrd (xls) from the content
        return pd.ExcelFile(io.BytesIO(buffer))
    except Exception as e:
        logging.error(f"Cannot open workbook {file_name}: {e}")
        raise WorkbookReadError(f"Unreadable workbook {file_name}: {e}") from e


def read_sheet(workbook, sheet_name):
    """Sheet as a DataFrame keyed by header text, empty cells as ''"""
    df = workbook.parse(sheet_name, dtype=object)
    df.columns = [str(c) for c in df.columns]
    return df.astype(object).where(df.notna(), "")


def parse_excel_file(buffer, file_name):
    """Parse one workbook held in memory into a ParsedFileResult"""
    with PerformanceLogger(f"parse {file_name}"):
        workbook = open_workbook(buffer, file_name)
        sheet_names = list(workbook.sheet_names)
        logging.info(f"Sheets in {file_name}: {sheet_names}")

        file_type = detect_file_type(sheet_names)
        logging.info(f"File type detected: {file_type}")

        listing = find_listing_sheets(sheet_names)
        all_records = []

        if listing.calls:
            call_records = parse_listing_sheet(read_sheet(workbook, listing.calls))
            all_records.extend(call_records)
            logging.info(f"Parsed {len(call_records)} call records from '{listing.calls}'")
        else:
            logging.warning(f"No calls listing sheet in {file_name}")

        if listing.sms:
            sms_records = parse_listing_sheet(read_sheet(workbook, listing.sms), is_sms=True)
            all_records.extend(sms_records)
            logging.info(f"Parsed {len(sms_records)} SMS records from '{listing.sms}'")

        subscribers = []
        subscribers_sheet = find_subscribers_sheet(sheet_names)
        if subscribers_sheet:
            subscribers = parse_subscribers_sheet(read_sheet(workbook, subscribers_sheet))
        else:
            logging.warning(f"No identification sheet in {file_name}")

        phone_numbers = aggregate_by_phone_number(all_records, subscribers)

        return ParsedFileResult(
            file_name=file_name,
            file_type=file_type,
            phone_numbers=phone_numbers,
            all_records=all_records,
            subscribers=subscribers,
        )


def serialize_parsed_data(data):
    """JSON-ready dict: ISO-8601 dates, phone map flattened to a list"""
    return data.to_dict()
