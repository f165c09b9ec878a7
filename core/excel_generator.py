#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Excel report of merged phone aggregates
- Numeros: one row per number
- Chronologie: every record, chronological per number
- Localisations: distinct cell sites per number
"""

import logging

import numpy as np
import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from core.merger import summarize

NUMBER_COLUMNS = [
    "Numero", "Identite", "IMEI", "Appels", "SMS", "Premiere activite",
    "Derniere activite", "Localisations", "Enregistrements"
]
RECORD_COLUMNS = [
    "Numero", "Date", "Type", "Numero appele", "Duree", "IMEI", "Site",
    "Cell ID", "Longitude", "Latitude", "Azimut", "Localisation brute"
]
LOCATION_COLUMNS = ["Numero", "Site", "Cell ID", "Longitude", "Latitude", "Azimut"]

IMPORTANT_HEADERS = {"Numero", "Identite", "Date", "Site", "Longitude", "Latitude"}


def _fmt_dt(value):
    return value.strftime("%Y-%m-%d %H:%M:%S") if value is not None else ""


class ExcelGenerator:
    def __init__(self, progress_callback=None):
        self.progress_callback = progress_callback

    def update_progress(self, percent, message=""):
        if self.progress_callback:
            self.progress_callback(percent, message)

    # -------------------------
    # Autofit and Styling
    # -------------------------
    def autofit_and_style(self, workbook, sheet_name, important_headers, sheet_index=0):
        try:
            ws = workbook[sheet_name]
            max_row = ws.max_row
            max_col = ws.max_column

            tab_colors = ["92D050", "4472C4", "ED7D31"]
            ws.sheet_properties.tabColor = tab_colors[sheet_index % len(tab_colors)]

            # Freeze top row and first column
            ws.freeze_panes = "B2"
            if max_row > 1:
                ws.auto_filter.ref = ws.dimensions

            header_font = Font(bold=True, color="FFFFFF")
            header_alignment = Alignment(horizontal="center", vertical="center")
            imp_fill = PatternFill(start_color="FF305496", end_color="FF305496", fill_type="solid")
            normal_fill = PatternFill(start_color="FF4472C4", end_color="FF4472C4", fill_type="solid")
            alt_fill = PatternFill(start_color="FFF2F2F2", end_color="FFF2F2F2", fill_type="solid")
            thin = Side(border_style="thin", color="FF999999")
            border = Border(left=thin, right=thin, top=thin, bottom=thin)

            for col_idx in range(1, max_col + 1):
                cell = ws.cell(row=1, column=col_idx)
                cell.font = header_font
                cell.alignment = header_alignment
                cell.border = border
                cell.fill = imp_fill if cell.value in important_headers else normal_fill

            for r in range(2, max_row + 1):
                if r % 2 == 0:
                    for c in range(1, max_col + 1):
                        ws.cell(row=r, column=c).fill = alt_fill

            for col in ws.columns:
                max_length = 0
                col_letter = get_column_letter(col[0].column)
                for cell in col:
                    v = str(cell.value) if cell.value is not None else ""
                    max_length = max(max_length, len(v))
                ws.column_dimensions[col_letter].width = min(50, max(10, max_length + 3))

        except (KeyError, ValueError) as e:
            logging.warning(f"Styling error on sheet {sheet_name}: {e}")

    # -------------------------
    # Sheet creators
    # -------------------------
    def create_numbers_sheet(self, aggregates):
        rows = [{
            "Numero": a.number,
            "Identite": a.identity or "",
            "IMEI": a.imei or "",
            "Appels": a.call_count,
            "SMS": a.sms_count,
            "Premiere activite": _fmt_dt(a.first_activity),
            "Derniere activite": _fmt_dt(a.last_activity),
            "Localisations": len(a.locations),
            "Enregistrements": len(a.records),
        } for a in aggregates]
        df = pd.DataFrame(rows, columns=NUMBER_COLUMNS)
        if df.empty:
            return df
        return df.sort_values(by=["Enregistrements", "Numero"], ascending=[False, True]).reset_index(drop=True)

    def create_records_sheet(self, aggregates):
        rows = []
        for a in aggregates:
            for r in a.records:
                loc = r.location
                rows.append({
                    "Numero": a.number,
                    "Date": _fmt_dt(r.date_time),
                    "Type": "SMS" if r.is_sms else "Appel",
                    "Numero appele": r.called_number,
                    "Duree": "" if r.is_sms else r.duration,
                    "IMEI": r.imei,
                    "Site": loc.site_name if loc else "",
                    "Cell ID": loc.cell_id if loc else "",
                    "Longitude": loc.longitude if loc else np.nan,
                    "Latitude": loc.latitude if loc else np.nan,
                    "Azimut": loc.azimuth if loc else "",
                    "Localisation brute": r.raw_location,
                })
        return pd.DataFrame(rows, columns=RECORD_COLUMNS)

    def create_locations_sheet(self, aggregates):
        rows = [{
            "Numero": a.number,
            "Site": loc.site_name,
            "Cell ID": loc.cell_id,
            "Longitude": loc.longitude,
            "Latitude": loc.latitude,
            "Azimut": loc.azimuth,
        } for a in aggregates for loc in a.locations]
        return pd.DataFrame(rows, columns=LOCATION_COLUMNS)

    def generate_excel(self, aggregates, output_path):
        """Write the three report sheets to output_path and style them"""
        try:
            aggregates = list(aggregates)
            self.update_progress(10, "Building report sheets...")
            sheets = {
                "Numeros": self.create_numbers_sheet(aggregates),
                "Chronologie": self.create_records_sheet(aggregates),
                "Localisations": self.create_locations_sheet(aggregates),
            }

            self.update_progress(50, "Writing workbook...")
            with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
                for name, df in sheets.items():
                    df.to_excel(writer, sheet_name=name, index=False)

            self.update_progress(80, "Styling workbook...")
            wb = load_workbook(output_path)
            for idx, name in enumerate(sheets):
                self.autofit_and_style(wb, name, IMPORTANT_HEADERS, sheet_index=idx)
            wb.save(output_path)

            stats = summarize(aggregates)
            logging.info(f"Excel report written to {output_path}: {stats}")
            self.update_progress(100, "Report complete")
            return output_path

        except Exception as e:
            logging.error(f"Error generating Excel report: {e}")
            raise
