"""
tests/conftest.py
Builds carrier-style workbooks in memory; no real CDR exports needed.
"""

import io

import pandas as pd
import pytest

CALL_HEADERS = ["Numero Appelant", "Numero Appele", "Date", "Duree", "Localisation"]

BASTOS = "Bastos (Cell: A1 Long: 11.5 Lat: 3.9 Azimut: 45)"
MVOG_MBI = "Mvog-Mbi (Cell: B7 Long: 11.52 Lat: 3.85 Azimut: 120)"


def build_workbook(sheets):
    """sheets: {sheet name: list of row dicts} -> .xlsx bytes"""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=name, index=False)
    return buf.getvalue()


def call_row(caller, called, when, duration, location):
    return dict(zip(CALL_HEADERS, [caller, called, when, duration, location]))


@pytest.fixture
def workbook_bytes():
    return build_workbook


@pytest.fixture
def numero_workbook():
    return build_workbook({
        "Listing Appel": [
            call_row("699111222", "655333444", "15/03/2024 09:00:00", "00:01:30", BASTOS),
        ],
    })


@pytest.fixture
def full_workbook():
    return build_workbook({
        "Identification": [{
            "Numero": "237699111222",
            "Nom et Prénom": "ATANGANA Paul",
            "Date de naissance": "05/01/1990 00:00:00",
            "Numéro CNI": "112233445",
            "Date d'expiration": "31-12-2030 00:00:00",
            "Adresse": "Yaoundé",
        }],
        "Listing Appel": [
            call_row("699111222", "655333444", "15/03/2024 11:00:00", "00:02:00", MVOG_MBI),
            call_row("699111222", "655333444", "15/03/2024 09:00:00", "00:01:30", BASTOS),
            call_row("", "677000111", "15/03/2024 10:00:00", "00:00:40", "--"),
        ],
        "Listing SMS": [
            call_row("699111222", "655333444", "14/03/2024 20:15:00", "", BASTOS),
            call_row("655333444", "699111222", "16/03/2024 07:30:00", "", "Site inconnu"),
        ],
    })
