"""
tests/test_merger.py
Cross-file merge of aggregates, trajectories and summary counts.
"""

from datetime import datetime

from conftest import BASTOS, MVOG_MBI, call_row
from core.excel_parser import parse_excel_file
from core.merger import build_trajectory, merge_results, summarize
from core.models import FileOutcome


def parse_rows(workbook_bytes, name, rows, sheet="Listing Appel"):
    return parse_excel_file(workbook_bytes({sheet: rows}), name)


class TestMergeResults:

    def test_two_files_same_location(self, workbook_bytes):
        first = parse_rows(workbook_bytes, "a.xlsx", [
            call_row("699111222", "655333444", "15/03/2024 09:00:00", "00:01:30", BASTOS),
        ])
        second = parse_rows(workbook_bytes, "b.xlsx", [
            call_row("699111222", "677000111", "16/03/2024 10:00:00", "00:00:45",
                     "Bastos (Cell: A2 Long: 11.50004 Lat: 3.90003 Azimut: 90)"),
        ])

        [merged] = merge_results([first, second])
        assert merged.number == "699111222"
        assert merged.call_count == 2
        assert len(merged.locations) == 1
        assert len(merged.records) == 2
        assert merged.first_activity == datetime(2024, 3, 15, 9)
        assert merged.last_activity == datetime(2024, 3, 16, 10)

    def test_records_resorted_across_files(self, workbook_bytes):
        late = parse_rows(workbook_bytes, "late.xlsx", [
            call_row("699111222", "655333444", "20/03/2024 09:00:00", "10", MVOG_MBI),
        ])
        early = parse_rows(workbook_bytes, "early.xlsx", [
            call_row("699111222", "655333444", "01/03/2024 09:00:00", "", BASTOS),
        ], sheet="Listing SMS")

        [merged] = merge_results([late, early])
        assert [r.date_time.day for r in merged.records] == [1, 20]
        assert merged.call_count == 1
        assert merged.sms_count == 1
        assert [l.site_name for l in merged.locations] == ["Mvog-Mbi", "Bastos"]

    def test_inputs_not_mutated(self, numero_workbook):
        first = parse_excel_file(numero_workbook, "a.xlsx")
        second = parse_excel_file(numero_workbook, "b.xlsx")
        merge_results([first, second])
        agg = first.phone_numbers["699111222"]
        assert agg.call_count == 1
        assert len(agg.records) == 1

    def test_failed_outcomes_skipped(self, numero_workbook):
        ok = FileOutcome("a.xlsx", True, data=parse_excel_file(numero_workbook, "a.xlsx"))
        failed = FileOutcome("b.xlsx", False, error="Unreadable workbook")
        merged = merge_results([ok, failed])
        assert [m.number for m in merged] == ["699111222"]
        assert merged[0].call_count == 1

    def test_distinct_numbers_kept_in_first_seen_order(self, workbook_bytes):
        first = parse_rows(workbook_bytes, "a.xlsx", [
            call_row("699111222", "", "15/03/2024 09:00:00", "10", ""),
            call_row("677000111", "", "15/03/2024 09:00:00", "10", ""),
        ])
        second = parse_rows(workbook_bytes, "b.xlsx", [
            call_row("655333444", "", "15/03/2024 09:00:00", "10", ""),
            call_row("699111222", "", "15/03/2024 09:00:00", "10", ""),
        ])
        merged = merge_results([first, second])
        assert [m.number for m in merged] == ["699111222", "677000111", "655333444"]

    def test_empty(self):
        assert merge_results([]) == []


class TestDerivedViews:

    def test_trajectory_follows_records(self, full_workbook):
        agg = parse_excel_file(full_workbook, "full.xlsx").phone_numbers["699111222"]
        positions = build_trajectory(agg)
        assert [p.site_name for p in positions] == ["Bastos", "Bastos", "Mvog-Mbi"]
        assert positions[0].timestamp == datetime(2024, 3, 14, 20, 15)
        assert positions[-1].to_dict()["timestamp"] == "2024-03-15T11:00:00"

    def test_summarize(self, full_workbook):
        merged = merge_results([parse_excel_file(full_workbook, "full.xlsx")])
        assert summarize(merged) == {
            "totalNumbers": 2,
            "numbersWithLocation": 1,
            "totalRecords": 4,
            "totalLocations": 2,
        }
