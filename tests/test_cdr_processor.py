"""
tests/test_cdr_processor.py
Batch processing: per-file outcomes, failure isolation, ordering, progress.
"""

from core.cdr_processor import CDRProcessor


class TestProcessBuffers:

    def test_failure_does_not_abort_siblings(self, numero_workbook):
        outcomes = CDRProcessor(max_workers=3).process_buffers([
            ("a.xlsx", numero_workbook),
            ("broken.xlsx", b"garbage"),
            ("notes.csv", b"a,b,c"),
            ("b.XLS", numero_workbook),
        ])

        assert [o.file_name for o in outcomes] == ["a.xlsx", "broken.xlsx", "notes.csv", "b.XLS"]
        assert [o.success for o in outcomes] == [True, False, False, True]
        assert outcomes[1].error.startswith("Error while parsing")
        assert "Unsupported file format" in outcomes[2].error
        assert outcomes[0].data.phone_numbers["699111222"].call_count == 1

    def test_outcome_dict(self, numero_workbook):
        ok, bad = CDRProcessor().process_buffers([("a.xlsx", numero_workbook), ("x.txt", b"")])
        assert ok.to_dict()["success"] is True
        assert ok.to_dict()["data"]["fileType"] == "NUMERO"
        assert "error" not in ok.to_dict()
        assert bad.to_dict() == {"fileName": "x.txt", "success": False, "error": bad.error}

    def test_progress_reported(self, numero_workbook):
        seen = []
        CDRProcessor(progress_callback=lambda p, m: seen.append(p)).process_buffers([
            ("a.xlsx", numero_workbook), ("b.xlsx", numero_workbook),
        ])
        assert seen[0] == 5
        assert seen[-1] == 100
        assert seen == sorted(seen)

    def test_cancelled_before_start(self, numero_workbook):
        processor = CDRProcessor()
        processor.set_cancel_flag()
        [outcome] = processor.process_buffers([("a.xlsx", numero_workbook)])
        assert not outcome.success
        assert outcome.error == "Cancelled"

    def test_empty_batch(self):
        assert CDRProcessor().process_buffers([]) == []

    def test_merge(self, numero_workbook):
        processor = CDRProcessor()
        outcomes = processor.process_buffers([("a.xlsx", numero_workbook), ("b.xlsx", numero_workbook)])
        [merged] = processor.merge(outcomes)
        assert merged.call_count == 2
        assert len(merged.locations) == 1


class TestProcessFiles:

    def test_paths(self, tmp_path, numero_workbook):
        good = tmp_path / "numero.xlsx"
        good.write_bytes(numero_workbook)
        missing = tmp_path / "absent.xlsx"
        wrong = tmp_path / "notes.txt"
        wrong.write_text("hello")

        outcomes = CDRProcessor().process_files([good, missing, wrong])
        assert [o.success for o in outcomes] == [True, False, False]
        assert outcomes[0].file_name == "numero.xlsx"
        assert outcomes[1].error.startswith("Cannot read file")
        assert "Unsupported file format" in outcomes[2].error
