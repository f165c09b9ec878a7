#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CDR Tracker - Main Entry Point
Parses carrier CDR workbooks, aggregates activity per phone number and
writes the merged result as JSON (optionally as an Excel report)
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from core.cdr_processor import CDRProcessor
from core.excel_generator import ExcelGenerator
from core.merger import build_trajectory, summarize
from utils.config import Config
from utils.file_handler import FileHandler
from utils.logger import setup_logger


def build_parser():
    parser = argparse.ArgumentParser(
        prog="cdr-tracker",
        description="Aggregate carrier call/SMS listings (.xlsx/.xls) per phone number"
    )
    parser.add_argument("files", nargs="+", help="Workbooks to parse")
    parser.add_argument("-o", "--output", help="JSON output file (default: stdout)")
    parser.add_argument("--excel", help="Also write an Excel report to this path")
    parser.add_argument("--config", default="config/settings.ini", help="Settings file")
    parser.add_argument("--log-level", help="Override the configured log level")
    parser.add_argument("--workers", type=int, help="Files parsed in parallel")
    parser.add_argument("--trajectories", action="store_true",
                        help="Include per-number map trajectories in the output")
    return parser


class CDRTrackerApp:
    def __init__(self, args):
        self.args = args
        self.config = Config(args.config)

    def setup_logging(self):
        """Setup application logging"""
        log_level = self.args.log_level or self.config.get('logging', 'level', fallback='INFO')
        log_dir = self.config.get('logging', 'log_dir', fallback='logs')
        # stdout is reserved for the JSON document
        setup_logger(log_level, log_dir, stream=sys.stderr)

    def on_progress(self, percent, message):
        logging.info(f"[{percent:3d}%] {message}")

    def build_document(self, outcomes, merged):
        document = {
            "success": any(o.success for o in outcomes),
            "results": [o.to_dict() for o in outcomes],
            "merged": [a.to_dict() for a in merged],
            "stats": summarize(merged),
        }
        if self.args.trajectories:
            document["trajectories"] = {
                a.number: [p.to_dict() for p in build_trajectory(a)] for a in merged
            }
        return document

    def write_json(self, document):
        indent = self.config.getint('output', 'json_indent', fallback=2)
        text = json.dumps(document, indent=indent, ensure_ascii=False)
        if self.args.output:
            FileHandler.safe_create_directory(Path(self.args.output).parent)
            with open(self.args.output, 'w', encoding='utf-8') as f:
                f.write(text)
            logging.info(f"Results written to {self.args.output}")
        else:
            sys.stdout.write(text + "\n")

    def run(self):
        """Process the batch and write the outputs; returns the exit code"""
        self.setup_logging()
        logging.info("Starting CDR Tracker")

        extensions = self.config.getlist('processing', 'allowed_extensions', fallback=['.xlsx', '.xls'])
        for path in self.args.files:
            info = FileHandler.get_file_info(path)
            if info:
                logging.info(f"Input {info['name']}: {info['size_mb']:.2f} MB")
            errors, warnings = FileHandler.validate_excel_file(path, extensions)
            for w in warnings:
                logging.warning(f"{path}: {w}")
            for e in errors:
                logging.warning(f"{path}: {e}")

        processor = CDRProcessor(
            progress_callback=self.on_progress,
            max_workers=self.args.workers or self.config.getint('processing', 'max_workers', fallback=4),
            extensions=extensions,
        )
        outcomes = processor.process_files(self.args.files)
        merged = processor.merge(outcomes)

        self.write_json(self.build_document(outcomes, merged))

        excel_path = self.args.excel
        if not excel_path and self.config.getboolean('output', 'excel_report', fallback=False):
            first = Path(self.args.files[0]).stem
            excel_path = FileHandler.get_safe_filename(f"{first}_rapport.xlsx")
        if excel_path:
            FileHandler.safe_create_directory(Path(excel_path).parent)
            ExcelGenerator(progress_callback=self.on_progress).generate_excel(merged, excel_path)

        failed = [o for o in outcomes if not o.success]
        for o in failed:
            logging.error(f"{o.file_name}: {o.error}")
        return 0 if len(failed) < len(outcomes) else 1


def main(argv=None):
    """Main entry point"""
    args = build_parser().parse_args(argv)
    try:
        return CDRTrackerApp(args).run()
    except KeyboardInterrupt:
        logging.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
