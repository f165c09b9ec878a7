#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Batch processing of carrier workbooks: one independent parse per file"""

import os
import logging
from concurrent.futures import ThreadPoolExecutor

from core.excel_parser import parse_excel_file
from core.merger import merge_results
from core.models import FileOutcome
from utils.file_handler import SUPPORTED_EXTENSIONS, FileHandler, UnsupportedFileError


class CDRProcessor:
    def __init__(self, progress_callback=None, max_workers=4, extensions=SUPPORTED_EXTENSIONS):
        self.progress_callback = progress_callback
        self.max_workers = max(1, int(max_workers or 1))
        self.extensions = tuple(extensions)
        self.cancel_flag = False

    def set_cancel_flag(self):
        self.cancel_flag = True

    def update_progress(self, percent, message=""):
        if self.progress_callback:
            self.progress_callback(percent, message)

    def process_buffer(self, file_name, buffer):
        """Parse one workbook; any failure is reported in the outcome, never raised"""
        if self.cancel_flag:
            return FileOutcome(file_name=file_name, success=False, error="Cancelled")
        try:
            FileHandler.ensure_supported(file_name, self.extensions)
        except UnsupportedFileError as e:
            logging.warning(str(e))
            return FileOutcome(file_name=file_name, success=False, error=str(e))
        try:
            data = parse_excel_file(buffer, file_name)
            return FileOutcome(file_name=file_name, success=True, data=data)
        except Exception as e:
            logging.error(f"Error parsing {file_name}: {e}")
            return FileOutcome(file_name=file_name, success=False,
                               error=f"Error while parsing: {e}")

    def _process_path(self, path):
        file_name = os.path.basename(path)
        if not FileHandler.is_supported(file_name, self.extensions):
            # rejected by extension before any read
            return self.process_buffer(file_name, None)
        try:
            buffer = FileHandler.read_bytes(path)
        except OSError as e:
            logging.error(f"Error reading {path}: {e}")
            return FileOutcome(file_name=file_name, success=False, error=f"Cannot read file: {e}")
        return self.process_buffer(file_name, buffer)

    def _run(self, jobs):
        """jobs: list of zero-arg callables returning FileOutcome; results keep input order"""
        total = len(jobs)
        outcomes = [None] * total
        if total == 0:
            return []

        self.update_progress(5, f"Processing {total} files...")
        with ThreadPoolExecutor(max_workers=min(self.max_workers, total)) as pool:
            futures = [pool.submit(job) for job in jobs]
            for done, (i, future) in enumerate(enumerate(futures), start=1):
                outcomes[i] = future.result()
                self.update_progress(5 + int(90 * done / total), f"Processed {outcomes[i].file_name}")

        ok = sum(1 for o in outcomes if o.success)
        self.update_progress(100, f"Processing complete: {ok}/{total} files parsed")
        return outcomes

    def process_buffers(self, items):
        """items: iterable of (file_name, bytes)"""
        return self._run([
            (lambda n=name, b=buffer: self.process_buffer(n, b)) for name, buffer in items
        ])

    def process_files(self, file_paths):
        return self._run([(lambda p=path: self._process_path(p)) for path in file_paths])

    def merge(self, outcomes):
        return merge_results(outcomes)
