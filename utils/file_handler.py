#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
File handling utilities for the CDR Tracker
"""

import os
import re
import logging
from pathlib import Path

SUPPORTED_EXTENSIONS = ('.xlsx', '.xls')
LARGE_FILE_BYTES = 200 * 1024 * 1024


class UnsupportedFileError(ValueError):
    """File extension is not an accepted spreadsheet format"""


class FileHandler:
    @staticmethod
    def is_supported(file_name, extensions=SUPPORTED_EXTENSIONS):
        return str(file_name).lower().endswith(tuple(e.lower() for e in extensions))

    @staticmethod
    def ensure_supported(file_name, extensions=SUPPORTED_EXTENSIONS):
        if not FileHandler.is_supported(file_name, extensions):
            raise UnsupportedFileError(
                f"Unsupported file format: {os.path.basename(str(file_name))}. "
                f"Use {' or '.join(extensions)}"
            )

    @staticmethod
    def validate_excel_file(file_path, extensions=SUPPORTED_EXTENSIONS):
        """Validate a workbook path before reading it"""
        errors = []
        warnings = []

        if not os.path.exists(file_path):
            errors.append("File does not exist")
            return errors, warnings

        file_size = os.path.getsize(file_path)
        if file_size == 0:
            errors.append("File is empty")
            return errors, warnings

        if file_size > LARGE_FILE_BYTES:
            warnings.append("Large file size may cause slow processing")

        if not FileHandler.is_supported(file_path, extensions):
            errors.append(f"File does not have a {'/'.join(extensions)} extension")

        return errors, warnings

    @staticmethod
    def read_bytes(file_path):
        with open(file_path, 'rb') as f:
            return f.read()

    @staticmethod
    def get_file_info(file_path):
        """Get basic information about a file"""
        try:
            stat = os.stat(file_path)
            return {
                'path': str(file_path),
                'name': os.path.basename(file_path),
                'size': stat.st_size,
                'size_mb': stat.st_size / (1024 * 1024),
                'modified': stat.st_mtime,
                'readable': os.access(file_path, os.R_OK)
            }
        except OSError as e:
            logging.error(f"Error getting file info for {file_path}: {e}")
            return None

    @staticmethod
    def safe_create_directory(dir_path):
        """Create the parent directory of an output path if needed"""
        Path(dir_path).mkdir(parents=True, exist_ok=True)

    @staticmethod
    def get_safe_filename(filename):
        """Get a safe filename by removing/replacing invalid characters"""
        safe_name = re.sub(r'[<>:"/\\|?*]', '_', filename)
        safe_name = re.sub(r'_{2,}', '_', safe_name)

        safe_name = safe_name.strip('_').strip()
        if not safe_name:
            safe_name = 'output'

        return safe_name
