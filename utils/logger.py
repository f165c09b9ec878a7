#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration for the CDR Tracker
"""

import logging
import sys
from datetime import datetime
from pathlib import Path


def setup_logger(level='INFO', log_dir='logs', stream=None):
    """Setup application logging"""

    # Create logs directory if it doesn't exist
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_filename = f"cdr_tracker_{datetime.now().strftime('%Y%m%d')}.log"
    log_path = log_dir / log_filename

    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        datefmt=date_format,
        handlers=[
            logging.FileHandler(log_path, encoding='utf-8'),
            logging.StreamHandler(stream or sys.stdout)
        ],
        force=True
    )

    logger = logging.getLogger('CDRTracker')
    logger.info("=" * 50)
    logger.info("CDR Tracker - Started")
    logger.info(f"Log Level: {level}")
    logger.info(f"Log File: {log_path}")
    logger.info("=" * 50)

    return logger


def get_logger(name=None):
    """Get a logger instance"""
    return logging.getLogger(name or 'CDRTracker')


class PerformanceLogger:
    """Context manager for performance logging"""

    def __init__(self, operation_name, logger=None):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.start_time = None
        self.duration = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.info(f"Starting operation: {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = (datetime.now() - self.start_time).total_seconds()

        if exc_type is None:
            self.logger.info(f"Completed operation: {self.operation_name} in {self.duration:.2f}s")
        else:
            self.logger.error(f"Failed operation: {self.operation_name} after {self.duration:.2f}s - {exc_val}")

        return False  # Don't suppress exceptions
