#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration management for the CDR Tracker
"""

import configparser
import os
import logging
from pathlib import Path

DEFAULTS = {
    'logging': {
        'level': 'INFO',
        'log_dir': 'logs'
    },
    'processing': {
        'max_workers': '4',
        'allowed_extensions': '.xlsx, .xls'
    },
    'output': {
        'json_indent': '2',
        'excel_report': 'false'
    }
}


class Config:
    def __init__(self, config_file='config/settings.ini'):
        self.config_file = config_file
        self.config = configparser.ConfigParser()

        # Ensure config directory exists
        config_dir = Path(config_file).parent
        config_dir.mkdir(parents=True, exist_ok=True)

        self.load()

    def load(self):
        """Load configuration from file"""
        try:
            if os.path.exists(self.config_file):
                self.config.read(self.config_file, encoding='utf-8')
                logging.info(f"Configuration loaded from {self.config_file}")
            else:
                self.create_default_config()
                logging.info("Created default configuration")

        except configparser.Error as e:
            logging.error(f"Error loading configuration: {e}")
            self.config = configparser.ConfigParser()
            self.create_default_config()

    def create_default_config(self):
        """Create default configuration"""
        self.config['DEFAULT'] = {
            'version': '1.0.0'
        }
        for section, values in DEFAULTS.items():
            self.config[section] = dict(values)

        self.save()

    def get(self, section, option, fallback=None):
        """Get configuration value"""
        try:
            return self.config.get(section, option, fallback=fallback)
        except (configparser.Error, ValueError):
            return fallback

    def getint(self, section, option, fallback=None):
        """Get integer configuration value"""
        try:
            return self.config.getint(section, option, fallback=fallback)
        except (configparser.Error, ValueError):
            return fallback

    def getboolean(self, section, option, fallback=None):
        """Get boolean configuration value"""
        try:
            return self.config.getboolean(section, option, fallback=fallback)
        except (configparser.Error, ValueError):
            return fallback

    def getlist(self, section, option, fallback=None):
        """Comma-separated value as a list of stripped, non-empty items"""
        raw = self.get(section, option)
        if raw is None:
            return list(fallback or [])
        return [item.strip() for item in raw.split(',') if item.strip()]

    def set(self, section, option, value):
        """Set configuration value (in memory; call save() to persist)"""
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, option, str(value))

    def save(self):
        """Save configuration to file"""
        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                self.config.write(f)
            logging.debug(f"Configuration saved to {self.config_file}")

        except OSError as e:
            logging.error(f"Error saving configuration: {e}")
